# app/shared/exceptions.py
"""
Errores de dominio para operaciones de stock.

Todos los errores son StockError con un código estructurado:

    try:
        processor.process(origin_id, destination_id, user_id, cart)
    except StockError as e:
        if e.code == 'STOCK_ENTRY_NOT_FOUND':
            print(e.data['product_id'], e.data['warehouse_id'])

El handler HTTP usa `status_code` para elegir la respuesta.
"""
from typing import Any, Dict, Optional


class StockError(Exception):
    """Excepción estructurada para operaciones de stock"""

    _default_messages = {
        'EMPTY_CART': 'La transferencia debe incluir al menos un producto',
        'INVALID_QUANTITY': 'Cantidad inválida (debe ser positiva)',
        'SAME_WAREHOUSE': 'El depósito origen y destino deben ser distintos',
        'WAREHOUSE_NOT_FOUND': 'Depósito no encontrado',
        'STOCK_ENTRY_NOT_FOUND': 'No existe stock del producto en el depósito',
        'INSUFFICIENT_STOCK': 'Stock insuficiente en el depósito origen',
        'CONCURRENT_MODIFICATION': 'El stock fue modificado por otra operación',
    }

    _status_codes = {
        'EMPTY_CART': 400,
        'INVALID_QUANTITY': 400,
        'SAME_WAREHOUSE': 400,
        'WAREHOUSE_NOT_FOUND': 404,
        'STOCK_ENTRY_NOT_FOUND': 404,
        'INSUFFICIENT_STOCK': 409,
        'CONCURRENT_MODIFICATION': 409,
    }

    def __init__(self, code: str, message: Optional[str] = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data: Dict[str, Any] = data
        super().__init__(f"[{code}] {self.message}")

    @property
    def status_code(self) -> int:
        return self._status_codes.get(self.code, 400)

    def as_dict(self) -> Dict[str, Any]:
        """Serializar para respuestas de la API"""
        return {
            'code': self.code,
            'message': self.message,
            'data': dict(self.data),
        }

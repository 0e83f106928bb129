# app/modules/transfers/service.py
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from app.config.settings import settings
from app.shared.exceptions import StockError
from .processor import CartLine, TransferProcessor
from .repository import TransfersRepository
from .schemas import (
    TransferCreate, TransferCreateResponse, TransferHeader,
    TransferDetail, TransferResponse, TransferListResponse
)

logger = logging.getLogger(__name__)


class TransfersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TransfersRepository(db)
        self.processor = TransferProcessor(db, allow_self_transfer=settings.allow_self_transfer)

    async def create_transfer(self, transfer_data: TransferCreate, user_id: int) -> TransferCreateResponse:
        """Crear transferencia y mover stock entre depósitos"""
        try:
            cart = [CartLine(product_id=item.product_id, quantity=item.quantity) for item in transfer_data.cart]

            transfer = self.processor.process(
                warehouse_origin_id=transfer_data.warehouse_origin_id,
                warehouse_destination_id=transfer_data.warehouse_destination_id,
                user_id=user_id,
                cart=cart
            )

            return TransferCreateResponse(
                success=True,
                message="Transferencia creada",
                transfer=TransferHeader.model_validate(transfer)
            )

        except (StockError, HTTPException):
            raise
        except Exception as e:
            logger.exception("❌ Error inesperado creando transferencia")
            raise HTTPException(status_code=500, detail=f"[Transfers - CREATE]: {str(e)}")

    async def get_transfers(self) -> TransferListResponse:
        """Listar transferencias con usuario, depósitos y líneas"""
        try:
            transfers = self.repository.get_all()
            return TransferListResponse(
                success=True,
                message="Transferencias entre depósitos recuperadas",
                transfers=[TransferDetail.model_validate(t) for t in transfers],
                total=len(transfers)
            )
        except Exception as e:
            logger.exception("❌ Error listando transferencias")
            raise HTTPException(status_code=500, detail=f"[Transfers - GET ALL]: {str(e)}")

    async def get_transfer(self, transfer_id: int) -> TransferResponse:
        transfer = self.repository.get_by_id(transfer_id)
        if not transfer:
            raise HTTPException(status_code=404, detail=f"Transferencia {transfer_id} no encontrada")

        return TransferResponse(
            success=True,
            message="Transferencia entre depósitos recuperada",
            transfer=TransferDetail.model_validate(transfer)
        )

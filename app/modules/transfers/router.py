# app/modules/transfers/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from .service import TransfersService
from .schemas import TransferCreate, TransferCreateResponse, TransferListResponse, TransferResponse

router = APIRouter()


@router.post("/", response_model=TransferCreateResponse)
async def create_transfer(
    transfer_data: TransferCreate,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Transferir productos entre depósitos

    **Proceso:**
    1. Registra la transferencia y una línea por producto del carrito
    2. Resta las cantidades del stock del depósito origen
    3. Suma las cantidades al stock del depósito destino

    Todo se confirma junto o no se aplica nada.

    **Errores:**
    - 400: carrito vacío, cantidad inválida u origen igual a destino
    - 404: depósito inexistente o producto sin stock registrado en un depósito
    - 409: stock insuficiente o stock modificado por otra operación
    """
    service = TransfersService(db)
    return await service.create_transfer(transfer_data, current_user.id)


@router.get("/", response_model=TransferListResponse)
async def get_transfers(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Listar transferencias con usuario, depósitos y productos"""
    service = TransfersService(db)
    return await service.get_transfers()


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    transfer_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener una transferencia por ID"""
    service = TransfersService(db)
    return await service.get_transfer(transfer_id)

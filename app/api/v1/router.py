# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.users.router import router as users_router
from app.modules.products.router import router as products_router
from app.modules.warehouses.router import router as warehouses_router
from app.modules.stocks.router import router as stocks_router
from app.modules.pricelists.router import router as pricelists_router
from app.modules.transfers.router import router as transfers_router


# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)

api_router.include_router(
    products_router,
    prefix="/products",
    tags=["Products"]
)

api_router.include_router(
    warehouses_router,
    prefix="/warehouses",
    tags=["Warehouses"]
)

api_router.include_router(
    stocks_router,
    prefix="/stocks",
    tags=["Stocks"]
)

api_router.include_router(
    pricelists_router,
    prefix="/pricelists",
    tags=["Price Lists"]
)

api_router.include_router(
    transfers_router,
    prefix="/transfers",
    tags=["Transfers"]
)


@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "Inventario POS API v1",
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "authentication": "/api/v1/auth",
            "users": "/api/v1/users",
            "products": "/api/v1/products",
            "warehouses": "/api/v1/warehouses",
            "stocks": "/api/v1/stocks",
            "pricelists": "/api/v1/pricelists",
            "transfers": "/api/v1/transfers"
        }
    }

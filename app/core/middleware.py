from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from app.config.settings import settings
from app.shared.exceptions import StockError
from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def configure_logging():
    """Configurar logging de la aplicación"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response


def setup_exception_handlers(app: FastAPI):
    """Respuestas JSON para errores de dominio"""

    @app.exception_handler(StockError)
    async def stock_error_handler(request: Request, exc: StockError):
        logger.warning(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
        body = ErrorResponse(
            message=exc.message,
            error_code=exc.code,
            details=exc.data
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))

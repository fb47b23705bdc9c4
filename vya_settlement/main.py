from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vya_settlement import __version__
from vya_settlement.api import create_api_router
from vya_settlement.core.config import get_settings
from vya_settlement.core.exceptions import SettlementError
from vya_settlement.core.logging import configure_logging
from vya_settlement.infrastructure.database import dispose_engine, init_db

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.environment in {"development", "test"}:
        await init_db()
    yield
    await dispose_engine()


async def settlement_error_handler(request: Request, exc: SettlementError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app() -> FastAPI:
    configure_logging(settings.logging)

    app = FastAPI(
        title=settings.project_name,
        description="Liquidação de pagamentos PIX e carteiras de viajantes",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SettlementError, settlement_error_handler)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


app = create_app()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import settings
from core.exceptions import LedgerError
from db.session import Store
from api.routers import v1_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Store = app.state.store
    if settings.AUTO_CREATE_TABLES:
        store.create_all()
    logger.info("Store ready")
    yield
    store.close()
    logger.info("Store closed")


def create_app(store: Store | None = None) -> FastAPI:
    app = FastAPI(title="Table Ledger API", version="0.1.0", lifespan=lifespan)
    app.state.store = store or Store.from_settings(settings)

    # Exception handler for validation errors (422)
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(f"[422 Validation Error] {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    # Domain errors carry their own status code
    @app.exception_handler(LedgerError)
    async def ledger_exception_handler(request: Request, exc: LedgerError):
        logger.warning(f"[{exc.status_code}] {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API v1 routes
    app.include_router(v1_router.routes, prefix="/api")

    @app.get("/")
    def read_root():
        return {"message": "Table Ledger API", "version": "0.1.0"}

    return app


app = create_app()

"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import ApiError, api_error_handler
from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging
from .storage.storage_client import ObjectStore
from .storage.storage_factory import create_storage


def create_app(config: AppConfig | None = None, store: ObjectStore | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="Studio Media")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-sweep-token"],
    )
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    include_routers(app, cfg, store or create_storage(cfg.storage))

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

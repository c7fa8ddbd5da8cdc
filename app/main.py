import time
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import ShiprocketSettings, load_settings
from app.error_handlers import register_error_handlers
from app.logging_config import configure_logging
from app.routers.auth import router as auth_router
from app.routers.orders import router as orders_router
from app.routers.pickups import router as pickups_router
from app.routers.rates import router as rates_router
from app.routers.tracking import router as tracking_router
from app.routers.webhooks import router as webhooks_router
from app.services.sdk import ShiprocketSDK
from app.services.shiprocket import ShiprocketService

API_PREFIX = "/shiprocket"


def create_app(settings: ShiprocketSettings | None = None, service: ShiprocketService | None = None) -> FastAPI:
    """Composition root: one SDK, hence one credential cache, per app."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Shiprocket Gateway")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.shiprocket = service or ShiprocketService(ShiprocketSDK(settings))
    app.state.started_at = time.monotonic()
    register_error_handlers(app)

    for router in (auth_router, orders_router, tracking_router, pickups_router, rates_router, webhooks_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/")
    async def root():
        return {"status": "ONLINE", "engine": "Shiprocket Gateway"}

    @app.get("/health")
    async def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - app.state.started_at, 3),
        }

    return app


app = create_app()

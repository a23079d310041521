# cabin_admin/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cabin_admin.config import ALLOWED_ORIGINS
from cabin_admin.logging_config import setup_logging
from cabin_admin.middleware import RequestIDMiddleware
from cabin_admin.routes.cabins import router as cabins_router
from cabin_admin.routes.health import router as health_router
from cabin_admin.routes.messages import router as messages_router
from cabin_admin.routes.metrics import router as metrics_router
from cabin_admin.routes.payments import router as payments_router
from cabin_admin.routes.reservations import router as reservations_router
from cabin_admin.routes.views import router as views_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Cabin Admin API",
    description="Back office for cabin reservations, payments and guest messages",
    version="1.0.0",
)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(cabins_router, prefix="/admin", tags=["Cabins"])
app.include_router(reservations_router, prefix="/admin", tags=["Reservations"])
app.include_router(payments_router, prefix="/admin", tags=["Payments"])
app.include_router(messages_router, prefix="/admin", tags=["Messages"])
app.include_router(views_router, prefix="/admin", tags=["Views"])


@app.on_event("startup")
def startup_event() -> None:
    """Check the database once so misconfiguration shows up in the logs early."""
    from cabin_admin.db.engine import check_engine_health

    logger.info("FastAPI application starting up...")

    if not check_engine_health():
        logger.warning("database_not_reachable_at_startup")

    logger.info("FastAPI application initialized")

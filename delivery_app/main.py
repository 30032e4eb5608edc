from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from delivery_app.api import delivery
from delivery_app.core.config import get_settings
from delivery_app.core.errors import register_exception_handlers
from delivery_app.db import create_db_and_tables

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


# Create the FastAPI app
app = FastAPI(
    title="Delivery Driver API",
    version="1.0.0",
    description="Driver dashboard, order acceptance and delivery tracking.",
)

register_exception_handlers(app)

# Allow the web and driver apps (CORS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    log.info("Starting DB setup...")
    await create_db_and_tables()
    log.info("DB schema ready.")


@app.get("/health")
async def health():
    return {"status": "ok"}


# Core app routers
app.include_router(delivery.router, prefix="/api")

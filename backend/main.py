from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from api import settings, clients, orders, weeks
from config.app_config import LOG_DIR, HOST, get_log_level, get_port
from domain.week_calendar import current_week_range
from init_db import init_database
import logging
from logging.handlers import RotatingFileHandler
import sys

logger = logging.getLogger(__name__)

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def configure_logging():
    """
    Rotating file handler plus console handler on the root logger.

    Runs once; later calls are ignored.
    """
    root_logger = logging.getLogger()
    if any(getattr(handler, '_dozen_orders', False) for handler in root_logger.handlers):
        return

    level = get_log_level()
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / "backend.log"

    # File handler with rotation (5MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    console_handler = logging.StreamHandler(sys.stdout)

    for handler in (file_handler, console_handler):
        handler.setFormatter(log_formatter)
        handler.setLevel(level)
        handler._dozen_orders = True
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
    logger.info(f"Logging initialized: {log_file}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_database()
    logger.info(f"Current business week: {current_week_range().label}")
    yield
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Dozen Orders API",
    description="Orders, clients and weekly reports for a business selling by the dozen",
    version="1.0.0",
    lifespan=lifespan
)

# Local operator UI may be served from another port
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(settings.router, prefix="/api", tags=["settings"])
app.include_router(clients.router, prefix="/api", tags=["clients"])
app.include_router(orders.router, prefix="/api", tags=["orders"])
app.include_router(weeks.router, prefix="/api", tags=["weeks"])


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    port = get_port()
    logger.info(f"🚀 Starting Dozen Orders on http://{HOST}:{port}...")
    uvicorn.run(app, host=HOST, port=port)

import argparse
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db
from config import load_config
from routes import entries, today, stats, maintenance  # Import routers
from utils.logging_config import get_logger

logger = logging.getLogger("versetrack")


# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: init DB and config
    config = load_config()  # Ensures config exists
    get_logger("", level=config["logging"]["level"])  # root handler for all modules
    init_db()
    logger.info(
        "VerseTrack ready (memorization system %s)",
        "enabled" if config["memorization"]["system_enabled"] else "disabled",
    )
    yield
    # Shutdown if needed


app = FastAPI(
    title="VerseTrack",
    description="Scripture memorization progress engine",
    lifespan=lifespan,
)

# Include routers
app.include_router(entries.router, prefix="/entries", tags=["entries"])
app.include_router(today.router, prefix="/today", tags=["today"])
app.include_router(stats.router, prefix="/stats", tags=["stats"])
app.include_router(maintenance.router, prefix="/admin", tags=["admin"])


@app.get("/")
async def home():
    return {"name": "VerseTrack", "routes": ["/entries", "/today", "/stats", "/admin/repair"]}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="VerseTrack App")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    args = parser.parse_args()
    if args.init:
        load_config()  # Ensures config is copied if missing
        init_db()
        print("DB initialized and config copied to ~/.versetrack/")
        exit(0)
    # Run server
    reload = args.dev
    uvicorn.run("main:app", host="127.0.0.1", port=args.port, reload=reload, log_level="info")

import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtolk.config import settings
from jobtolk.routers import jobs, profiles, search
from jobtolk.utils.logging import setup_logging

logger = logging.getLogger("jobtolk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Startup: create or migrate the store, then integrity-check it
    try:
        from jobtolk.database import init_db
        from jobtolk.utils.filesystem import ensure_data_dir
        ensure_data_dir()
        init_db()
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    except (OSError, sqlite3.Error) as exc:
        logger.error("Could not initialise database: %s", exc)
    yield


app = FastAPI(
    title="JobTolk Search",
    description="Job and freelancer search with client-style fuzzy ranking",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profiles.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(search.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


def run():
    import uvicorn
    uvicorn.run("jobtolk.main:app", host=settings.host, port=settings.port)

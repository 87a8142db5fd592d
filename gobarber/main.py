# gobarber/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .db import create_db_and_tables
from .errors import SchedulingError
from .routers import (
    appointments_routes,
    auth_routes,
    files_routes,
    notifications_routes,
    providers_routes,
    schedule_routes,
    users_routes,
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("Database ready")
    yield


app = FastAPI(title="GoBarber", lifespan=lifespan)

app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(providers_routes.router)
app.include_router(appointments_routes.router)
app.include_router(schedule_routes.router)
app.include_router(notifications_routes.router)
app.include_router(files_routes.router)

# uploaded avatars, see File.url
app.mount("/files", StaticFiles(directory=settings.upload_dir, check_dir=False), name="files")


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/health")
def health_check():
    return {"status": "ok"}

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Treating Calendar Service
=========================
Tracks who hosts the weekly team treat, keeps the rotation fair across the
roster, lets hosts swap future dates and sends weekly reminders.

Port: 8010
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from treating_calendar.controllers import (
    personnel_controller,
    reminder_controller,
    schedule_controller,
    system_controller,
    team_controller,
)
from treating_calendar.core import database
from treating_calendar.core.config import settings
from treating_calendar.core.logging import get_logger
from treating_calendar.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


@asynccontextmanager
async def lifespan(application: FastAPI):
    database.init_db()
    logger.info("Database schema ready")
    yield
    database.engine.dispose()
    logger.info("Shutting down: connection pool disposed")


app = FastAPI(
    title="Treating Calendar Service",
    description="Fair weekly host rotation with swaps and reminders.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc)},
    )


app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(personnel_controller.router)
app.include_router(schedule_controller.router)
app.include_router(reminder_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")

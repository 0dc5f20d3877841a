import logging
import logging.config
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi_sqlalchemy import DBSessionMiddleware
from starlette.middleware.cors import CORSMiddleware

from app.api.api_router import router
from app.models import Base
from app.db.base import engine
from app.core.config import settings
from app.helpers.exception_handler import CustomException, http_exception_handler
from app.services.reminder_scheduler import reminder_scheduler

if os.path.exists(settings.LOGGING_CONFIG_FILE):
    logging.config.fileConfig(settings.LOGGING_CONFIG_FILE, disable_existing_loggers=False)

logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.REMINDER_SCHEDULER_ENABLED:
        reminder_scheduler.start()
    else:
        logger.info("Reminder scheduler disabled via REMINDER_SCHEDULER_ENABLED")
    yield
    reminder_scheduler.stop()


def get_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME, docs_url="/docs", redoc_url='/re-docs',
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description='''
        Medication reminder backend with FastAPI + SQLAlchemy
            - Login/Register with JWT
            - CRUD Medication schedules
            - Dose ledger with taken/skipped tracking
            - Per-minute e-mail and SMS reminder sweep
        ''',
        lifespan=lifespan
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Length", "Authorization"],
    )
    application.add_middleware(DBSessionMiddleware, custom_engine=engine)
    application.include_router(router, prefix=settings.API_PREFIX)
    application.add_exception_handler(CustomException, http_exception_handler)

    @application.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "services": {
                "database": "connected",
                "reminder_scheduler": "running" if reminder_scheduler.running else "stopped"
            }
        }

    return application


app = get_application()
if __name__ == '__main__':
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))

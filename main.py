# main.py
import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler # type: ignore
from apscheduler.triggers.cron import CronTrigger # type: ignore
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dancey_portal.api.v1.api import api_router
from dancey_portal.config import CORS_ORIGINS
from dancey_portal.database import Base, engine, SessionLocal
from dancey_portal.exceptions import register_exception_handlers
from dancey_portal.models import *
from dancey_portal.services import promotion_service

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger('apscheduler').setLevel(logging.INFO)

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def run_expire_promotions_task():
    """Disable promotions whose end date has passed. Runs nightly."""
    db = SessionLocal()
    try:
        count = promotion_service.deactivate_expired_promotions(db)
        logger.info("Expired promotions job finished, %d promotion(s) disabled.", count)
    except Exception:
        logger.exception("Expired promotions job failed.")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler.add_job(
        run_expire_promotions_task,
        trigger=CronTrigger(hour=0, minute=0),
        id="expire_promotions_job",
        name="Disable Expired Promotions"
    )
    scheduler.start()
    logger.info("Scheduler started.")

    Base.metadata.create_all(bind=engine)

    yield

    scheduler.shutdown()
    logger.info("Scheduler stopped.")


app = FastAPI(
    title="Dancey Admin Portal API",
    description="Admin API for managing dance classes, class packs, memberships and studio content.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"message": "Welcome to the Dancey Admin Portal API! Visit /docs for API documentation."}

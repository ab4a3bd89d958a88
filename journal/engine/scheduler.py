"""APScheduler integration for FastAPI.

Runs the periodic statistics refresh job.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from journal.config import settings
from journal.utils.constants import INTERVAL_HOURS

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

STATS_JOB_ID = "stats_refresh"


def _get_trigger(interval: str) -> IntervalTrigger:
    # Support arbitrary "<N>m" schedule intervals
    if interval.endswith("m") and interval[:-1].isdigit():
        return IntervalTrigger(minutes=int(interval[:-1]))
    hours = INTERVAL_HOURS.get(interval, 1.0)
    if hours < 1:
        return IntervalTrigger(minutes=int(hours * 60))
    return IntervalTrigger(hours=hours)


def add_stats_job(interval: str):
    """Add or replace the statistics refresh job."""
    from journal.engine.stats_job import run_stats_refresh

    if scheduler.get_job(STATS_JOB_ID):
        scheduler.remove_job(STATS_JOB_ID)

    scheduler.add_job(
        run_stats_refresh,
        trigger=_get_trigger(interval),
        id=STATS_JOB_ID,
        name="Statistics refresh",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=60,
    )
    logger.info(f"Scheduled statistics refresh every {interval}")


def remove_stats_job():
    if scheduler.get_job(STATS_JOB_ID):
        scheduler.remove_job(STATS_JOB_ID)
        logger.info("Removed statistics refresh job")


def start_scheduler():
    """Start the scheduler with the refresh job if enabled."""
    if settings.stats_refresh_enabled:
        add_stats_job(settings.stats_refresh_interval)

    scheduler.start()
    logger.info(f"Scheduler started with {len(scheduler.get_jobs())} jobs")


def stop_scheduler():
    """Shut down the scheduler."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
    logger.info("Scheduler stopped")


def get_scheduler_status() -> dict:
    """Return current scheduler state for the API."""
    jobs = scheduler.get_jobs()
    return {
        "running": scheduler.running,
        "job_count": len(jobs),
        "jobs": [
            {
                "id": j.id,
                "name": j.name,
                "next_run": str(j.next_run_time) if getattr(j, "next_run_time", None) else None,
                "trigger": str(j.trigger),
            }
            for j in jobs
        ],
    }

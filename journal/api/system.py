"""System API: health check, scheduler status, manual stats refresh."""

from fastapi import APIRouter, HTTPException

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/scheduler")
def scheduler_status():
    """Current scheduler state with job details."""
    from journal.engine.scheduler import get_scheduler_status
    return get_scheduler_status()


@router.post("/refresh-stats")
async def refresh_stats():
    """Manually run one statistics refresh for every owner."""
    from journal.engine.stats_job import run_stats_refresh
    try:
        summary = await run_stats_refresh()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "ok", **summary}

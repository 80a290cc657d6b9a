"""
Queueing and status tracking for the daily agenda job
"""

import asyncio
import logging

from arq import create_pool
from arq.jobs import Job, JobStatus
from fastapi import APIRouter, HTTPException

from ..schemas import JobEnqueuedResponse, JobStatusResponse
from ..worker import DAILY_AGENDA_TASK, get_redis_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

STATUS_MAP = {
    JobStatus.deferred: "queued",
    JobStatus.queued: "queued",
    JobStatus.in_progress: "in_progress",
    JobStatus.complete: "complete",
    JobStatus.not_found: "not_found",
}


@router.post("/daily-agenda", response_model=JobEnqueuedResponse, status_code=202)
async def enqueue_daily_agenda():
    """Run the daily agenda cycle now instead of waiting for the hourly cron"""
    try:
        pool = await asyncio.wait_for(create_pool(get_redis_settings()), timeout=20.0)
    except Exception as e:
        logger.error(f"❌ Could not connect to job queue: {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Job queue unavailable") from e

    try:
        job = await pool.enqueue_job(DAILY_AGENDA_TASK)
    finally:
        await pool.close()

    if job is None:
        raise HTTPException(status_code=409, detail="Daily agenda job already queued")

    logger.info(f"📋 Daily agenda job queued: {job.job_id}")
    return JobEnqueuedResponse(jobId=job.job_id)


@router.get("/status/{job_id}", response_model=JobStatusResponse)
async def get_job_status(job_id: str):
    """Get the status of a queued daily agenda run"""
    try:
        pool = await asyncio.wait_for(create_pool(get_redis_settings()), timeout=20.0)
    except Exception as e:
        logger.error(f"❌ Could not connect to job queue: {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Job queue unavailable") from e

    try:
        job = Job(job_id, pool)
        job_status = await asyncio.wait_for(job.status(), timeout=15.0)

        if job_status == JobStatus.not_found:
            raise HTTPException(status_code=404, detail="Job not found")

        status = STATUS_MAP.get(job_status, "unknown")
        result = None
        error = None

        if job_status == JobStatus.complete:
            try:
                job_result = await asyncio.wait_for(job.result(), timeout=10.0)
                result = job_result if isinstance(job_result, dict) else {"data": job_result}
            except asyncio.TimeoutError:
                logger.warning(f"⏰ Timeout getting result for job {job_id}")
                error = "Timeout retrieving job result"
                status = "failed"
            except Exception as e:
                logger.error(f"❌ Job {job_id} failed: {e}")
                error = str(e)
                status = "failed"

        return JobStatusResponse(jobId=job_id, status=status, result=result, error=error)
    except asyncio.TimeoutError as e:
        raise HTTPException(status_code=504, detail="Timeout connecting to job queue") from e
    finally:
        await pool.close()

# gobarber/queue.py
"""
Database-backed job queue.

Jobs are rows in the `job` table. `enqueue` is idempotent on the dedupe
key, so a job for the same subject can be submitted again safely (for
instance by the reconciliation pass in the worker).
"""

import logging
from typing import Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .clock import utcnow
from .config import settings
from .errors import QueueDispatchError
from .models import Job

logger = logging.getLogger(__name__)

JobHandler = Callable[[dict], None]


class JobQueue:
    def __init__(self, session: Session, max_attempts: Optional[int] = None):
        self.session = session
        self.max_attempts = max_attempts or settings.job_max_attempts

    def find_by_dedupe_key(self, dedupe_key: str) -> Optional[Job]:
        return self.session.exec(
            select(Job).where(Job.dedupe_key == dedupe_key)
        ).first()

    def enqueue(self, key: str, payload: dict, dedupe_key: Optional[str] = None) -> Job:
        try:
            if dedupe_key is not None:
                existing = self.find_by_dedupe_key(dedupe_key)
                if existing is not None:
                    logger.info("Job %s already queued (id=%s)", dedupe_key, existing.id)
                    return existing

            job = Job(key=key, payload=payload, dedupe_key=dedupe_key)
            self.session.add(job)
            self.session.commit()
            self.session.refresh(job)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise QueueDispatchError(f"Could not enqueue {key} job") from exc

        logger.info("Enqueued job %s (id=%s)", key, job.id)
        return job

    def run_pending(self, handlers: Dict[str, JobHandler], limit: int = 50) -> int:
        """Runs up to `limit` pending jobs. Returns how many succeeded."""
        jobs = self.session.exec(
            select(Job)
            .where(Job.status == "pending")
            .order_by(Job.id)
            .limit(limit)
        ).all()

        succeeded = 0
        for job in jobs:
            job.attempts += 1
            handler = handlers.get(job.key)
            try:
                if handler is None:
                    raise LookupError(f"No handler registered for job {job.key!r}")
                handler(job.payload)
            except Exception as exc:
                job.last_error = f"{type(exc).__name__}: {exc}"
                if handler is None or job.attempts >= self.max_attempts:
                    job.status = "failed"
                logger.warning(
                    "Job %s (id=%s) failed on attempt %s/%s: %s",
                    job.key, job.id, job.attempts, self.max_attempts, job.last_error,
                )
            else:
                job.status = "done"
                job.last_error = None
                succeeded += 1

            job.updated_at = utcnow()
            self.session.add(job)
            self.session.commit()

        return succeeded

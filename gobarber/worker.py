# gobarber/worker.py
"""
Background worker: sends queued mails.

Each pass first re-queues cancellation mails that are missing (an
appointment canceled while the queue was unreachable), then runs the
pending jobs.
"""

import argparse
import logging
import time
from typing import Dict, Optional

from sqlmodel import Session

from .clock import Clock, SystemClock
from .config import settings
from .db import create_db_and_tables, engine
from .errors import QueueDispatchError
from .jobs import CancellationMail, cancellation_dedupe_key
from .mail import Mailer
from .queue import JobHandler, JobQueue
from .store import AppointmentStore

logger = logging.getLogger(__name__)


def build_handlers(mailer: Mailer) -> Dict[str, JobHandler]:
    return {CancellationMail.key: CancellationMail(mailer).handle}


def reconcile_cancellations(session: Session, queue: JobQueue, clock: Clock) -> int:
    """Queues a cancellation mail for every upcoming canceled appointment that has none."""
    requeued = 0
    for appointment in AppointmentStore(session).find_canceled_after(clock.now()):
        dedupe_key = cancellation_dedupe_key(appointment.id)
        if queue.find_by_dedupe_key(dedupe_key) is not None:
            continue
        try:
            queue.enqueue(CancellationMail.key, CancellationMail.payload_for(appointment), dedupe_key=dedupe_key)
        except QueueDispatchError:
            logger.exception("Could not re-queue the cancellation mail of appointment %s", appointment.id)
            continue
        requeued += 1

    if requeued:
        logger.warning("Re-queued %s missing cancellation mail(s)", requeued)
    return requeued


def run_once(session: Session, handlers: Dict[str, JobHandler], clock: Optional[Clock] = None) -> int:
    queue = JobQueue(session)
    reconcile_cancellations(session, queue, clock or SystemClock())
    return queue.run_pending(handlers)


def main() -> int:
    parser = argparse.ArgumentParser(description="GoBarber background worker")
    parser.add_argument("--once", action="store_true", help="Run a single pass and exit")
    parser.add_argument("--interval", type=float, default=5.0, help="Seconds between passes")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    create_db_and_tables()
    handlers = build_handlers(Mailer())

    while True:
        try:
            with Session(engine) as session:
                done = run_once(session, handlers)
            if done:
                logger.info("Processed %s job(s)", done)
        except Exception:
            logger.exception("Worker pass failed")
            if args.once:
                return 1
        if args.once:
            return 0
        time.sleep(args.interval)


if __name__ == "__main__":
    raise SystemExit(main())

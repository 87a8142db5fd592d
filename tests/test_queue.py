from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from conftest import NOW, make_appointment

from gobarber.errors import QueueDispatchError
from gobarber.jobs import CancellationMail, cancellation_dedupe_key
from gobarber.mail import Mailer
from gobarber.models import Job
from gobarber.queue import JobQueue
from gobarber.worker import build_handlers, main as worker_main, reconcile_cancellations, run_once


def test_enqueue_is_idempotent_on_the_dedupe_key(session) -> None:
    queue = JobQueue(session)

    first = queue.enqueue("CancellationMail", {"n": 1}, dedupe_key="CancellationMail:1")
    again = queue.enqueue("CancellationMail", {"n": 2}, dedupe_key="CancellationMail:1")

    assert again.id == first.id
    assert again.payload == {"n": 1}
    assert len(session.exec(select(Job)).all()) == 1


def test_enqueue_failure_raises_queue_dispatch_error(session) -> None:
    queue = JobQueue(session)
    error = OperationalError("INSERT INTO job", {}, Exception("database is locked"))

    with patch.object(session, "commit", side_effect=error):
        with pytest.raises(QueueDispatchError):
            queue.enqueue("CancellationMail", {}, dedupe_key="CancellationMail:1")


def test_run_pending_marks_jobs_done(session) -> None:
    queue = JobQueue(session)
    job = queue.enqueue("Echo", {"value": 42})
    handler = MagicMock()

    assert queue.run_pending({"Echo": handler}) == 1

    handler.assert_called_once_with({"value": 42})
    session.refresh(job)
    assert (job.status, job.attempts, job.last_error) == ("done", 1, None)


def test_failing_job_is_retried_until_max_attempts(session) -> None:
    queue = JobQueue(session, max_attempts=2)
    job = queue.enqueue("Echo", {})
    handler = MagicMock(side_effect=RuntimeError("smtp down"))

    assert queue.run_pending({"Echo": handler}) == 0
    session.refresh(job)
    assert (job.status, job.attempts) == ("pending", 1)
    assert job.last_error == "RuntimeError: smtp down"

    assert queue.run_pending({"Echo": handler}) == 0
    session.refresh(job)
    assert (job.status, job.attempts) == ("failed", 2)

    # failed jobs are not picked up again
    queue.run_pending({"Echo": handler})
    assert handler.call_count == 2


def test_job_without_handler_fails_immediately(session) -> None:
    queue = JobQueue(session, max_attempts=5)
    job = queue.enqueue("Unknown", {})

    queue.run_pending({})

    session.refresh(job)
    assert job.status == "failed"
    assert "Unknown" in job.last_error


def test_cancellation_mail_goes_to_the_provider() -> None:
    mailer = MagicMock(spec=Mailer)
    payload = {
        "appointment": {
            "id": 1,
            "date": "2026-10-20T14:00:00",
            "provider": {"name": "Carla Barber", "email": "carla@example.com"},
            "user": {"name": "John Client"},
        }
    }

    CancellationMail(mailer).handle(payload)

    kwargs = mailer.send_mail.call_args.kwargs
    assert kwargs["to"] == "Carla Barber <carla@example.com>"
    assert kwargs["subject"] == "Appointment canceled"
    assert "John Client canceled the appointment scheduled for 20 October, at 14:00h" in kwargs["body"]


def test_mailer_without_host_only_logs(caplog) -> None:
    mailer = Mailer(host="", sender="GoBarber <noreply@gobarber.com>")

    with patch("gobarber.mail.smtplib.SMTP") as smtp, caplog.at_level("INFO", logger="gobarber.mail"):
        mailer.send_mail("carla@example.com", "Hi", "Body")

    smtp.assert_not_called()
    assert "carla@example.com" in caplog.text


def test_mailer_sends_through_smtp() -> None:
    mailer = Mailer(host="smtp.example.com", port=2525, user="u", password="p", sender="noreply@gobarber.com")

    with patch("gobarber.mail.smtplib.SMTP") as smtp:
        mailer.send_mail("carla@example.com", "Hi", "Body")

    smtp.assert_called_once_with("smtp.example.com", 2525)
    connection = smtp.return_value.__enter__.return_value
    connection.login.assert_called_once_with("u", "p")
    message = connection.send_message.call_args.args[0]
    assert message["To"] == "carla@example.com"
    assert message["Subject"] == "Hi"


def test_reconciliation_queues_missing_cancellation_mails(session, clock, provider, client_user) -> None:
    lost = make_appointment(session, client_user, provider, datetime(2026, 10, 20, 9, 0), canceled_at=NOW)
    make_appointment(session, client_user, provider, datetime(2026, 10, 20, 10, 0))
    make_appointment(session, client_user, provider, datetime(2026, 10, 1, 10, 0), canceled_at=datetime(2026, 9, 30))
    queue = JobQueue(session)

    assert reconcile_cancellations(session, queue, clock) == 1
    assert reconcile_cancellations(session, queue, clock) == 0

    [job] = session.exec(select(Job)).all()
    assert job.dedupe_key == cancellation_dedupe_key(lost.id)


def test_run_once_sends_the_cancellation_mail(session, clock, provider, client_user) -> None:
    make_appointment(session, client_user, provider, datetime(2026, 10, 20, 9, 0), canceled_at=NOW)
    mailer = MagicMock(spec=Mailer)

    assert run_once(session, build_handlers(mailer), clock) == 1

    mailer.send_mail.assert_called_once()
    [job] = session.exec(select(Job)).all()
    assert job.status == "done"


def test_run_once_still_runs_pending_jobs_when_requeue_fails(session, clock, provider, client_user) -> None:
    make_appointment(session, client_user, provider, datetime(2026, 10, 20, 9, 0), canceled_at=NOW)
    JobQueue(session).enqueue("Echo", {"value": 1})
    handler = MagicMock()

    with patch.object(JobQueue, "enqueue", side_effect=QueueDispatchError("db down")):
        assert run_once(session, {"Echo": handler}, clock) == 1

    handler.assert_called_once_with({"value": 1})


def test_worker_exits_with_error_on_a_failed_single_pass() -> None:
    with (
        patch("sys.argv", ["gobarber-worker", "--once"]),
        patch("gobarber.worker.create_db_and_tables"),
        patch("gobarber.worker.Session"),
        patch("gobarber.worker.run_once", side_effect=RuntimeError("db down")),
    ):
        assert worker_main() == 1


def test_worker_loop_survives_a_failed_pass() -> None:
    with (
        patch("sys.argv", ["gobarber-worker", "--interval", "0"]),
        patch("gobarber.worker.create_db_and_tables"),
        patch("gobarber.worker.Session"),
        patch("gobarber.worker.time.sleep"),
        patch("gobarber.worker.run_once", side_effect=[RuntimeError("db down"), 2, KeyboardInterrupt()]) as run,
    ):
        with pytest.raises(KeyboardInterrupt):
            worker_main()

    assert run.call_count == 3

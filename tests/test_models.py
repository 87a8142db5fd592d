from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import DateTime
from sqlmodel import select

from conftest import NOW, make_appointment

from gobarber.models import Appointment, File, Job, Notification, User


@pytest.mark.parametrize("model", [File, User, Appointment, Notification, Job])
def test_datetime_columns_store_naive_utc(model) -> None:
    columns = [c for c in model.__table__.columns if c.name in {"date", "canceled_at", "created_at", "updated_at"}]

    assert columns
    for column in columns:
        assert type(column.type) is DateTime, column.name
        assert column.type.timezone is False, column.name


def test_naive_datetimes_round_trip(session, provider, client_user) -> None:
    make_appointment(session, client_user, provider, datetime(2026, 10, 20, 14, 0), canceled_at=NOW)
    session.expire_all()

    stored = session.exec(select(Appointment)).one()
    assert stored.date == datetime(2026, 10, 20, 14, 0)
    assert stored.canceled_at == NOW
    assert stored.created_at.tzinfo is None

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..infra.models import CalendarDate, Stamp

# Injected wherever the wall clock is read so tests can pin it.
Clock = Callable[[], datetime]


def local_now() -> datetime:
    return datetime.now().replace(microsecond=0)


def now_stamp(clock: Clock = local_now) -> Stamp:
    return Stamp.from_datetime(clock())


def today(clock: Clock = local_now) -> CalendarDate:
    return CalendarDate.from_date(clock().date())


def log_timestamp(clock: Clock = local_now) -> str:
    return clock().strftime("%d-%m-%Y %H:%M:%S")

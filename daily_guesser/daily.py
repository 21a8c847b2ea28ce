import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DailySelection:
    target_code: str
    puzzle_number: int


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_elapsed(now: datetime, epoch: datetime) -> int:
    """Whole days between epoch and now. Instants before the epoch count as day 0."""
    elapsed = _as_utc(now) - _as_utc(epoch)
    if elapsed < timedelta(0):
        logger.warning("Clock %s is before the puzzle epoch %s, using day one", now, epoch)
        return 0
    return elapsed // ONE_DAY


def daily_selection(now: datetime, permutation, epoch: datetime) -> DailySelection:
    """Pick the target country for the day containing ``now``."""
    if not permutation:
        raise ValueError("permutation must not be empty")
    days = days_elapsed(now, epoch)
    return DailySelection(
        target_code=permutation[days % len(permutation)],
        puzzle_number=days + 1,
    )


def todays_selection(catalog, epoch, now=None) -> DailySelection:
    now = now or datetime.now(timezone.utc)
    return daily_selection(now, catalog.permutation, epoch)

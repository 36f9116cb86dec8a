from datetime import datetime, date, time
from typing import Iterable, List, Optional, Tuple, Union

NOON = time(12, 0)
END_OF_DAY = time(23, 59, 59)

_FILTER_SENTINELS = {"", "null", "none", "undefined"}


# =========================
# Filter normalization
# =========================
def normalize_filter(value: Optional[str]) -> Optional[str]:
    """Map absent filter markers ("null", "", ...) to None."""
    if value is None:
        return None
    stripped = value.strip()
    if stripped.lower() in _FILTER_SENTINELS:
        return None
    return stripped


# =========================
# Slot times
# =========================
def parse_slot(value: Union[str, time]) -> time:
    """Parse a configured slot ("09:00" or "09:00:00") into a time."""
    if isinstance(value, time):
        return value
    value = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid slot time: {value!r}. Use HH:MM")


def format_slot(value: time) -> str:
    if value.second:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")


def normalize_slots(values: Iterable[str]) -> List[str]:
    """Parse, reject duplicates and return slots as sorted HH:MM strings."""
    parsed = [parse_slot(v) for v in values]
    if len(set(parsed)) != len(parsed):
        raise ValueError("Slot times must be unique")
    return [format_slot(t) for t in sorted(parsed)]


def split_slots(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def join_slots(slots: Iterable[str]) -> str:
    return ",".join(slots)


# =========================
# Dates
# =========================
def parse_day(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_appointment_time(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.strip())


def day_window(day: date) -> Tuple[datetime, datetime]:
    """Closed window [day 00:00:00, day 23:59:59]."""
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


# =========================
# LIKE patterns
# =========================
LIKE_ESCAPE = "\\"


def contains_pattern(value: str) -> str:
    """Substring LIKE pattern with %, _ and the escape char matched literally."""
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"

"""
"on this day" and month calendars built from birth/death dates

dates are stored as YYYY-MM-DD text and matched by slicing the string, never
by parsing into a date object, so there is no timezone shift:
    value[0:4]  -> year
    value[5:7]  -> month
    value[5:10] -> month-day
values that are not in that exact shape are skipped.
"""
import re
from datetime import date
from typing import Iterable, Optional

from sqlalchemy import func
from sqlmodel import Session, select, or_

from historyaddress.models import Home

CALENDAR_DATE_RE = re.compile(r'\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])')

EVENT_FIELDS = (("birth", "birth_date"), ("death", "death_date"))


def is_calendar_date(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(CALENDAR_DATE_RE.fullmatch(value))


def month_day(month: int, day: int) -> str:
    return f"{month:02d}-{day:02d}"


def parse_month(raw: Optional[str], today: date) -> int:
    """month query param, anything missing or outside 1..12 means this month"""
    try:
        month = int(str(raw).strip())
    except (TypeError, ValueError):
        return today.month
    return month if 1 <= month <= 12 else today.month


def parse_year(raw: Optional[str], today: date) -> int:
    try:
        year = int(str(raw).strip())
    except (TypeError, ValueError):
        return today.year
    return year if year > 0 else today.year


def _event(home: Home, event_type: str, value: str, reference_year: int) -> dict:
    return {
        "name": home.name,
        "slug": home.slug,
        "type": event_type,
        "full_date": value,
        "years_ago": reference_year - int(value[0:4]),
    }


def _candidates(session: Session, start: int, length: int, needle: str) -> Iterable[Home]:
    # narrow sql pre-filter only, the string checks below decide the match
    return session.exec(
        select(Home)
        .where(Home.published == True)  # noqa: E712
        .where(or_(
            func.substr(Home.birth_date, start, length) == needle,
            func.substr(Home.death_date, start, length) == needle,
        ))
        .order_by(Home.name)
    ).all()


def match_month(homes: Iterable[Home], month: int, reference_year: int) -> dict[str, list[dict]]:
    target = f"{month:02d}"
    events: dict[str, list[dict]] = {}
    for home in homes:
        for event_type, field in EVENT_FIELDS:
            value = getattr(home, field)
            if not is_calendar_date(value) or value[5:7] != target:
                continue
            events.setdefault(value[5:10], []).append(_event(home, event_type, value, reference_year))
    return dict(sorted(events.items()))


def match_day(homes: Iterable[Home], target: str, reference_year: int) -> list[dict]:
    events = []
    for home in homes:
        # birth and death on the same month-day give two events
        for event_type, field in EVENT_FIELDS:
            value = getattr(home, field)
            if is_calendar_date(value) and value[5:10] == target:
                events.append(_event(home, event_type, value, reference_year))
    return events


def month_events(session: Session, month: int, reference_year: int) -> dict[str, list[dict]]:
    homes = _candidates(session, 6, 2, f"{month:02d}")
    return match_month(homes, month, reference_year)


def today_events(session: Session, today: date, reference_year: Optional[int] = None) -> list[dict]:
    target = month_day(today.month, today.day)
    homes = _candidates(session, 6, 5, target)
    return match_day(homes, target, reference_year or today.year)

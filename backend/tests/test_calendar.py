from datetime import date

from historyaddress.models import Home
from historyaddress.services.calendar import (
    is_calendar_date,
    match_day,
    match_month,
    parse_month,
    parse_year,
    today_events,
)


def _add(session, slug, birth=None, death=None, published=True):
    session.add(Home(id=slug, slug=slug, name=slug.replace("-", " ").title(),
                     birth_date=birth, death_date=death, published=published))
    session.commit()


def test_today_years_ago(client, session):
    """birth 1850-11-07 seen on 11-07 of 2025 is 175 years ago"""
    _add(session, "ivan-vazov", birth="1850-11-07", death="1921-09-22")

    events = client.get("/api/calendar/today").json()
    assert events == [{
        "name": "Ivan Vazov",
        "slug": "ivan-vazov",
        "type": "birth",
        "full_date": "1850-11-07",
        "years_ago": 175,
    }]


def test_today_year_override(client, session):
    """?year= changes the reference year"""
    _add(session, "ivan-vazov", birth="1850-11-07")
    events = client.get("/api/calendar/today?year=2050").json()
    assert events[0]["years_ago"] == 200


def test_month_groups_by_month_day(client, session):
    """two births on the same month-day land under one key"""
    _add(session, "first-person", birth="1850-11-07")
    _add(session, "second-person", birth="1901-11-07")
    _add(session, "third-person", death="1944-11-21")
    _add(session, "other-month", birth="1850-12-07")

    events = client.get("/api/calendar?month=11&year=2025").json()
    assert list(events) == ["11-07", "11-21"]
    assert [e["slug"] for e in events["11-07"]] == ["first-person", "second-person"]
    assert events["11-07"][1]["years_ago"] == 124
    assert events["11-21"][0]["type"] == "death"


def test_same_month_day_birth_and_death_gives_two_events(client, session):
    """matching birth and death are reported separately"""
    _add(session, "same-day", birth="1800-11-07", death="1870-11-07")

    today = client.get("/api/calendar/today").json()
    assert [e["type"] for e in today] == ["birth", "death"]

    month = client.get("/api/calendar?month=11").json()
    assert len(month["11-07"]) == 2


def test_malformed_dates_are_skipped(client, session):
    """bad or partial dates never match and never error"""
    _add(session, "partial", birth="1850-11", death="11-07")
    _add(session, "garbage", birth="not a date", death="1850-11-07T00:00:00")
    _add(session, "empty", birth="", death=None)

    assert client.get("/api/calendar/today").json() == []
    assert client.get("/api/calendar?month=11").json() == {}


def test_unpublished_homes_not_in_calendar(client, session):
    """calendar only covers published homes"""
    _add(session, "hidden", birth="1850-11-07", published=False)
    assert client.get("/api/calendar/today").json() == []


def test_month_param_defaults(client, session):
    """missing or invalid month means the current month"""
    _add(session, "november", birth="1850-11-03")
    assert "11-03" in client.get("/api/calendar").json()
    assert "11-03" in client.get("/api/calendar?month=13").json()
    assert "11-03" in client.get("/api/calendar?month=abc").json()


def test_is_calendar_date():
    """only YYYY-MM-DD with a real month/day range is accepted"""
    assert is_calendar_date("1837-07-18")
    assert not is_calendar_date("1837-13-18")
    assert not is_calendar_date("1837-7-18")
    assert not is_calendar_date(None)
    assert not is_calendar_date("")


def test_match_functions_without_database():
    """matchers work on any iterable of homes"""
    homes = [
        Home(id="a", slug="a", name="A", birth_date="1837-07-18", death_date="1873-02-18"),
        Home(id="b", slug="b", name="B", birth_date="1848-01-06", death_date="1876-06-01"),
    ]
    assert [e["slug"] for e in match_day(homes, "02-18", 2023)] == ["a"]
    assert match_day(homes, "02-18", 2023)[0]["years_ago"] == 150
    assert list(match_month(homes, 6, 2026)) == ["06-01"]
    assert match_month(homes, 3, 2026) == {}


def test_today_events_service(session):
    """service call with an explicit day"""
    _add(session, "levski", birth="1837-07-18")
    events = today_events(session, date(2037, 7, 18))
    assert events[0]["years_ago"] == 200


def test_parse_helpers():
    """query parsing falls back to today"""
    today = date(2025, 11, 7)
    assert parse_month("3", today) == 3
    assert parse_month("0", today) == 11
    assert parse_month(None, today) == 11
    assert parse_year("1990", today) == 1990
    assert parse_year("x", today) == 2025


def test_trailing_newline_date_is_skipped(client, session):
    """a stored date with trailing whitespace is not a calendar date"""
    _add(session, "stray-newline", birth="1850-11-07\n")
    _add(session, "trailing-space", death="1921-11-07 ")

    assert not is_calendar_date("1850-11-07\n")
    assert client.get("/api/calendar/today").json() == []
    assert client.get("/api/calendar?month=11").json() == {}

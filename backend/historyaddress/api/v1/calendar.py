from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from historyaddress.api.deps import get_today
from historyaddress.core.db import get_session
from historyaddress.services import calendar

router = APIRouter()


@router.get("")
def get_month_calendar(
    month: Optional[str] = None,
    year: Optional[str] = None,
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    """births and deaths in a month, keyed by MM-DD"""
    target_month = calendar.parse_month(month, today)
    reference_year = calendar.parse_year(year, today)
    return calendar.month_events(session, target_month, reference_year)


@router.get("/today")
def get_today_calendar(
    year: Optional[str] = None,
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    """flat list of births and deaths that fall on today's month-day"""
    return calendar.today_events(session, today, calendar.parse_year(year, today))

"""
History filtering

Date-range and risk-level filters over stored assessments and daily
records, newest first.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from disfagia_monitor.services.risk.catalog import DAILY_HISTORY_BANDS
from disfagia_monitor.services.utils import parse_iso_date


def _in_range(day: Optional[date], start_date: Optional[date], end_date: Optional[date]) -> bool:
    if day is None:
        return start_date is None and end_date is None
    if start_date and day < start_date:
        return False
    if end_date and day > end_date:
        return False
    return True


def filter_assessments(
    assessments: List[Dict[str, Any]],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    risk_level: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Filter assessments by completion day and stored risk level

    Args:
        assessments: Stored assessment dictionaries
        start_date: First day included
        end_date: Last day included (the whole day counts)
        risk_level: Exact stored risk level to keep

    Returns:
        Matching assessments ordered by completed_at, newest first
    """
    results = [
        a for a in assessments
        if _in_range(parse_iso_date(a.get('completed_at')), start_date, end_date)
        and (risk_level is None or a.get('risk_level') == risk_level)
    ]
    results.sort(key=lambda a: a.get('completed_at') or '', reverse=True)
    return results


def filter_daily_records(
    records: List[Dict[str, Any]],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    risk_level: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Filter daily records by record_date and history risk band

    `risk_level` is one of DAILY_HISTORY_BANDS ('baixo', 'medio', 'alto')
    and selects records whose risk_score falls in that band.

    Raises:
        ValueError: unknown risk level
    """
    band = None
    if risk_level is not None:
        if risk_level not in DAILY_HISTORY_BANDS:
            raise ValueError(f"Unknown risk level '{risk_level}'. Use one of: {', '.join(DAILY_HISTORY_BANDS)}")
        band = DAILY_HISTORY_BANDS[risk_level]

    results = []
    for record in records:
        if not _in_range(parse_iso_date(record.get('record_date')), start_date, end_date):
            continue
        if band is not None:
            score = record.get('risk_score') or 0
            low, high = band
            if score < low or (high is not None and score > high):
                continue
        results.append(record)

    results.sort(key=lambda r: (r.get('record_date') or '', r.get('created_at') or ''), reverse=True)
    return results

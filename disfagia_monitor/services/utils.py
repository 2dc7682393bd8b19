"""
Utility functions for API routes
"""
from datetime import date, datetime
from typing import Dict, Any, Optional


def convert_datetime_to_iso(data: Dict[str, Any], fields: list[str]) -> Dict[str, Any]:
    """
    Convert datetime/date objects to ISO strings for JSON storage

    Args:
        data: Dictionary to convert
        fields: List of field names to convert

    Returns:
        Dictionary with the listed fields converted to ISO strings
    """
    result = data.copy()
    for field in fields:
        if isinstance(result.get(field), (datetime, date)):
            result[field] = result[field].isoformat()
    return result


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse the date part of an ISO date or datetime string

    Returns None for empty values.
    """
    if not value:
        return None
    return datetime.fromisoformat(value).date() if 'T' in value else date.fromisoformat(value)

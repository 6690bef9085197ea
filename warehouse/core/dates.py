from datetime import date, datetime

from warehouse.config import get_settings


def normalize_date(value):
    """Coerce a ledger date (DATE_FORMAT text, ISO text, date or datetime) to a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return datetime.strptime(value_text, get_settings().DATE_FORMAT).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            return None
    return None
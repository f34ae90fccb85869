"""Date rendering and parsing in the e-Fatura formats."""

from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"
DATE_T_TIME = "%Y-%m-%dT%H:%M:%S"


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_datetime(value: datetime) -> str:
    """Render to the second, dropping any sub-second part."""
    return value.strftime(DATE_T_TIME)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_datetime(value: str) -> datetime:
    return datetime.strptime(value, DATE_T_TIME)

'''
Date normalizer: turns the timestamp strings found in feeds into integer
epoch seconds. Formats are tried in a fixed order; the first that yields a
zone-aware datetime wins.
'''

import re
from collections.abc import Callable
from datetime import datetime
from email.utils import parsedate_to_datetime

import structlog
from dateutil import parser as date_parser
from dateutil import tz

logger = structlog.get_logger()

# Abbreviations dateutil cannot resolve on its own, as UTC offsets in hours
ZONE_ABBREVIATIONS: dict[str, float] = {
    'EST': -5, 'EDT': -4,
    'CST': -6, 'CDT': -5,
    'MST': -7, 'MDT': -6,
    'PST': -8, 'PDT': -7,
    'AKST': -9, 'AKDT': -8,
    'HST': -10,
    'WET': 0, 'WEST': 1,
    'BST': 1,
    'CET': 1, 'CEST': 2,
    'EET': 2, 'EEST': 3,
    'MSK': 3,
    'JST': 9, 'KST': 9,
    'AEST': 10, 'AEDT': 11,
    'NZST': 12, 'NZDT': 13,
}

# EEE, dd MMM yyyy HH:mm:ss z
_NAMED_ZONE_PATTERN = re.compile(
    r'^[A-Za-z]{3}, \d{1,2} [A-Za-z]{3} \d{4} \d{2}:\d{2}:\d{2} [A-Za-z][A-Za-z0-9_/+\-]*$'
)


def _aware(dt: datetime | None) -> datetime | None:
    if dt is None or dt.tzinfo is None or dt.utcoffset() is None:
        return None
    return dt


def parse_iso_offset(value: str) -> datetime | None:
    '''ISO-8601 date-time carrying an offset, e.g. 2024-01-01T00:00:00+02:00 or ...Z.'''
    if 'T' not in value and 't' not in value:
        return None
    try:
        return _aware(datetime.fromisoformat(value))
    except ValueError:
        return None


def parse_rfc1123(value: str) -> datetime | None:
    '''RFC 1123 / RFC 822 date-time, e.g. Mon, 01 Jan 2024 00:00:00 GMT.'''
    try:
        return _aware(parsedate_to_datetime(value))
    except (TypeError, ValueError, IndexError):
        return None


def _zone_for(name: str | None, offset: int | None):
    if offset is not None:
        return offset
    if not name:
        return None
    hours = ZONE_ABBREVIATIONS.get(name.upper())
    if hours is not None:
        return tz.tzoffset(name, int(hours * 3600))
    return tz.gettz(name)


def parse_named_zone(value: str) -> datetime | None:
    '''
    Last-resort fallback for near-RFC-1123 strings with a named zone the
    stricter parser rejects, e.g. Mon, 01 Jan 2024 09:00:00 CET.
    '''
    value = value.strip()
    if not _NAMED_ZONE_PATTERN.match(value):
        return None
    try:
        return _aware(date_parser.parse(value, tzinfos=_zone_for))
    except (ValueError, OverflowError, TypeError):
        return None


DATE_PARSERS: tuple[Callable[[str], datetime | None], ...] = (
    parse_iso_offset,
    parse_rfc1123,
    parse_named_zone,
)


def parse_date_to_epoch(value: str) -> int | None:
    '''
    Integer epoch seconds for the first parser that accepts value, or None
    if none does. Never raises.
    '''
    value = value.strip()
    for parse in DATE_PARSERS:
        dt = parse(value)
        if dt is not None:
            return int(dt.timestamp())
    logger.warning('failed to parse date', value=value)
    return None

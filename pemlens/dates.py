# pemlens/dates.py
import datetime as dt
from typing import Optional


def _canonical(year: int, rest: str) -> str:
    # rest = MMDDHHMMSS
    return f"{year:04d}-{rest[0:2]}-{rest[2:4]} {rest[4:6]}:{rest[6:8]}:{rest[8:10]}"


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    ASN.1 UTCTime (YYMMDDHHMMSSZ) or GeneralizedTime (YYYYMMDDHHMMSSZ)
    → "YYYY-MM-DD HH:MM:SS". Anything else is returned as given.
    """
    if not raw:
        return raw
    s = raw[:-1] if raw.endswith("Z") else raw
    if not (s.isascii() and s.isdigit()):
        return raw
    if len(s) == 12:
        yy = int(s[0:2])
        year = 2000 + yy if yy < 50 else 1900 + yy
        return _canonical(year, s[2:])
    if len(s) == 14:
        return _canonical(int(s[0:4]), s[4:])
    return raw


def to_asn1_time(d: dt.datetime) -> str:
    # RFC 5280 4.1.2.5: UTCTime through 2049, GeneralizedTime from 2050
    if d.tzinfo is not None:
        d = d.astimezone(dt.timezone.utc)
    if 1950 <= d.year <= 2049:
        return d.strftime("%y%m%d%H%M%S") + "Z"
    return f"{d.year:04d}" + d.strftime("%m%d%H%M%S") + "Z"

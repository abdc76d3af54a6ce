import datetime as dt
import re
from typing import Optional

from partstat.interpret import _common

_S = r"(?P<seconds>\d{1,2})"
_M = r"(?P<minutes>\d{1,2})"
_H = r"(?P<hours>\d{1,2})"
_D = r"(?P<days>\d+)"

_M_REGEX_STRING = f"^{_M}$"
_MS_REGEX_STRING = f"^{_M}:{_S}$"
_HMS_REGEX_STRING = f"^{_H}:{_M}:{_S}$"
_DH_REGEX_STRING = f"^{_D}-{_H}$"
_DHM_REGEX_STRING = f"^{_D}-{_H}:{_M}$"
_DHMS_REGEX_STRING = f"^{_D}-{_H}:{_M}:{_S}$"
_DURATION_REGEX_STRINGS = [
    _M_REGEX_STRING,
    _MS_REGEX_STRING,
    _HMS_REGEX_STRING,
    _DH_REGEX_STRING,
    _DHM_REGEX_STRING,
    _DHMS_REGEX_STRING,
]  # do not change order! see: https://slurm.schedmd.com/sbatch.html#OPT_time
_DURATION_REGEX = [re.compile(s) for s in _DURATION_REGEX_STRINGS]

_SECONDS_REGEX = re.compile(r"^(?P<head>(\d+-)?\d+:\d+):\d+$")

TIME_LIMIT_KEYWORDS = (
    _common.INFINITE,
    _common.UNLIMITED.casefold(),
    _common.NA.casefold(),
    _common.NONE.casefold(),
)


def duration_timedelta(_v: str) -> Optional[dt.timedelta]:
    """
    "2-03:04:05" -> dt.timedelta(days=2, seconds=11045)
    "60:00" -> dt.timedelta(minutes=60)
    """
    for regex in _DURATION_REGEX:
        match = regex.match(_v)
        if match is None or match.group() == "":
            continue
        parts = {k: int(v) for k, v in match.groupdict().items()}
        td = dt.timedelta(**parts)
        return td
    return None


def time_limit(_v: str) -> Optional[str]:
    """
    A partition time limit as shown: a duration without its seconds, or one of
    the keywords "infinite", "UNLIMITED", "n/a" and "NONE" unchanged. None when
    the field is neither.
    """
    if _v.casefold() in TIME_LIMIT_KEYWORDS:
        return _v
    if duration_timedelta(_v) is None:
        return None
    return strip_seconds(_v)


def strip_seconds(_v: str) -> str:
    """
    Drops the seconds of a full "[d-]hh:mm:ss" duration. Anything else, such as
    "infinite", "n/a" or the short "mm:ss" form, is returned unchanged.

    "7-00:00:00" -> "7-00:00"
    "12:00:00" -> "12:00"
    "60:00" -> "60:00"
    """
    match = _SECONDS_REGEX.match(_v)
    if match is None:
        return _v
    return match.group("head")

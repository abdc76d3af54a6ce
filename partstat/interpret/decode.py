from __future__ import annotations

from typing import List, Optional, Tuple

from partstat.interpret import _common, _safe_convert

"""
These functions decode single sinfo/squeue fields into python values.
"""


def na_str(_v: str) -> Optional[str]:
    out = _safe_convert.convert_value_unsafe_to_none(_common.NA, _v)
    return out


def null_str(_v: str) -> Optional[str]:
    out = _safe_convert.convert_value_unsafe_to_none(_common.NULL, _v)
    return out


def yes_no_bool(_v: str) -> Optional[bool]:
    out = _safe_convert.convert_value_to_bool_safe(
        _common.YES, _common.NO, _v.casefold()
    )
    return out


def comma_separated_list(_v: str) -> List[str]:
    """
    Empty items are dropped, "a,,b" -> ["a", "b"]
    """
    out = delimited_list(",", _v)
    out = [item for item in out if item != ""]
    return out


def delimited_list(_delimiter: str, _v: str) -> List[str]:
    """
    _delimiter must be punctuation or a separator (unicode P?|Z?)

    x,y,... -> [x, y, ...]
    '' -> ['']
    """
    return _v.split(_delimiter)


def ranged(_separator: str, _v: str) -> Tuple[str, str]:
    """
    ("-", "x-y") -> ("x", "y")
    ("-", "x-") -> ("x", "")
    ("-", "x") -> ("x", "")
    """
    r = _v.split(_separator, maxsplit=1)
    if len(r) < 2:
        r.append("")
    return (r[0], r[1])


def strip_suffix(_suffix: str, _v: str) -> Tuple[str, bool]:
    """
    ("*", "batch*") -> ("batch", True)
    ("*", "batch") -> ("batch", False)
    """
    if _suffix != "" and _v.endswith(_suffix):
        return (_v[: -len(_suffix)], True)
    return (_v, False)


def enclosed(_brackets: Tuple[str, str], _v: str) -> Optional[str]:
    """
    _brackets must be punctuation or separator (unicode P?|Z?)

    l...r -> ...
    """
    if not (_v.startswith(_brackets[0]) and _v.endswith(_brackets[1])):
        return None
    if len(_v) < len(_brackets[0]) + len(_brackets[1]):
        return None

    left = len(_brackets[0])
    right = len(_v) - len(_brackets[1])
    return _v[left:right]

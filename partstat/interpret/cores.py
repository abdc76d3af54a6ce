from __future__ import annotations

from typing import NamedTuple, Optional

from partstat.interpret import _common, _safe_convert, decode


class CoreCounts(NamedTuple):
    allocated: int
    idle: int
    other: int
    total: int

    def __str__(self) -> str:
        return f"{self.allocated}/{self.idle}/{self.other}/{self.total}"

    @classmethod
    def from_string(cls, _v: str) -> Optional[CoreCounts]:
        """
        sinfo %C, "allocated/idle/other/total"

        "4/2/0/8" -> CoreCounts(4, 2, 0, 8)
        """
        parts = decode.delimited_list("/", _v)
        if len(parts) != 4:
            return None

        values = [_safe_convert.nonnegative_int(p) for p in parts]
        if _common.any_none(values):
            return None

        return cls(*values)  # type: ignore

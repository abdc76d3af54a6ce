from __future__ import annotations

import enum

from partstat.interpret import decode


class PendingReason(enum.Enum):
    """
    Why a pending job waits. Only jobs waiting on resources or on priority
    count as demand that is blocked by the partition being full.
    """

    RESOURCES = "Resources"
    PRIORITY = "Priority"
    OTHER = "Other"

    @property
    def is_resource_blocked(self) -> bool:
        return self in (PendingReason.RESOURCES, PendingReason.PRIORITY)

    @classmethod
    def from_string(cls, _v: str) -> PendingReason:
        """
        "(Resources)" -> RESOURCES
        "(Priority)" -> PRIORITY
        "Resources" -> OTHER, squeue always encloses the reason
        "(ReqNodeNotAvail, Reserved for maintenance)" -> OTHER
        """
        v = decode.enclosed(("(", ")"), _v.strip())
        if v is None:
            return cls.OTHER

        for reason in (cls.RESOURCES, cls.PRIORITY):
            if v == reason.value:
                return reason
        return cls.OTHER

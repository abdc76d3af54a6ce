from __future__ import annotations

import enum
from typing import FrozenSet, NamedTuple, Optional


class BaseNodeState(enum.Enum):
    ALLOCATED = "allocated"
    COMPLETING = "completing"
    DOWN = "down"
    DRAINED = "drained"
    DRAINING = "draining"
    FAIL = "fail"
    FAILING = "failing"
    FUTURE = "future"
    IDLE = "idle"
    INVALID = "inval"
    MAINTENANCE = "maint"
    MIXED = "mixed"
    PERFCTRS = "perfctrs"
    PLANNED = "planned"
    POWER_DOWN = "power_down"
    POWERED_DOWN = "powered_down"
    POWERING_DOWN = "powering_down"
    POWERING_UP = "powering_up"
    REBOOT = "reboot"
    RESERVED = "reserved"
    UNKNOWN = "unknown"
    OTHER = "other"


class NodeFlag(enum.Enum):
    """
    Suffix characters sinfo appends to a node state.

    https://slurm.schedmd.com/sinfo.html#SECTION_NODE-STATE-CODES
    """

    NOT_RESPONDING = "*"
    POWERED_DOWN = "~"
    POWERING_UP = "#"
    POWER_DOWN_PENDING = "!"
    POWERING_DOWN = "%"
    MAINTENANCE = "$"
    REBOOT_REQUESTED = "@"
    REBOOT_ISSUED = "^"
    PLANNED = "-"
    MORE_STATES = "+"


_FLAG_CHARACTERS = {flag.value: flag for flag in NodeFlag}
_BASE_STATES = {state.value: state for state in BaseNodeState}
_BASE_ALIASES = {
    "alloc": BaseNodeState.ALLOCATED,
    "comp": BaseNodeState.COMPLETING,
    "drain": BaseNodeState.DRAINED,
    "drng": BaseNodeState.DRAINING,
    "maintenance": BaseNodeState.MAINTENANCE,
    "mix": BaseNodeState.MIXED,
    "reboot_issued": BaseNodeState.REBOOT,
    "reboot_requested": BaseNodeState.REBOOT,
    "resv": BaseNodeState.RESERVED,
    "unk": BaseNodeState.UNKNOWN,
}
_REBOOT_FLAGS = frozenset((NodeFlag.REBOOT_REQUESTED, NodeFlag.REBOOT_ISSUED))


class NodeState(NamedTuple):
    base: BaseNodeState
    flags: FrozenSet[NodeFlag]
    token: str

    def __str__(self) -> str:
        return self.token

    @property
    def is_idle(self) -> bool:
        """
        Idle nodes that still respond; these are the free nodes of a partition.
        """
        return (
            self.base == BaseNodeState.IDLE
            and NodeFlag.NOT_RESPONDING not in self.flags
        )

    @property
    def pending_reboot(self) -> bool:
        return self.base == BaseNodeState.REBOOT or bool(self.flags & _REBOOT_FLAGS)

    @property
    def in_maintenance(self) -> bool:
        return (
            self.base == BaseNodeState.MAINTENANCE
            or NodeFlag.MAINTENANCE in self.flags
        )

    @classmethod
    def from_string(cls, _v: str) -> Optional[NodeState]:
        """
        "idle" -> NodeState(IDLE, {}, "idle")
        "mixed@" -> NodeState(MIXED, {REBOOT_REQUESTED}, "mixed@")
        "idle~" -> NodeState(IDLE, {POWERED_DOWN}, "idle~")
        "maint*" -> NodeState(MAINTENANCE, {NOT_RESPONDING}, "maint*")
        """
        token = _v.strip()
        if token == "":
            return None

        name = token.casefold()
        flags = set()
        while name and name[-1] in _FLAG_CHARACTERS:
            flags.add(_FLAG_CHARACTERS[name[-1]])
            name = name[:-1]

        if name in _BASE_STATES:
            base = _BASE_STATES[name]
        elif name in _BASE_ALIASES:
            base = _BASE_ALIASES[name]
        elif name.startswith(BaseNodeState.REBOOT.value):
            base = BaseNodeState.REBOOT
        elif BaseNodeState.MAINTENANCE.value in name:
            base = BaseNodeState.MAINTENANCE
        else:
            base = BaseNodeState.OTHER

        return cls(base, frozenset(flags), token)

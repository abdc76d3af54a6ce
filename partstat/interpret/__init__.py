from .cores import CoreCounts
from .decode import comma_separated_list, na_str, null_str, ranged, yes_no_bool
from .memory import MemoryValue
from .node_state import BaseNodeState, NodeFlag, NodeState
from .reason import PendingReason
from .time import duration_timedelta, strip_seconds, time_limit

__all__ = [
    "BaseNodeState",
    "comma_separated_list",
    "duration_timedelta",
    "CoreCounts",
    "MemoryValue",
    "na_str",
    "NodeFlag",
    "NodeState",
    "null_str",
    "PendingReason",
    "ranged",
    "strip_seconds",
    "time_limit",
    "yes_no_bool",
]

from .accumulator import PartitionAccumulator, PartitionStat
from .demand import PartitionDemand, PendingDemand
from .report import PartitionReport, ReportOptions

__all__ = [
    "PartitionAccumulator",
    "PartitionDemand",
    "PartitionReport",
    "PartitionStat",
    "PendingDemand",
    "ReportOptions",
]

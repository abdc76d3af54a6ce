from __future__ import annotations

from typing import List, NamedTuple, Optional

import pandas as pd
from typing_extensions import Literal

from partstat.accumulator import PartitionStat
from partstat.demand import PendingDemand
from partstat.interpret._common import INFINITE
from partstat.table import (
    Alignment,
    Cell,
    Color,
    Column,
    CsvStyle,
    FixedWidthStyle,
    Style,
    Table,
)

TEXT = "text"
CSV = "csv"
FORMATS = (TEXT, CSV)

REBOOT_MARKER = "@"
MAINTENANCE_MARKER = "$"
OVERFLOW_MARKER = "+"
FLAG_SEPARATOR = ":"
UNBOUNDED = "infin"

CLUSTER_MIN_WIDTH = 7


class ReportOptions(NamedTuple):
    gres: bool = False
    min_max: bool = False
    federation: bool = False
    color: bool = False
    name_width: Optional[int] = None
    output_format: Literal["text", "csv"] = TEXT


class PartitionReport:
    """
    Lays out accumulated partition statistics and pending demand as a table,
    one row per partition in order of first appearance in the snapshot.
    """

    def __init__(
        self,
        stats: List[PartitionStat],
        demand: PendingDemand,
        options: Optional[ReportOptions] = None,
    ) -> None:
        if options is None:
            options = ReportOptions()
        self._stats: List[PartitionStat] = sorted(stats, key=lambda s: s.order_index)
        self._demand: PendingDemand = demand
        self._options: ReportOptions = options

    @property
    def options(self) -> ReportOptions:
        return self._options

    def columns(self) -> List[Column]:
        columns: List[Column] = []
        if self._options.federation:
            columns.append(
                Column("Cluster", "Name", Alignment.LEFT, min_width=CLUSTER_MIN_WIDTH)
            )
        columns.extend(
            [
                Column(
                    "Partition",
                    "Name",
                    Alignment.RIGHT,
                    max_width=self._options.name_width,
                ),
                Column("Partition", "State", Alignment.RIGHT),
                Column("#Nodes", "Total", min_width=5),
                Column("#Nodes", "Idle", min_width=5),
                Column("#CPU_cores", "Total", min_width=6),
                Column("#CPU_cores", "Idle", min_width=6),
                Column("Cores_pending", "Resorc", min_width=6),
                Column("Cores_pending", "Other", min_width=6),
                Column("Job_Nodes", "Min", min_width=5),
                Column("Job_Nodes", "Max", min_width=5),
                Column("MaxJobTime", "Day-hr:mn"),
                Column("DefJobTime", "Day-hr:mn"),
                Column("Cores", "/node"),
                Column("Mem/Node", "(GB)"),
            ]
        )
        if self._options.gres:
            columns.append(Column("GRES", "(#Nodes:State)", Alignment.LEFT))
        return columns

    def table(self) -> Table:
        rows = [self._build_row(stat) for stat in self._stats]
        return Table(self.columns(), rows)

    def render(self) -> str:
        style: Style
        if self._options.output_format == CSV:
            style = CsvStyle()
        else:
            style = FixedWidthStyle(use_color=self._options.color)
        return style.render(self.table())

    def to_df(self) -> pd.DataFrame:
        return self.table().to_df()

    def _build_row(self, stat: PartitionStat) -> List[Cell]:
        demand = self._demand[stat.name]
        unblocked = demand.resource_cores == 0

        row: List[Cell] = []
        if self._options.federation:
            row.append(Cell(stat.cluster_name))
        row.extend(
            [
                Cell(display_name(stat)),
                Cell(display_state(stat)),
                Cell(str(stat.total_nodes)),
                Cell(
                    str(stat.idle_nodes),
                    _available_color(stat.idle_nodes, unblocked),
                ),
                Cell(str(stat.total_cores)),
                Cell(
                    str(stat.free_cores),
                    _available_color(stat.free_cores, unblocked),
                ),
                Cell(
                    str(demand.resource_cores),
                    Color.ALERT if 0 < demand.resource_cores else Color.DEFAULT,
                ),
                Cell(str(demand.other_cores)),
                Cell(display_job_nodes(stat.min_job_nodes)),
                Cell(display_job_nodes(stat.max_job_nodes)),
                Cell(stat.time_limit),
                Cell(stat.default_time),
                Cell(self._display_cores(stat)),
                Cell(self._display_memory(stat)),
            ]
        )
        if self._options.gres:
            row.append(Cell(stat.gres))
        return row

    def _display_cores(self, stat: PartitionStat) -> str:
        if self._options.min_max and stat.min_cores is not None:
            return display_range(stat.min_cores, stat.max_cores)
        return str(stat.cores_per_node)

    def _display_memory(self, stat: PartitionStat) -> str:
        if self._options.min_max and stat.min_memory_gb is not None:
            return display_range(stat.min_memory_gb, stat.max_memory_gb)
        marker = OVERFLOW_MARKER if stat.memory_overflow else ""
        return f"{stat.memory_gb}{marker}"


def display_name(stat: PartitionStat) -> str:
    """
    "batch" default and hidden -> "batch:*H"
    """
    flags = stat.flags
    if flags == "":
        return stat.name
    return f"{stat.name}{FLAG_SEPARATOR}{flags}"


def display_state(stat: PartitionStat) -> str:
    out = stat.state
    if stat.pending_reboot:
        out += REBOOT_MARKER
    if stat.in_maintenance:
        out += MAINTENANCE_MARKER
    return out


def display_job_nodes(_v: str) -> str:
    """
    An empty bound is unbounded. "infinite" is shortened to fit the column.
    """
    if _v == "" or _v.casefold() == INFINITE:
        return UNBOUNDED
    return _v


def display_range(lo: int, hi: Optional[int]) -> str:
    if hi is None or lo == hi:
        return f"{lo}"
    return f"{lo}-{hi}"


def _available_color(count: int, unblocked: bool) -> Color:
    if 0 < count and unblocked:
        return Color.AVAILABLE
    return Color.DEFAULT

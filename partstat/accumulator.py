from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from partstat.records import SnapshotRow, parse_snapshot_lines

logger = logging.getLogger(__name__)

DEFAULT_CLUSTER_NAME = ""
GRES_SEPARATOR = "+"

PartitionKey = Union[str, Tuple[str, str]]


class PartitionStat:
    """
    Running statistics of one partition, folded from every snapshot row that
    names it. Counts are summed over rows and flags are combined. The time and
    job size limits keep the value of the latest row.
    """

    def __init__(self, name: str, order_index: int, cluster_name: str) -> None:
        self.name: str = name
        self.order_index: int = order_index
        self.cluster_name: str = cluster_name

        self.is_default: bool = False
        self.is_root_only: bool = False
        self.is_hidden: bool = False

        self.state: str = ""
        self.pending_reboot: bool = False
        self.in_maintenance: bool = False

        self.total_nodes: int = 0
        self.idle_nodes: int = 0
        self.total_cores: int = 0
        self.free_cores: int = 0

        self.cores_per_node: int = 0
        self.min_cores: Optional[int] = None
        self.max_cores: Optional[int] = None

        self.memory_gb: int = 0
        self.memory_overflow: bool = False
        self.min_memory_gb: Optional[int] = None
        self.max_memory_gb: Optional[int] = None

        self.time_limit: str = ""
        self.default_time: str = ""
        self.min_job_nodes: str = ""
        self.max_job_nodes: str = ""

        self._gres: List[str] = []
        self._seen_cores: bool = False
        self._seen_memory: bool = False

    @property
    def gres(self) -> str:
        return GRES_SEPARATOR.join(self._gres)

    @property
    def flags(self) -> str:
        """
        "*" default, "R" root only, "H" hidden
        """
        out = ""
        if self.is_default:
            out += "*"
        if self.is_root_only:
            out += "R"
        if self.is_hidden:
            out += "H"
        return out

    def update(self, row: SnapshotRow, track_min_max: bool = False) -> None:
        self.is_default |= row.is_default
        self.is_root_only |= row.is_root_only
        self.state = row.state
        if row.cluster is not None:
            self.cluster_name = row.cluster

        self.pending_reboot |= row.node_state.pending_reboot
        self.in_maintenance |= row.node_state.in_maintenance

        self.total_nodes += row.node_count
        if row.node_state.is_idle:
            self.idle_nodes += row.node_count
        self.total_cores += row.cores.total
        self.free_cores += row.cores.idle

        # rows without nodes carry no per-node figures
        if 0 < row.node_count:
            self._update_cores(row.cores_per_node, track_min_max)
            self._update_memory(row.memory.gb, track_min_max)
        if row.memory.at_least:
            self.memory_overflow = True

        self.time_limit = row.time_limit
        self.default_time = row.default_time
        self.min_job_nodes = row.min_job_nodes
        self.max_job_nodes = row.max_job_nodes

        if row.gres is not None:
            self._gres.append(f"{row.gres}({row.node_count}:{row.node_state})")

    def _update_cores(self, ratio: int, track_min_max: bool) -> None:
        if ratio == 0:
            return

        if not self._seen_cores or ratio < self.cores_per_node:
            self.cores_per_node = ratio
        self._seen_cores = True

        if track_min_max:
            self.min_cores = _min(self.min_cores, ratio)
            self.max_cores = _max(self.max_cores, ratio)

    def _update_memory(self, gb: int, track_min_max: bool) -> None:
        if not self._seen_memory:
            self.memory_gb = gb
        elif gb > self.memory_gb:
            self.memory_overflow = True
        elif gb < self.memory_gb:
            # the previous minimum is now a larger observed value
            self.memory_gb = gb
            self.memory_overflow = True
        self._seen_memory = True

        if track_min_max:
            self.min_memory_gb = _min(self.min_memory_gb, gb)
            self.max_memory_gb = _max(self.max_memory_gb, gb)


class PartitionAccumulator:
    """
    Folds snapshot rows into one PartitionStat per partition. Partitions are
    keyed by name, or by (cluster name, name) when `by_cluster` is set, so that
    the clusters of a federation keep partitions of the same name apart. The
    order of first appearance is the display order.
    """

    def __init__(
        self,
        track_min_max: bool = False,
        default_cluster_name: str = DEFAULT_CLUSTER_NAME,
        partitions: Optional[Iterable[str]] = None,
        by_cluster: bool = False,
    ) -> None:
        self._track_min_max: bool = track_min_max
        self._default_cluster_name: str = default_cluster_name
        self._partition_filter: Optional[Set[str]] = (
            None if partitions is None else set(partitions)
        )
        self._by_cluster: bool = by_cluster
        self._stats: Dict[PartitionKey, PartitionStat] = {}

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, key: object) -> bool:
        return key in self._stats

    def __getitem__(self, key: PartitionKey) -> PartitionStat:
        return self._stats[key]

    @property
    def track_min_max(self) -> bool:
        return self._track_min_max

    @property
    def by_cluster(self) -> bool:
        return self._by_cluster

    def add_row(self, row: SnapshotRow) -> bool:
        if (
            self._partition_filter is not None
            and row.partition not in self._partition_filter
        ):
            return False

        cluster_name = self._default_cluster_name
        if row.cluster is not None:
            cluster_name = row.cluster

        key: PartitionKey = row.partition
        if self._by_cluster:
            key = (cluster_name, row.partition)

        stat = self._stats.get(key)
        if stat is None:
            stat = PartitionStat(row.partition, len(self._stats), cluster_name)
            self._stats[key] = stat
        stat.update(row, self._track_min_max)
        return True

    def add_lines(self, lines: Iterable[str]) -> int:
        count = 0
        for row in parse_snapshot_lines(lines):
            if self.add_row(row):
                count += 1
        logger.debug(
            "accumulated %d snapshot rows into %d partitions", count, len(self)
        )
        return count

    def mark_hidden(self, visible: Iterable[str], every: Iterable[str]) -> List[str]:
        """
        Partitions listed by `sinfo --all` but not by plain `sinfo` are hidden.
        Returns the hidden names that were found in the snapshot.
        """
        hidden = set(_clean_names(every)) - set(_clean_names(visible))
        marked: List[str] = []
        for name in sorted(hidden):
            found = [stat for stat in self._stats.values() if stat.name == name]
            for stat in found:
                stat.is_hidden = True
            if found:
                marked.append(name)
        return marked

    def stats(self) -> List[PartitionStat]:
        return sorted(self._stats.values(), key=lambda s: s.order_index)


def _clean_names(names: Iterable[str]) -> List[str]:
    out = [name.strip().rstrip("*") for name in names]
    return [name for name in out if name != ""]


def _min(current: Optional[int], value: int) -> int:
    return value if current is None else min(current, value)


def _max(current: Optional[int], value: int) -> int:
    return value if current is None else max(current, value)

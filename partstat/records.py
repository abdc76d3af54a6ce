from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional

from partstat.interpret import (
    CoreCounts,
    MemoryValue,
    NodeState,
    PendingReason,
    comma_separated_list,
    na_str,
    null_str,
    ranged,
    time_limit,
    yes_no_bool,
)
from partstat.interpret import _safe_convert, decode
from partstat.interpret._common import any_none

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "*"

SNAPSHOT_FIELD_COUNT = 11
FEDERATED_SNAPSHOT_FIELD_COUNT = 12
PENDING_FIELD_COUNT = 4


class SnapshotRow(NamedTuple):
    """
    One sinfo row, i.e. the nodes of one partition sharing one node state.
    """

    partition: str
    is_default: bool
    state: str
    node_count: int
    cores: CoreCounts
    memory: MemoryValue
    time_limit: str
    default_time: str
    min_job_nodes: str
    max_job_nodes: str
    node_state: NodeState
    gres: Optional[str]
    is_root_only: bool
    cluster: Optional[str]

    @property
    def cores_per_node(self) -> int:
        """
        Zero for a row without nodes.
        """
        if self.node_count == 0:
            return 0
        return self.cores.total // self.node_count

    @classmethod
    def from_line(cls, _line: str) -> Optional[SnapshotRow]:
        """
        Fields, whitespace delimited, as requested by
        `sinfo -o "%P %a %D %C %m %l %L %s %T %G %r %V"`:

        PartitionName[*] State NodeCount A/I/O/T Memory[+] TimeLimit DefaultTime
        MinNodes-MaxNodes NodeState GRES|(null) RootOnly [ClusterName|N/A]
        """
        fields = _line.split()
        if len(fields) not in (SNAPSHOT_FIELD_COUNT, FEDERATED_SNAPSHOT_FIELD_COUNT):
            return None

        partition, is_default = decode.strip_suffix(DEFAULT_MARKER, fields[0])
        if partition == "":
            return None

        node_count = _safe_convert.nonnegative_int(fields[2])
        cores = CoreCounts.from_string(fields[3])
        memory = MemoryValue.from_string(fields[4])
        node_state = NodeState.from_string(fields[8])
        limit = time_limit(fields[5])
        default_time = time_limit(fields[6])
        if any_none((node_count, cores, memory, node_state, limit, default_time)):
            return None

        min_job_nodes, max_job_nodes = ranged("-", fields[7])
        is_root_only = yes_no_bool(fields[10])

        cluster: Optional[str] = None
        if len(fields) == FEDERATED_SNAPSHOT_FIELD_COUNT:
            cluster = na_str(fields[11])

        return cls(
            partition=partition,
            is_default=is_default,
            state=fields[1],
            node_count=node_count,
            cores=cores,
            memory=memory,
            time_limit=limit,
            default_time=default_time,
            min_job_nodes=min_job_nodes,
            max_job_nodes=max_job_nodes,
            node_state=node_state,
            gres=null_str(fields[9]),
            is_root_only=bool(is_root_only),
            cluster=cluster,
        )


class PendingJobRow(NamedTuple):
    """
    One squeue row for a pending job.
    """

    job_id: str
    partitions: List[str]
    cpus: int
    reason: PendingReason

    @classmethod
    def from_line(cls, _line: str) -> Optional[PendingJobRow]:
        """
        Fields as requested by `squeue -o "%A %P %C %R"`:

        JobID Partition[,Partition...] NumCPUs Reason

        The reason is free text and may contain spaces, so only the first three
        separators split.
        """
        fields = _line.split(maxsplit=PENDING_FIELD_COUNT - 1)
        if len(fields) != PENDING_FIELD_COUNT:
            return None

        partitions = comma_separated_list(fields[1])
        cpus = _safe_convert.nonnegative_int(fields[2])
        if not partitions or cpus is None:
            return None

        return cls(fields[0], partitions, cpus, PendingReason.from_string(fields[3]))


def parse_snapshot_lines(_lines: Iterable[str]) -> Iterator[SnapshotRow]:
    yield from _parse_lines(SnapshotRow.from_line, _lines, "snapshot")


def parse_pending_lines(_lines: Iterable[str]) -> Iterator[PendingJobRow]:
    yield from _parse_lines(PendingJobRow.from_line, _lines, "pending job")


def _parse_lines(parse_fn, _lines: Iterable[str], kind: str) -> Iterator:
    for line in _lines:
        if line.strip() == "":
            continue
        row = parse_fn(line)
        if row is None:
            logger.debug("skipping malformed %s row: %r", kind, line)
            continue
        yield row

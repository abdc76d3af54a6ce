from __future__ import annotations

import logging
from typing import Dict, Iterable, List, NamedTuple

from partstat.records import PendingJobRow, parse_pending_lines

logger = logging.getLogger(__name__)


class PartitionDemand(NamedTuple):
    resource_cores: int = 0
    other_cores: int = 0


class PendingDemand:
    """
    Cores requested by pending jobs, per partition, split by whether the job
    waits on resources/priority or on anything else. A job submitted to several
    partitions counts in full against every one of them.
    """

    def __init__(self) -> None:
        self._demand: Dict[str, PartitionDemand] = {}

    def __getitem__(self, partition: str) -> PartitionDemand:
        return self._demand.get(partition, PartitionDemand())

    def __contains__(self, partition: object) -> bool:
        return partition in self._demand

    def __len__(self) -> int:
        return len(self._demand)

    @property
    def partitions(self) -> List[str]:
        return list(self._demand.keys())

    def add_job(self, job: PendingJobRow) -> None:
        for partition in dict.fromkeys(job.partitions):
            current = self[partition]
            if job.reason.is_resource_blocked:
                updated = current._replace(
                    resource_cores=current.resource_cores + job.cpus
                )
            else:
                updated = current._replace(other_cores=current.other_cores + job.cpus)
            self._demand[partition] = updated

    def add_lines(self, lines: Iterable[str]) -> int:
        count = 0
        for job in parse_pending_lines(lines):
            self.add_job(job)
            count += 1
        logger.debug("aggregated %d pending jobs", count)
        return count

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> PendingDemand:
        demand = cls()
        demand.add_lines(lines)
        return demand

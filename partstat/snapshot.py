import logging
import multiprocessing as mp
from pathlib import Path, PurePath
from typing import Dict, List, NamedTuple, Optional, Union

import partstat.slurm as slurm
from partstat.command import DataSourceError

logger = logging.getLogger(__name__)

PathLike = Union[Path, PurePath, str]

SINFO = "sinfo"
SQUEUE = "squeue"
VISIBLE = "visible"
ALL = "all"
CLUSTER = "cluster"
SOURCES = (SINFO, SQUEUE, VISIBLE, ALL, CLUSTER)


class Query(NamedTuple):
    partitions: Optional[List[str]] = None
    show_all: bool = False
    federation: bool = False

    @property
    def sources(self) -> List[str]:
        """
        Hidden partitions are only looked up when they are shown, the default
        cluster name only when a cluster column is shown.
        """
        out = [SINFO, SQUEUE]
        if self.show_all:
            out.extend([VISIBLE, ALL])
        if self.federation:
            out.append(CLUSTER)
        return out


def snapshot_interface(
    query: Query,
    snapshot_dir: Optional[PathLike] = None,
    save_dir: Optional[PathLike] = None,
) -> "Snapshot":
    snapshot = Snapshot(query)
    if snapshot_dir is not None:
        snapshot.read(snapshot_dir)
    else:
        snapshot.take()

    if save_dir is not None:
        snapshot.write(save_dir)

    return snapshot


def snapshot_source(source: str, query: Query) -> str:
    """
    Takes a snapshot of the output of the Slurm command behind one source.
    """
    assert source in SOURCES

    if source == SINFO:
        sinfo = slurm.Sinfo(query.partitions, query.show_all, query.federation)
        return sinfo.get_partition_summary()
    elif source == SQUEUE:
        return slurm.Squeue(query.partitions, query.federation).get_pending_jobs()
    elif source in (VISIBLE, ALL):
        sinfo = slurm.Sinfo(query.partitions, federation=query.federation)
        return sinfo.get_partition_names(include_hidden=source == ALL)
    elif source == CLUSTER:
        return slurm.Scontrol().get_cluster_name()
    else:
        assert False


class Snapshot:
    def __init__(self, query: Query) -> None:
        self._query: Query = query
        self._data: Optional[Dict[str, str]] = None

    @property
    def query(self) -> Query:
        return self._query

    @property
    def sources(self) -> List[str]:
        return self._query.sources

    def __getitem__(self, source: str) -> str:
        assert self._data is not None
        return self._data.get(source, "")

    def lines(self, source: str) -> List[str]:
        return self[source].splitlines()

    def take(self) -> None:
        """
        Runs the commands of every source concurrently. A source that fails is
        logged and left empty, so the report degrades instead of aborting.
        """
        with mp.Pool(len(self.sources)) as pool:
            results = {}
            for source in self.sources:
                results[source] = pool.apply_async(
                    func=snapshot_source, args=(source, self._query)
                )
            pool.close()
            pool.join()

        out: Dict[str, str] = {}
        for source, result in results.items():
            try:
                out[source] = result.get()
            except DataSourceError as e:
                logger.warning("no data from %s: %s", source, e)
                out[source] = ""
        self._data = out

    def read(self, folder: PathLike) -> None:
        """
        Reads a snapshot from folder. Missing files are empty sources.
        """
        out: Dict[str, str] = {}
        for source in self.sources:
            filepath = Path(self._build_path(folder, source))
            if not filepath.is_file():
                logger.warning("no snapshot file %s", filepath)
                out[source] = ""
                continue
            with open(filepath, "r", encoding="utf-8") as f:
                out[source] = f.read()
        self._data = out

    def write(self, folder: PathLike) -> None:
        """
        Writes a snapshot to folder.
        """
        assert self._data is not None
        Path(folder).mkdir(parents=True, exist_ok=True)
        for source, data in self._data.items():
            filepath = self._build_path(folder, source)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(data)
        logger.info("snapshot written to %s", folder)

    @classmethod
    def from_data(cls, query: Query, data: Dict[str, str]) -> "Snapshot":
        for source in data.keys():
            assert source in SOURCES
        snapshot = cls(query)
        snapshot._data = {source: data.get(source, "") for source in query.sources}
        return snapshot

    @staticmethod
    def _build_path(folder: PathLike, source: str) -> PurePath:
        filename = source + ".txt"
        return PurePath(folder) / filename

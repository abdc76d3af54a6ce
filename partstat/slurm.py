from typing import List, Optional

import partstat.command as command

SNAPSHOT_FORMAT = "%P %a %D %C %m %l %L %s %T %G %r %V"
PENDING_FORMAT = "%A %P %C %R"
PARTITION_NAME_FORMAT = "%R"
PENDING_STATE = "pending"

CLUSTER_NAME_KEY = "ClusterName"


class Sinfo:
    """
    https://slurm.schedmd.com/sinfo.html
    """

    def __init__(
        self,
        partitions: Optional[List[str]] = None,
        show_all: bool = False,
        federation: bool = False,
    ) -> None:
        self._partitions: Optional[List[str]] = partitions
        self._show_all: bool = show_all
        self._federation: bool = federation

    def get_partition_summary(self) -> str:
        """
        One line per partition and node state.
        """
        args = ["sinfo", "--noheader", "--exact", "-o", SNAPSHOT_FORMAT]
        if self._show_all:
            args.append("--all")
        args.extend(self._scope_args())
        return command.run(args).stdout

    def get_partition_names(self, include_hidden: bool) -> str:
        args = ["sinfo", "--noheader", "-o", PARTITION_NAME_FORMAT]
        if include_hidden:
            args.append("--all")
        args.extend(self._scope_args())
        return command.run(args).stdout

    def _scope_args(self) -> List[str]:
        return _scope_args(self._partitions, self._federation)


class Squeue:
    """
    https://slurm.schedmd.com/squeue.html
    """

    def __init__(
        self, partitions: Optional[List[str]] = None, federation: bool = False
    ) -> None:
        self._partitions: Optional[List[str]] = partitions
        self._federation: bool = federation

    def get_pending_jobs(self) -> str:
        args = [
            "squeue",
            "--noheader",
            f"--states={PENDING_STATE}",
            "-o",
            PENDING_FORMAT,
        ]
        args.extend(_scope_args(self._partitions, self._federation))
        return command.run(args).stdout


class Scontrol:
    """
    https://slurm.schedmd.com/scontrol.html
    """

    def get_cluster_name(self) -> str:
        args = ["scontrol", "show", "config"]
        result = command.run(args, error_handling=command.IGNORE)
        return parse_cluster_name(result.stdout)


def parse_cluster_name(_s: str) -> str:
    """
    Finds `ClusterName = x` in `scontrol show config` output. Empty if absent.
    """
    for line in _s.splitlines():
        key, _, value = line.partition("=")
        if key.strip() == CLUSTER_NAME_KEY:
            return value.strip()
    return ""


def _scope_args(partitions: Optional[List[str]], federation: bool) -> List[str]:
    args: List[str] = []
    if partitions:
        args.extend(["-p", ",".join(partitions)])
    if federation:
        args.append("--federation")
    return args

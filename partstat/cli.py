import argparse
import logging
import multiprocessing as mp
import sys
from typing import List, Optional

import colorama

import partstat.snapshot as snapshot
from partstat.accumulator import PartitionAccumulator
from partstat.demand import PendingDemand
from partstat.interpret import comma_separated_list
from partstat.report import FORMATS, TEXT, PartitionReport, ReportOptions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MIN_NAME_WIDTH = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="showpartitions",
        description="Shows the status of Slurm partitions: nodes, cores and memory, free and busy, with the cores of pending jobs blocked by resources or by other reasons. Requires no arguments to run.",
        epilog="Partition flags: * default, R root only, H hidden. State flags: @ nodes pending reboot, $ nodes in maintenance.",
    )
    parser.add_argument(
        "-p",
        "--partition",
        type=str,
        action="append",
        default=None,
        help="Only show these partitions. Comma separated, may be repeated.",
    )
    parser.add_argument(
        "-g", "--gres", action="store_true", help="Show the GRES of each partition."
    )
    parser.add_argument(
        "-m",
        "--minmax",
        action="store_true",
        help="Show minimum and maximum cores and memory per node instead of the minimum.",
    )
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Also show hidden partitions, flagged with H.",
    )
    parser.add_argument(
        "-f",
        "--federation",
        action="store_true",
        help="Show all clusters of the federation, with a cluster name column.",
    )
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "-c",
        "--color",
        dest="color",
        action="store_true",
        default=None,
        help="Always color the output. Default is to color only a terminal.",
    )
    color.add_argument(
        "-n",
        "--no-color",
        dest="color",
        action="store_false",
        help="Never color the output.",
    )
    parser.add_argument(
        "-w",
        "--name-width",
        type=int,
        default=None,
        help="Truncate partition names to this width, marking the cut with +.",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=FORMATS,
        default=TEXT,
        help="""One of ("text", "csv").""",
    )
    parser.add_argument(
        "--snapshot-dir",
        type=str,
        default=None,
        help="Read Slurm output from files in this folder instead of running Slurm commands.",
    )
    parser.add_argument(
        "--save-snapshot",
        type=str,
        default=None,
        help="Save the Slurm output used for the report to files in this folder.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debugging information."
    )
    return parser


def parse_args(
    argv: Optional[List[str]] = None,
) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.name_width is not None and args.name_width < MIN_NAME_WIDTH:
        parser.error(f"--name-width must be at least {MIN_NAME_WIDTH}")
    return args


def options_from_args(args: argparse.Namespace, is_terminal: bool) -> ReportOptions:
    color = is_terminal if args.color is None else args.color
    return ReportOptions(
        gres=args.gres,
        min_max=args.minmax,
        federation=args.federation,
        color=color and args.format == TEXT,
        name_width=args.name_width,
        output_format=args.format,
    )


def query_from_args(args: argparse.Namespace) -> snapshot.Query:
    partitions: Optional[List[str]] = None
    if args.partition is not None:
        partitions = [p for arg in args.partition for p in comma_separated_list(arg)]
    return snapshot.Query(
        partitions=partitions, show_all=args.all, federation=args.federation
    )


def build_report(snap: snapshot.Snapshot, options: ReportOptions) -> PartitionReport:
    query = snap.query
    default_cluster_name = ""
    if query.federation:
        default_cluster_name = snap[snapshot.CLUSTER].strip()

    accumulator = PartitionAccumulator(
        track_min_max=options.min_max,
        default_cluster_name=default_cluster_name,
        partitions=query.partitions,
        by_cluster=query.federation,
    )
    accumulator.add_lines(snap.lines(snapshot.SINFO))
    if query.show_all:
        hidden = accumulator.mark_hidden(
            snap.lines(snapshot.VISIBLE), snap.lines(snapshot.ALL)
        )
        logger.debug("hidden partitions: %s", ", ".join(hidden))

    demand = PendingDemand.from_lines(snap.lines(snapshot.SQUEUE))
    return PartitionReport(accumulator.stats(), demand, options)


def interface(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    options = options_from_args(args, sys.stdout.isatty())
    if options.color:
        colorama.just_fix_windows_console()

    snap = snapshot.snapshot_interface(
        query_from_args(args),
        snapshot_dir=args.snapshot_dir,
        save_dir=args.save_snapshot,
    )
    report = build_report(snap, options)
    sys.stdout.write(report.render())


if __name__ == "__main__":
    mp.freeze_support()
    interface()

import unittest
from tests._strategies import sinfo_line, sinfo_lines

from hypothesis import given

from partstat.interpret import BaseNodeState, CoreCounts, MemoryValue, PendingReason
from partstat.records import (
    PendingJobRow,
    SnapshotRow,
    parse_pending_lines,
    parse_snapshot_lines,
)


class SnapshotRowTest(unittest.TestCase):
    def test_from_line(self):
        row = SnapshotRow.from_line(
            "partA up 2 4/2/0/8 16000 60:00 60:00 1-4 idle (null) no N/A"
        )
        assert row is not None
        self.assertEqual(row.partition, "partA")
        self.assertFalse(row.is_default)
        self.assertEqual(row.state, "up")
        self.assertEqual(row.node_count, 2)
        self.assertEqual(row.cores, CoreCounts(4, 2, 0, 8))
        self.assertEqual(row.memory, MemoryValue(16, False))
        self.assertEqual(row.time_limit, "60:00")
        self.assertEqual(row.default_time, "60:00")
        self.assertEqual(row.min_job_nodes, "1")
        self.assertEqual(row.max_job_nodes, "4")
        self.assertEqual(row.node_state.base, BaseNodeState.IDLE)
        self.assertEqual(row.gres, None)
        self.assertFalse(row.is_root_only)
        self.assertEqual(row.cluster, None)
        self.assertEqual(row.cores_per_node, 4)

    def test_from_line_flags(self):
        row = SnapshotRow.from_line(
            sinfo_line(
                name="batch*",
                time_limit="7-00:00:00",
                job_size="2-",
                gres="gpu:a100:4",
                root_only="yes",
                cluster="alpha",
                memory="191000+",
            )
        )
        assert row is not None
        self.assertEqual(row.partition, "batch")
        self.assertTrue(row.is_default)
        self.assertTrue(row.is_root_only)
        self.assertEqual(row.time_limit, "7-00:00")
        self.assertEqual(row.min_job_nodes, "2")
        self.assertEqual(row.max_job_nodes, "")
        self.assertEqual(row.gres, "gpu:a100:4")
        self.assertEqual(row.cluster, "alpha")
        self.assertEqual(row.memory, MemoryValue(191, True))

    def test_from_line_without_cluster(self):
        row = SnapshotRow.from_line(sinfo_line(cluster=None))
        assert row is not None
        self.assertEqual(row.cluster, None)

    def test_zero_nodes(self):
        row = SnapshotRow.from_line(sinfo_line(nodes=0, cores="0/0/0/0", memory="0"))
        assert row is not None
        self.assertEqual(row.node_count, 0)
        self.assertEqual(row.cores_per_node, 0)

    def test_from_line_malformed(self):
        self.assertEqual(SnapshotRow.from_line(""), None)
        self.assertEqual(SnapshotRow.from_line("partA up 2"), None)
        self.assertEqual(SnapshotRow.from_line(sinfo_line() + " extra"), None)
        self.assertEqual(SnapshotRow.from_line(sinfo_line(name="*")), None)
        self.assertEqual(SnapshotRow.from_line(sinfo_line(cores="4/2/0")), None)
        self.assertEqual(SnapshotRow.from_line(sinfo_line(memory="lots")), None)
        line = "partA up x 4/2/0/8 16000 60:00 60:00 1-4 idle (null) no"
        self.assertEqual(SnapshotRow.from_line(line), None)

    def test_from_line_time_limits(self):
        row = SnapshotRow.from_line(sinfo_line(time_limit="UNLIMITED", default_time="n/a"))
        assert row is not None
        self.assertEqual(row.time_limit, "UNLIMITED")
        self.assertEqual(row.default_time, "n/a")

        self.assertEqual(SnapshotRow.from_line(sinfo_line(time_limit="1-xx:00:00")), None)
        self.assertEqual(SnapshotRow.from_line(sinfo_line(time_limit="forever")), None)
        self.assertEqual(SnapshotRow.from_line(sinfo_line(default_time="1:00:00:00")), None)

    @given(sinfo_lines())
    def test_generated_lines_parse(self, line):
        self.assertIsNotNone(SnapshotRow.from_line(line))

    def test_parse_snapshot_lines_skips_malformed(self):
        lines = [
            sinfo_line(name="a"),
            "",
            "garbage",
            sinfo_line(name="b", cores="x/y/z/w"),
            sinfo_line(name="c"),
        ]
        rows = list(parse_snapshot_lines(lines))
        self.assertEqual([r.partition for r in rows], ["a", "c"])


class PendingJobRowTest(unittest.TestCase):
    def test_from_line(self):
        row = PendingJobRow.from_line("1234 A,B 4 (Resources)")
        assert row is not None
        self.assertEqual(row.job_id, "1234")
        self.assertEqual(row.partitions, ["A", "B"])
        self.assertEqual(row.cpus, 4)
        self.assertEqual(row.reason, PendingReason.RESOURCES)

    def test_reason_with_spaces(self):
        row = PendingJobRow.from_line(
            "77 gpu 16 (ReqNodeNotAvail, Reserved for maintenance)"
        )
        assert row is not None
        self.assertEqual(row.partitions, ["gpu"])
        self.assertEqual(row.reason, PendingReason.OTHER)

    def test_from_line_malformed(self):
        self.assertEqual(PendingJobRow.from_line(""), None)
        self.assertEqual(PendingJobRow.from_line("1234 A 4"), None)
        self.assertEqual(PendingJobRow.from_line("1234 A four (Priority)"), None)
        self.assertEqual(PendingJobRow.from_line("1234 , 4 (Priority)"), None)

    def test_parse_pending_lines_skips_malformed(self):
        lines = ["1 A 2 (Priority)", "bad", "2 B 3 (Dependency)"]
        rows = list(parse_pending_lines(lines))
        self.assertEqual([r.job_id for r in rows], ["1", "2"])

import unittest
from tests.interpret._strategies import u16_integers

from hypothesis import given
from hypothesis.strategies import composite

from partstat.interpret.cores import CoreCounts


@composite
def core_count_strings(draw):
    values = [draw(u16_integers()) for _ in range(4)]
    return "/".join(str(v) for v in values)


class CoreCountsTest(unittest.TestCase):
    @given(core_count_strings())
    def test_roundtrip(self, s):
        cc = CoreCounts.from_string(s)
        self.assertEqual(s, str(cc))

    def test_from_string(self):
        self.assertEqual(CoreCounts.from_string("4/2/0/8"), CoreCounts(4, 2, 0, 8))
        self.assertEqual(CoreCounts.from_string("4/2/0/8").total, 8)
        self.assertEqual(CoreCounts.from_string("4/2/0/8").idle, 2)

    def test_from_string_boundaries(self):
        self.assertEqual(CoreCounts.from_string(""), None)
        self.assertEqual(CoreCounts.from_string("4/2/0"), None)
        self.assertEqual(CoreCounts.from_string("4/2/0/8/1"), None)
        self.assertEqual(CoreCounts.from_string("a/2/0/8"), None)
        self.assertEqual(CoreCounts.from_string("-1/2/0/8"), None)

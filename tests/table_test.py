import textwrap
import unittest

from colorama import Fore, Style as AnsiStyle

from partstat.table import *


def _columns():
    return [
        Column("G", "a", Alignment.RIGHT),
        Column("G", "b", Alignment.LEFT),
        Column("H", "c", Alignment.RIGHT),
    ]


class TestTable(unittest.TestCase):
    def test_empty(self):
        t = Table.empty(_columns())
        self.assertEqual(t.shape, (0, 3))
        self.assertEqual(t.height, 0)
        self.assertEqual(t.width, 3)
        self.assertEqual(t.rows, [])
        self.assertEqual(t.column_widths(), [1, 1, 1])

    def test_groups(self):
        t = Table.empty(_columns())
        self.assertEqual(t.groups(), [(0, 2, "G"), (2, 3, "H")])

    def test_column_widths(self):
        t = Table(_columns(), [[Cell("1"), Cell("xy"), Cell("long")]])
        self.assertEqual(t.column_widths(), [1, 2, 4])

    def test_column_widths_fit_group_title(self):
        columns = [Column("Cores_pending", "Resorc"), Column("Cores_pending", "Other")]
        t = Table(columns, [[Cell("0"), Cell("0")]])
        self.assertEqual(t.column_widths(), [6, 6])

        columns = [Column("Partition", "Name")]
        t = Table(columns, [[Cell("a")]])
        self.assertEqual(t.column_widths(), [9])

    def test_column_widths_min_and_max(self):
        columns = [
            Column("", "n", min_width=5),
            Column("", "name", max_width=6),
        ]
        t = Table(columns, [[Cell("1"), Cell("averylongname")]])
        self.assertEqual(t.column_widths(), [5, 6])

    def test_values_as_str(self):
        t = Table(_columns(), [[Cell("1"), Cell("xy", Color.ALERT), Cell("long")]])
        self.assertEqual(t.values_as_str(), [["1", "xy", "long"]])

    def test_to_df(self):
        t = Table(_columns(), [[Cell("1"), Cell("xy"), Cell("long")]])
        df = t.to_df()
        self.assertEqual(list(df.columns), ["G a", "G b", "H c"])
        self.assertEqual(df.values.tolist(), [["1", "xy", "long"]])


class TestFit(unittest.TestCase):
    def test_fit(self):
        self.assertEqual(fit("short", 5), "short")
        self.assertEqual(fit("partition", 5), "part+")
        self.assertEqual(len(fit("partition", 5)), 5)
        self.assertEqual(fit("ab", 1), "+")


class TestFixedWidthStyle(unittest.TestCase):
    def test_render(self):
        t = Table(_columns(), [[Cell("1"), Cell("xy"), Cell("long")]])
        actual = FixedWidthStyle().render(t)
        expected = textwrap.dedent(
            """
             G      H
            a b     c
            1 xy long
            """
        )[1:]
        self.assertEqual(actual, expected)

    def test_render_truncates(self):
        columns = [Column("Name", "", Alignment.LEFT, max_width=5), Column("N", "n")]
        t = Table(columns, [[Cell("abcdefgh"), Cell("1")], [Cell("abc"), Cell("2")]])
        lines = FixedWidthStyle().render(t).splitlines()
        self.assertEqual(lines[2], "abcd+ 1")
        self.assertEqual(lines[3], "abc   2")

    def test_render_color(self):
        columns = [Column("", "a"), Column("", "b")]
        t = Table(columns, [[Cell("1", Color.AVAILABLE), Cell("22", Color.ALERT)]])

        plain = FixedWidthStyle(use_color=False).render(t)
        self.assertNotIn("\x1b", plain)

        colored = FixedWidthStyle(use_color=True).render(t).splitlines()
        self.assertEqual(
            colored[2],
            f"{Fore.GREEN}1{AnsiStyle.RESET_ALL} {Fore.RED}22{AnsiStyle.RESET_ALL}",
        )

    def test_render_header_only(self):
        t = Table.empty(_columns())
        lines = FixedWidthStyle().render(t).splitlines()
        self.assertEqual(len(lines), 2)


class TestCsvStyle(unittest.TestCase):
    def test_render(self):
        t = Table(_columns(), [[Cell("1"), Cell("x,y", Color.ALERT), Cell("long")]])
        actual = CsvStyle().render(t)
        expected = textwrap.dedent(
            """
            G a,G b,H c
            1,"x,y",long
            """
        )[1:]
        self.assertEqual(actual, expected)

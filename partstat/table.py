import abc
import enum
import itertools
from types import DynamicClassAttribute
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

import pandas as pd
from colorama import Fore, Style as AnsiStyle

CONTINUATION = "+"


class Alignment(enum.Enum, metaclass=enum.EnumMeta):
    LEFT = "l"
    CENTER = "c"
    RIGHT = "r"
    DEFAULT = "l"

    @DynamicClassAttribute
    def value(self) -> str:
        """The value of the Enum member."""
        return self._value_


class Color(enum.Enum):
    DEFAULT = "default"
    AVAILABLE = "available"
    ALERT = "alert"


class Cell(NamedTuple):
    text: str
    color: Color = Color.DEFAULT

    def __str__(self) -> str:
        return self.text


class Column(NamedTuple):
    """
    Columns sharing the same group title, side by side, share one title on the
    group header line. A column with max_width truncates longer cells.
    """

    group: str
    label: str
    alignment: Alignment = Alignment.RIGHT
    min_width: int = 0
    max_width: Optional[int] = None

    @property
    def title(self) -> str:
        return " ".join(part for part in (self.group, self.label) if part != "")


class Table:
    """
    tables are indexed by row, then column
    """

    def __init__(self, _columns: List[Column], _rows: List[List[Cell]]) -> None:
        for row in _rows:
            assert len(row) == len(_columns)

        self._columns: List[Column] = _columns
        self._rows: List[List[Cell]] = _rows

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._columns)

    @property
    def columns(self) -> List[Column]:
        return self._columns.copy()

    @property
    def rows(self) -> List[List[Cell]]:
        return [row.copy() for row in self._rows]

    def values_as_str(self) -> List[List[str]]:
        return [[cell.text for cell in row] for row in self._rows]

    def column_widths(self) -> List[int]:
        """
        Widest of header and cells, grown so that group titles fit over their
        columns, then capped by any max_width.
        """
        widths = [max(len(c.label), c.min_width) for c in self._columns]
        for row in self._rows:
            widths = [max(w, len(cell.text)) for w, cell in zip(widths, row)]

        for start, stop, group in self.groups():
            span = sum(widths[start:stop]) + (stop - start - 1)
            if span < len(group):
                widths[stop - 1] += len(group) - span

        widths = [
            w if c.max_width is None else max(min(w, c.max_width), 1)
            for w, c in zip(widths, self._columns)
        ]
        return widths

    def groups(self) -> List[Tuple[int, int, str]]:
        """
        (start, stop, title) of each run of adjacent columns with one group.
        """
        out: List[Tuple[int, int, str]] = []
        start = 0
        for group, members in itertools.groupby(self._columns, key=lambda c: c.group):
            stop = start + len(list(members))
            out.append((start, stop, group))
            start = stop
        return out

    def to_df(self) -> pd.DataFrame:
        df = pd.DataFrame(
            self.values_as_str(), columns=[c.title for c in self._columns]
        )
        return df

    @classmethod
    def empty(cls, _columns: List[Column]) -> "Table":
        return cls(_columns, [])


def fit(_text: str, width: int) -> str:
    """
    Truncates to width, marking the cut with a trailing "+".

    ("partition", 5) -> "part+"
    """
    if len(_text) <= width:
        return _text
    if width <= 1:
        return CONTINUATION[:width]
    return _text[: width - 1] + CONTINUATION


class Style(abc.ABC):
    @abc.abstractmethod
    def render(self, table: Table) -> str:
        ...


class FixedWidthStyle(Style):
    _ALIGNMENT_MAP: Dict[Alignment, str] = {
        Alignment.LEFT: "<",
        Alignment.CENTER: "^",
        Alignment.RIGHT: ">",
    }
    _COLOR_MAP: Dict[Color, str] = {
        Color.AVAILABLE: Fore.GREEN,
        Color.ALERT: Fore.RED,
    }

    def __init__(self, separator: str = " ", use_color: bool = False) -> None:
        self._separator: str = separator
        self._use_color: bool = use_color

    def render(self, table: Table) -> str:
        columns = table.columns
        widths = table.column_widths()

        lines = [self._render_group_line(table, widths)]
        lines.append(
            self._render_row_line(
                columns, widths, [Cell(c.label) for c in columns], color=False
            )
        )
        for row in table.rows:
            lines.append(
                self._render_row_line(columns, widths, row, color=self._use_color)
            )

        out = "\n".join(lines)
        out += "\n"
        return out

    def _render_group_line(self, table: Table, widths: List[int]) -> str:
        columns = table.columns
        parts: List[str] = []
        for start, stop, group in table.groups():
            span = sum(widths[start:stop]) + len(self._separator) * (stop - start - 1)
            alignment = columns[start].alignment if stop - start == 1 else Alignment.CENTER
            parts.append(self._align(fit(group, span), span, alignment))
        return self._separator.join(parts).rstrip()

    def _render_row_line(
        self,
        columns: List[Column],
        widths: List[int],
        row: Iterable[Cell],
        color: bool,
    ) -> str:
        parts: List[str] = []
        for column, width, cell in zip(columns, widths, row):
            text = fit(cell.text, width)
            aligned = self._align(text, width, column.alignment)
            if color and cell.color in self._COLOR_MAP:
                aligned = self._colorize(aligned, text, cell.color)
            parts.append(aligned)
        return self._separator.join(parts).rstrip()

    def _align(self, text: str, width: int, alignment: Alignment) -> str:
        # e.g. {:>6s}
        return f"{{:{self._ALIGNMENT_MAP[alignment]}{width}s}}".format(text)

    def _colorize(self, aligned: str, text: str, color: Color) -> str:
        # escapes wrap the text only, padding stays outside
        index = aligned.find(text)
        before = aligned[:index]
        after = aligned[index + len(text) :]
        return f"{before}{self._COLOR_MAP[color]}{text}{AnsiStyle.RESET_ALL}{after}"


class CsvStyle(Style):
    def __init__(self, delimiter: str = ",") -> None:
        assert len(delimiter) == 1
        self._delim: str = delimiter

    def render(self, table: Table) -> str:
        df = table.to_df()
        return df.to_csv(index=False, sep=self._delim)

"""Pipe-table block rule for mistune that tolerates ragged rows.

mistune's bundled table plugin drops a whole table back to paragraph text as
soon as one body row has the wrong number of cells. This rule instead
normalizes every body row to the header width: short rows are padded with
empty cells, long rows are truncated. Tokens use the same shape as the bundled
plugin (``table`` > ``table_head`` / ``table_body`` > ``table_row`` >
``table_cell``), so the inline parser fills in cell content.
"""

from __future__ import annotations

import logging
import re
from re import Match
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mistune import Markdown
    from mistune.block_parser import BlockParser
    from mistune.core import BlockState

logger = logging.getLogger(__name__)

# Any line with a pipe in it can open a table; the delimiter row decides.
TABLE_PATTERN = r"^ {0,3}\S[^\n]*\|[^\n]*(?:\n|$)"

_DELIMITER_CELL = re.compile(r"^:?-+:?$")
_DELIMITER_LINE = re.compile(r"^[ \t]*[|:\- \t]*-[|:\- \t]*$")
_ESCAPED_PIPE = re.compile(r"\\\|")

# A body line that opens another block ends the table even if it has a pipe:
# ATX heading, quote, bullet or ordered item, fence, thematic break, indented code.
_BLOCK_START = re.compile(
    r"^(?: {4,}|\t"
    r"| {0,3}(?:#{1,6}(?:[ \t]|$)|>|[-+*](?:[ \t]|$)|\d{1,9}[.)](?:[ \t]|$)|`{3,}|~{3,}"
    r"|(?:[-*_][ \t]*){3,}$))"
)


def split_row(line: str) -> list[str]:
    """Split one table line into stripped cell strings.

    An optional leading and trailing pipe is removed first. An escaped pipe
    (``\\|``) does not split and is unescaped to ``|`` inside its cell, code
    spans included.
    """
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not _is_escaped(text, len(text) - 1):
        text = text[:-1]

    cells = []
    start = 0
    for pos, char in enumerate(text):
        if char == "|" and not _is_escaped(text, pos):
            cells.append(text[start:pos])
            start = pos + 1
    cells.append(text[start:])
    return [_ESCAPED_PIPE.sub("|", cell).strip() for cell in cells]


def _is_escaped(text: str, pos: int) -> bool:
    backslashes = 0
    pos -= 1
    while pos >= 0 and text[pos] == "\\":
        backslashes += 1
        pos -= 1
    return backslashes % 2 == 1


def parse_alignments(line: str) -> list[str | None] | None:
    """Alignment per column, or None when ``line`` is not a delimiter row."""
    if not _DELIMITER_LINE.match(line.rstrip("\n")):
        return None
    aligns: list[str | None] = []
    for cell in split_row(line):
        if not _DELIMITER_CELL.match(cell):
            return None
        if cell.startswith(":") and cell.endswith(":"):
            aligns.append("center")
        elif cell.startswith(":"):
            aligns.append("left")
        elif cell.endswith(":"):
            aligns.append("right")
        else:
            aligns.append(None)
    return aligns


def normalize_row(cells: list[str], width: int) -> list[str]:
    """Pad or truncate ``cells`` to exactly ``width`` entries."""
    if len(cells) < width:
        return cells + [""] * (width - len(cells))
    return cells[:width]


def _cell(text: str, align: str | None, head: bool) -> dict[str, Any]:
    return {"type": "table_cell", "text": text, "attrs": {"align": align, "head": head}}


def parse_table(block: BlockParser, m: Match[str], state: BlockState) -> int | None:
    header_line = m.group(0)
    pos = m.end()
    if pos >= state.cursor_max:
        return None

    delimiter_line = state.get_line(pos)
    aligns = parse_alignments(delimiter_line)
    headers = split_row(header_line)
    if aligns is None or len(aligns) != len(headers):
        return None
    pos += len(delimiter_line)

    width = len(headers)
    rows = []
    while pos < state.cursor_max:
        line = state.get_line(pos)
        if not line.strip() or "|" not in line or _BLOCK_START.match(line.rstrip("\n")):
            break
        cells = split_row(line)
        if len(cells) != width:
            logger.debug("Normalizing table row from %d to %d cells", len(cells), width)
        cells = normalize_row(cells, width)
        rows.append(
            {
                "type": "table_row",
                "children": [_cell(c, aligns[i], False) for i, c in enumerate(cells)],
            }
        )
        pos += len(line)

    head = {
        "type": "table_head",
        "children": [_cell(h, aligns[i], True) for i, h in enumerate(headers)],
    }
    state.append_token(
        {"type": "table", "children": [head, {"type": "table_body", "children": rows}]}
    )
    return pos


def pipe_tables(md: Markdown) -> None:
    """mistune plugin: register the table rule at top level, in quotes and in lists."""
    md.block.register("table", TABLE_PATTERN, parse_table, before="paragraph")
    md.block.insert_rule(md.block.block_quote_rules, "table", before="paragraph")
    md.block.insert_rule(md.block.list_rules, "table", before="paragraph")

"""Markdown to Atlassian Document Format conversion built on mistune's AST mode."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import mistune

from agent_scripts.adf.models import (
    AdfDocument,
    AdfMark,
    AdfNode,
    link_mark,
    paragraph,
    text_node,
)
from agent_scripts.adf.tables import pipe_tables

logger = logging.getLogger(__name__)

Token = dict[str, Any]
Marks = tuple[AdfMark, ...]

_SIMPLE_MARKS: dict[str, str] = {
    "strong": "strong",
    "emphasis": "em",
    "strikethrough": "strike",
}

TABLE_ATTRS: dict[str, Any] = {"isNumberColumnEnabled": False, "layout": "default"}


def _create_parser() -> mistune.Markdown:
    return mistune.create_markdown(
        renderer=None,
        plugins=["strikethrough", "url", pipe_tables],
    )


class MarkdownToAdf:
    """Walks mistune's token tree and builds ADF nodes.

    Each instance owns its own parser, so converters never share state.
    """

    def __init__(self) -> None:
        self._parser = _create_parser()

    def convert(self, markdown: str) -> AdfDocument:
        if not isinstance(markdown, str):
            raise TypeError(f"markdown must be str, not {type(markdown).__name__}")
        tokens = self._parser(markdown)
        return AdfDocument(content=self._blocks(tokens))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _blocks(self, tokens: Iterable[Token]) -> list[AdfNode]:
        nodes: list[AdfNode] = []
        for token in tokens:
            nodes.extend(self._block(token))
        return nodes

    def _block(self, token: Token) -> list[AdfNode]:
        kind = token["type"]
        attrs = token.get("attrs") or {}

        if kind == "blank_line":
            return []
        if kind in ("paragraph", "block_text"):
            return [paragraph(self._inline(token.get("children", [])))]
        if kind == "heading":
            level = min(max(int(attrs.get("level", 1)), 1), 6)
            return [
                AdfNode(
                    type="heading",
                    attrs={"level": level},
                    content=self._inline(token.get("children", [])),
                )
            ]
        if kind == "block_code":
            return [self._code_block(token)]
        if kind == "block_quote":
            content = self._blocks(token.get("children", []))
            return [AdfNode(type="blockquote", content=content or [paragraph([])])]
        if kind == "list":
            return [self._list(token)]
        if kind == "thematic_break":
            return [AdfNode(type="rule")]
        if kind == "table":
            return [self._table(token)]
        if kind == "block_html":
            raw = token.get("raw", "").strip("\n")
            return [paragraph([text_node(raw)] if raw else [])]

        logger.debug("Unmapped block token %r", kind)
        if "children" in token:
            return self._blocks(token["children"])
        return []

    def _code_block(self, token: Token) -> AdfNode:
        raw = token.get("raw", "")
        if raw.endswith("\n"):
            raw = raw[:-1]
        info = (token.get("attrs") or {}).get("info") or ""
        language = info.split()[0] if info.strip() else None
        return AdfNode(
            type="codeBlock",
            attrs={"language": language} if language else None,
            content=[text_node(raw)] if raw else None,
        )

    def _list(self, token: Token) -> AdfNode:
        attrs = token.get("attrs") or {}
        items = [
            AdfNode(
                type="listItem",
                content=self._blocks(item.get("children", [])) or [paragraph([])],
            )
            for item in token.get("children", [])
        ]
        if attrs.get("ordered"):
            start = attrs.get("start", 1)
            return AdfNode(
                type="orderedList",
                attrs={"order": start} if start != 1 else None,
                content=items,
            )
        return AdfNode(type="bulletList", content=items)

    def _table(self, token: Token) -> AdfNode:
        rows: list[AdfNode] = []
        for section in token.get("children", []):
            if section["type"] == "table_head":
                rows.append(self._table_row(section.get("children", []), "tableHeader"))
            elif section["type"] == "table_body":
                for row in section.get("children", []):
                    rows.append(self._table_row(row.get("children", []), "tableCell"))
        return AdfNode(type="table", attrs=dict(TABLE_ATTRS), content=rows)

    def _table_row(self, cells: list[Token], cell_type: str) -> AdfNode:
        return AdfNode(
            type="tableRow",
            content=[
                AdfNode(
                    type=cell_type,
                    attrs={},
                    content=[paragraph(self._inline(cell.get("children", [])))],
                )
                for cell in cells
            ],
        )

    # ------------------------------------------------------------------
    # Inline
    # ------------------------------------------------------------------

    def _inline(self, tokens: Iterable[Token]) -> list[AdfNode]:
        nodes: list[AdfNode] = []
        self._walk_inline(tokens, (), nodes)
        return _merge_text(nodes)

    def _walk_inline(self, tokens: Iterable[Token], marks: Marks, out: list[AdfNode]) -> None:
        for token in tokens:
            kind = token["type"]
            attrs = token.get("attrs") or {}

            if kind in ("text", "inline_html"):
                _append_text(out, token.get("raw", ""), marks)
            elif kind in _SIMPLE_MARKS:
                mark = AdfMark(type=_SIMPLE_MARKS[kind])
                self._walk_inline(token.get("children", []), _add_mark(marks, mark), out)
            elif kind == "codespan":
                code_marks = tuple(m for m in marks if m.type == "link") + (AdfMark(type="code"),)
                _append_text(out, token.get("raw", ""), code_marks)
            elif kind == "link":
                url = attrs.get("url") or ""
                inner = _add_mark(marks, link_mark(url, attrs.get("title"))) if url else marks
                self._walk_inline(token.get("children", []), inner, out)
            elif kind == "image":
                url = attrs.get("url") or ""
                alt = _plain_text(token.get("children", [])) or url
                _append_text(out, alt, _add_mark(marks, link_mark(url)) if url else marks)
            elif kind == "linebreak":
                out.append(AdfNode(type="hardBreak"))
            elif kind == "softbreak":
                _append_text(out, " ", marks)
            elif "children" in token:
                self._walk_inline(token["children"], marks, out)
            elif "raw" in token:
                _append_text(out, token["raw"], marks)
            else:
                logger.debug("Unmapped inline token %r", kind)


def _add_mark(marks: Marks, mark: AdfMark) -> Marks:
    if any(m.type == mark.type for m in marks):
        return marks
    return marks + (mark,)


def _append_text(out: list[AdfNode], text: str, marks: Marks) -> None:
    if text:
        out.append(text_node(text, marks))


def _merge_text(nodes: list[AdfNode]) -> list[AdfNode]:
    """Join neighbouring text nodes that carry the same marks."""
    merged: list[AdfNode] = []
    for node in nodes:
        prev = merged[-1] if merged else None
        if (
            prev is not None
            and node.type == "text"
            and prev.type == "text"
            and (prev.marks or []) == (node.marks or [])
        ):
            merged[-1] = text_node((prev.text or "") + (node.text or ""), prev.marks or ())
        else:
            merged.append(node)
    return merged


def _plain_text(tokens: Iterable[Token]) -> str:
    parts = []
    for token in tokens:
        if "children" in token:
            parts.append(_plain_text(token["children"]))
        elif token["type"] == "softbreak":
            parts.append(" ")
        else:
            parts.append(token.get("raw", ""))
    return "".join(parts)


def markdown_to_adf(markdown: str) -> AdfDocument:
    """Convert markdown text to an ADF document.

    Never raises for string input: anything the markdown grammar cannot
    interpret ends up as literal text.
    """
    return MarkdownToAdf().convert(markdown)


def markdown_to_adf_string(markdown: str, indent: int | None = None) -> str:
    """Convert markdown text to serialized ADF JSON."""
    return markdown_to_adf(markdown).to_json(indent=indent)

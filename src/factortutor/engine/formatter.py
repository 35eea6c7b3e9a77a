"""Lesson text formatting: bold spans, lists and line breaks into display blocks."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from enum import Enum

# Private-use code points mark resolved bold spans between the global bold
# pass and per-line span splitting.
_BOLD_OPEN = "\ue000"
_BOLD_CLOSE = "\ue001"

_BOLD = re.compile(r"\*\*(.*?)\*\*")
_MARKED = re.compile(f"{_BOLD_OPEN}(.*?){_BOLD_CLOSE}")
_ORDERED_MARKER = re.compile(r"^\d+\.\s")
_UNORDERED_MARKER = re.compile(r"^\*\s")


class BlockKind(str, Enum):
    PARAGRAPH = "paragraph"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"


@dataclass(frozen=True)
class Span:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class InlineText:
    spans: tuple[Span, ...] = ()

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class DisplayBlock:
    """One rendered block.

    For a paragraph, ``items`` are its lines, separated by in-block breaks.
    For a list, ``items`` are the list items and ``breaks`` holds lines that
    sat inside the list without a marker.
    """
    kind: BlockKind
    items: tuple[InlineText, ...]
    breaks: tuple[InlineText, ...] = field(default=())

    @property
    def is_list(self) -> bool:
        return self.kind is not BlockKind.PARAGRAPH


def _spans(line: str) -> InlineText:
    spans: list[Span] = []
    pos = 0
    for m in _MARKED.finditer(line):
        if m.start() > pos:
            spans.append(Span(line[pos : m.start()]))
        spans.append(Span(m.group(1), bold=True))
        pos = m.end()
    if pos < len(line):
        spans.append(Span(line[pos:]))
    return InlineText(tuple(spans))


def _list_block(kind: BlockKind, lines: list[str]) -> DisplayBlock:
    marker = _ORDERED_MARKER if kind is BlockKind.ORDERED_LIST else _UNORDERED_MARKER
    items: list[InlineText] = []
    breaks: list[InlineText] = []
    for line in lines:
        trimmed = line.strip()
        if marker.match(trimmed):
            if kind is BlockKind.ORDERED_LIST:
                body = trimmed[trimmed.index(".") + 1 :]
            else:
                body = trimmed[2:]
            items.append(_spans(body.strip()))
        elif trimmed:
            breaks.append(_spans(line))
    return DisplayBlock(kind=kind, items=tuple(items), breaks=tuple(breaks))


def format_content(text: str) -> list[DisplayBlock]:
    """Split marked-up lesson text into display blocks, in input order."""
    if not text:
        return []

    text = text.replace("\r\n", "\n").replace(_BOLD_OPEN, "").replace(_BOLD_CLOSE, "")
    marked = _BOLD.sub(lambda m: f"{_BOLD_OPEN}{m.group(1)}{_BOLD_CLOSE}", text)

    blocks: list[DisplayBlock] = []
    for para in marked.split("\n\n"):
        if not para.strip():
            continue
        lines = para.split("\n")
        if _ORDERED_MARKER.match(lines[0]):
            blocks.append(_list_block(BlockKind.ORDERED_LIST, lines))
        elif _UNORDERED_MARKER.match(lines[0]):
            blocks.append(_list_block(BlockKind.UNORDERED_LIST, lines))
        else:
            blocks.append(DisplayBlock(
                kind=BlockKind.PARAGRAPH,
                items=tuple(_spans(line) for line in lines),
            ))
    return blocks


# --- Renderers ---

def _inline_html(inline: InlineText) -> str:
    return "".join(
        f"<strong>{html.escape(s.text)}</strong>" if s.bold else html.escape(s.text)
        for s in inline.spans
    )


def render_html(blocks: list[DisplayBlock]) -> str:
    """Render blocks as HTML, one ``<div class="mb-4">`` per block."""
    out = []
    for block in blocks:
        if block.kind is BlockKind.PARAGRAPH:
            body = "<br />".join(_inline_html(line) for line in block.items)
        else:
            tag, css = (
                ("ol", "list-decimal") if block.kind is BlockKind.ORDERED_LIST
                else ("ul", "list-disc")
            )
            lis = "".join(f"<li>{_inline_html(item)}</li>" for item in block.items)
            body = f'<{tag} class="{css} list-inside pl-4">{lis}</{tag}>'
            body += "".join(f"<br />{_inline_html(b)}" for b in block.breaks)
        out.append(f'<div class="mb-4">{body}</div>')
    return "".join(out)


def render_plain(blocks: list[DisplayBlock]) -> str:
    """Render blocks as terminal text; bold spans are dropped to plain text."""
    out = []
    for block in blocks:
        if block.kind is BlockKind.PARAGRAPH:
            lines = [item.text for item in block.items]
        elif block.kind is BlockKind.ORDERED_LIST:
            lines = [f"{i}. {item.text}" for i, item in enumerate(block.items, 1)]
        else:
            lines = [f"* {item.text}" for item in block.items]
        if block.is_list:
            lines += [b.text.strip() for b in block.breaks]
        out.append("\n".join(lines))
    return "\n\n".join(out)

"""Line-oriented terminal formatting for model answers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from rich.color import ColorSystem
from rich.segment import Segment
from rich.style import Style

FENCE = "```"
DIVIDER = "─" * 35
BULLET_MARKERS = ("- ", "* ")
SHELL_PREFIXES = ("$", "sudo")
NUMBERED_PREFIX_RE = re.compile(r"^\d+\.\s")

STYLE_HEADING1 = "bold blue"
STYLE_HEADING2 = "bold green"
STYLE_HEADING3 = "bold yellow"
STYLE_CODE_LABEL = "bold cyan"
STYLE_DIVIDER = "dim"
STYLE_SHELL = "bold green"
STYLE_BULLET = "white"
STYLE_NUMBER = "cyan"

COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


class LineKind(str, Enum):
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    CODE_FENCE_OPEN = "code_fence_open"
    CODE_FENCE_CLOSE = "code_fence_close"
    SHELL_COMMAND = "shell_command"
    BULLET_ITEM = "bullet_item"
    NUMBERED_ITEM = "numbered_item"
    PLAIN_TEXT = "plain_text"


_HEADINGS: tuple[tuple[str, LineKind, str], ...] = (
    ("# ", LineKind.HEADING1, STYLE_HEADING1),
    ("## ", LineKind.HEADING2, STYLE_HEADING2),
    ("### ", LineKind.HEADING3, STYLE_HEADING3),
)


@dataclass(frozen=True)
class FormattedLine:
    """One rendered line as styled segments.

    Segment text is kept verbatim: tabs and control characters are written
    as they arrived.
    """

    kind: LineKind
    segments: tuple[Segment, ...]

    @property
    def plain(self) -> str:
        return "".join(segment.text for segment in self.segments)

    def render(self, color_system: str | None = "standard") -> str:
        """Return the line with ANSI escapes, without a trailing newline."""
        system = COLOR_SYSTEMS.get(color_system) if color_system else None
        return "".join(
            segment.style.render(segment.text, color_system=system) if segment.style else segment.text
            for segment in self.segments
        )


def _line(kind: LineKind, *parts: str | tuple[str, str]) -> FormattedLine:
    segments = []
    for part in parts:
        if isinstance(part, tuple):
            text, style = part
            segments.append(Segment(text, Style.parse(style)))
        else:
            segments.append(Segment(part))
    return FormattedLine(kind, tuple(segments))


def split_lines(content: str) -> list[str]:
    """Split a response body on ``\\n``; an empty body is one empty line.

    A trailing ``\\r`` is dropped from each line and a final newline does not
    start a new line.
    """

    if not content:
        return [""]
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _is_numbered(line: str) -> bool:
    if "." in line and all(ch.isdigit() or ch in ". " for ch in line):
        return True
    return NUMBERED_PREFIX_RE.match(line) is not None


def split_numbered(line: str) -> tuple[str, str]:
    """Split a numbered item on its first period into ``(label, remainder)``."""
    label, _, remainder = line.partition(".")
    return label, remainder


def classify_line(line: str, *, in_code_block: bool = False) -> LineKind:
    """Classify one line.

    ``in_code_block`` only affects fence lines. When it is False, a bare fence
    is a close and a fence with a tag is an open, which is the stateless rule
    used by ``render_lines(..., track_fences=False)``.
    """

    for marker, kind, _ in _HEADINGS:
        if line.startswith(marker):
            return kind
    if line.startswith(FENCE):
        if in_code_block or line == FENCE:
            return LineKind.CODE_FENCE_CLOSE
        return LineKind.CODE_FENCE_OPEN
    if line.lstrip().startswith(SHELL_PREFIXES):
        return LineKind.SHELL_COMMAND
    if line.startswith(BULLET_MARKERS):
        return LineKind.BULLET_ITEM
    if _is_numbered(line):
        return LineKind.NUMBERED_ITEM
    return LineKind.PLAIN_TEXT


def render_line(line: str, kind: LineKind) -> FormattedLine:
    """Render one classified line."""

    for marker, heading_kind, style in _HEADINGS:
        if heading_kind is kind:
            return _line(kind, (line[len(marker) :], style))
    if kind is LineKind.CODE_FENCE_CLOSE:
        return _line(kind, (DIVIDER, STYLE_DIVIDER))
    if kind is LineKind.CODE_FENCE_OPEN:
        tag = line.replace(FENCE, "")
        label = f"Code ({tag})" if tag else "Code"
        return _line(kind, (label, STYLE_CODE_LABEL))
    if kind is LineKind.SHELL_COMMAND:
        return _line(kind, "  ", (line, STYLE_SHELL))
    if kind is LineKind.BULLET_ITEM:
        return _line(kind, "  • ", (line[2:], STYLE_BULLET))
    if kind is LineKind.NUMBERED_ITEM:
        label, remainder = split_numbered(line)
        return _line(kind, "  ", (label, STYLE_NUMBER), ". ", remainder)
    return _line(kind, line)


def render_lines(lines: Iterable[str], *, track_fences: bool = True) -> list[FormattedLine]:
    """Render each line; the result has exactly one entry per input line.

    With ``track_fences`` a fence opens a block when none is open and closes it
    otherwise, so an empty block (two bare fences) renders as label + divider.
    Without it every bare fence renders as a divider.
    """

    rendered: list[FormattedLine] = []
    in_code_block = False
    for line in lines:
        kind = classify_line(line, in_code_block=in_code_block and track_fences)
        if track_fences and kind in (LineKind.CODE_FENCE_OPEN, LineKind.CODE_FENCE_CLOSE):
            if not in_code_block and line == FENCE:
                kind = LineKind.CODE_FENCE_OPEN
            in_code_block = kind is LineKind.CODE_FENCE_OPEN
        rendered.append(render_line(line, kind))
    return rendered


def to_ansi(lines: Iterable[FormattedLine], *, color_system: str | None = "standard") -> str:
    """Join rendered lines into one newline-terminated string.

    ``color_system`` is a Rich color system name; None emits plain text.
    """

    return "".join(f"{line.render(color_system)}\n" for line in lines)


def format_output(content: str, *, track_fences: bool = True, color_system: str | None = "standard") -> str:
    """Format a raw answer for the terminal."""
    return to_ansi(render_lines(split_lines(content), track_fences=track_fences), color_system=color_system)

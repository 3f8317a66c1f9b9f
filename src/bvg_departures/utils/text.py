"""Text helpers for values scraped from timetable pages."""

import re

from bs4 import Tag

# Parenthesis form "M4 (Gl. 2)" and word forms "S5 Gleis 3" / "S5 Gl. 3".
# Word forms only count as whole words, so "U1 Gleisdreieck" has no platform.
PLATFORM_WORD = r"Gl(?:eis\b|\.)"
PLATFORM_MARKER_RE = re.compile(rf"\(|\b{PLATFORM_WORD}")
PLATFORM_PREFIX_RE = re.compile(rf"^\s*{PLATFORM_WORD}")
PLATFORM_TERMINATOR = ")"


def sanitize(text: str) -> str:
    """Remove newlines and surrounding whitespace."""
    return text.replace("\n", "").strip()


def sanitize_node(node: Tag) -> str:
    """Sanitized text content of an element."""
    return sanitize(node.get_text())


def find_platform_marker(text: str) -> tuple[int, str] | None:
    """Locate the earliest platform marker in a line cell text."""
    match = PLATFORM_MARKER_RE.search(text)
    if match is None:
        return None
    return match.start(), match.group()


def split_line_platform(full_line: str) -> tuple[str, str | None]:
    """Split a line cell text into line name and platform.

    Examples:
        "M4 (Gl. 2)"      -> ("M4", "2")
        "S5 (Gleis 3)"    -> ("S5", "3")
        "S5 Gleis 3"      -> ("S5", "3")
        "U1 Gleisdreieck" -> ("U1 Gleisdreieck", None)
        "M4"              -> ("M4", None)
    """
    marker = find_platform_marker(full_line)
    if marker is None:
        return full_line, None

    position, text = marker
    line = sanitize(full_line[:position])
    annotation = full_line[position + len(text) :]
    if annotation.endswith(PLATFORM_TERMINATOR):
        annotation = annotation[: -len(PLATFORM_TERMINATOR)]
    annotation = PLATFORM_PREFIX_RE.sub("", annotation)
    # Platform number follows the last abbreviation dot, e.g. "Bstg. 2"
    platform = sanitize(annotation.rsplit(".", 1)[-1])
    return line, platform

"""Utility modules for bvg-departures."""

from .text import sanitize, sanitize_node, split_line_platform

__all__ = [
    "sanitize",
    "sanitize_node",
    "split_line_platform",
]

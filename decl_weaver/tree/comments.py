"""Comment line normalization shared by direct and deferred attachment."""

from collections.abc import Sequence


def comment_lines(comment: str | Sequence[str]) -> list[str]:
    """Normalize a comment argument to a list of single lines.

    A string becomes one line per source line; a sequence contributes each
    element, itself split if it spans several lines. An empty string is kept
    as one blank comment line.
    """
    if isinstance(comment, str):
        return comment.splitlines() or [""]
    lines: list[str] = []
    for item in comment:
        lines.extend(comment_lines(item))
    return lines


__all__ = ["comment_lines"]

"""Path segment splitting."""
from typing import List


def split_segments(path: str) -> List[str]:
    """
    Split a slash-delimited path into segments.

    One leading empty segment is dropped when the path starts with '/'.
    Consecutive slashes yield empty segments, which are kept.

    Example:
        >>> split_segments("/a/b/c.txt")
        ['a', 'b', 'c.txt']
        >>> split_segments("a//b")
        ['a', '', 'b']
    """
    segments = path.split('/')
    if path.startswith('/'):
        segments = segments[1:]
    return segments


def format_path(segments: List[str]) -> str:
    """Join segments into an absolute path string."""
    return '/' + '/'.join(segments)

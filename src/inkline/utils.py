"""
Utility functions for the inkline engine.
"""

import os


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/inkline).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def line_bounds(text: str, position: int) -> tuple[int, int]:
    """
    Return the ``[start, end)`` offsets of the line containing ``position``.

    Args:
        text: Full text buffer
        position: Offset inside the buffer (clamped to the buffer)

    Returns:
        Tuple of (line_start, line_end)
    """
    position = max(0, min(position, len(text)))
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    if end == -1:
        end = len(text)
    return start, end


def clamp_cursor(text: str, cursor_position: int) -> int:
    """Clamp a cursor offset into ``0 <= pos <= len(text)``."""
    return max(0, min(cursor_position, len(text)))

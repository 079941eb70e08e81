# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of character offsets into line and column numbers."""

import bisect

# ###############
# Public Interface
# ###############


def location(source: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of *offset* within *source*.

    Offsets past the end of the source are clamped to the end. For many
    lookups into the same source use :class:`LineIndex`.
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


class LineIndex:
    """Line start offsets of one source, for repeated offset lookups."""

    def __init__(self, source: str) -> None:
        self._length = len(source)
        self._line_starts = [0]
        self._line_starts.extend(i + 1 for i, ch in enumerate(source) if ch == "\n")

    def location(self, offset: int) -> tuple[int, int]:
        """Return the same ``(line, column)`` as :func:`location`."""
        offset = max(0, min(offset, self._length))
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

"""Single-interval HTTP ``Range`` header parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

from dirshare.errors import RangeInvalid, RangeMalformed, RangeUnsatisfiable

UNIT_PREFIX = "bytes="

_BOUND = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte interval; ``start <= end < file size``."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"


def _parse_bound(value: str) -> int:
    if not _BOUND.fullmatch(value):
        raise RangeMalformed(f"Malformed range bound: {value!r}")
    return int(value)


def parse_range(header: str, file_size: int) -> ByteRange:
    """Validate ``header`` against a file of ``file_size`` bytes.

    An empty start means 0 and an empty end means the last byte. An end past
    the last byte is clamped rather than rejected. Multi-range requests are
    not supported and count as malformed.
    """
    header = header.strip()
    if not header.startswith(UNIT_PREFIX):
        raise RangeMalformed("Unsupported range unit")

    parts = header[len(UNIT_PREFIX):].split("-")
    if len(parts) != 2:
        raise RangeMalformed()
    start_str, end_str = (p.strip() for p in parts)

    start = _parse_bound(start_str) if start_str else 0
    end = _parse_bound(end_str) if end_str else file_size - 1

    # With an open end, start > end only happens when start is past EOF
    if end_str and start > end:
        raise RangeInvalid(start, end)
    if start >= file_size:
        raise RangeUnsatisfiable(start, file_size)

    return ByteRange(start=start, end=min(end, file_size - 1))

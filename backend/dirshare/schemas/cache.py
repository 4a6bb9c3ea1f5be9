"""Cache statistics schemas."""

from pydantic import BaseModel


class CacheStats(BaseModel):
    """Small-file cache and admission gate statistics."""
    entries: int
    capacity: int
    total_bytes: int
    threshold_bytes: int
    hits: int
    misses: int
    hit_rate_percent: float | None = None
    in_flight: int  # requests currently holding an admission slot
    max_concurrent: int

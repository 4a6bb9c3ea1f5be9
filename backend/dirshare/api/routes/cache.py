"""Cache statistics routes."""

from fastapi import APIRouter, Depends

from dirshare.api.deps import get_delivery, get_gate
from dirshare.schemas.cache import CacheStats
from dirshare.services.admission import AdmissionGate
from dirshare.services.file_delivery import FileDelivery

router = APIRouter()


@router.get("/stats", response_model=CacheStats)
async def cache_stats(
    delivery: FileDelivery = Depends(get_delivery),
    gate: AdmissionGate = Depends(get_gate),
):
    """Small-file cache usage and current admission load."""
    return CacheStats(
        **delivery.cache.stats(),
        threshold_bytes=delivery.threshold_bytes,
        in_flight=gate.in_flight,
        max_concurrent=gate.limit,
    )

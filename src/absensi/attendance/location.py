from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, Mapping, Optional

from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from .model import Location

logger = logging.getLogger(__name__)

LocationProvider = Callable[[], Optional[Location]]


def capture_location(
    provider: Optional[LocationProvider],
    *,
    timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
) -> Optional[Location]:
    """Single-shot location lookup bounded by ``timeout`` seconds.

    Denial, timeout, a missing provider or any provider failure all give
    ``None``: a check-in without location is still a valid check-in.
    """

    if provider is None:
        return None

    # One executor per lookup: a provider that never returns only strands its own thread.
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="location")
    future = executor.submit(provider)
    try:
        return future.result(timeout=timeout)
    except FutureTimeout:
        logger.info("Location lookup timed out after %.1fs", timeout)
        return None
    except Exception as e:
        logger.info("Location unavailable: %s", e)
        return None
    finally:
        executor.shutdown(wait=False)


def form_location_provider(form: Mapping[str, str]) -> LocationProvider:
    """Provider for coordinates the browser posted in ``lat``/``lng`` fields.

    Empty fields mean the browser had no fix (denied, timed out, unsupported).
    """

    def provide() -> Optional[Location]:
        lat_s = (form.get("lat") or "").strip()
        lng_s = (form.get("lng") or "").strip()
        if not lat_s or not lng_s:
            return None
        lat, lng = float(lat_s), float(lng_s)
        if not (math.isfinite(lat) and math.isfinite(lng)) or not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise ValueError(f"coordinates out of range: {lat}, {lng}")
        return Location(lat=lat, lng=lng)

    return provide

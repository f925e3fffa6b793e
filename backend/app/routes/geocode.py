"""Reverse geocoding proxy.

Forwards coordinate lookups to Nominatim so clients don't call it
directly and every request carries the app's identifying User-Agent.
"""

import math
from collections.abc import AsyncIterator
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..logging_config import get_logger
from ..rate_limit import READ_LIMIT, limiter

logger = get_logger("workly.geocode")
router = APIRouter(prefix="/geocode", tags=["geocode"])

MIN_ZOOM = 3
MAX_ZOOM = 18


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency yielding an outbound HTTP client."""
    async with httpx.AsyncClient() as client:
        yield client


HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def parse_number(value: str | None) -> float | None:
    """Parse a query value as a finite number, or None."""
    if not value:
        return None
    try:
        n = float(value)
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def clamp_zoom(zoom: float | None) -> int:
    """Round half-up and clamp to the zoom levels Nominatim supports."""
    if zoom is None:
        return MAX_ZOOM
    return min(MAX_ZOOM, max(MIN_ZOOM, math.floor(zoom + 0.5)))


def _error(status_code: int, **body) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


@router.get("/reverse")
@limiter.limit(READ_LIMIT)
async def reverse_geocode(
    request: Request,
    http: HttpClient,
    settings: Annotated[Settings, Depends(get_settings)],
    lat: str | None = Query(None),
    lon: str | None = Query(None),
    zoom: str | None = Query(None),
):
    """Look up the address for a coordinate pair."""
    lat_n = parse_number(lat)
    lon_n = parse_number(lon)
    if lat_n is None or lon_n is None:
        return _error(status.HTTP_400_BAD_REQUEST, error="Missing or invalid lat/lon")

    if not (-90 <= lat_n <= 90 and -180 <= lon_n <= 180):
        return _error(status.HTTP_400_BAD_REQUEST, error="lat/lon out of range")

    params = {
        "format": "json",
        "lat": str(lat_n),
        "lon": str(lon_n),
        "zoom": str(clamp_zoom(parse_number(zoom))),
        "addressdetails": "1",
    }
    headers = {"Accept": "application/json", "User-Agent": settings.geocode_user_agent}

    try:
        res = await http.get(
            settings.nominatim_url,
            params=params,
            headers=headers,
            timeout=settings.geocode_timeout_seconds,
        )
        if not res.is_success:
            logger.warning(f"Nominatim returned {res.status_code} for lat={lat_n} lon={lon_n}")
            body = {"error": "Reverse geocoding failed", "status": res.status_code}
            if "application/json" not in res.headers.get("content-type", ""):
                body["details"] = res.text[:500]
            return _error(status.HTTP_502_BAD_GATEWAY, **body)

        return JSONResponse(status_code=status.HTTP_200_OK, content=res.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Nominatim request failed: {type(e).__name__}: {e}")
        return _error(
            status.HTTP_502_BAD_GATEWAY,
            error="Reverse geocoding request failed",
            name=type(e).__name__,
        )

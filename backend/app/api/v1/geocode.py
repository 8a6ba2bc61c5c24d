"""
geocode.py — Reverse Geocoding Proxy Endpoint

GET /geocode/reverse?lat=..&lon=..

Proxies to Nominatim so the browser never calls it directly (Nominatim
requires an identifying User-Agent). Upstream errors are passed through
with their original status and body.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.services.geocoding import GeocodingError, NominatimClient, get_geocoding_client, parse_coordinates

router = APIRouter(
    prefix="/geocode",
    tags=["geocode"]
)


@router.get("/reverse")
def reverse_geocode(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    client: NominatimClient = Depends(get_geocoding_client),
):
    latitude, longitude = parse_coordinates(lat, lon)
    try:
        return client.reverse(latitude, longitude)
    except GeocodingError as e:
        return JSONResponse(status_code=e.status_code, content=e.payload)

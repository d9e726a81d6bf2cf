# routers/geocode.py
"""
Geocoding proxy: resolves a free-form address to coordinates.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from schemas.geocode import CoordinatesResponse
from services.credential_service import TokenPayload
from services.geocoding_service import Coordinates, Geocoder, get_geocoder
from services.session_resolver import require_user
from utils.errors import NotFoundError, ValidationError

router = APIRouter(prefix="/api/geocode", tags=["geocode"])


@router.get("", response_model=CoordinatesResponse, summary="Locate an address")
def geocode_address(
     address: Optional[str] = Query(None),
     user: TokenPayload = Depends(require_user),
     geocoder: Geocoder = Depends(get_geocoder),
):
     if not address or not address.strip():
          raise ValidationError("Address is required")

     result = geocoder.geocode(address)
     if not isinstance(result, Coordinates):
          raise NotFoundError("Could not locate address")
     return CoordinatesResponse(latitude=result.latitude, longitude=result.longitude)

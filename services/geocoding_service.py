# services/geocoding_service.py
"""
Geocoding capability backed by the public Nominatim search API.

geocode(address) returns Coordinates, or Unavailable with a reason.
Network failures are retried a fixed number of times with a fixed
backoff; HTTP errors and empty results are final.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

import requests
from fastapi import Request

import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
     latitude: float
     longitude: float


@dataclass(frozen=True)
class Unavailable:
     reason: str  # "empty_address", "not_found", "http_error", "network_error", "bad_response"


GeocodeResult = Union[Coordinates, Unavailable]


class Geocoder:
     """Interface: resolve a free-form address to coordinates."""

     def geocode(self, address: str) -> GeocodeResult:
          raise NotImplementedError


class NominatimGeocoder(Geocoder):

     def __init__(
          self,
          base_url: str = config.GEOCODER_URL,
          country_codes: str = config.GEOCODER_COUNTRY_CODES,
          user_agent: str = config.GEOCODER_USER_AGENT,
          attempts: int = config.GEOCODER_RETRIES,
          backoff_seconds: float = config.GEOCODER_BACKOFF_SECONDS,
          timeout: float = config.GEOCODER_TIMEOUT_SECONDS,
          session: Optional[requests.Session] = None,
          sleep: Callable[[float], None] = time.sleep,
     ):
          self.base_url = base_url
          self.country_codes = country_codes
          self.user_agent = user_agent
          self.attempts = max(1, attempts)
          self.backoff_seconds = backoff_seconds
          self.timeout = timeout
          self.session = session or requests.Session()
          self.sleep = sleep

     def _params(self, address: str) -> dict:
          params = {"format": "json", "q": address, "limit": 1}
          if self.country_codes:
               params["countrycodes"] = self.country_codes
          return params

     def geocode(self, address: str) -> GeocodeResult:
          if not address or not address.strip():
               return Unavailable("empty_address")

          for attempt in range(1, self.attempts + 1):
               try:
                    response = self.session.get(
                         self.base_url,
                         params=self._params(address.strip()),
                         headers={"User-Agent": self.user_agent},
                         timeout=self.timeout,
                    )
               except requests.RequestException as e:
                    logger.warning(
                         "Geocoding failed (%d retries left): %s",
                         self.attempts - attempt, e
                    )
                    if attempt < self.attempts:
                         self.sleep(self.backoff_seconds)
                    continue

               if response.status_code != 200:
                    logger.warning("Geocoder returned HTTP %s", response.status_code)
                    return Unavailable("http_error")

               try:
                    results = response.json()
                    if not results:
                         return Unavailable("not_found")
                    first = results[0]
                    return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
               except (ValueError, KeyError, IndexError, TypeError):
                    logger.warning("Geocoder returned an unreadable response")
                    return Unavailable("bad_response")

          logger.error("Geocoding failed after all retries")
          return Unavailable("network_error")


def get_geocoder(request: Request) -> Geocoder:
     """FastAPI dependency returning the geocoder the app was built with."""
     return request.app.state.geocoder

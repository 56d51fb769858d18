"""
Geocoding adapter: turns a postal address into coordinates.
Talks to the Google Geocoding JSON API over httpx.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging

import httpx

from sejour.config import settings
from sejour.utils.exceptions import AddressNotFoundError, GeocodingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair as returned by the geocoder."""

    lat: Decimal
    lng: Decimal

    @property
    def latitude(self) -> str:
        return str(self.lat)

    @property
    def longitude(self) -> str:
        return str(self.lng)


class GeocodingService:
    """Resolves street, city and state to a single location."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.geocoding_api_key
        self.base_url = base_url or settings.geocoding_url
        self.timeout = timeout or settings.geocoding_timeout
        self._transport = transport

    async def geocode(self, street: str, city: str, state: str) -> Coordinates:
        """
        Geocode an address using the first result returned.

        Args:
            street: Street line
            city: City name
            state: State or region

        Returns:
            Coordinates of the address

        Raises:
            AddressNotFoundError: If the geocoder knows no such address
            GeocodingError: If the geocoder is unreachable or answers with an error
        """
        address = f"{street}, {city}, {state}"
        params = {"address": address, "key": self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Geocoder returned HTTP {e.response.status_code} for '{address}'")
            raise GeocodingError(f"Geocoding service returned HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Geocoding request failed for '{address}': {e}")
            raise GeocodingError("Geocoding service unavailable")
        except ValueError as e:
            logger.error(f"Geocoder returned invalid JSON for '{address}': {e}")
            raise GeocodingError("Geocoding service returned an invalid response")

        status = data.get("status")
        if status == "ZERO_RESULTS":
            logger.warning(f"No geocoding results for '{address}'")
            raise AddressNotFoundError(address)
        if status != "OK" or not data.get("results"):
            logger.error(f"Geocoding failed for '{address}': status={status} {data.get('error_message', '')}")
            raise GeocodingError(f"Geocoding failed with status {status}")

        try:
            location = data["results"][0]["geometry"]["location"]
            coordinates = Coordinates(
                lat=Decimal(str(location["lat"])),
                lng=Decimal(str(location["lng"])),
            )
        except (KeyError, TypeError, ArithmeticError) as e:
            logger.error(f"Unexpected geocoding payload for '{address}': {e}")
            raise GeocodingError("Geocoding service returned an invalid response")

        logger.debug(f"Geocoded '{address}' to {coordinates.latitude},{coordinates.longitude}")
        return coordinates

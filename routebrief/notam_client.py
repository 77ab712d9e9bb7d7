"""FAA NOTAM API client module."""
import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

import requests

from routebrief.config import Config
from routebrief.exceptions import (
    ConfigurationError,
    NoticeApiError,
    NoticeApiTimeoutError,
    NoticeQueryError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://external-api.faa.gov/notamapi/v1/notams"
DEFAULT_PAGE_SIZE = 1000
MAX_PAGE_SIZE = 1000
MAX_RADIUS_NM = 100
TIMEOUT_SECONDS = 30

ICAO_PATTERN = re.compile(r'[A-Za-z]{3,4}')


@dataclass(frozen=True)
class Pagination:
    """Page selection; pages are numbered from 1."""
    page_size: int = DEFAULT_PAGE_SIZE
    page_num: int = 1

    def __post_init__(self):
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise NoticeQueryError(
                f"pageSize must be between 1 and {MAX_PAGE_SIZE}, currently: {self.page_size}"
            )
        if not self.page_num >= 1:
            raise NoticeQueryError(f"pageNum must be >= 1, currently: {self.page_num}")

    def to_params(self) -> Dict[str, int]:
        return {'pageSize': self.page_size, 'pageNum': self.page_num}


@dataclass(frozen=True)
class IcaoQuery:
    """NOTAMs for one ICAO location. The code is upper-cased."""
    icao: str

    def __post_init__(self):
        if self.icao is None or not str(self.icao).strip():
            raise NoticeQueryError("ICAO code must not be null or blank")
        if not ICAO_PATTERN.fullmatch(self.icao):
            raise NoticeQueryError(
                f"Invalid ICAO code: '{self.icao}'. Expected 3-4 alphabetic characters."
            )
        object.__setattr__(self, 'icao', self.icao.upper())

    def to_params(self) -> Dict[str, str]:
        return {'icaoLocation': self.icao}


@dataclass(frozen=True)
class RadiusQuery:
    """NOTAMs within radius_nm nautical miles of a point."""
    latitude: float
    longitude: float
    radius_nm: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise NoticeQueryError(
                f"Latitude must be between -90 and 90, currently: {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise NoticeQueryError(
                f"Longitude must be between -180 and 180, currently: {self.longitude}"
            )
        if not 0 < self.radius_nm <= MAX_RADIUS_NM:
            raise NoticeQueryError(
                f"Radius must be between 0 and {MAX_RADIUS_NM}, currently: {self.radius_nm}"
            )

    def to_params(self) -> Dict[str, float]:
        return {
            'locationLatitude': self.latitude,
            'locationLongitude': self.longitude,
            'locationRadius': self.radius_nm,
        }


NoticeQuery = Union[IcaoQuery, RadiusQuery]


class NoticeApiClient:
    """
    Client for the FAA NOTAM API.

    Returns raw JSON text; no mapping or parsing is done here. Each call is
    a single blocking GET with a fixed timeout. Non-200 responses raise
    NoticeApiError and nothing is retried.
    """

    def __init__(self, client_id: str, client_secret: str,
                 base_url: str = DEFAULT_BASE_URL,
                 session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            client_id: API client identifier
            client_secret: API client secret
            base_url: NOTAM endpoint URL
            session: Optional requests session (injected in tests)
        """
        if not client_id or not client_id.strip():
            raise ConfigurationError("NOTAM client_id is missing")
        if not client_secret or not client_secret.strip():
            raise ConfigurationError("NOTAM client_secret is missing")

        self.base_url = base_url
        self.timeout = TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self._headers = {
            'client_id': client_id,
            'client_secret': client_secret,
            'Accept': 'application/json',
        }

    @classmethod
    def from_config(cls, config: Optional[Config] = None,
                    session: Optional[requests.Session] = None) -> 'NoticeApiClient':
        """Build a client from application configuration."""
        config = config or Config()
        return cls(
            client_id=config.NOTAM_CLIENT_ID,
            client_secret=config.NOTAM_CLIENT_SECRET,
            base_url=config.NOTAM_API_URL,
            session=session,
        )

    def fetch_by_icao(self, icao_code: str, page_size: int = DEFAULT_PAGE_SIZE,
                      page_num: int = 1) -> str:
        """
        Fetch NOTAMs for an ICAO location.

        Args:
            icao_code: 3-4 letter code, any case
            page_size: Results per page (1-1000)
            page_num: Page number (>= 1)

        Returns:
            Raw JSON response body
        """
        query = IcaoQuery(icao_code)
        return self.fetch(query, Pagination(page_size, page_num))

    def fetch_by_location(self, latitude: float, longitude: float, radius_nm: float,
                          page_size: int = DEFAULT_PAGE_SIZE, page_num: int = 1) -> str:
        """
        Fetch NOTAMs within a radius of a point.

        Args:
            latitude: Degrees, -90 to 90
            longitude: Degrees, -180 to 180
            radius_nm: Nautical miles, above 0 and at most 100
            page_size: Results per page (1-1000)
            page_num: Page number (>= 1)

        Returns:
            Raw JSON response body
        """
        query = RadiusQuery(latitude, longitude, radius_nm)
        return self.fetch(query, Pagination(page_size, page_num))

    def fetch(self, query: NoticeQuery, pagination: Optional[Pagination] = None) -> str:
        """Send one validated query and return the response body."""
        pagination = pagination or Pagination()
        return self._send_request(self.build_params(query, pagination))

    @staticmethod
    def build_params(query: NoticeQuery, pagination: Pagination) -> Dict[str, Union[str, int, float]]:
        """Query string parameters, in the order the API documents them."""
        params = {'responseFormat': 'geoJson'}
        params.update(query.to_params())
        params.update(pagination.to_params())
        return params

    def _send_request(self, params: Dict[str, Union[str, int, float]]) -> str:
        """GET the endpoint with the required headers; HTTP 200 is success."""
        logger.info(f"Requesting NOTAMs: {params}")

        try:
            response = self.session.get(
                self.base_url,
                params=params,
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"NOTAM API timed out after {self.timeout}s: {e}")
            raise NoticeApiTimeoutError(
                f"NOTAM API did not respond within {self.timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Error requesting NOTAMs: {e}")
            raise NoticeApiError(f"NOTAM API request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"NOTAM API returned HTTP {response.status_code}")
            raise NoticeApiError(
                f"NOTAM API returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(f"Received {len(response.text)} bytes")
        return response.text

"""Configuration module for the route briefing tool."""
import os
from pathlib import Path

from dotenv import load_dotenv

from routebrief.exceptions import ConfigurationError

# Load environment variables
load_dotenv()

BUNDLED_AIRPORTS_CSV = str(Path(__file__).parent / 'data' / 'airports.csv')


class Config:
    """Application configuration."""

    # Logging level
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # NOTAM API
    NOTAM_API_URL = os.getenv('NOTAM_API_URL', 'https://external-api.faa.gov/notamapi/v1/notams')
    NOTAM_CLIENT_ID = os.getenv('NOTAM_CLIENT_ID', '')
    NOTAM_CLIENT_SECRET = os.getenv('NOTAM_CLIENT_SECRET', '')
    NOTAM_PAGE_SIZE = int(os.getenv('NOTAM_PAGE_SIZE', '1000'))

    # Airport coordinates (OurAirports CSV layout)
    AIRPORTS_CSV_PATH = os.getenv('AIRPORTS_CSV_PATH', BUNDLED_AIRPORTS_CSV)

    # Spacing between route points
    ROUTE_INTERVAL_MILES = float(os.getenv('ROUTE_INTERVAL_MILES', '50'))

    @classmethod
    def validate(cls):
        """Validate required configuration."""
        if not cls.NOTAM_CLIENT_ID or not cls.NOTAM_CLIENT_ID.strip():
            raise ConfigurationError("NOTAM_CLIENT_ID configuration is required")
        if not cls.NOTAM_CLIENT_SECRET or not cls.NOTAM_CLIENT_SECRET.strip():
            raise ConfigurationError("NOTAM_CLIENT_SECRET configuration is required")
        if not cls.NOTAM_API_URL:
            raise ConfigurationError("NOTAM_API_URL configuration is required")
        return True

"""Airport coordinate lookup backed by an OurAirports-style CSV file."""
import csv
import logging
import os
from typing import Dict, Optional

from routebrief.config import Config
from routebrief.exceptions import AirportNotFoundError
from routebrief.models.airport import Airport
from routebrief.models.coordinate import Coordinate

logger = logging.getLogger(__name__)


class AirportDirectory:
    """
    Resolves ICAO codes to airports.

    The CSV uses the OurAirports column names (ident, name, latitude_deg,
    longitude_deg, iata_code, iso_country, municipality) and is read once,
    on first lookup. Rows with missing or out-of-range coordinates are
    skipped.
    """

    def __init__(self, csv_path: Optional[str] = None):
        """
        Initialize directory.

        Args:
            csv_path: Path to CSV file. If None, uses config.AIRPORTS_CSV_PATH.
        """
        self.csv_path = csv_path or Config.AIRPORTS_CSV_PATH
        self._airports: Optional[Dict[str, Airport]] = None

    def _load(self) -> Dict[str, Airport]:
        if self._airports is not None:
            return self._airports

        if not os.path.exists(self.csv_path):
            raise FileNotFoundError(f"Airport CSV not found: {self.csv_path}")

        airports = {}
        skipped = 0
        with open(self.csv_path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)

            for row in reader:
                icao = (row.get('ident') or '').strip().upper()
                if not icao:
                    skipped += 1
                    continue

                try:
                    coordinate = Coordinate(
                        float(row['latitude_deg']),
                        float(row['longitude_deg']),
                    )
                except (KeyError, TypeError, ValueError) as e:
                    logger.debug(f"Skipping {icao}: {e}")
                    skipped += 1
                    continue

                airports[icao] = Airport(
                    icao=icao,
                    coordinate=coordinate,
                    name=row.get('name') or None,
                    iata=row.get('iata_code') or None,
                    country_code=row.get('iso_country') or None,
                    municipality=row.get('municipality') or None,
                )

        logger.info(f"Loaded {len(airports)} airport(s) from {self.csv_path} ({skipped} skipped)")
        self._airports = airports
        return airports

    def get(self, icao_code: str) -> Optional[Airport]:
        """
        Get airport by ICAO code (case-insensitive).

        Returns:
            Airport or None if not found
        """
        if not icao_code:
            return None
        return self._load().get(icao_code.strip().upper())

    def lookup(self, icao_code: str) -> Airport:
        """
        Get airport by ICAO code.

        Raises:
            AirportNotFoundError: if the code is not in the file
        """
        airport = self.get(icao_code)
        if airport is None:
            raise AirportNotFoundError(f"ICAO coords not found: {icao_code}")
        return airport

    def coordinate(self, icao_code: str) -> Coordinate:
        """Shortcut for lookup(icao_code).coordinate."""
        return self.lookup(icao_code).coordinate

    def __contains__(self, icao_code: str) -> bool:
        return self.get(icao_code) is not None

    def __len__(self) -> int:
        return len(self._load())

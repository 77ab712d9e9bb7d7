"""Airport domain model."""
from dataclasses import dataclass
from typing import Optional

from routebrief.models.coordinate import Coordinate


@dataclass(frozen=True)
class Airport:
    """An aerodrome identified by its ICAO code."""
    icao: str
    coordinate: Coordinate
    name: Optional[str] = None
    iata: Optional[str] = None
    country_code: Optional[str] = None
    municipality: Optional[str] = None

    def __str__(self) -> str:
        if self.name:
            return f"{self.icao} ({self.name})"
        return self.icao

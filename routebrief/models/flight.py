"""Flight domain model."""
from datetime import datetime
from typing import List, Optional

from routebrief.geo import distance, interpolate
from routebrief.models.airport import Airport
from routebrief.models.coordinate import Coordinate

DEFAULT_INTERVAL_MILES = 50.0


class Flight:
    """A planned flight between two airports and its great-circle path."""

    def __init__(self, departure_airport: Airport, arrival_airport: Airport,
                 date: Optional[datetime] = None,
                 interval_miles: float = DEFAULT_INTERVAL_MILES):
        if departure_airport is None:
            raise ValueError("Cannot create flight path with null departure Airport.")
        if arrival_airport is None:
            raise ValueError("Cannot create flight path with null arrival Airport.")

        self.departure_airport = departure_airport
        self.arrival_airport = arrival_airport
        self.date = date
        self.interval_miles = interval_miles
        self.flight_path: List[Coordinate] = interpolate(
            departure_airport.coordinate,
            arrival_airport.coordinate,
            interval_miles,
        )

    @property
    def distance_miles(self) -> float:
        return distance(self.departure_airport.coordinate, self.arrival_airport.coordinate)

    def __repr__(self) -> str:
        return (
            f"<Flight {self.departure_airport.icao}->{self.arrival_airport.icao} "
            f"{self.distance_miles:.0f}mi points={len(self.flight_path)}>"
        )

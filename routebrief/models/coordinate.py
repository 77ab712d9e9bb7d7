"""Geographic coordinate value type."""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A point on the globe in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude must be between -90 and 90, currently: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude must be between -180 and 180, currently: {self.longitude}")

    def is_close(self, other: 'Coordinate', tolerance: float = 1e-6) -> bool:
        """Check whether both components are within tolerance degrees of other."""
        return (
            math.isclose(self.latitude, other.latitude, abs_tol=tolerance)
            and math.isclose(self.longitude, other.longitude, abs_tol=tolerance)
        )

    def __str__(self) -> str:
        return f"({self.latitude:.4f}, {self.longitude:.4f})"

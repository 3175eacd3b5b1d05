"""
Coordinates value object
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair in degrees

    No range validation: callers are responsible for plausible values.
    """

    lat: float
    lng: float

    def __post_init__(self):
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lng", float(self.lng))

    def format_display(self) -> str:
        """Format for display to users"""
        return f"{self.lat:.6f}, {self.lng:.6f}"

    def __str__(self) -> str:
        return self.format_display()

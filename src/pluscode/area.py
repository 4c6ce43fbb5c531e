"""
Decoded code areas.

A CodeArea is the latitude/longitude bounding box a code stands for, together
with the number of digits that produced it.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CodeArea:
    """
    Bounding box of a decoded Open Location Code.

    The box is half-open: the south and west edges belong to the area, the
    north and east edges belong to the neighbouring codes.
    """
    south_latitude: float
    west_longitude: float
    north_latitude: float
    east_longitude: float
    length: int  # number of significant digits, at most 15

    def __post_init__(self):
        if self.south_latitude > self.north_latitude or self.west_longitude > self.east_longitude:
            raise ValueError(
                f"Invalid code area: south={self.south_latitude}, west={self.west_longitude}, "
                f"north={self.north_latitude}, east={self.east_longitude}"
            )

    @property
    def latitude_height(self) -> float:
        return self.north_latitude - self.south_latitude

    @property
    def longitude_width(self) -> float:
        return self.east_longitude - self.west_longitude

    @property
    def center_latitude(self) -> float:
        return (self.north_latitude + self.south_latitude) / 2

    @property
    def center_longitude(self) -> float:
        return (self.east_longitude + self.west_longitude) / 2

    def center(self) -> Tuple[float, float]:
        """Return the (lat, lng) midpoint of the area."""
        return self.center_latitude, self.center_longitude

    def contains(self, lat: float, lng: float) -> bool:
        """Check if the point (lat, lng) falls within this area."""
        return (
            self.south_latitude <= lat < self.north_latitude
            and self.west_longitude <= lng < self.east_longitude
        )

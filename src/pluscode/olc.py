"""
Open Location Code values.

OpenLocationCode wraps a validated, upper-cased code string. Build one from a
code with OpenLocationCode.from_code() or from a point with
OpenLocationCode.from_coordinates(), then use its methods to decode, shorten
or recover it. Every transform returns a new instance.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from .area import CodeArea
from .calculator import CodeCalculator, default_calculator
from .errors import IllegalCodeOperationError, InvalidCodeError, ReferenceTooFarError
from .grammar import (
    CODE_PRECISION_NORMAL,
    ENCODING_BASE,
    LATITUDE_MAX,
    PADDING_CHARACTER,
    SEPARATOR,
    SEPARATOR_POSITION,
    is_valid_code,
    strip_code,
)
from .quantize import (
    compute_latitude_precision,
    normalize_coords,
    validate_code_length,
)

logger = logging.getLogger(__name__)

# A code may be shortened while the reference is within this fraction of the
# removed precision; 0.5 would be the hard limit.
SHORTEN_SAFETY_FACTOR = 0.3

# Latitude 90 is moved south by this fraction of the cell height.
POLE_ADJUSTMENT_FACTOR = 0.9


@dataclass(frozen=True)
class OpenLocationCode:
    """
    A valid full or short Open Location Code.

    The stored code is always upper case and always satisfies the code
    grammar; construction fails with InvalidCodeError otherwise.
    """
    code: str

    def __post_init__(self):
        if not is_valid_code(self.code):
            code = "(None)" if self.code is None else self.code
            raise InvalidCodeError(f"The provided code {code} is not a valid Open Location Code.")
        object.__setattr__(self, "code", self.code.upper())

    @classmethod
    def from_code(cls, code: Optional[str]) -> OpenLocationCode:
        """
        Create an OpenLocationCode from a full or short code string.

        Args:
            code: Code string, case-insensitive

        Returns:
            The OpenLocationCode

        Raises:
            InvalidCodeError: if the string is not a valid code
        """
        return cls(code)

    @classmethod
    def from_coordinates(
        cls,
        lat: float,
        lng: float,
        code_length: int = CODE_PRECISION_NORMAL,
        calculator: Optional[CodeCalculator] = None,
    ) -> OpenLocationCode:
        """
        Encode a point into an OpenLocationCode.

        Args:
            lat: Latitude in degrees, clipped to [-90, 90]
            lng: Longitude in degrees, normalized to [-180, 180)
            code_length: Number of digits (default: 10, capped at 15)
            calculator: Calculator to use (default: the process-wide one)

        Returns:
            The OpenLocationCode of the cell containing the point

        Raises:
            InvalidCodeLengthError: if the length is below 4, or odd and below 10
        """
        code_length = validate_code_length(code_length)
        lat, lng = normalize_coords(lat, lng)

        # Latitude 90 is moved just inside the range so the code can be decoded.
        if lat == LATITUDE_MAX:
            lat = lat - POLE_ADJUSTMENT_FACTOR * compute_latitude_precision(code_length)

        calculator = calculator or default_calculator()
        return cls(calculator.encode(lat, lng, code_length))

    def __str__(self) -> str:
        return self.code

    def decode(self, calculator: Optional[CodeCalculator] = None) -> CodeArea:
        """
        Decode this code into the area it covers.

        Raises:
            IllegalCodeOperationError: if this is not a full code
        """
        if not self.is_full():
            raise IllegalCodeOperationError(
                f"decode() may only be called on full codes, but code was {self.code}."
            )
        calculator = calculator or default_calculator()
        return calculator.decode(strip_code(self.code))

    def contains(self, lat: float, lng: float, calculator: Optional[CodeCalculator] = None) -> bool:
        """Check if the area of this (full) code contains the point."""
        return self.decode(calculator).contains(lat, lng)

    def shorten(
        self,
        reference_lat: float,
        reference_lng: float,
        calculator: Optional[CodeCalculator] = None,
    ) -> OpenLocationCode:
        """
        Remove as many leading digit pairs as the reference location allows.

        Up to four pairs are removed. A pair can go if the reference is close
        enough to the code center that recover() will put it back.

        Args:
            reference_lat: Reference latitude in degrees
            reference_lng: Reference longitude in degrees

        Returns:
            A short OpenLocationCode

        Raises:
            IllegalCodeOperationError: if this code is short or padded
            ReferenceTooFarError: if not even one pair can be removed
        """
        if not self.is_full():
            raise IllegalCodeOperationError("shorten() may only be called on a full code.")
        if self.is_padded():
            raise IllegalCodeOperationError("shorten() may not be called on a padded code.")

        area = self.decode(calculator)
        coord_range = max(
            abs(reference_lat - area.center_latitude),
            abs(reference_lng - area.center_longitude),
        )
        for pairs in range(4, 0, -1):
            if coord_range < compute_latitude_precision(pairs * 2) * SHORTEN_SAFETY_FACTOR:
                return OpenLocationCode(self.code[pairs * 2:])

        raise ReferenceTooFarError("Reference location is too far from the Open Location Code center.")

    def recover(
        self,
        reference_lat: float,
        reference_lng: float,
        calculator: Optional[CodeCalculator] = None,
    ) -> OpenLocationCode:
        """
        Recover the full code nearest to the reference location.

        Full codes are returned unchanged. Short codes get their missing
        leading digits from the reference location; if that puts the result
        more than half a cell away from the reference, the result is moved
        by one cell toward it.

        The latitude move is skipped when it would leave [-90, 90]. The
        longitude move has no such guard and is not wrapped at +/-180 here;
        re-encoding normalizes it.

        Args:
            reference_lat: Reference latitude in degrees
            reference_lng: Reference longitude in degrees

        Returns:
            The nearest matching full OpenLocationCode
        """
        if self.is_full():
            return self
        reference_lat, reference_lng = normalize_coords(reference_lat, reference_lng)

        digits_to_recover = SEPARATOR_POSITION - self.code.find(SEPARATOR)
        # Height and width of the missing prefix in degrees.
        prefix_precision = float(ENCODING_BASE) ** (2 - digits_to_recover // 2)

        reference_code = OpenLocationCode.from_coordinates(
            reference_lat, reference_lng, calculator=calculator
        ).code
        recovered = OpenLocationCode(reference_code[:digits_to_recover] + self.code)
        area = recovered.decode(calculator)

        recovered_lat = area.center_latitude
        recovered_lng = area.center_longitude

        lat_diff = recovered_lat - reference_lat
        if lat_diff > prefix_precision / 2 and recovered_lat - prefix_precision > -LATITUDE_MAX:
            recovered_lat -= prefix_precision
        elif lat_diff < -prefix_precision / 2 and recovered_lat + prefix_precision < LATITUDE_MAX:
            recovered_lat += prefix_precision

        lng_diff = recovered_lng - reference_lng
        if lng_diff > prefix_precision / 2:
            recovered_lng -= prefix_precision
        elif lng_diff < -prefix_precision / 2:
            recovered_lng += prefix_precision

        if (recovered_lat, recovered_lng) != area.center():
            logger.debug(
                "Moved recovered code %s from (%s, %s) to (%s, %s)",
                recovered.code, area.center_latitude, area.center_longitude,
                recovered_lat, recovered_lng,
            )

        return OpenLocationCode.from_coordinates(
            recovered_lat, recovered_lng, len(recovered.code) - 1, calculator=calculator
        )

    def is_valid(self) -> bool:
        return is_valid_code(self.code)

    def is_full(self) -> bool:
        """Full codes have the separator at position 8."""
        return self.code.find(SEPARATOR) == SEPARATOR_POSITION

    def is_short(self) -> bool:
        """Short codes have the separator before position 8."""
        return 0 <= self.code.find(SEPARATOR) < SEPARATOR_POSITION

    def is_padded(self) -> bool:
        """Padded codes have fewer than 8 significant digits before the separator."""
        return PADDING_CHARACTER in self.code


def encode(lat: float, lng: float, code_length: int = CODE_PRECISION_NORMAL) -> str:
    """Encode a point into a code string of the given length."""
    return OpenLocationCode.from_coordinates(lat, lng, code_length).code


def decode(code: str) -> CodeArea:
    """Decode a full code string into its CodeArea."""
    return OpenLocationCode.from_code(code).decode()


def shorten(code: str, reference_lat: float, reference_lng: float) -> str:
    """Shorten a full code string relative to a reference location."""
    return OpenLocationCode.from_code(code).shorten(reference_lat, reference_lng).code


def recover(code: str, reference_lat: float, reference_lng: float) -> str:
    """Recover the nearest full code string for a short code."""
    return OpenLocationCode.from_code(code).recover(reference_lat, reference_lng).code

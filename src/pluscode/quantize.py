"""
Quantization module for converting between WGS84 coordinates and the integer
grid that underlies Open Location Codes.

At the maximum code length (15 digits) every code cell is exactly one unit of
an integer grid:
- lat_val is in [0, 180 * LAT_INTEGER_MULTIPLIER) representing latitude in [-90, +90)
- lng_val is in [0, 360 * LNG_INTEGER_MULTIPLIER) representing longitude in [-180, +180)

LAT_INTEGER_MULTIPLIER = 20^3 * 5^5 and LNG_INTEGER_MULTIPLIER = 20^3 * 4^5,
so all pair and grid digits of a coordinate are exact integer divisions.

Quantization uses round-half-away-from-zero rounding at microunit precision
before truncating, which suppresses floating point drift.
"""

from typing import Tuple

from .errors import InvalidCodeLengthError
from .grammar import (
    ENCODING_BASE,
    GRID_CODE_LENGTH,
    GRID_COLUMNS,
    GRID_ROWS,
    LATITUDE_MAX,
    LONGITUDE_MAX,
    MAX_DIGIT_COUNT,
    PAIR_CODE_LENGTH,
)


# The 360 degree circle, used to normalize longitudes.
CIRCLE_DEG = 2 * LONGITUDE_MAX

# Precision of the pair section in degrees, as 1/x.
PAIR_PRECISION_INVERSE = ENCODING_BASE ** 3

# Multiply degrees by these to get integer grid units at full precision.
LAT_INTEGER_MULTIPLIER = PAIR_PRECISION_INVERSE * GRID_ROWS ** GRID_CODE_LENGTH
LNG_INTEGER_MULTIPLIER = PAIR_PRECISION_INVERSE * GRID_COLUMNS ** GRID_CODE_LENGTH

# Value of the most significant digit after conversion to grid units.
LAT_MSP_VALUE = LAT_INTEGER_MULTIPLIER * ENCODING_BASE * ENCODING_BASE
LNG_MSP_VALUE = LNG_INTEGER_MULTIPLIER * ENCODING_BASE * ENCODING_BASE

# Scaled values are rounded at this resolution before truncating.
MICROUNITS = 1_000_000

MIN_CODE_LENGTH = 4


def clip_latitude(lat: float) -> float:
    """Clip latitude to the valid [-90, 90] range."""
    return max(-float(LATITUDE_MAX), min(float(LATITUDE_MAX), lat))


def normalize_longitude(lon: float) -> float:
    """
    Normalize longitude into [-180, 180).

    Shifts the periodic range to [0, 360), reduces it with a floored modulo
    and shifts it back.
    """
    if -LONGITUDE_MAX <= lon < LONGITUDE_MAX:
        return lon
    return (lon + LONGITUDE_MAX) % CIRCLE_DEG - LONGITUDE_MAX


def normalize_coords(lat: float, lon: float) -> Tuple[float, float]:
    """
    Bring latitude and longitude into their encodable ranges.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        Tuple of (clipped_lat, normalized_lon)
    """
    return clip_latitude(lat), normalize_longitude(lon)


def _round_half_away_from_zero(x: float) -> int:
    """
    Round to nearest integer, with ties going away from zero.

    Python's round() uses banker's rounding, which would move some values
    into the neighbouring cell.
    """
    if x >= 0:
        return int(x + 0.5)
    else:
        return int(x - 0.5)


def validate_code_length(code_length: int) -> int:
    """
    Cap a requested digit count and reject lengths that cannot be encoded.

    Args:
        code_length: Requested number of digits

    Returns:
        The length capped at MAX_DIGIT_COUNT

    Raises:
        InvalidCodeLengthError: if the length is below 4, or odd and below 10
    """
    code_length = min(code_length, MAX_DIGIT_COUNT)
    if code_length < MIN_CODE_LENGTH or (code_length < PAIR_CODE_LENGTH and code_length % 2 == 1):
        raise InvalidCodeLengthError(f"Illegal code length {code_length}")
    return code_length


def compute_latitude_precision(code_length: int) -> float:
    """
    Height of a code cell in degrees for a given code length.

    Lengths <= 10 have the same precision for latitude and longitude; longer
    codes narrow latitude by the grid's 5 rows per digit.
    """
    if code_length <= PAIR_CODE_LENGTH:
        return float(ENCODING_BASE) ** (code_length // -2 + 2)
    return float(ENCODING_BASE) ** -3 / GRID_ROWS ** (code_length - PAIR_CODE_LENGTH)


def compute_longitude_precision(code_length: int) -> float:
    """Width of a code cell in degrees; grid digits narrow it by 4 columns."""
    if code_length <= PAIR_CODE_LENGTH:
        return float(ENCODING_BASE) ** (code_length // -2 + 2)
    return float(ENCODING_BASE) ** -3 / GRID_COLUMNS ** (code_length - PAIR_CODE_LENGTH)


def get_grid_dimensions() -> Tuple[int, int]:
    """
    Get the maximum grid values at full precision.

    Returns:
        Tuple of (max_lat_val, max_lng_val)
    """
    max_lat_val = 2 * LATITUDE_MAX * LAT_INTEGER_MULTIPLIER
    max_lng_val = CIRCLE_DEG * LNG_INTEGER_MULTIPLIER
    return max_lat_val, max_lng_val


def quantize(lat: float, lon: float) -> Tuple[int, int]:
    """
    Convert coordinates to full-precision integer grid values.

    Args:
        lat: Latitude in degrees [-90, 90]
        lon: Longitude in degrees [-180, 180)

    Returns:
        Tuple of (lat_val, lng_val) as non-negative integers

    The quantization formula is:
        lat_val = _round_half_away_from_zero((lat + 90) * LAT_INTEGER_MULTIPLIER * 1e6) // MICROUNITS
        lng_val = _round_half_away_from_zero((lon + 180) * LNG_INTEGER_MULTIPLIER * 1e6) // MICROUNITS
    followed by clamp_grid_values().
    """
    lat_val = _round_half_away_from_zero((lat + LATITUDE_MAX) * LAT_INTEGER_MULTIPLIER * 1e6) // MICROUNITS
    lng_val = _round_half_away_from_zero((lon + LONGITUDE_MAX) * LNG_INTEGER_MULTIPLIER * 1e6) // MICROUNITS
    return clamp_grid_values(lat_val, lng_val)


def clamp_grid_values(lat_val: float, lng_val: float) -> Tuple[float, float]:
    """
    Clamp grid values to the last cell below the upper edge of the grid.

    Rounding at microunit precision can lift a coordinate just below
    latitude 90 or longitude 180 onto the edge itself, which has no code.

    Args:
        lat_val: Latitude in grid units, offset from -90
        lng_val: Longitude in grid units, offset from -180

    Returns:
        Tuple of (lat_val, lng_val) within [0, max - 1]
    """
    max_lat_val, max_lng_val = get_grid_dimensions()
    lat_val = max(0, min(max_lat_val - 1, lat_val))
    lng_val = max(0, min(max_lng_val - 1, lng_val))
    return lat_val, lng_val


def dequantize(lat_val: float, lng_val: float) -> Tuple[float, float]:
    """
    Convert signed grid values back to degrees.

    Args:
        lat_val: Latitude in grid units
        lng_val: Longitude in grid units

    Returns:
        Tuple of (lat, lon) as floating point degrees
    """
    lat = lat_val / LAT_INTEGER_MULTIPLIER
    lon = lng_val / LNG_INTEGER_MULTIPLIER
    return lat, lon

"""
pluscode: Open Location Code ("Plus Code") encoding and decoding.

This package converts latitude/longitude pairs into short base-20 codes that
name a rectangular area of the Earth's surface, and turns those codes back
into bounding boxes. Short codes can be derived from and recovered to full
codes with a nearby reference location.
"""

__version__ = "0.1.0"

from .area import CodeArea
from .calculator import (
    CalculatorConfig,
    CodeCalculator,
    FloatCodeCalculator,
    IntCodeCalculator,
    create_calculator,
    default_calculator,
)
from .errors import (
    IllegalCodeOperationError,
    InvalidCodeError,
    InvalidCodeLengthError,
    PlusCodeError,
    ReferenceTooFarError,
    UnsupportedPlatformError,
)
from .grammar import is_full_code, is_padded_code, is_short_code, is_valid_code
from .olc import OpenLocationCode, decode, encode, recover, shorten

__all__ = [
    "CodeArea",
    "CalculatorConfig",
    "CodeCalculator",
    "FloatCodeCalculator",
    "IntCodeCalculator",
    "create_calculator",
    "default_calculator",
    "PlusCodeError",
    "InvalidCodeError",
    "InvalidCodeLengthError",
    "ReferenceTooFarError",
    "IllegalCodeOperationError",
    "UnsupportedPlatformError",
    "is_valid_code",
    "is_full_code",
    "is_short_code",
    "is_padded_code",
    "OpenLocationCode",
    "encode",
    "decode",
    "shorten",
    "recover",
]

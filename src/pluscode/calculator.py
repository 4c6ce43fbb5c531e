"""
Code calculators: the numeric core of encoding and decoding.

Both calculators walk the same digit loops over the full-precision grid
described in quantize.py. They differ only in how the scaled values are held:
IntCodeCalculator uses integers and needs 64-bit native integers,
FloatCodeCalculator uses doubles that still represent every grid value
exactly and works on any host. Both produce identical output.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple
import logging
import math
import sys

from .area import CodeArea
from .errors import UnsupportedPlatformError
from .grammar import (
    CODE_ALPHABET,
    ENCODING_BASE,
    GRID_CODE_LENGTH,
    GRID_COLUMNS,
    GRID_ROWS,
    LATITUDE_MAX,
    LONGITUDE_MAX,
    MAX_DIGIT_COUNT,
    PADDING_CHARACTER,
    PAIR_CODE_LENGTH,
    SEPARATOR,
    SEPARATOR_POSITION,
)
from .quantize import (
    LAT_INTEGER_MULTIPLIER,
    LAT_MSP_VALUE,
    LNG_INTEGER_MULTIPLIER,
    LNG_MSP_VALUE,
    MICROUNITS,
    clamp_grid_values,
    dequantize,
    quantize,
)

logger = logging.getLogger(__name__)

STRATEGY_AUTO = "auto"
STRATEGY_INT = "int"
STRATEGY_FLOAT = "float"
STRATEGIES = (STRATEGY_AUTO, STRATEGY_INT, STRATEGY_FLOAT)

# Full-precision grid values need 64-bit integers.
_REQUIRED_INT_BITS = 63


def has_wide_integers() -> bool:
    """Check whether the host's native integers are at least 64 bits wide."""
    return sys.maxsize.bit_length() >= _REQUIRED_INT_BITS


class CodeCalculator(ABC):
    """
    Abstract base class for code calculators.

    Inputs are assumed to be already clipped, normalized and length-checked;
    OpenLocationCode takes care of that before delegating here.
    """

    name: str = ""

    @abstractmethod
    def _scale(self, lat: float, lng: float) -> Tuple[float, float]:
        """Convert coordinates to full-precision grid values."""
        pass

    @abstractmethod
    def _number(self, value: int) -> float:
        """Convert an integer constant to this calculator's representation."""
        pass

    @abstractmethod
    def _divide(self, value: float, divisor: int) -> float:
        """Floor division in this calculator's representation."""
        pass

    @abstractmethod
    def _digit(self, value: float, base: int) -> int:
        """Least significant digit of value in the given base."""
        pass

    def encode(self, lat: float, lng: float, code_length: int) -> str:
        """
        Encode coordinates into a code with the given number of digits.

        Args:
            lat: Latitude in degrees, already clipped
            lng: Longitude in degrees, already normalized
            code_length: Number of digits, already validated

        Returns:
            The code string, padded if code_length is below 8
        """
        code = list(reversed(self._generate_reversed_code(lat, lng, code_length)))

        # Replace the digits that were not requested with padding.
        for i in range(code_length, SEPARATOR_POSITION):
            code[i] = PADDING_CHARACTER

        return "".join(code[:max(SEPARATOR_POSITION + 1, code_length + 1)])

    def _generate_reversed_code(self, lat: float, lng: float, code_length: int) -> str:
        """
        Generate the code least significant digit first.

        Each coordinate is turned into a single grid value at the final
        precision so that digit extraction is exact.
        """
        lat_val, lng_val = self._scale(lat, lng)
        rev_code = []

        if code_length > PAIR_CODE_LENGTH:
            for _ in range(GRID_CODE_LENGTH):
                lat_digit = self._digit(lat_val, GRID_ROWS)
                lng_digit = self._digit(lng_val, GRID_COLUMNS)
                rev_code.append(CODE_ALPHABET[lat_digit * GRID_COLUMNS + lng_digit])
                lat_val = self._divide(lat_val, GRID_ROWS)
                lng_val = self._divide(lng_val, GRID_COLUMNS)
        else:
            # Grid precision is never emitted, drop it in one step.
            lat_val = self._divide(lat_val, GRID_ROWS ** GRID_CODE_LENGTH)
            lng_val = self._divide(lng_val, GRID_COLUMNS ** GRID_CODE_LENGTH)

        for i in range(PAIR_CODE_LENGTH // 2):
            rev_code.append(CODE_ALPHABET[self._digit(lng_val, ENCODING_BASE)])
            rev_code.append(CODE_ALPHABET[self._digit(lat_val, ENCODING_BASE)])
            lat_val = self._divide(lat_val, ENCODING_BASE)
            lng_val = self._divide(lng_val, ENCODING_BASE)
            if i == 0:
                rev_code.append(SEPARATOR)

        return "".join(rev_code)

    def decode(self, stripped_code: str) -> CodeArea:
        """
        Decode significant digits into a CodeArea.

        Args:
            stripped_code: Digits of a full code with separator and padding removed

        Returns:
            CodeArea covering the code
        """
        digit_count = min(len(stripped_code), MAX_DIGIT_COUNT)

        lat_val = self._number(-LATITUDE_MAX * LAT_INTEGER_MULTIPLIER)
        lng_val = self._number(-LONGITUDE_MAX * LNG_INTEGER_MULTIPLIER)
        # Place values are divided down as we work through the code.
        lat_place = self._number(LAT_MSP_VALUE)
        lng_place = self._number(LNG_MSP_VALUE)

        for i in range(0, min(digit_count, PAIR_CODE_LENGTH), 2):
            lat_place = self._divide(lat_place, ENCODING_BASE)
            lng_place = self._divide(lng_place, ENCODING_BASE)
            lat_val += CODE_ALPHABET.index(stripped_code[i]) * lat_place
            lng_val += CODE_ALPHABET.index(stripped_code[i + 1]) * lng_place

        for i in range(PAIR_CODE_LENGTH, digit_count):
            lat_place = self._divide(lat_place, GRID_ROWS)
            lng_place = self._divide(lng_place, GRID_COLUMNS)
            row, col = divmod(CODE_ALPHABET.index(stripped_code[i]), GRID_COLUMNS)
            lat_val += row * lat_place
            lng_val += col * lng_place

        south, west = dequantize(lat_val, lng_val)
        north, east = dequantize(lat_val + lat_place, lng_val + lng_place)
        return CodeArea(south, west, north, east, digit_count)


class IntCodeCalculator(CodeCalculator):
    """
    Calculator holding grid values as integers.

    Exact, but only available where native integers are 64 bits wide.
    """

    name = STRATEGY_INT

    def __init__(self):
        if not has_wide_integers():
            raise UnsupportedPlatformError(
                "IntCodeCalculator needs 64-bit integers; use FloatCodeCalculator instead"
            )

    def _scale(self, lat: float, lng: float) -> Tuple[int, int]:
        return quantize(lat, lng)

    def _number(self, value: int) -> int:
        return value

    def _divide(self, value: int, divisor: int) -> int:
        return value // divisor

    def _digit(self, value: int, base: int) -> int:
        return value % base


class FloatCodeCalculator(CodeCalculator):
    """
    Calculator holding grid values as doubles.

    Every full-precision grid value is below 2^53, so doubles represent them
    exactly and this calculator works on any host.
    """

    name = STRATEGY_FLOAT

    def _scale(self, lat: float, lng: float) -> Tuple[float, float]:
        lat_val = math.floor(math.floor((lat + LATITUDE_MAX) * LAT_INTEGER_MULTIPLIER * 1e6 + 0.5) / MICROUNITS)
        lng_val = math.floor(math.floor((lng + LONGITUDE_MAX) * LNG_INTEGER_MULTIPLIER * 1e6 + 0.5) / MICROUNITS)
        lat_val, lng_val = clamp_grid_values(float(lat_val), float(lng_val))
        return float(lat_val), float(lng_val)

    def _number(self, value: int) -> float:
        return float(value)

    def _divide(self, value: float, divisor: int) -> float:
        return float(math.floor(value / divisor))

    def _digit(self, value: float, base: int) -> int:
        return int(math.fmod(value, base))


@dataclass(frozen=True)
class CalculatorConfig:
    """Configuration for choosing a code calculator."""

    strategy: str = STRATEGY_AUTO
    """One of "auto", "int" or "float"; "auto" picks int on 64-bit hosts."""

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"strategy must be one of {', '.join(STRATEGIES)}, got {self.strategy!r}"
            )


def create_calculator(config: Optional[CalculatorConfig] = None) -> CodeCalculator:
    """
    Build the calculator described by a configuration.

    Args:
        config: Calculator configuration (default: auto)

    Returns:
        A CodeCalculator instance

    Raises:
        UnsupportedPlatformError: if "int" is requested on a narrow-integer host
    """
    config = config or CalculatorConfig()
    strategy = config.strategy
    if strategy == STRATEGY_AUTO:
        strategy = STRATEGY_INT if has_wide_integers() else STRATEGY_FLOAT

    calculator: CodeCalculator
    if strategy == STRATEGY_INT:
        calculator = IntCodeCalculator()
    else:
        calculator = FloatCodeCalculator()

    logger.debug("Using %s code calculator (requested %s)", calculator.name, config.strategy)
    return calculator


@lru_cache(maxsize=None)
def default_calculator() -> CodeCalculator:
    """Return the process-wide calculator, chosen once on first use."""
    return create_calculator()

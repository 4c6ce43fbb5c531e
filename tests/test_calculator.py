"""Tests for the integer and float code calculators."""

import math
import random

import pytest
from pluscode import calculator as calculator_module
from pluscode.area import CodeArea
from pluscode.calculator import (
    CalculatorConfig,
    FloatCodeCalculator,
    IntCodeCalculator,
    create_calculator,
    default_calculator,
)
from pluscode.errors import UnsupportedPlatformError
from pluscode.grammar import is_valid_code
from pluscode.quantize import normalize_longitude


CALCULATORS = [IntCodeCalculator(), FloatCodeCalculator()]

ENCODING_VECTORS = [
    # (lat, lng, length, code)
    (51.530812, -0.123767, 10, "9C3XGVJG+8F"),
    (1.357063, 103.988563, 10, "6PH59X4Q+RC"),
    (0.0, 0.0, 10, "6FG22222+22"),
    (0.0, 0.0, 15, "6FG22222+2222222"),
    (20.375, 2.775, 6, "7FG49Q00+"),
]

VALID_LENGTHS = [4, 6, 8, 10, 11, 12, 13, 14, 15]


def random_points(count, seed=42):
    """Generate deterministic points covering the whole globe."""
    rng = random.Random(seed)
    return [
        (rng.uniform(-89.9, 89.9), rng.uniform(-180.0, 179.9))
        for _ in range(count)
    ]


@pytest.mark.parametrize("calculator", CALCULATORS, ids=lambda c: c.name)
class TestEncode:
    """Tests shared by both calculators."""

    @pytest.mark.parametrize("lat,lng,length,expected", ENCODING_VECTORS)
    def test_vectors(self, calculator, lat, lng, length, expected):
        """Test known coordinates encode to known codes."""
        assert calculator.encode(lat, lng, length) == expected

    def test_padding(self, calculator):
        """Test short lengths are padded up to the separator."""
        code = calculator.encode(51.530812, -0.123767, 4)
        assert code == "9C3X0000+"

    def test_code_lengths(self, calculator):
        """Test the number of characters produced for each length."""
        for length in VALID_LENGTHS:
            code = calculator.encode(10.0, 10.0, length)
            assert len(code) == max(9, length + 1)
            assert code[8] == "+"

    def test_decode_origin(self, calculator):
        """Test decoding the cell at the origin."""
        area = calculator.decode("6FG2222222")
        assert area == CodeArea(0.0, 0.0, 0.000125, 0.000125, 10)

    def test_decode_padded(self, calculator):
        """Test decoding a four digit code."""
        area = calculator.decode("9C3X")
        assert area.south_latitude == pytest.approx(51.0)
        assert area.north_latitude == pytest.approx(52.0)
        assert area.west_longitude == pytest.approx(-1.0)
        assert area.east_longitude == pytest.approx(0.0)
        assert area.length == 4

    def test_decode_grid(self, calculator):
        """Test grid digits narrow the cell by 5 rows and 4 columns."""
        area = calculator.decode("6FG222222222222")
        assert area.latitude_height == pytest.approx(0.000125 / 5 ** 5)
        assert area.longitude_width == pytest.approx(0.000125 / 4 ** 5)
        assert area.length == 15

    def test_decode_caps_length(self, calculator):
        """Test digits past the fifteenth are ignored."""
        area = calculator.decode("6FG22222222222222")
        assert area.length == 15

    def test_contains_encoded_point(self, calculator):
        """Test the decoded area contains the point that was encoded."""
        for lat, lng in random_points(100):
            for length in VALID_LENGTHS:
                code = calculator.encode(lat, lng, length)
                stripped = code.replace("+", "").replace("0", "")
                assert calculator.decode(stripped).contains(lat, lng), code


class TestStrategiesAgree:
    """Tests that the integer and float calculators are interchangeable."""

    def test_encode_agrees(self):
        """Test both calculators produce identical codes."""
        int_calc, float_calc = IntCodeCalculator(), FloatCodeCalculator()
        for lat, lng in random_points(200, seed=7):
            for length in VALID_LENGTHS:
                assert int_calc.encode(lat, lng, length) == float_calc.encode(lat, lng, length)

    def test_decode_agrees(self):
        """Test both calculators produce identical areas."""
        int_calc, float_calc = IntCodeCalculator(), FloatCodeCalculator()
        for lat, lng in random_points(200, seed=11):
            code = int_calc.encode(lat, lng, 15).replace("+", "")
            assert int_calc.decode(code) == float_calc.decode(code)

    def test_edges_agree(self):
        """Test both calculators agree at the edges of the globe."""
        int_calc, float_calc = IntCodeCalculator(), FloatCodeCalculator()
        for lat in (-90.0, -45.0, 0.0, 89.99, math.nextafter(90.0, 0.0)):
            for lng in (-180.0, -0.000001, 0.0, normalize_longitude(180.0), 179.999999, math.nextafter(180.0, 0.0)):
                assert int_calc.encode(lat, lng, 15) == float_calc.encode(lat, lng, 15)

    @pytest.mark.parametrize("length", [10, 15])
    def test_upper_edges_agree(self, length):
        """Test both calculators agree just below latitude 90 and longitude 180."""
        int_calc, float_calc = IntCodeCalculator(), FloatCodeCalculator()
        for lat in (math.nextafter(90.0, 0.0), 0.0):
            for lng in (math.nextafter(180.0, 0.0), 0.0):
                assert int_calc.encode(lat, lng, length) == float_calc.encode(lat, lng, length)

    @pytest.mark.parametrize("calc", CALCULATORS, ids=lambda c: c.name)
    @pytest.mark.parametrize("length", [10, 15])
    def test_upper_edges_valid(self, calc, length):
        """Test points just below latitude 90 and longitude 180 give valid codes."""
        for lat, lng in (
            (math.nextafter(90.0, 0.0), 0.0),
            (0.0, math.nextafter(180.0, 0.0)),
            (math.nextafter(90.0, 0.0), math.nextafter(180.0, 0.0)),
        ):
            code = calc.encode(lat, lng, length)
            assert is_valid_code(code), code


class TestCalculatorConfig:
    """Tests for CalculatorConfig and calculator selection."""

    def test_default_config(self):
        """Test default configuration values."""
        assert CalculatorConfig().strategy == "auto"

    def test_invalid_strategy(self):
        """Test that unknown strategies raise errors."""
        with pytest.raises(ValueError):
            CalculatorConfig(strategy="decimal")

    def test_auto_picks_int_on_wide_hosts(self, monkeypatch):
        """Test auto selection on a 64-bit host."""
        monkeypatch.setattr(calculator_module, "has_wide_integers", lambda: True)
        assert isinstance(create_calculator(), IntCodeCalculator)

    def test_auto_picks_float_on_narrow_hosts(self, monkeypatch):
        """Test auto selection on a 32-bit host."""
        monkeypatch.setattr(calculator_module, "has_wide_integers", lambda: False)
        assert isinstance(create_calculator(CalculatorConfig("auto")), FloatCodeCalculator)

    def test_explicit_float(self):
        """Test the float calculator can always be requested."""
        assert isinstance(create_calculator(CalculatorConfig("float")), FloatCodeCalculator)

    def test_int_rejected_on_narrow_hosts(self, monkeypatch):
        """Test the int calculator refuses narrow integers."""
        monkeypatch.setattr(calculator_module, "has_wide_integers", lambda: False)
        with pytest.raises(UnsupportedPlatformError):
            create_calculator(CalculatorConfig("int"))

    def test_default_calculator_is_cached(self):
        """Test the process-wide calculator is created once."""
        assert default_calculator() is default_calculator()

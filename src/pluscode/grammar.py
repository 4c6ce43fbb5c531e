"""
Alphabet, layout constants and the validity grammar for Open Location Codes.

A code is a string of base-20 digits drawn from CODE_ALPHABET with a single
SEPARATOR. Full codes carry SEPARATOR_POSITION digits before the separator;
short codes carry fewer (an even number) and need a reference location to be
recovered. Full codes with fewer than eight significant digits fill the rest
of the positions before the separator with PADDING_CHARACTER.

All checks here are pure predicates and never raise.
"""

from typing import Optional


# The character set used to encode the values. The index of a character is
# its digit value.
CODE_ALPHABET = "23456789CFGHJMPQRVWX"

# The base to use to convert numbers to/from.
ENCODING_BASE = len(CODE_ALPHABET)

# Separates the first eight digits from the rest of the code.
SEPARATOR = "+"

# Fills the unused positions before the separator.
PADDING_CHARACTER = "0"

# The number of characters to place before the separator.
SEPARATOR_POSITION = 8

# The max number of digits to process in a code.
MAX_DIGIT_COUNT = 15

# Maximum code length using just lat/lng pair encoding.
PAIR_CODE_LENGTH = 10

# Number of digits in the grid coding section.
GRID_CODE_LENGTH = MAX_DIGIT_COUNT - PAIR_CODE_LENGTH

# Default code length, roughly 14x14 meters.
CODE_PRECISION_NORMAL = 10

LATITUDE_MAX = 90
LONGITUDE_MAX = 180

# Dimensions of the grid refinement used after the pair section.
GRID_COLUMNS = 4
GRID_ROWS = 5

# Highest permitted alphabet index for the first latitude and longitude digit
# of a full code (keeps the first pair inside +/-90 and +/-180).
_FIRST_LATITUDE_DIGIT_MAX = 8
_FIRST_LONGITUDE_DIGIT_MAX = 17


def is_valid_code(code: Optional[str]) -> bool:
    """
    Check whether a string is a valid full or short Open Location Code.

    The check is case-insensitive.

    Args:
        code: Candidate code, may be None

    Returns:
        True if the string satisfies the code grammar
    """
    if not isinstance(code, str) or len(code) < 2:
        return False
    code = code.upper()

    # There must be exactly one separator.
    separator_position = code.find(SEPARATOR)
    if separator_position == -1 or separator_position != code.rfind(SEPARATOR):
        return False

    # There must be an even number of at most 8 characters before the separator.
    if separator_position % 2 != 0 or separator_position > SEPARATOR_POSITION:
        return False

    # Only some values from the alphabet are permitted for the first pair.
    if separator_position == SEPARATOR_POSITION:
        if CODE_ALPHABET.find(code[0]) > _FIRST_LATITUDE_DIGIT_MAX:
            return False
        if CODE_ALPHABET.find(code[1]) > _FIRST_LONGITUDE_DIGIT_MAX:
            return False

    # Check the characters before the separator.
    padding_started = False
    for i in range(separator_position):
        char = code[i]
        if char not in CODE_ALPHABET and char != PADDING_CHARACTER:
            return False
        if padding_started:
            # Once padding starts, there must not be anything but padding.
            if char != PADDING_CHARACTER:
                return False
        elif char == PADDING_CHARACTER:
            padding_started = True
            # Short codes cannot have padding.
            if separator_position < SEPARATOR_POSITION:
                return False
            # Padding can only start on an even character: 2, 4 or 6.
            if i not in (2, 4, 6):
                return False

    # Check the characters after the separator.
    if len(code) > separator_position + 1:
        if padding_started:
            return False
        # A single character after the separator is not allowed.
        if len(code) == separator_position + 2:
            return False
        for char in code[separator_position + 1:]:
            if char not in CODE_ALPHABET:
                return False

    return True


def is_full_code(code: Optional[str]) -> bool:
    """Check whether a string is a valid full code (separator at position 8)."""
    return is_valid_code(code) and code.find(SEPARATOR) == SEPARATOR_POSITION


def is_short_code(code: Optional[str]) -> bool:
    """Check whether a string is a valid short code (separator before position 8)."""
    return is_valid_code(code) and code.find(SEPARATOR) < SEPARATOR_POSITION


def is_padded_code(code: Optional[str]) -> bool:
    """Check whether a string is a valid code that contains padding."""
    return is_valid_code(code) and PADDING_CHARACTER in code


def strip_code(code: str) -> str:
    """Remove the separator and padding, leaving only significant digits."""
    return code.replace(SEPARATOR, "").replace(PADDING_CHARACTER, "").upper()

"""Pure masking transforms for detected values.

Each function keeps a short verifiable remnant (the last four characters) and
replaces everything before it with a fixed mask token. None of them depend on
where the value was found.
"""

import re

MASK_CHAR = "X"
KEEP_LAST = 4

_NON_DIGIT_RE = re.compile(r"\D")


def _digits(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value)


def mask_national_id(value: str) -> str:
    """``1234-5678 9012`` -> ``XXXX XXXX 9012``, always three space-separated blocks."""
    block = MASK_CHAR * 4
    return f"{block} {block} {_digits(value)[-KEEP_LAST:]}"


def mask_tax_id(value: str) -> str:
    """``ABCDE1234F`` -> ``XXXXX234F``: five mask characters, then the last four."""
    return f"{MASK_CHAR * 5}{value[-KEEP_LAST:]}"


def mask_phone(number: str, prefix: str = "") -> str:
    """``("9876543210", "+91 ")`` -> ``+91 XXXXX3210``.

    The country-code prefix is kept verbatim, separator included.
    """
    return f"{prefix}{MASK_CHAR * 5}{_digits(number)[-KEEP_LAST:]}"

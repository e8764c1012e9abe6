"""
Number to words, South Asian grouping.

Spells whole amounts using Crore (10^7), Lakh (10^5), Thousand, Hundred,
e.g. 12345678 -> "One Crore Twenty Three Lakh Forty Five Thousand Six
Hundred Seventy Eight". Used for the "In Words" line of bank letters.
"""

from decimal import ROUND_HALF_UP, Decimal

_UNITS = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# (value, name), largest first; anything >= 1 Crore recurses on the quotient
_SCALES = [
    (10_000_000, "Crore"),
    (100_000, "Lakh"),
    (1_000, "Thousand"),
]


def _in_words(n: int) -> str:
    if n < 20:
        return _UNITS[n]
    if n < 100:
        tens, rest = divmod(n, 10)
        return _TENS[tens] + (f" {_UNITS[rest]}" if rest else "")
    if n < 1000:
        hundreds, rest = divmod(n, 100)
        return f"{_UNITS[hundreds]} Hundred" + (f" {_in_words(rest)}" if rest else "")
    for scale, name in _SCALES:
        if n >= scale:
            head, rest = divmod(n, scale)
            return f"{_in_words(head)} {name}" + (f" {_in_words(rest)}" if rest else "")
    raise AssertionError("unreachable")


def number_to_words(value: int) -> str:
    """
    Spell a non-negative whole number.

    Args:
        value: Amount to spell.

    Returns:
        Title-cased words, "Zero" for 0.

    Raises:
        TypeError: If value is not an int.
        ValueError: If value is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"number_to_words expects an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError("number_to_words does not support negative amounts")
    if value == 0:
        return "Zero"
    return _in_words(value)


def round_half_up(amount: Decimal) -> int:
    """Round a money amount to a whole number, halves away from zero."""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def amount_in_words(amount: Decimal, currency: str) -> str:
    """
    Upper-case "in words" line for a letter, e.g. "ONE LAKH TAKA ONLY".
    """
    return f"{number_to_words(round_half_up(amount)).upper()} {currency} ONLY"

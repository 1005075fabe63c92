import string

from ethrpc.errors import MalformedQuantity

HEX_PREFIX = "0x"
MAX_QUANTITY = 2**64 - 1
ETH1 = 10**18

_HEX_DIGITS = frozenset(string.hexdigits)


def _strip_prefix(text: str) -> str:
    if text[:2] in ("0x", "0X"):
        return text[2:]
    return text


def decode_big_quantity(text: str) -> int:
    """
    Parses a hex quantity of any width. The 0x prefix is optional on input;
    an empty digit string is rejected rather than read as zero.
    """
    if not isinstance(text, str):
        raise MalformedQuantity(f"Quantity must be a string, got {type(text).__name__}")

    digits = _strip_prefix(text)
    if not digits:
        raise MalformedQuantity(f"Empty quantity: {text!r}")
    if not _HEX_DIGITS.issuperset(digits):
        raise MalformedQuantity(f"Invalid hex quantity: {text!r}")

    return int(digits, 16)


def decode_quantity(text: str) -> int:
    """
    Parses a machine-width (unsigned 64-bit) hex quantity.
    """
    value = decode_big_quantity(text)
    if value > MAX_QUANTITY:
        raise MalformedQuantity(f"Quantity out of range: {text!r}")
    return value


def encode_big_quantity(value: int) -> str:
    """
    Canonical wire form: lowercase digits, no leading zeros, 0x0 for zero.
    """
    if value < 0:
        raise ValueError(f"Quantities are non-negative, got {value}")
    return f"{HEX_PREFIX}{value:x}"


def encode_quantity(value: int) -> str:
    if value > MAX_QUANTITY:
        raise ValueError(f"Quantity {value} exceeds the machine width")
    return encode_big_quantity(value)


def encode_data(data: bytes) -> str:
    return HEX_PREFIX + data.hex()


def eth1() -> int:
    """
    One ether expressed in wei.
    """
    return ETH1

"""
Call data encoding and result decoding for ERC-20 ``balanceOf``.
"""
import re

from web3 import Web3

from core.exceptions import InvalidAddressException

# first four bytes of keccak("balanceOf(address)") == 0x70a08231
BALANCE_OF_SELECTOR = Web3.keccak(text="balanceOf(address)")[:4]

DEFAULT_DECIMALS = 18
MAX_RAW_AMOUNT = 2**128 - 1

_ADDRESS_RE = re.compile(r"(0x)?[0-9a-fA-F]{40}")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _strip_0x(value: str) -> str:
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def normalize_address(address: str) -> str:
    """
    Validate an address and return its 40 hex digits without prefix.

    Parameters
    ----------
    address : str
        20-byte address, with or without ``0x``

    Returns
    -------
    str
        Unprefixed hex digits, case preserved

    Raises
    ------
    InvalidAddressException
        If the value is not exactly 20 bytes of hex
    """
    if not isinstance(address, str) or not _ADDRESS_RE.fullmatch(address):
        raise InvalidAddressException(f"Invalid address: {address!r}")
    return _strip_0x(address)


def encode_balance_call(wallet_address: str) -> str:
    """
    Build ``balanceOf(wallet)`` call data.

    Parameters
    ----------
    wallet_address : str
        Wallet address, with or without ``0x``

    Returns
    -------
    str
        ``0x`` + 4-byte selector + wallet left-padded to a 32-byte slot
    """
    wallet_bytes = Web3.to_bytes(hexstr=normalize_address(wallet_address))
    return Web3.to_hex(BALANCE_OF_SELECTOR + wallet_bytes.rjust(32, b"\x00"))


def parse_raw_amount(hex_result: str) -> int | None:
    """
    Parse an ``eth_call`` hex result into an integer amount.

    Returns None for empty, non-hex or out of range input.
    """
    if not isinstance(hex_result, str):
        return None
    digits = _strip_0x(hex_result.strip())
    if not _HEX_RE.fullmatch(digits):
        return None
    value = int(digits, 16)
    if value > MAX_RAW_AMOUNT:
        return None
    return value


def scale_amount(raw_amount: int | None, decimals: int = DEFAULT_DECIMALS) -> float:
    """Convert a raw integer amount to token units; unparseable counts as zero."""
    if raw_amount is None:
        return 0.0
    return raw_amount / 10 ** decimals


def decode_quantity(hex_result: str, decimals: int = DEFAULT_DECIMALS) -> float:
    """
    Decode an ``eth_call`` result into a token quantity.

    Parameters
    ----------
    hex_result : str
        Hex quantity, optionally ``0x`` prefixed
    decimals : int
        Token decimals

    Returns
    -------
    float
        Quantity in token units, 0.0 when the result cannot be parsed
    """
    return scale_amount(parse_raw_amount(hex_result), decimals)

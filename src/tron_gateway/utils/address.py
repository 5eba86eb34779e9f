"""
Address utility functions for TRON Base58Check and 41-hex conversion
"""

import re

import base58

TRON_ADDRESS_PREFIX = 0x41
TRON_PAYLOAD_LENGTH = 21

_HEX41_RE = re.compile(r"^41[0-9a-fA-F]{40}$")


def _clean(addr: object) -> str:
    return addr.strip() if isinstance(addr, str) else ""


def is_hex41(addr: object) -> bool:
    """True for '41' followed by exactly 40 hex characters (any case)"""
    return bool(_HEX41_RE.match(_clean(addr)))


def decode_base58check(addr: object) -> bytes | None:
    """Decode a TRON Base58Check address to its 21-byte payload.

    Returns None when the string is not Base58, fails checksum verification,
    or does not decode to a 0x41-prefixed 21-byte payload.
    """
    s = _clean(addr)
    if not s:
        return None
    try:
        payload = base58.b58decode_check(s)
    except ValueError:
        return None
    if len(payload) != TRON_PAYLOAD_LENGTH or payload[0] != TRON_ADDRESS_PREFIX:
        return None
    return payload


def is_base58_tron(addr: object) -> bool:
    return decode_base58check(addr) is not None


def payload_to_base58check(payload: bytes) -> str:
    """Encode a 21-byte payload as Base58Check (4-byte double-SHA256 checksum)"""
    return base58.b58encode_check(payload).decode("ascii")

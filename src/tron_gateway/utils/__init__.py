"""
tron_gateway utility functions
"""

from tron_gateway.utils.address import (
    decode_base58check,
    is_base58_tron,
    is_hex41,
    payload_to_base58check,
)
from tron_gateway.utils.amount import (
    from_smallest_units,
    parse_human_amount,
    to_smallest_units,
)
from tron_gateway.utils.keys import strip_key_prefix, validate_signing_key

__all__ = [
    # Address encodings
    "decode_base58check",
    "is_base58_tron",
    "is_hex41",
    "payload_to_base58check",
    # Amount conversion
    "from_smallest_units",
    "parse_human_amount",
    "to_smallest_units",
    # Signing keys
    "strip_key_prefix",
    "validate_signing_key",
]

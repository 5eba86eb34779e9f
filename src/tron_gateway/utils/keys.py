"""
Signing key syntax checks
"""

import re

from tron_gateway.exceptions import InvalidCredentialError

_PRIVATE_KEY_RE = re.compile(r"[0-9a-fA-F]{64}", re.ASCII)


def strip_key_prefix(signing_key: str) -> str:
    return signing_key[2:] if signing_key[:2] in ("0x", "0X") else signing_key


def validate_signing_key(signing_key: object, field: str = "signing_key") -> str:
    """Check that a key is 32 bytes of hex, optionally 0x-prefixed.

    Args:
        signing_key: Candidate private key
        field: Name reported in the error

    Returns:
        The key as 64 hex characters, without prefix

    Raises:
        InvalidCredentialError: If the key is not a string of 64 hex characters
    """
    if not isinstance(signing_key, str):
        raise InvalidCredentialError(field)
    clean_key = strip_key_prefix(signing_key.strip())
    if not _PRIVATE_KEY_RE.fullmatch(clean_key):
        raise InvalidCredentialError(field)
    return clean_key

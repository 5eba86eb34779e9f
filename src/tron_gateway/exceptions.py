"""
tron_gateway custom exception hierarchy
"""

from typing import Any


class GatewayError(Exception):
    """tron_gateway base exception"""

    pass


class ValidationError(GatewayError):
    """Caller supplied a malformed value"""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidAddressError(ValidationError):
    """Address is not valid Base58Check or 41-prefixed hex"""

    def __init__(self, value: Any, field: str = "address"):
        super().__init__(field, value, f"Invalid TRON address for '{field}': {value!r}")


class InvalidAmountError(ValidationError):
    """Amount is not a plain non-negative decimal, or raw value is not a non-negative integer"""

    def __init__(self, value: Any, field: str = "amount", reason: str | None = None):
        self.reason = reason
        message = f"Invalid amount for '{field}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(field, value, message)


class MissingCredentialError(GatewayError):
    """No signing key available for a state-changing call"""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"No signing key for '{operation}'. "
            "Set SENDER_PRIVATE_KEY or pass signing_key explicitly."
        )


class UpstreamError(GatewayError):
    """Chain client or TronGrid failure"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(GatewayError):
    """Configuration-related error"""

    pass


class UnsupportedNetworkError(ConfigurationError):
    """Unsupported network"""

    pass


class InvalidCredentialError(GatewayError):
    """Signing key is not a valid 32-byte hex private key"""

    def __init__(self, field: str = "signing_key"):
        self.field = field
        super().__init__(f"Malformed private key in '{field}'")

"""
Gateway configuration
Network endpoints plus process-wide defaults for signing and fee limits
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from tron_gateway.exceptions import ConfigurationError, UnsupportedNetworkError
from tron_gateway.logging_config import resolve_level, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_FEE_LIMIT_SUN = 10_000_000
DEFAULT_REQUEST_TIMEOUT = 30.0


class NetworkConfig:
    """TRON network identifiers and TronGrid endpoints"""

    TRON_MAINNET = "tron:mainnet"
    TRON_SHASTA = "tron:shasta"
    TRON_NILE = "tron:nile"

    GRID_HOSTS: Dict[str, str] = {
        "tron:mainnet": "https://api.trongrid.io",
        "tron:shasta": "https://api.shasta.trongrid.io",
        "tron:nile": "https://nile.trongrid.io",
    }

    @classmethod
    def normalize(cls, network: str) -> str:
        """Accept both "nile" and "tron:nile" """
        network = network.strip().lower()
        if not network.startswith("tron:"):
            network = f"tron:{network}"
        if network not in cls.GRID_HOSTS:
            raise UnsupportedNetworkError(f"Unsupported network: {network}")
        return network

    @classmethod
    def get_tronpy_name(cls, network: str) -> str:
        """Network name as tronpy expects it (mainnet/shasta/nile)"""
        return cls.normalize(network)[len("tron:") :]

    @classmethod
    def get_grid_host(cls, network: str) -> str:
        return cls.GRID_HOSTS[cls.normalize(network)]


def _env_int(name: str, fallback: int) -> int:
    value = os.getenv(name)
    if not value:
        return fallback
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, value, fallback)
        return fallback


def _env_float(name: str, fallback: float) -> float:
    value = os.getenv(name)
    if not value:
        return fallback
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, value, fallback)
        return fallback


@dataclass(frozen=True)
class GatewaySettings:
    """Process-wide settings, read-only after startup"""

    network: str = NetworkConfig.TRON_MAINNET
    api_key: Optional[str] = None
    grid_host: Optional[str] = None
    default_signing_key: Optional[str] = field(default=None, repr=False)
    fee_limit_sun: int = DEFAULT_FEE_LIMIT_SUN
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "network", NetworkConfig.normalize(self.network))
        if self.fee_limit_sun <= 0:
            raise ConfigurationError(f"fee_limit_sun must be positive, got {self.fee_limit_sun}")
        if self.request_timeout <= 0:
            raise ConfigurationError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )
        if self.log_level is not None:
            resolve_level(self.log_level)

    @property
    def resolved_grid_host(self) -> str:
        """TronGrid base URL without trailing slash"""
        host = self.grid_host or NetworkConfig.get_grid_host(self.network)
        return host.rstrip("/")

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "GatewaySettings":
        """Build settings from the environment, loading a .env file first if given.

        Variables:
            TRON_NETWORK: mainnet/shasta/nile (default mainnet)
            TRON_GRID_API_KEY: TronGrid API key
            TRON_GRID_HOST: TronGrid base URL override
            SENDER_PRIVATE_KEY: default signing key
            FEE_LIMIT_SUN: default fee limit (default 10_000_000)
            TRON_REQUEST_TIMEOUT: HTTP timeout in seconds (default 30)
            TRON_LOG_LEVEL: when set, package logging is configured at this level
        """
        if env_file is not None:
            load_dotenv(env_file)

        settings = cls(
            network=os.getenv("TRON_NETWORK") or NetworkConfig.TRON_MAINNET,
            api_key=os.getenv("TRON_GRID_API_KEY") or None,
            grid_host=os.getenv("TRON_GRID_HOST") or None,
            default_signing_key=os.getenv("SENDER_PRIVATE_KEY") or None,
            fee_limit_sun=_env_int("FEE_LIMIT_SUN", DEFAULT_FEE_LIMIT_SUN),
            request_timeout=_env_float("TRON_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            log_level=os.getenv("TRON_LOG_LEVEL") or None,
        )
        if settings.log_level:
            setup_logging(settings.log_level)
        return settings

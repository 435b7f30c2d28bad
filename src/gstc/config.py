"""Client configuration.

Defaults can be overridden through environment variables:
- GSTC_ADDRESS: daemon host (default: localhost)
- GSTC_PORT: daemon port (default: 5000)
- GSTC_TIMEOUT: connect/receive timeout in seconds, 0 waits forever (default: 0)
- GSTC_KEEP_OPEN: hold one connection across requests (1/true/yes/on)
- GSTC_PROTOCOL: "tcp" or "http" (default: tcp)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ADDRESS = "localhost"
DEFAULT_PORT = 5000
DEFAULT_TIMEOUT = 0.0

PROTOCOL_TCP = "tcp"
PROTOCOL_HTTP = "http"
PROTOCOLS = (PROTOCOL_TCP, PROTOCOL_HTTP)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ClientConfig:
    """Configuration for GstClient."""

    address: str = DEFAULT_ADDRESS
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    keep_open: bool = False
    protocol: str = PROTOCOL_TCP

    def __post_init__(self) -> None:
        if self.protocol not in PROTOCOLS:
            raise ValueError(f"Unknown protocol: {self.protocol} (expected one of {PROTOCOLS})")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from GSTC_* environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        return cls(
            address=os.environ.get("GSTC_ADDRESS", DEFAULT_ADDRESS),
            port=int(os.environ.get("GSTC_PORT", DEFAULT_PORT)),
            timeout=float(os.environ.get("GSTC_TIMEOUT", DEFAULT_TIMEOUT)),
            keep_open=os.environ.get("GSTC_KEEP_OPEN", "").strip().lower() in _TRUTHY,
            protocol=os.environ.get("GSTC_PROTOCOL", PROTOCOL_TCP).strip().lower(),
        )

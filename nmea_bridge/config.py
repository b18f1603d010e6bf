"""Static bridge configuration.

The bridge is configured once at start-up and never reloaded. Setup for the
usual deployment: the phone app sends NMEA over UDP *to* this machine, so the
receiver binds ``bind_host:port`` and listens; ``host`` is only used by the
connect modes and must be the phone's IP address.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

__all__ = ["DEFAULT_CONFIG", "BridgeConfig", "ConfigError", "Transport"]

# --- defaults -----------------------------------------------------------------

_HOST = "192.168.0.10"
_BIND_HOST = "0.0.0.0"
_PORT = 11123
_MAX_LINE_LENGTH = 512
_SMOOTHING = 0.2
_MAX_SMOOTHING = 0.95
_RECEIVE_TIMEOUT = 1.0  # socket poll interval; bounds stop() latency
_CONNECT_TIMEOUT = 4.0

_ENV_PREFIX = "NMEA_BRIDGE_"
_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


class ConfigError(ValueError):
    """The configuration holds a value the bridge cannot run with."""


class Transport(Enum):
    """Socket type used to receive sentences."""

    UDP = "udp"
    TCP = "tcp"


def _parse_bool(name: str, value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _parse_number(name: str, value: str, kind: type) -> int | float:
    try:
        return kind(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be {kind.__name__}, got {value!r}") from e


@dataclass(frozen=True)
class BridgeConfig:
    """Process-wide settings for the receiver and the aggregator.

    Attributes:
        host: Remote device IP, used when connecting (TCP, or UDP with
            ``listen=False``).
        bind_host: Local address to bind in UDP listen mode.
        port: Port to listen on or connect to. 0 binds an ephemeral port.
        transport: ``Transport.UDP`` (datagrams) or ``Transport.TCP`` (stream).
        listen: UDP only. True binds and listens for any sender, False
            connects to ``host:port`` and receives from it.
        auto_start: Start receiving as soon as a ``LocationBridge`` is entered.
        max_line_length: Line accumulator bound; longer lines are dropped.
        smoothing: Exponential smoothing factor for latitude/longitude,
            in ``[0, 0.95]``. 0 disables smoothing.
        receive_timeout: Seconds each socket read may block before the loop
            checks for cancellation again.
        connect_timeout: Seconds allowed for a TCP connect.
        verify_checksum: Discard sentences with a missing or wrong checksum.
    """

    host: str = _HOST
    bind_host: str = _BIND_HOST
    port: int = _PORT
    transport: Transport = Transport.UDP
    listen: bool = True
    auto_start: bool = True
    max_line_length: int = _MAX_LINE_LENGTH
    smoothing: float = _SMOOTHING
    receive_timeout: float = _RECEIVE_TIMEOUT
    connect_timeout: float = _CONNECT_TIMEOUT
    verify_checksum: bool = False

    def __post_init__(self) -> None:
        """Reject values the receiver or aggregator cannot work with.

        Raises:
            ConfigError: On the first invalid value found.
        """
        if not isinstance(self.transport, Transport):
            raise ConfigError(f"transport must be a Transport, got {self.transport!r}")
        if not 0 <= self.port <= 65535:
            raise ConfigError(f"port must be in 0..65535, got {self.port}")
        if self.max_line_length <= 0:
            raise ConfigError(
                f"max_line_length must be positive, got {self.max_line_length}"
            )
        if not 0.0 <= self.smoothing <= _MAX_SMOOTHING:
            raise ConfigError(
                f"smoothing must be in [0, {_MAX_SMOOTHING}], got {self.smoothing}"
            )
        if self.receive_timeout <= 0:
            raise ConfigError(
                f"receive_timeout must be positive, got {self.receive_timeout}"
            )
        if self.connect_timeout <= 0:
            raise ConfigError(
                f"connect_timeout must be positive, got {self.connect_timeout}"
            )

    @property
    def is_datagram_listen(self) -> bool:
        """True if the receiver binds locally instead of connecting out."""
        return self.transport is Transport.UDP and self.listen

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BridgeConfig":
        """Build a config from ``NMEA_BRIDGE_*`` environment variables.

        Unset variables keep their defaults. Read once by the host at
        start-up, e.g. ``NMEA_BRIDGE_PORT=11123 NMEA_BRIDGE_TRANSPORT=tcp``.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigError: If a variable cannot be converted or is out of range.
        """
        if environ is None:
            environ = os.environ

        def get(name: str) -> str | None:
            return environ.get(_ENV_PREFIX + name)

        overrides: dict[str, object] = {}
        for name in ("HOST", "BIND_HOST"):
            value = get(name)
            if value is not None:
                overrides[name.lower()] = value.strip()
        for name, kind in (
            ("PORT", int),
            ("MAX_LINE_LENGTH", int),
            ("SMOOTHING", float),
            ("RECEIVE_TIMEOUT", float),
            ("CONNECT_TIMEOUT", float),
        ):
            value = get(name)
            if value is not None:
                overrides[name.lower()] = _parse_number(_ENV_PREFIX + name, value, kind)
        for name in ("LISTEN", "AUTO_START", "VERIFY_CHECKSUM"):
            value = get(name)
            if value is not None:
                overrides[name.lower()] = _parse_bool(_ENV_PREFIX + name, value)

        transport = get("TRANSPORT")
        if transport is not None:
            try:
                overrides["transport"] = Transport(transport.strip().lower())
            except ValueError as e:
                raise ConfigError(
                    f"{_ENV_PREFIX}TRANSPORT must be 'udp' or 'tcp', got {transport!r}"
                ) from e

        return cls(**overrides)  # type: ignore[arg-type]


DEFAULT_CONFIG = BridgeConfig()

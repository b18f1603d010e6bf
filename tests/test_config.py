"""Tests for BridgeConfig."""

import pytest

from nmea_bridge.config import DEFAULT_CONFIG, BridgeConfig, ConfigError, Transport


class TestBridgeConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.host == "192.168.0.10"
        assert DEFAULT_CONFIG.bind_host == "0.0.0.0"
        assert DEFAULT_CONFIG.port == 11123
        assert DEFAULT_CONFIG.transport is Transport.UDP
        assert DEFAULT_CONFIG.listen is True
        assert DEFAULT_CONFIG.auto_start is True
        assert DEFAULT_CONFIG.max_line_length == 512
        assert DEFAULT_CONFIG.smoothing == pytest.approx(0.2)
        assert DEFAULT_CONFIG.verify_checksum is False

    def test_is_datagram_listen(self):
        assert BridgeConfig().is_datagram_listen is True
        assert BridgeConfig(listen=False).is_datagram_listen is False
        assert BridgeConfig(transport=Transport.TCP).is_datagram_listen is False

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.port = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"port": -1},
            {"port": 65536},
            {"max_line_length": 0},
            {"smoothing": -0.01},
            {"smoothing": 0.96},
            {"receive_timeout": 0},
            {"connect_timeout": -1.0},
            {"transport": "udp"},
        ],
    )
    def test_rejects_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            BridgeConfig(**overrides)

    @pytest.mark.parametrize("smoothing", [0.0, 0.95])
    def test_smoothing_bounds_inclusive(self, smoothing):
        assert BridgeConfig(smoothing=smoothing).smoothing == smoothing


class TestFromEnv:
    """Tests for BridgeConfig.from_env."""

    def test_empty_environment_gives_defaults(self):
        assert BridgeConfig.from_env({}) == DEFAULT_CONFIG

    def test_unrelated_variables_ignored(self):
        assert BridgeConfig.from_env({"PORT": "1", "HOME": "/root"}) == DEFAULT_CONFIG

    def test_reads_all_variables(self):
        config = BridgeConfig.from_env(
            {
                "NMEA_BRIDGE_HOST": " 10.0.0.5 ",
                "NMEA_BRIDGE_BIND_HOST": "127.0.0.1",
                "NMEA_BRIDGE_PORT": "5000",
                "NMEA_BRIDGE_TRANSPORT": "TCP",
                "NMEA_BRIDGE_LISTEN": "no",
                "NMEA_BRIDGE_AUTO_START": "0",
                "NMEA_BRIDGE_MAX_LINE_LENGTH": "256",
                "NMEA_BRIDGE_SMOOTHING": "0.5",
                "NMEA_BRIDGE_RECEIVE_TIMEOUT": "0.25",
                "NMEA_BRIDGE_CONNECT_TIMEOUT": "2",
                "NMEA_BRIDGE_VERIFY_CHECKSUM": "Yes",
            }
        )

        assert config == BridgeConfig(
            host="10.0.0.5",
            bind_host="127.0.0.1",
            port=5000,
            transport=Transport.TCP,
            listen=False,
            auto_start=False,
            max_line_length=256,
            smoothing=0.5,
            receive_timeout=0.25,
            connect_timeout=2.0,
            verify_checksum=True,
        )

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("NMEA_BRIDGE_PORT", "6000")

        assert BridgeConfig.from_env().port == 6000

    @pytest.mark.parametrize(
        "environ",
        [
            {"NMEA_BRIDGE_PORT": "eleven"},
            {"NMEA_BRIDGE_PORT": "70000"},
            {"NMEA_BRIDGE_SMOOTHING": "1.0"},
            {"NMEA_BRIDGE_LISTEN": "maybe"},
            {"NMEA_BRIDGE_TRANSPORT": "serial"},
        ],
    )
    def test_invalid_values_raise(self, environ):
        with pytest.raises(ConfigError):
            BridgeConfig.from_env(environ)

    def test_error_names_the_variable(self):
        with pytest.raises(ConfigError, match="NMEA_BRIDGE_PORT"):
            BridgeConfig.from_env({"NMEA_BRIDGE_PORT": "x"})

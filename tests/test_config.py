"""
Tests for settings, startup validation and the application lifespan.
"""
from unittest.mock import patch

import pytest

from uptime_monitor.config import (
    ConfigurationError,
    DEFAULT_CHECK_INTERVAL_SECONDS,
    Settings,
    require_access_keys,
)
from uptime_monitor.main import create_app, lifespan


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestCheckInterval:

    def test_default(self):
        with patch.dict("os.environ", {}, clear=False) as env:
            env.pop("CHECK_INTERVAL_SECONDS", None)
            assert _settings().check_interval_seconds == DEFAULT_CHECK_INTERVAL_SECONDS

    @pytest.mark.parametrize("value,expected", [(45, 45), ("120", 120), (" 15 ", 15)])
    def test_positive_values_are_kept(self, value, expected):
        assert _settings(check_interval_seconds=value).check_interval_seconds == expected

    @pytest.mark.parametrize("value", [0, -10, "0", "", "abc", None])
    def test_invalid_values_fall_back_to_default(self, value):
        assert _settings(check_interval_seconds=value).check_interval_seconds == DEFAULT_CHECK_INTERVAL_SECONDS

    def test_read_from_environment(self):
        with patch.dict("os.environ", {"CHECK_INTERVAL_SECONDS": "-1"}):
            assert _settings().check_interval_seconds == DEFAULT_CHECK_INTERVAL_SECONDS
        with patch.dict("os.environ", {"CHECK_INTERVAL_SECONDS": "5"}):
            assert _settings().check_interval_seconds == 5


class TestAccessKeys:

    def test_keys_are_trimmed(self):
        config = _settings(read_key=" reader ", admin_key="\tadmin\n")
        assert require_access_keys(config) == ("reader", "admin")

    @pytest.mark.parametrize(
        "read_key,admin_key",
        [(None, "admin"), ("reader", None), ("  ", "admin"), ("reader", ""), (None, None)],
    )
    def test_missing_keys_fail_startup(self, read_key, admin_key):
        config = _settings(read_key=read_key, admin_key=admin_key)
        with pytest.raises(ConfigurationError):
            require_access_keys(config)


class TestLifespan:

    @pytest.mark.asyncio
    async def test_missing_keys_abort_startup(self):
        app = create_app()
        with patch("uptime_monitor.main.settings", _settings(read_key=None, admin_key=None)):
            with pytest.raises(ConfigurationError):
                async with lifespan(app):
                    pass

    @pytest.mark.asyncio
    async def test_startup_wires_services_and_shutdown_stops_scheduler(self):
        app = create_app()

        async with lifespan(app):
            assert app.state.access_keys.read_key == "read-key"
            assert app.state.access_keys.admin_key == "admin-key"
            assert app.state.scheduler.running
            assert app.state.scheduler.interval == DEFAULT_CHECK_INTERVAL_SECONDS
            assert await app.state.monitor_service.list_monitors() == []

        assert not app.state.scheduler.running

"""Unit tests for the configuration context."""

import asyncio

import pytest

from src.bilemo.runtime.config.config_data import ConfigData
from src.bilemo.runtime.context import (
    AppContext,
    get_config,
    get_context,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)
        assert context.config is get_config()

    def test_with_context_override_single_level(self):
        """Should override config for the duration of the context manager."""
        original_config = get_config()
        original_limit = original_config.pagination.max_limit

        test_config = ConfigData()
        test_config.pagination.max_limit = 5

        with with_context(test_config):
            assert get_config().pagination.max_limit == 5
            assert get_config() is not original_config

        assert get_config().pagination.max_limit == original_limit
        assert get_config() is original_config

    def test_unset_fields_are_inherited(self):
        """Only explicitly set fields replace the current values."""
        outer = ConfigData()
        outer.cache.ttl_seconds = 10

        inner = ConfigData()
        inner.pagination.default_limit = 3

        base_limit = get_config().pagination.default_limit
        with with_context(outer):
            with with_context(inner):
                config = get_config()
                assert config.cache.ttl_seconds == 10
                assert config.pagination.default_limit == 3
            assert get_config().pagination.default_limit == base_limit
            assert get_config().cache.ttl_seconds == 10

    def test_none_override_is_noop(self):
        original = get_config()
        with with_context(None):
            assert get_config() is original

    def test_rejects_wrong_type(self):
        with pytest.raises(ValueError):
            with with_context({"cache": {}}):  # type: ignore[arg-type]
                pass

    def test_isolated_between_tasks(self):
        """Overrides made in one task are invisible to concurrent tasks."""

        async def override_then_read() -> int:
            cfg = ConfigData()
            cfg.pagination.max_limit = 7
            with with_context(cfg):
                await asyncio.sleep(0)
                return get_config().pagination.max_limit

        async def read() -> int:
            await asyncio.sleep(0)
            return get_config().pagination.max_limit

        async def main():
            return await asyncio.gather(override_then_read(), read())

        overridden, untouched = asyncio.run(main())

        assert overridden == 7
        assert untouched == get_config().pagination.max_limit

"""Unit tests for provider selection."""

import pytest

from ritual.util.di import (
    ClockProvider,
    MissingProviderError,
    ProdClockProvider,
    ProdConfigProvider,
    ProviderBase,
    get_provider,
)
from tests.di import MockClockProvider


class _OrphanProvider(ProviderBase):
    __mock_component__ = "clock"


class _OrphanProdProvider(_OrphanProvider):
    __is_mock__ = False


class TestGetProvider:
    def test_concrete_provider_is_used_directly(self):
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_selects_by_mock_flag(self):
        assert get_provider(ClockProvider, use_mock=False) is ProdClockProvider
        assert get_provider(ClockProvider, use_mock=True) is MockClockProvider

    def test_missing_mock_implementation(self):
        with pytest.raises(MissingProviderError) as exc_info:
            get_provider(_OrphanProvider, use_mock=True)

        assert exc_info.value.component == "clock"
        assert "No mock implementation" in str(exc_info.value)

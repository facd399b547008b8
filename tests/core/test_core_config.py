"""
Farm Market — Config Tests
============================
"""

from types import SimpleNamespace

import pytest

from core.config import DEFAULT_CALLER_HEADER, MarketConfig


class TestMarketConfig:
    def test_defaults(self):
        config = MarketConfig()
        assert config.journal_path is None
        assert config.caller_header == DEFAULT_CALLER_HEADER
        assert config.verify_journal_on_load is True

    def test_from_settings(self):
        settings = SimpleNamespace(
            MARKET_JOURNAL_PATH="/var/lib/market/journal.jsonl",
            MARKET_CALLER_HEADER="X-Principal",
            MARKET_VERIFY_JOURNAL_ON_LOAD=False,
        )
        config = MarketConfig.from_settings(settings)
        assert config.journal_path == "/var/lib/market/journal.jsonl"
        assert config.caller_header == "X-Principal"
        assert config.verify_journal_on_load is False

    def test_empty_journal_path_means_memory(self):
        config = MarketConfig.from_settings(SimpleNamespace(MARKET_JOURNAL_PATH=""))
        assert config.journal_path is None

    def test_missing_settings_use_defaults(self):
        assert MarketConfig.from_settings(SimpleNamespace()) == MarketConfig()

    def test_caller_header_required(self):
        with pytest.raises(ValueError):
            MarketConfig(caller_header="")

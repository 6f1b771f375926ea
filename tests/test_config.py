"""Tests for ContextVar-based scan configuration.

Validates thread isolation, context manager behavior, and that scanners
snapshot the config active when they are created.
"""

import re
from threading import Thread

import pytest

from rastro import (
    ScanConfig,
    Scanner,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)


class TestScanConfigDataclass:
    """Test ScanConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ScanConfig()
        assert config.flags == 0
        assert config.cache_size == 128
        assert config.exact_end is False

    def test_immutability(self) -> None:
        config = ScanConfig()
        with pytest.raises(AttributeError):
            config.exact_end = True  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ScanConfig.from_dict({"exact_end": True, "cache_size": 4, "unknown": 1})
        assert config == ScanConfig(exact_end=True, cache_size=4)

    def test_from_empty_dict(self) -> None:
        assert ScanConfig.from_dict({}) == ScanConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_scan_config()

    def test_default_config(self) -> None:
        assert get_scan_config() == ScanConfig()

    def test_set_and_get(self) -> None:
        custom = ScanConfig(flags=re.IGNORECASE)
        set_scan_config(custom)
        assert get_scan_config() is custom

    def test_reset_restores_default(self) -> None:
        set_scan_config(ScanConfig(exact_end=True))
        reset_scan_config()
        assert get_scan_config().exact_end is False


class TestScanConfigContext:
    """Test scan_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with scan_config_context(ScanConfig(exact_end=True)):
            assert get_scan_config().exact_end is True
        assert get_scan_config().exact_end is False

    def test_nested_contexts(self) -> None:
        with scan_config_context(ScanConfig(exact_end=True)):
            with scan_config_context(ScanConfig(flags=re.MULTILINE)):
                assert get_scan_config().flags == re.MULTILINE
                assert get_scan_config().exact_end is False
            assert get_scan_config().exact_end is True
        assert get_scan_config() == ScanConfig()

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with scan_config_context(ScanConfig(exact_end=True)):
                raise ValueError("test")
        assert get_scan_config().exact_end is False


class TestScannerUsesConfig:
    def test_flags_apply_to_patterns(self) -> None:
        with scan_config_context(ScanConfig(flags=re.IGNORECASE)):
            s = Scanner("SELECT 1")
        assert s.scan("select") == "SELECT"

    def test_scanner_snapshots_config(self) -> None:
        with scan_config_context(ScanConfig(exact_end=True)):
            s = Scanner("ab")
        s.terminate()
        assert s.position == 2
        assert Scanner("ab").config.exact_end is False

    def test_explicit_config_wins_over_context(self) -> None:
        with scan_config_context(ScanConfig(exact_end=True)):
            s = Scanner("ab", config=ScanConfig())
        assert s.config.exact_end is False

    def test_multiline_caret_stays_window_relative(self) -> None:
        s = Scanner("ab\ncd", config=ScanConfig(flags=re.MULTILINE))
        assert s.scan_until("^c") == "ab\nc"


class TestThreadIsolation:
    def test_thread_isolation(self) -> None:
        results: dict[int, bool] = {}

        def worker(thread_id: int, config: ScanConfig) -> None:
            set_scan_config(config)
            s = Scanner("ab")
            s.terminate()
            results[thread_id] = s.position == 2

        threads = [
            Thread(target=worker, args=(0, ScanConfig(exact_end=True))),
            Thread(target=worker, args=(1, ScanConfig(exact_end=False))),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: True, 1: False}
        assert get_scan_config().exact_end is False

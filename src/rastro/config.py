"""ContextVar-based scan configuration for Rastro.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Scanner snapshots the active config when it is constructed; changing the
context afterwards does not affect scanners that already exist.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from rastro.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(flags=re.IGNORECASE)):
        scanner = Scanner("Hello World")
        scanner.scan("hello")  # -> "Hello"

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        flags: re flags applied when compiling textual patterns
        cache_size: Maximum number of compiled patterns kept by RegexMatcher
            (0 disables the cache)
        exact_end: When False, end_of_string()/terminate() keep the historical
            ``length - 1`` behaviour. When True they use ``length``.

    """

    flags: int | re.RegexFlag = 0
    cache_size: int = 128
    exact_end: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> ScanConfig:
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ScanConfig.from_dict({"exact_end": True, "other": 1})
            >>> config.exact_end
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (thread-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Example:
        >>> from rastro import Scanner
        >>> with scan_config_context(ScanConfig(exact_end=True)):
        ...     s = Scanner("abc")
        >>> get_scan_config().exact_end, s.config.exact_end
        (False, True)

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]

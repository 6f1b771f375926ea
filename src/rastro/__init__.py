"""
Rastro — a string scanning cursor for lexers and hand-written parsers.

A Scanner walks an immutable str or bytes buffer left to right, advancing
only when a pattern matches at (or is found after) the scan position.
Patterns are anchored to the scan position: ``^`` means "here", not
"start of the buffer".

Quick Start:
    >>> from rastro import Scanner
    >>> s = Scanner("3 + 4")
    >>> s.scan(r"\\d+")
    '3'
    >>> s.scan(r"\\s*\\+\\s*")
    ' + '
    >>> s.scan(r"\\d+"), s.pre_match()
    ('4', '3 + ')

Configuration:
    >>> import re
    >>> from rastro import ScanConfig, scan_config_context
    >>> with scan_config_context(ScanConfig(flags=re.IGNORECASE)):
    ...     s = Scanner("SELECT 1")
    >>> s.scan("select")
    'SELECT'

Custom pattern engines:
    Any object with ``compile`` and ``find_leftmost`` (see PatternMatcher)
    can be passed as ``Scanner(buffer, matcher=...)``.
"""

from rastro.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from rastro.errors import InvalidPosition, PatternError, RastroError
from rastro.location import SourceLocation
from rastro.matcher import MatchSpan, PatternMatcher, RegexMatcher, default_matcher
from rastro.scanner import ScanMatch, Scanner

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 — grouped by category
    # Version
    "__version__",
    # Core
    "Scanner",
    "ScanMatch",
    # Pattern engine
    "MatchSpan",
    "PatternMatcher",
    "RegexMatcher",
    "default_matcher",
    # Configuration (ContextVar-based)
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Errors
    "RastroError",
    "PatternError",
    "InvalidPosition",
    # Location
    "SourceLocation",
]

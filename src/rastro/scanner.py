"""Stateful scanning cursor over an immutable buffer.

A Scanner holds a buffer, a scan position and the outcome of the most
recent match attempt. Matching operations evaluate a pattern against the
window (the buffer from the scan position onward), so ``^`` anchors at
the scan position rather than at offset 0 of the buffer.

    >>> s = Scanner("This is a test")
    >>> s.scan(r"\\w+")
    'This'
    >>> s.scan(r"^\\s")
    ' '
    >>> s.scan_until("a")
    'is a'
    >>> s.pre_match(), s.matched(), s.post_match()
    ('This is ', 'a', ' test')

Window Semantics:
    The window is passed to the matcher as a slice, so patterns cannot see
    text before the scan position. Lookbehind assertions and ``\\b`` at the
    window start behave as if the buffer began there.

Thread Safety:
    Scanner instances are single-owner cursors, like iterators. Do not
    share one between threads without external locking. The buffer itself
    is never mutated, so independent scanners over one buffer are safe.

"""

from __future__ import annotations

import operator
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rastro.config import ScanConfig, get_scan_config
from rastro.errors import InvalidPosition, PatternError
from rastro.location import SourceLocation
from rastro.matcher import PatternMatcher, default_matcher
from rastro.utils.logger import get_logger

logger = get_logger(__name__)

# Characters shown by Scanner.__repr__ before truncating the window
_REPR_PREVIEW = 10


@dataclass(frozen=True, slots=True)
class ScanMatch:
    """Record of the last successful match.

    Attributes:
        start: Absolute start offset in the buffer
        end: Absolute end offset in the buffer (exclusive)
        text: The matched slice of the buffer
        groups: Captured group texts (group 1 onward)
        named: Named group texts

    """

    start: int
    end: int
    text: str | bytes
    groups: tuple[Any, ...] = ()
    named: Mapping[str, Any] = field(default_factory=dict)


class Scanner:
    """Cursor over a str or bytes buffer driven by pattern matches.

    Four matching primitives differ in whether the match must start at the
    scan position and whether the position advances:

    ==============  ===============  ========
    operation       must start at 0  advances
    ==============  ===============  ========
    scan            yes              yes
    scan_until      no               yes
    check           yes              no
    check_until     no               no
    ==============  ===============  ========

    Every attempt replaces the last match: a failed attempt clears it, and
    so does any explicit repositioning. "No match" is returned as None and
    never raised.

    Usage:
        >>> s = Scanner("abc")
        >>> s.getch(), s.getch(), s.getch(), s.getch()
        ('a', 'b', 'c', None)

    """

    __slots__ = (
        "_buffer",
        "_length",  # Cached len(buffer)
        "_pos",
        "_match",  # ScanMatch of the last attempt, None if it failed
        "_matcher",
        "_config",
        "_newline",  # "\n" or b"\n" depending on buffer type
    )

    def __init__(
        self,
        buffer: str | bytes,
        *,
        matcher: PatternMatcher | None = None,
        config: ScanConfig | None = None,
    ) -> None:
        """Bind a scanner to buffer at position 0.

        Args:
            buffer: Text (str) or binary (bytes) to scan; never copied or mutated
            matcher: Pattern engine to use (defaults to the shared RegexMatcher
                for the config's flags)
            config: Scan configuration (defaults to the context's config)

        Raises:
            TypeError: If buffer is neither str nor bytes
        """
        if not isinstance(buffer, (str, bytes)):
            raise TypeError(f"Scanner requires str or bytes, got {type(buffer).__name__}")

        self._config = config if config is not None else get_scan_config()
        if matcher is None:
            matcher = default_matcher(self._config.flags, self._config.cache_size)
        self._matcher = matcher
        self._buffer = buffer
        self._length = len(buffer)
        self._newline = "\n" if isinstance(buffer, str) else b"\n"
        self._pos = 0
        self._match: ScanMatch | None = None

    # =========================================================================
    # Buffer and position
    # =========================================================================

    @property
    def string(self) -> str | bytes:
        """The scanned buffer."""
        return self._buffer

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def matcher(self) -> PatternMatcher:
        return self._matcher

    @property
    def position(self) -> int:
        """Current scan offset, ``0 <= position <= len(string)``."""
        return self._pos

    @position.setter
    def position(self, value: int) -> None:
        self.set_position(value)

    @property
    def rest(self) -> str | bytes:
        """The window: everything from the scan position to the end."""
        return self._buffer[self._pos :]

    @property
    def location(self) -> SourceLocation:
        """Line/column of the scan position (computed on demand)."""
        return SourceLocation.from_offset(self._buffer, self._pos)

    def beginning_of_line(self) -> bool:
        """True at offset 0 or directly after a line feed."""
        return self._pos == 0 or self._buffer[self._pos - 1 : self._pos] == self._newline

    bol = beginning_of_line

    def _end_offset(self) -> int:
        """Offset treated as end of string by end_of_string()/terminate().

        Keeps the historical ``length - 1`` unless config.exact_end is set.
        An empty buffer always ends at 0.
        """
        if self._config.exact_end or self._length == 0:
            return self._length
        return self._length - 1

    def end_of_string(self) -> bool:
        """True when the position is at the end offset.

        Note:
            By default the end offset is ``len(string) - 1``, not
            ``len(string)``: after consuming the whole buffer this returns
            False. Construct with ``ScanConfig(exact_end=True)`` for the
            true end.
        """
        return self._pos == self._end_offset()

    eos = end_of_string

    def set_position(self, position: int) -> None:
        """Move the cursor and clear the last match.

        The match is cleared even if position equals the current position.

        Raises:
            InvalidPosition: If position is outside [0, len(string)]; the
                scanner is left unchanged
            TypeError: If position is not an integer
        """
        position = operator.index(position)
        if not 0 <= position <= self._length:
            raise InvalidPosition(position, self._length)
        logger.debug("Repositioning scanner %d -> %d", self._pos, position)
        self._pos = position
        self._match = None

    def reset(self) -> None:
        """Rewind to offset 0 and clear the last match."""
        self.set_position(0)

    def terminate(self) -> None:
        """Move to the end offset (see end_of_string) and clear the last match."""
        self.set_position(self._end_offset())

    def peek(self, length: int) -> str | bytes:
        """Return up to length characters of the window without side effects."""
        if length < 0:
            raise ValueError(f"peek length must be non-negative, got {length}")
        return self._buffer[self._pos : self._pos + length]

    # =========================================================================
    # Matching
    # =========================================================================

    def _compile(self, pattern: Any) -> Any:
        text = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
        if isinstance(text, (str, bytes)) and isinstance(text, str) != isinstance(
            self._buffer, str
        ):
            raise PatternError(
                pattern,
                f"{type(text).__name__} pattern cannot scan a "
                f"{type(self._buffer).__name__} buffer",
            )
        return self._matcher.compile(pattern)

    def _commit(self, match: ScanMatch | None, *, advance: bool) -> ScanMatch | None:
        """Record the outcome of a match attempt.

        All matching operations funnel through here so the last match and
        the position can never disagree.
        """
        self._match = match
        if match is not None and advance:
            self._pos = match.end
        return match

    def _attempt(self, pattern: Any, *, anchored: bool, advance: bool) -> ScanMatch | None:
        compiled = self._compile(pattern)
        window = self._buffer[self._pos :]
        span = self._matcher.find_leftmost(compiled, window, anchored=anchored)
        if span is None or (anchored and span.start != 0):
            return self._commit(None, advance=advance)

        return self._commit(
            ScanMatch(
                start=self._pos + span.start,
                end=self._pos + span.end,
                text=window[span.start : span.end],
                groups=tuple(span.groups),
                named=dict(span.named),
            ),
            advance=advance,
        )

    def scan(self, pattern: Any) -> str | bytes | None:
        """Match pattern at the scan position and advance past it.

        Args:
            pattern: Pattern text (or a compiled pattern the matcher accepts)

        Returns:
            The matched text (possibly empty), or None if the pattern does
            not match starting exactly at the scan position

        Raises:
            PatternError: If the matcher rejects the pattern
        """
        match = self._attempt(pattern, anchored=True, advance=True)
        return None if match is None else match.text

    def scan_until(self, pattern: Any) -> str | bytes | None:
        """Search for pattern anywhere in the window and advance past it.

        Returns:
            Text from the old scan position through the end of the match,
            or None if there is no match
        """
        start = self._pos
        match = self._attempt(pattern, anchored=False, advance=True)
        return None if match is None else self._buffer[start : match.end]

    def check(self, pattern: Any) -> str | bytes | None:
        """Like scan(), but without advancing."""
        match = self._attempt(pattern, anchored=True, advance=False)
        return None if match is None else match.text

    def check_until(self, pattern: Any) -> str | bytes | None:
        """Like scan_until(), but without advancing."""
        match = self._attempt(pattern, anchored=False, advance=False)
        return None if match is None else self._buffer[self._pos : match.end]

    def getch(self) -> str | bytes | None:
        """Consume exactly one character (or byte), newlines included.

        Returns None at the end of the buffer.
        """
        if self._pos >= self._length:
            self._commit(None, advance=True)
            return None
        end = self._pos + 1
        match = ScanMatch(start=self._pos, end=end, text=self._buffer[self._pos : end])
        return self._commit(match, advance=True).text

    # =========================================================================
    # Last match introspection
    # =========================================================================

    @property
    def last_match(self) -> ScanMatch | None:
        return self._match

    def matched(self) -> str | bytes | None:
        """Text of the last match, or None if the last attempt failed."""
        return None if self._match is None else self._match.text

    def pre_match(self) -> str | bytes | None:
        """Buffer contents before the last match (absolute, not window-relative)."""
        if self._match is None:
            return None
        return self._buffer[: self._match.start]

    def post_match(self) -> str | bytes | None:
        """Buffer contents after the last match.

        For scan/scan_until/getch this is the window at the new position.
        """
        if self._match is None:
            return None
        return self._buffer[self._match.end :]

    def groups(self) -> tuple[Any, ...] | None:
        """Captured groups of the last match (group 1 onward)."""
        return None if self._match is None else self._match.groups

    def __getitem__(self, group: int | str) -> Any:
        """Group of the last match by index or name; group 0 is matched().

        Returns None when there is no last match.

        Raises:
            IndexError: If the group does not exist in the last match
        """
        match = self._match
        if match is None:
            return None
        if isinstance(group, str):
            if group not in match.named:
                raise IndexError(f"no such group: {group!r}")
            return match.named[group]
        if group == 0:
            return match.text
        if not 0 < group <= len(match.groups):
            raise IndexError(f"no such group: {group!r}")
        return match.groups[group - 1]

    def subscan(self) -> Scanner:
        """Independent scanner over the window, at position 0 with no match.

        Shares the matcher and config; shares no mutable state.
        """
        return Scanner(self._buffer[self._pos :], matcher=self._matcher, config=self._config)

    def __repr__(self) -> str:
        window = self._buffer[self._pos : self._pos + _REPR_PREVIEW]
        suffix = "..." if self._length - self._pos > _REPR_PREVIEW else ""
        return f"Scanner({self._pos}/{self._length}, {window!r}{suffix})"


__all__ = ["ScanMatch", "Scanner"]

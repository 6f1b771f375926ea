"""Pattern matcher binding for Scanner.

The Scanner never interprets pattern syntax itself. It talks to a matcher
through two calls:

    compiled = matcher.compile(pattern)
    span = matcher.find_leftmost(compiled, window, anchored=...)

``window`` is always the unconsumed suffix of the buffer, so ``^`` and
``\\A`` in the pattern assert the start of the window rather than the
start of the whole buffer.

RegexMatcher binds this onto the standard library ``re`` module. Any
object with the same two methods can be injected instead (see
PatternMatcher).

Thread Safety:
RegexMatcher's compile cache is a plain dict. Concurrent compile() calls
can at worst compile a pattern twice; share a matcher across threads only
if that is acceptable.

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, AnyStr, Protocol

from rastro.errors import PatternError
from rastro.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MatchSpan:
    """Leftmost match reported by a matcher.
    
    Attributes:
        start: Match start, relative to the searched window
        end: Match end (exclusive), relative to the searched window
        groups: Captured group texts (None for groups that did not participate)
        named: Named group texts
        
    """

    start: int
    end: int
    groups: tuple[Any, ...] = ()
    named: Mapping[str, Any] = field(default_factory=dict)


class PatternMatcher(Protocol):
    """Protocol for the pattern engine consumed by Scanner.

    Implementations must evaluate start-of-input assertions relative to
    offset 0 of the window they are given.
    """

    def compile(self, pattern: Any) -> Any:
        """Compile pattern, raising PatternError if it is malformed."""
        ...

    def find_leftmost(
        self,
        compiled: Any,
        window: AnyStr,
        *,
        anchored: bool = False,
    ) -> MatchSpan | None:
        """Find the leftmost match of compiled in window.

        Args:
            compiled: Result of compile()
            window: Text to search; offset 0 is the anchor origin
            anchored: Hint that only a match starting at offset 0 is wanted.
                Implementations may ignore it.

        Returns:
            MatchSpan in window coordinates, or None if there is no match
        """
        ...


class RegexMatcher:
    """PatternMatcher backed by the standard library re module.

    Compiled patterns are cached per (pattern, flags). The cache is
    cleared wholesale when it reaches cache_size, the same strategy re
    uses for its own module-level cache.

    Usage:
        >>> matcher = RegexMatcher()
        >>> compiled = matcher.compile(r"\\d+")
        >>> matcher.find_leftmost(compiled, "ab12")
        MatchSpan(start=2, end=4, groups=(), named={})

    """

    __slots__ = ("_flags", "_cache_size", "_cache")

    def __init__(self, flags: int | re.RegexFlag = 0, cache_size: int = 128) -> None:
        """Initialize matcher.

        Args:
            flags: re flags applied to textual patterns
            cache_size: Maximum number of cached compiled patterns (0 disables)
        """
        self._flags = flags
        self._cache_size = cache_size
        self._cache: dict[tuple[type, str | bytes, int], re.Pattern] = {}

    @property
    def flags(self) -> int:
        return int(self._flags)

    def compile(self, pattern: str | bytes | re.Pattern) -> re.Pattern:
        """Compile pattern text into an re.Pattern.

        Already compiled patterns are returned unchanged (their own flags
        win over the matcher's).

        Raises:
            PatternError: If re rejects the pattern
        """
        if isinstance(pattern, re.Pattern):
            return pattern

        key = (type(pattern), pattern, int(self._flags))
        compiled = self._cache.get(key)
        if compiled is not None:
            return compiled

        logger.debug("Compiling pattern %r (flags=%d)", pattern, self._flags)
        try:
            compiled = re.compile(pattern, self._flags)
        except (re.error, TypeError) as e:
            raise PatternError(pattern, str(e)) from e

        if self._cache_size > 0:
            if len(self._cache) >= self._cache_size:
                self._cache.clear()
            self._cache[key] = compiled
        return compiled

    def find_leftmost(
        self,
        compiled: re.Pattern,
        window: AnyStr,
        *,
        anchored: bool = False,
    ) -> MatchSpan | None:
        """Find the leftmost match of compiled in window.

        With anchored=True only a match at offset 0 is attempted
        (re.Pattern.match), which avoids searching the whole window.
        """
        try:
            m = compiled.match(window) if anchored else compiled.search(window)
        except TypeError as e:
            # str pattern on a bytes window or the reverse
            raise PatternError(compiled.pattern, str(e)) from e
        if m is None:
            return None
        return MatchSpan(
            start=m.start(),
            end=m.end(),
            groups=m.groups(),
            named=m.groupdict(),
        )

    def clear_cache(self) -> None:
        """Drop all cached compiled patterns."""
        self._cache.clear()

    def __repr__(self) -> str:
        return f"RegexMatcher(flags={self.flags}, cached={len(self._cache)})"


# Shared default matchers, one per (flags, cache_size), so scanners created
# under the same config reuse one compile cache.
_DEFAULT_MATCHERS: dict[tuple[int, int], RegexMatcher] = {}


def default_matcher(flags: int | re.RegexFlag = 0, cache_size: int = 128) -> RegexMatcher:
    """Return the shared RegexMatcher for the given settings."""
    key = (int(flags), cache_size)
    matcher = _DEFAULT_MATCHERS.get(key)
    if matcher is None:
        matcher = _DEFAULT_MATCHERS[key] = RegexMatcher(flags, cache_size)
    return matcher


__all__ = ["MatchSpan", "PatternMatcher", "RegexMatcher", "default_matcher"]

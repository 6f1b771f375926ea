"""Source location tracking for lexers built on Scanner.

Provides SourceLocation dataclass for reporting a scan position as
line and column, computed on demand from an absolute offset.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line/column view of an offset in a scanned buffer.
    
    lineno and col_offset are 1-indexed; offset is the 0-indexed absolute
    position in the buffer. Columns count code points (or bytes for a
    bytes buffer).
    
    Examples:
        >>> SourceLocation.from_offset("ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4)
        >>> str(SourceLocation(3, 7, 20))
        '3:7'

    """

    lineno: int
    col_offset: int
    offset: int = 0

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "10:5"
        """
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(cls, buffer: str | bytes, offset: int) -> SourceLocation:
        """Compute the location of offset within buffer.

        Lines are delimited by line feed only; a CR-only buffer reports
        everything on line 1.
        """
        newline = "\n" if isinstance(buffer, str) else b"\n"
        lineno = buffer.count(newline, 0, offset) + 1
        last_nl = buffer.rfind(newline, 0, offset)
        return cls(lineno=lineno, col_offset=offset - last_nl, offset=offset)

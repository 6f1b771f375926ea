"""Exception classes for Rastro.

Provides standardized exceptions for error handling throughout Rastro.

"No match" is not an error: matching operations return None instead.
"""

from __future__ import annotations


class RastroError(Exception):
    """Base exception for all Rastro errors.
    
    Subclass this for specific error categories.
    """

    pass


class PatternError(RastroError):
    """Pattern text rejected by the pattern matcher.
    
    Raised when a scanning operation is given a malformed pattern, or a
    pattern whose type (str/bytes) does not match the scanned buffer.
    """

    def __init__(self, pattern: object, message: str) -> None:
        """Initialize pattern error.
        
        Args:
            pattern: The offending pattern (text, bytes, or compiled object)
            message: Description of the problem
        """
        self.pattern = pattern
        self.message = message
        super().__init__(f"Invalid pattern {pattern!r}: {message}")


class InvalidPosition(RastroError, IndexError):
    """Scan position outside the buffer.
    
    Raised by set_position()/terminate() when the offset is not in
    [0, length]. The scanner state is left unchanged.
    """

    def __init__(self, position: int, length: int) -> None:
        """Initialize invalid position error.
        
        Args:
            position: The rejected offset
            length: Length of the scanned buffer
        """
        self.position = position
        self.length = length
        super().__init__(f"Position {position} outside buffer of length {length}")

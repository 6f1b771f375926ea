"""Error-path tests.

Malformed patterns and bad positions raise; "no match" never does.
"""

import pytest

from rastro import InvalidPosition, PatternError, RastroError, Scanner


class TestPatternError:
    def test_message_includes_pattern(self) -> None:
        err = PatternError("(", "missing )")
        assert "'('" in str(err)
        assert "missing )" in str(err)
        assert err.pattern == "("
        assert err.message == "missing )"

    def test_is_rastro_error(self) -> None:
        assert isinstance(PatternError("x", "y"), RastroError)

    @pytest.mark.parametrize("method", ["scan", "scan_until", "check", "check_until"])
    def test_malformed_pattern_propagates_without_mutation(self, method: str) -> None:
        s = Scanner("This is a test")
        s.scan("This")
        with pytest.raises(PatternError):
            getattr(s, method)("(unclosed")
        assert s.position == 4
        assert s.matched() == "This"

    def test_str_pattern_on_bytes_buffer(self) -> None:
        s = Scanner(b"abc")
        with pytest.raises(PatternError, match="str pattern"):
            s.scan("a")

    def test_bytes_pattern_on_str_buffer(self) -> None:
        s = Scanner("abc")
        with pytest.raises(PatternError, match="bytes pattern"):
            s.scan_until(b"a")


class TestInvalidPosition:
    def test_attributes_and_message(self) -> None:
        err = InvalidPosition(9, 3)
        assert err.position == 9
        assert err.length == 3
        assert "9" in str(err)
        assert "3" in str(err)

    def test_is_index_error(self) -> None:
        err = InvalidPosition(-1, 0)
        assert isinstance(err, IndexError)
        assert isinstance(err, RastroError)

    def test_empty_buffer_only_accepts_zero(self) -> None:
        s = Scanner("")
        s.set_position(0)
        with pytest.raises(InvalidPosition):
            s.set_position(1)

    def test_non_integer_position(self) -> None:
        s = Scanner("abc")
        with pytest.raises(TypeError):
            s.set_position(1.5)  # type: ignore[arg-type]
        assert s.position == 0


class TestNoMatchIsNotAnError:
    @pytest.mark.parametrize("method", ["scan", "scan_until", "check", "check_until"])
    def test_returns_none(self, method: str) -> None:
        assert getattr(Scanner("abc"), method)(r"\d") is None

    def test_scanning_past_end(self) -> None:
        s = Scanner("abc")
        s.terminate()
        s.getch()
        assert s.scan(r".") is None
        assert s.scan_until(r".") is None


class TestConstruction:
    @pytest.mark.parametrize("buffer", [None, 42, ["a"], bytearray(b"a")])
    def test_rejects_non_text_buffers(self, buffer: object) -> None:
        with pytest.raises(TypeError, match="str or bytes"):
            Scanner(buffer)  # type: ignore[arg-type]

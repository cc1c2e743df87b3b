"""
Tests for the command tree lexer.

This module tests tokenization of words, structural characters, quoted
strings and comments, line tracking, look-ahead behaviour and error
reporting.
"""

import io

import pytest

from cmdtree.exceptions import LexError
from cmdtree.parsing.lexer import Lexer, Token, TokenType, tokenize


def _types(source: str) -> list[TokenType]:
    """Return the token types for all tokens except EOF."""
    return [tok.type for tok in tokenize(source)[:-1]]


def _texts(source: str) -> list[str]:
    """Return the token texts for all tokens except EOF."""
    return [tok.text for tok in tokenize(source)[:-1]]


class ByteReader:
    """Minimal reader returning bytes, without the io base classes."""

    def __init__(self, data: bytes):
        self.data = data

    def read(self, size):
        chunk, self.data = self.data[:size], self.data[size:]
        return chunk


def _drain(lexer: Lexer) -> list[Token]:
    tokens = [lexer.next()]
    while not tokens[-1].is_eof:
        tokens.append(lexer.next())
    return tokens


class TestStructuralTokens:
    """Tests for '{', '}' and ';'."""

    def test_structural_characters_are_standalone_tokens(self):
        assert _types("{ } ;") == [
            TokenType.OPEN_SCOPE,
            TokenType.CLOSE_SCOPE,
            TokenType.TERMINATOR,
        ]

    def test_structural_characters_split_words(self):
        assert _types("foo{bar;}") == [
            TokenType.WORD,
            TokenType.OPEN_SCOPE,
            TokenType.WORD,
            TokenType.TERMINATOR,
            TokenType.CLOSE_SCOPE,
        ]
        assert _texts("foo{bar;}") == ["foo", "{", "bar", ";", "}"]


class TestWords:
    """Tests for unquoted word tokens."""

    def test_printable_runs_form_words(self):
        assert _texts("foo bar-baz minecraft:entity a/b +1.5e3") == [
            "foo",
            "bar-baz",
            "minecraft:entity",
            "a/b",
            "+1.5e3",
        ]

    def test_control_characters_are_whitespace(self):
        assert _texts("a\x00\x01\tb\x0bc") == ["a", "b", "c"]

    def test_slashes_inside_word_are_not_comments(self):
        assert _texts("a//b c/*d") == ["a//b", "c/*d"]

    def test_quote_ends_word(self):
        tokens = tokenize('foo"bar"')
        assert [t.text for t in tokens[:-1]] == ["foo", "bar"]
        assert tokens[0].quoted is False
        assert tokens[1].quoted is True

    def test_token_str(self):
        assert str(Token(TokenType.WORD, "give")) == "word 'give'"
        assert str(Token(TokenType.OPEN_SCOPE, "{")) == "'{'"
        assert str(Token(TokenType.EOF)) == "end of input"


class TestQuotedStrings:
    """Tests for double-quoted word tokens."""

    def test_quoted_string_is_single_word(self):
        tokens = tokenize('"hello world"')
        assert tokens[0].type is TokenType.WORD
        assert tokens[0].text == "hello world"
        assert tokens[0].quoted is True

    def test_quoted_structural_character_is_a_word(self):
        tokens = tokenize('"{" ";"')
        assert [t.type for t in tokens[:-1]] == [TokenType.WORD, TokenType.WORD]
        assert [t.text for t in tokens[:-1]] == ["{", ";"]

    def test_empty_quoted_string(self):
        tokens = tokenize('""')
        assert tokens[0].type is TokenType.WORD
        assert tokens[0].text == ""

    def test_escape_sequences(self):
        tokens = tokenize(r'"a\"b\\c\nd\te"')
        assert tokens[0].text == 'a"b\\c\nd\te'

    def test_unknown_escape_is_kept(self):
        tokens = tokenize(r'"C:\path"')
        assert tokens[0].text == "C:\\path"

    def test_quoted_string_may_contain_non_ascii(self):
        tokens = tokenize('"héllo ✓"')
        assert tokens[0].text == "héllo ✓"

    def test_unterminated_quote_at_end_of_input(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('root "abc')
        assert "Unterminated quoted string" in str(exc_info.value)
        assert exc_info.value.line == 1

    def test_quoted_string_cannot_span_lines(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('a\n"ab\ncd"')
        assert exc_info.value.line == 2


class TestComments:
    """Tests for comment stripping."""

    def test_line_comment(self):
        assert _texts("foo // a comment { ; }\nbar") == ["foo", "bar"]

    def test_block_comment(self):
        assert _texts("foo /* skip { } ; */ bar") == ["foo", "bar"]

    def test_comment_directly_after_structural_token(self):
        assert _texts("foo;// trailing\nbar;/* x */") == ["foo", ";", "bar", ";"]

    def test_block_comment_advances_lines(self):
        tokens = tokenize("foo /* one\ntwo\nthree */ bar")
        assert tokens[1].text == "bar"
        assert tokens[1].line == 3

    def test_unterminated_block_comment_runs_to_end(self):
        tokens = tokenize("foo /* never closed ;")
        assert [t.type for t in tokens] == [TokenType.WORD, TokenType.EOF]


class TestLineTracking:
    """Tests for 1-based line numbers."""

    def test_tokens_carry_start_line(self):
        tokens = tokenize("a\nb\r\nc\rd")
        assert [t.line for t in tokens[:-1]] == [1, 2, 3, 4]

    def test_empty_input_eof_on_line_one(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].is_eof
        assert tokens[0].line == 1

    def test_eof_line_after_trailing_newline(self):
        tokens = tokenize("a;\n")
        assert tokens[-1].line == 2

    def test_current_line_follows_produced_tokens(self, make_lexer):
        lexer = make_lexer("a\n\nb")
        lexer.next()
        assert lexer.current_line() == 1
        lexer.peek()
        assert lexer.current_line() == 3


class TestLookAhead:
    """Tests for peek/next semantics."""

    def test_peek_is_idempotent(self, make_lexer):
        lexer = make_lexer("a b")
        first = lexer.peek()
        assert lexer.peek() is first
        assert lexer.peek() is first
        assert first.text == "a"

    def test_next_after_peek_returns_peeked_token(self, make_lexer):
        lexer = make_lexer("a b")
        peeked = lexer.peek()
        assert lexer.next() is peeked
        assert lexer.next().text == "b"

    def test_end_of_input_is_repeated(self, make_lexer):
        lexer = make_lexer("a")
        lexer.next()
        eof = lexer.next()
        assert eof.is_eof
        assert lexer.next() is eof
        assert lexer.peek() is eof
        assert lexer.next().is_eof

    @pytest.mark.parametrize("chunk_size", [1, 2, 3])
    def test_small_chunks_match_whole_read(self, make_lexer, chunk_size):
        source = 'root {\n  // c\n  a "q w" /* x */ b;\n}\r\n'
        lexer = make_lexer(source, chunk_size=chunk_size)
        tokens = [lexer.next()]
        while not tokens[-1].is_eof:
            tokens.append(lexer.next())
        assert tokens == tokenize(source)

    @pytest.mark.parametrize("chunk_size", [1, 2, 8192])
    def test_byte_reader_is_decoded(self, chunk_size):
        source = 'root {\n  "grüße ✓";\n}'
        lexer = Lexer(ByteReader(source.encode("utf-8")), chunk_size=chunk_size)
        assert _drain(lexer) == tokenize(source)


class TestLexErrors:
    """Tests for character-level failures."""

    @pytest.mark.parametrize("char", ["é", "\x7f", "\u00a0", "✓"])
    def test_unexpected_character(self, char):
        with pytest.raises(LexError) as exc_info:
            tokenize(f"root {{\n  a{char};\n}}")
        assert "Unexpected character" in str(exc_info.value)
        assert exc_info.value.line == 2

    def test_read_failure_is_wrapped(self):
        failure = OSError("disk on fire")

        class FailingReader:
            def read(self, size):
                raise failure

        lexer = Lexer(FailingReader())
        with pytest.raises(LexError) as exc_info:
            lexer.next()
        assert exc_info.value.cause is failure
        assert exc_info.value.__cause__ is failure
        assert exc_info.value.line == 1

    def test_read_failure_after_partial_input_reports_line(self):
        class FlakyReader:
            def __init__(self):
                self.calls = 0

            def read(self, size):
                self.calls += 1
                if self.calls == 1:
                    return "root {\n  a;\n"
                raise OSError("connection reset")

        lexer = Lexer(FlakyReader())
        assert lexer.next().text == "root"
        assert lexer.next().type is TokenType.OPEN_SCOPE
        assert lexer.next().text == "a"
        assert lexer.next().type is TokenType.TERMINATOR
        with pytest.raises(LexError) as exc_info:
            lexer.next()
        assert exc_info.value.line == 3
        assert isinstance(exc_info.value.cause, OSError)

    def test_non_text_read_result(self):
        class NumberReader:
            def read(self, size):
                return 42

        with pytest.raises(LexError) as exc_info:
            Lexer(NumberReader()).next()
        assert "Source returned int, expected text or bytes" in str(exc_info.value)

    def test_truncated_utf8_at_end_of_bytes(self):
        with pytest.raises(LexError) as exc_info:
            _drain(Lexer(ByteReader(b'root "\xc3')))
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_closed_stream_is_wrapped(self):
        stream = io.StringIO("root;")
        stream.close()
        with pytest.raises(LexError) as exc_info:
            Lexer(stream).next()
        assert isinstance(exc_info.value.cause, ValueError)

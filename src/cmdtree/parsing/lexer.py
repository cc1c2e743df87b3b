"""
Lexer for command tree sources.

This module turns a character stream into a lazily produced, peekable stream
of tokens. Comments (`//` and `/* */`) and whitespace are discarded; the
structural characters `{`, `}` and `;` become standalone tokens; double-quoted
strings and runs of printable ASCII characters become word tokens.
"""

import codecs
import io
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from cmdtree.exceptions.core import LexError


class TokenType(Enum):
    """Kind of token produced by the lexer."""

    OPEN_SCOPE = "{"
    CLOSE_SCOPE = "}"
    TERMINATOR = ";"
    WORD = "word"
    EOF = "end of input"


STRUCTURAL_CHARACTERS = {
    "{": TokenType.OPEN_SCOPE,
    "}": TokenType.CLOSE_SCOPE,
    ";": TokenType.TERMINATOR,
}

SOURCE_ENCODING = "utf-8"

QUOTE = '"'

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", QUOTE: QUOTE, "\\": "\\"}


def is_word_char(char: str) -> bool:
    """Check whether a character may appear in an unquoted word."""
    return "!" <= char <= "~" and char not in STRUCTURAL_CHARACTERS and char != QUOTE


@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    Params:
        type: Token kind
        text: Word text (empty for structural and end-of-input tokens)
        line: 1-based line on which the token starts
        quoted: True if the word was written as a double-quoted string
    """

    type: TokenType
    text: str = ""
    line: int = 1
    quoted: bool = False

    @property
    def is_word(self) -> bool:
        return self.type is TokenType.WORD

    @property
    def is_eof(self) -> bool:
        return self.type is TokenType.EOF

    def __str__(self) -> str:
        if self.type is TokenType.WORD:
            return f"word '{self.text}'"
        if self.type is TokenType.EOF:
            return "end of input"
        return f"'{self.type.value}'"


class Lexer:
    """
    Peekable token stream over a text source.

    The source is read lazily in chunks. Once the input is exhausted, `next()`
    and `peek()` keep returning the same end-of-input token. A lexer instance
    holds sequential read state and must not be shared between threads.

    The reader may return text or bytes; bytes are decoded as UTF-8.
    """

    def __init__(self, reader: TextIO, *, chunk_size: int = 8192):
        self._reader = reader
        self._chunk_size = chunk_size
        self._buffer = ""
        self._pos = 0
        self._exhausted = False
        self._line = 1
        self._token_line = 1
        self._lookahead: Token | None = None
        self._decoder: codecs.IncrementalDecoder | None = None

    def current_line(self) -> int:
        """Return the line of the most recently produced token."""
        return self._token_line

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._scan()
        return self._lookahead

    def next(self) -> Token:
        """Return and consume the next token."""
        token = self.peek()
        if not token.is_eof:
            self._lookahead = None
        return token

    # Character level

    def _read_chunk(self) -> str:
        while True:
            chunk = self._reader.read(self._chunk_size)
            if isinstance(chunk, str):
                return chunk
            if not isinstance(chunk, (bytes, bytearray)):
                raise LexError(
                    f"Source returned {type(chunk).__name__}, expected text or bytes",
                    self._line,
                )
            if self._decoder is None:
                self._decoder = codecs.getincrementaldecoder(SOURCE_ENCODING)()
            text = self._decoder.decode(chunk, final=not chunk)
            # a chunk may end inside a multi-byte sequence
            if text or not chunk:
                return text

    def _fill(self) -> bool:
        if self._exhausted:
            return False
        try:
            chunk = self._read_chunk()
        except (OSError, ValueError) as exc:
            raise LexError(
                f"Failed to read source: {exc}", self._line, cause=exc
            ) from exc
        if not chunk:
            self._exhausted = True
            return False
        self._buffer = self._buffer[self._pos :] + chunk
        self._pos = 0
        return True

    def _peek_char(self, offset: int = 0) -> str:
        while self._pos + offset >= len(self._buffer):
            if not self._fill():
                return ""
        return self._buffer[self._pos + offset]

    def _advance(self) -> str:
        char = self._peek_char()
        if not char:
            return char
        self._pos += 1
        if char == "\n":
            self._line += 1
        elif char == "\r" and self._peek_char() != "\n":
            self._line += 1
        return char

    # Token level

    def _produce(self, type_: TokenType, text: str, line: int, quoted: bool = False) -> Token:
        self._token_line = line
        return Token(type=type_, text=text, line=line, quoted=quoted)

    def _scan(self) -> Token:
        while True:
            char = self._peek_char()
            if not char:
                return self._produce(TokenType.EOF, "", self._line)
            if char <= " ":
                self._advance()
            elif char == "/" and self._peek_char(1) in ("/", "*"):
                self._skip_comment()
            else:
                break

        line = self._line
        if char in STRUCTURAL_CHARACTERS:
            self._advance()
            return self._produce(STRUCTURAL_CHARACTERS[char], char, line)
        if char == QUOTE:
            return self._scan_quoted()
        if is_word_char(char):
            return self._scan_word()
        raise LexError(f"Unexpected character {char!r}", line, token=char)

    def _skip_comment(self) -> None:
        self._advance()
        if self._advance() == "/":
            while self._peek_char() not in ("", "\n", "\r"):
                self._advance()
            return
        # block comment; an unterminated one runs to end of input
        while True:
            char = self._advance()
            if not char:
                return
            if char == "*" and self._peek_char() == "/":
                self._advance()
                return

    def _scan_word(self) -> Token:
        line = self._line
        chars = []
        while is_word_char(self._peek_char()):
            chars.append(self._advance())
        return self._produce(TokenType.WORD, "".join(chars), line)

    def _scan_quoted(self) -> Token:
        line = self._line
        self._advance()
        chars = []
        while True:
            char = self._advance()
            if char in ("", "\n", "\r"):
                raise LexError("Unterminated quoted string", line, token=QUOTE)
            if char == QUOTE:
                return self._produce(TokenType.WORD, "".join(chars), line, quoted=True)
            if char == "\\":
                escaped = self._advance()
                if escaped in ("", "\n", "\r"):
                    raise LexError("Unterminated quoted string", line, token=QUOTE)
                chars.append(ESCAPES.get(escaped, "\\" + escaped))
            else:
                chars.append(char)


def tokenize(text: str) -> list[Token]:
    """
    Tokenize a complete source string.

    Params:
        text: Source text

    Returns:
        All tokens in order, ending with the end-of-input token
    """
    lexer = Lexer(io.StringIO(text))
    tokens = [lexer.next()]
    while not tokens[-1].is_eof:
        tokens.append(lexer.next())
    return tokens

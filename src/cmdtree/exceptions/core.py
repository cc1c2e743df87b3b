"""
Exception classes for command tree parsing.

This module defines the error types raised while lexing a command tree source,
parsing its grammar, and resolving argument types. Every error carries the
1-based line number at which the problem was detected and, where one exists,
the underlying cause.
"""

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Location information for error messages.

    Params:
        line: 1-based line number where the problem was detected
        source_name: Name of the source being parsed (usually a file path)
        token: Text of the offending token, if any
    """

    line: int
    source_name: str | None = None
    token: str | None = None

    def format_location(self) -> str:
        """
        Format the location suffix appended to error messages.

        Returns:
            "at line N" or "at <source_name>:N"
        """
        if self.source_name:
            return f"at {self.source_name}:{self.line}"
        return f"at line {self.line}"


class CommandTreeError(Exception):
    """Base exception for all command tree errors."""

    def __init__(
        self,
        message: str,
        line: int,
        *,
        source_name: str | None = None,
        token: str | None = None,
        cause: BaseException | None = None,
    ):
        """
        Initialize the exception.

        Params:
            message: Human-readable description of what was expected vs. found
            line: 1-based line number where the problem was detected
            source_name: Optional name of the source being parsed
            token: Optional text of the offending token
            cause: Optional underlying exception
        """
        self.message = message
        self.context = ErrorContext(line=line, source_name=source_name, token=token)
        self.cause = cause
        super().__init__(f"{message} ({self.context.format_location()})")

    @property
    def line(self) -> int:
        return self.context.line

    @property
    def source_name(self) -> str | None:
        return self.context.source_name

    def __reduce__(self):
        # constructor signatures differ between subclasses
        return _restore_error, (type(self), self.args, self.__dict__.copy())

    def with_source_name(self, source_name: str | None) -> "CommandTreeError":
        """
        Return an equivalent error annotated with a source name.

        The returned error keeps the type, line, token and cause of this one.
        """
        if source_name is None or self.source_name == source_name:
            return self
        clone = self.__class__.__new__(self.__class__)
        CommandTreeError.__init__(
            clone,
            self.message,
            self.line,
            source_name=source_name,
            token=self.context.token,
            cause=self.cause,
        )
        clone.__dict__.update(
            {k: v for k, v in self.__dict__.items() if k not in clone.__dict__}
        )
        return clone


def _restore_error(cls: type, args: tuple, state: dict) -> CommandTreeError:
    error = cls.__new__(cls)
    error.args = args
    error.__dict__.update(state)
    return error


class LexError(CommandTreeError):
    """Raised on malformed input at the character level or on read failures."""

    pass


class ParseError(CommandTreeError):
    """Raised on malformed input at the grammar level."""

    pass


class ArgumentTypeError(ParseError):
    """Raised when an argument type declaration cannot be resolved."""

    pass


class DuplicateChildError(ParseError):
    """Raised when two sibling nodes share a name."""

    def __init__(self, name: str, parent: str, line: int, **kwargs):
        """
        Initialize the exception.

        Params:
            name: The duplicated child name
            parent: Name of the node both children belong to
            line: Line of the second occurrence
        """
        self.name = name
        self.parent = parent
        super().__init__(
            f"Duplicate child node '{name}' under '{parent}'", line, **kwargs
        )


class NestingDepthError(ParseError):
    """Raised when node nesting exceeds the configured depth limit."""

    pass

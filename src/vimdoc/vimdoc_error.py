"""Exception classes for the vimdoc converter."""


class VimdocError(Exception):
    """Base exception for all vimdoc conversion errors."""


class VimdocParseError(VimdocError):
    """Exception raised when the input cannot be interpreted as text at all."""

    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        """
        Initialize a parse error.

        Args:
            message: Description of the problem
            line: Zero-based line number where the problem was found
            column: Zero-based column where the problem was found
        """
        super().__init__(f"{message}: line {line}, column {column}")
        self.message: str = message
        self.line: int = line
        self.column: int = column

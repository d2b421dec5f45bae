"""
docdiff.errors — Failures raised around the diff engine.

The engine itself is total: any two documents can be diffed.  Errors
come from the edges, when text is read, parsed, or written.
"""

from pathlib import Path
from typing import Optional, Union


class DocDiffError(Exception):
    """Base class for every error raised by docdiff."""


class ParseError(DocDiffError, ValueError):
    """
    Input text is not a well-formed document.

    Carries the location of the problem when the parser reports one:
        str(err)  →  "original.json:3:14: Expecting ',' delimiter"
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.source = source
        self.line = line
        self.column = column

    def __str__(self) -> str:
        location = [str(part) for part in (self.source, self.line, self.column)
                    if part is not None]
        if not location:
            return self.message
        return f"{':'.join(location)}: {self.message}"


class DocumentNotFoundError(DocDiffError, FileNotFoundError):
    """A named input document does not exist."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Document not found: {path}")
        self.path = Path(path)


class OutputError(DocDiffError, OSError):
    """Writing a diff result failed."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        super().__init__(f"Could not write diff to {path}: {cause}")
        self.path = Path(path)
        self.cause = cause

"""
docdiff.formats — Reading documents in and writing results out.

Supported conversions:
    • Python objects (dict, list, str, int, float, bool, None) ↔ Document
    • JSON strings ↔ Document
    • JSON files → Document, diff result → JSON file
"""

import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Optional, Union

from .core import (
    Array, Bool, Document, Null, Number, Object, String,
    count_changes, describe, diff,
)
from .errors import DocDiffError, DocumentNotFoundError, OutputError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "diff_output.json"

PathLike = Union[str, Path]


class _Missing:
    """Marker for a key that is present but bound to no value."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS ↔ DOCUMENTS
# ═══════════════════════════════════════════════════════════════════

def from_python(obj: Any) -> Document:
    """
    Convert a Python object to a document.

    Mapping:
        None       → Null()
        bool       → Bool
        int/float  → Number
        str        → String
        list/tuple → Array
        dict       → Object   (keys converted with str())

    A dict key bound to MISSING is dropped, so {"a": MISSING} reads the
    same as {}.  Inside a list MISSING becomes Null(), keeping the
    position.  NaN and infinities are rejected with ValueError, and any
    other type with TypeError.
    """
    if obj is None or obj is MISSING:
        return Null()
    if isinstance(obj, bool):  # Must check before int (bool is subclass of int)
        return Bool(obj)
    if isinstance(obj, (int, float)):
        if isinstance(obj, float) and not math.isfinite(obj):
            raise ValueError(f"Non-finite number is not a document value: {obj!r}")
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        return Array(from_python(item) for item in obj)
    if isinstance(obj, dict):
        return Object({str(k): from_python(v) for k, v in obj.items()
                       if v is not MISSING})
    raise TypeError(f"Cannot convert {type(obj).__name__} to a document")


def to_python(doc: Optional[Document], unchanged: Any = None) -> Any:
    """
    Convert a document or diff result back to plain Python objects.

    Inverse of from_python.  Placeholders for unchanged array positions
    become `unchanged`; the default None serializes as JSON null.
    """
    if doc is None:
        return unchanged
    if isinstance(doc, Null):
        return None
    if isinstance(doc, (Bool, Number, String)):
        return doc.value
    if isinstance(doc, Array):
        return [to_python(item, unchanged) for item in doc.items]
    if isinstance(doc, Object):
        return {k: to_python(v, unchanged) for k, v in doc.entries.items()}
    raise TypeError(f"Unknown Document type: {type(doc)}")


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ DOCUMENTS
# ═══════════════════════════════════════════════════════════════════

def from_json(text: str, source: Optional[str] = None) -> Document:
    """
    Parse strict JSON text into a document.

    NaN and Infinity literals are refused, and so are numbers too large
    for a float (1e400).  Any syntax problem raises ParseError with the
    line and column the parser stopped at.

    Nesting is limited by the interpreter's recursion limit
    (sys.getrecursionlimit(), 1000 by default); parsing and conversion
    share that stack, so documents nested a few hundred levels deep are
    already refused.
    """
    def reject_constant(name: str) -> Any:
        raise ParseError(f"{name} is not a valid JSON number", source)

    def parse_float(literal: str) -> float:
        value = float(literal)
        if not math.isfinite(value):
            raise ParseError(f"number {literal} is out of range", source)
        return value

    try:
        obj = json.loads(text, parse_constant=reject_constant,
                         parse_float=parse_float)
        return from_python(obj)
    except ParseError:
        raise
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, source, exc.lineno, exc.colno) from exc
    except ValueError as exc:
        # e.g. integer literals past the int string-conversion limit
        raise ParseError(str(exc), source) from exc
    except RecursionError as exc:
        raise ParseError(
            "document nesting exceeds the recursion limit "
            f"({sys.getrecursionlimit()} frames)", source) from exc


def to_json(doc: Optional[Document], indent: Optional[int] = 2,
            unchanged: Any = None, **kwargs) -> str:
    """Serialize a document or diff result as JSON text."""
    return json.dumps(to_python(doc, unchanged), indent=indent,
                      ensure_ascii=False, **kwargs)


# ═══════════════════════════════════════════════════════════════════
#  FILES
# ═══════════════════════════════════════════════════════════════════

def load_document(path: PathLike) -> Document:
    """Read and parse a UTF-8 JSON file."""
    path = Path(path)
    if not path.is_file():
        raise DocumentNotFoundError(path)

    logger.debug("Reading %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"not valid UTF-8 ({exc.reason})", str(path)) from exc
    doc = from_json(text, source=str(path))
    logger.debug("Parsed %s: %s with %d nodes", path, describe(doc), doc.size())
    return doc


def compare_files(original_path: PathLike,
                  modified_path: PathLike) -> Optional[Document]:
    """
    Read two JSON files and return their differences.

    Returns None when the files hold equal documents.
    """
    try:
        original = load_document(original_path)
        modified = load_document(modified_path)
    except (DocDiffError, OSError) as exc:
        logger.error("Error comparing JSON files: %s", exc)
        raise

    result = diff(original, modified)
    logger.info("Compared %s with %s: %d changed value(s)",
                original_path, modified_path, count_changes(result))
    return result


def default_output_path(original_path: PathLike,
                        name: str = DEFAULT_OUTPUT_NAME) -> Path:
    """Where a diff is written by default: next to the original file."""
    return Path(original_path).parent / name


def write_result(result: Optional[Document], path: PathLike,
                 indent: Optional[int] = 2, unchanged: Any = None) -> bool:
    """
    Write a diff result as JSON.

    An absent result means there is nothing to report, so no file is
    written and False is returned.  Returns True once the file exists.
    """
    if result is None:
        logger.info("No differences; nothing written to %s", path)
        return False

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(to_json(result, indent=indent, unchanged=unchanged) + "\n",
                        encoding="utf-8")
    except OSError as exc:
        raise OutputError(path, exc) from exc

    logger.info("Wrote diff to %s", path)
    return True

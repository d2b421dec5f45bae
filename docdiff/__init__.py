"""
Minimal Structural Difference (docdiff)
=======================================

Show only what changed between two JSON-style documents.

    diff(from_python({"a": 1, "b": 2}), from_python({"a": 1, "b": 3}))
        → Object({"b": Number(3)})
    diff(from_python([1, 2, 3]), from_python([1, 5, 3]))
        → Array([None, Number(5), None])
    diff(from_python({"a": 1}), from_python({"a": 1}))
        → None

The result has the shape of the modified document but keeps only the
changed parts:
  • Changed scalars and new keys appear in full
  • Arrays are compared position by position; a length change
    replaces the whole array
  • A change of kind replaces the whole value
  • Removed keys are not shown
"""

from docdiff.core import (
    # Types
    Kind,
    Document,
    Null,
    Bool,
    Number,
    String,
    Array,
    Object,
    # Diff
    diff,
    iter_changes,
    count_changes,
    format_path,
)
from docdiff.errors import (
    DocDiffError, ParseError, DocumentNotFoundError, OutputError,
)
from docdiff.formats import (
    MISSING, from_python, to_python, from_json, to_json,
    load_document, compare_files, write_result, default_output_path,
)

__version__ = "0.1.0"
__all__ = [
    "Kind", "Document", "Null", "Bool", "Number", "String", "Array", "Object",
    "diff", "iter_changes", "count_changes", "format_path",
    "DocDiffError", "ParseError", "DocumentNotFoundError", "OutputError",
    "MISSING", "from_python", "to_python", "from_json", "to_json",
    "load_document", "compare_files", "write_result", "default_output_path",
]

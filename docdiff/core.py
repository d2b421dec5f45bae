"""
docdiff.core — Minimal Structural Difference
=============================================

§1  THE DOCUMENT MODEL
──────────────────────

A Document is a finite tree built from six kinds:

    Null()                          JSON null
    Bool(True)                      JSON true / false
    Number(42), Number(3.14)        JSON number (float64 value semantics)
    String("hello")                 JSON string
    Array((d₁, ..., dₙ))            ordered sequence, order is significant
    Object({k₁: d₁, ..., kₙ: dₙ})   string keys, insertion order kept for
                                    display only

The ABSENT sentinel is Python's ``None``.  It means "no value here" (a
missing side, or "no difference") and is never the same thing as
``Null()``, which is a real document.


§2  THE DIFF FUNCTION
─────────────────────

diff(original, modified) returns a Document holding only what changed,
or None when nothing did.  Rules, applied in order:

RULE 1: Kind mismatch
    Different kinds (absent counts as its own kind) → modified, whole.

RULE 2: Scalars  (Null, Bool, Number, String)
    Equal → None.  Unequal → modified.

RULE 3: Arrays
    Lengths differ → modified, whole.  No element alignment is tried,
    so an insertion in the middle replaces the entire array.
    Same length → position-wise diff.  Unchanged positions hold None
    as a placeholder, so the result keeps the original length and
    indices.  All positions unchanged → None.

RULE 4: Objects
    For each key of modified, in modified's order:
        key new      → bound to modified's value, whole
        key in both  → bound to the recursive diff, if any
    Keys removed from original do NOT appear in the result.  This
    diff format cannot express deletions.  Empty result → None.

    diff({"a": 1, "b": 2}, {"a": 1, "b": 3})  →  {"b": 3}
    diff([1, [2, 3], 4], [1, [2, 5], 4])      →  [None, [None, 5], None]
    diff({"a": 1, "b": 2}, {"a": 1})          →  None


§3  COMPLEXITY
──────────────

Each call descends into strictly smaller subtrees, so the recursion
terminates and runs in O(|original| + |modified|).  Recursion depth
equals the nesting depth of the inputs.  Inputs are never mutated, and
unchanged leaves of ``modified`` may be shared by the result.

License: MIT
"""

import json
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, ClassVar, Iterable, Iterator, Mapping, Optional, Union


# ═══════════════════════════════════════════════════════════════════
#  DOCUMENT KINDS
# ═══════════════════════════════════════════════════════════════════

class Kind(Enum):
    """The tag identifying which variant a Document is."""
    NULL = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


class Document:
    """Base class for document values.  Not instantiated directly."""
    __slots__ = ()

    kind: ClassVar[Kind]

    def size(self) -> int:
        """Number of nodes in this document."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Null(Document):
    """The JSON null value.  Distinct from the absent sentinel (None)."""
    kind: ClassVar[Kind] = Kind.NULL

    def size(self) -> int:
        return 1

    def __repr__(self) -> str:
        return "Null()"


@dataclass(frozen=True, slots=True)
class Bool(Document):
    value: bool
    kind: ClassVar[Kind] = Kind.BOOL

    def size(self) -> int:
        return 1

    def __repr__(self) -> str:
        return f"Bool({self.value!r})"


@dataclass(frozen=True, slots=True)
class Number(Document):
    """
    A numeric leaf.

    Holds an int or a float so that values print back the way they were
    read, but compares by numeric value: Number(1) == Number(1.0).
    """
    value: Union[int, float]
    kind: ClassVar[Kind] = Kind.NUMBER

    def size(self) -> int:
        return 1

    def __repr__(self) -> str:
        return f"Number({self.value!r})"


@dataclass(frozen=True, slots=True)
class String(Document):
    value: str
    kind: ClassVar[Kind] = Kind.STRING

    def size(self) -> int:
        return 1

    def __repr__(self) -> str:
        return f"String({self.value!r})"


@dataclass(frozen=True, slots=True)
class Array(Document):
    """
    An ordered sequence of documents.

    Items are documents, except inside a diff result, where None marks
    a position that did not change.

    Examples:
        Array((Number(1), Number(2)))            # [1, 2]
        Array((None, Number(5), None))           # diff: only index 1 changed
    """
    items: tuple[Optional[Document], ...]
    kind: ClassVar[Kind] = Kind.ARRAY

    def __init__(self, items: Iterable[Optional[Document]] = ()):
        object.__setattr__(self, 'items', tuple(items))

    def size(self) -> int:
        return 1 + sum(item.size() for item in self.items if item is not None)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        if len(self.items) <= 5:
            return f"Array({list(self.items)})"
        return f"Array([{self.items[0]!r}, ..., {self.items[-1]!r}] len={len(self.items)})"


@dataclass(frozen=True, slots=True)
class Object(Document):
    """
    A mapping of unique string keys to documents.

    Insertion order is preserved for display but does not take part in
    equality: Object({"a": x, "b": y}) == Object({"b": y, "a": x}).
    """
    entries: dict[str, Document]
    kind: ClassVar[Kind] = Kind.OBJECT

    def __init__(self, entries: Optional[Mapping[str, Document]] = None):
        object.__setattr__(self, 'entries', dict(entries or {}))

    def __hash__(self):
        return hash(frozenset(self.entries.items()))

    def size(self) -> int:
        return 1 + sum(v.size() for v in self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        if len(self.entries) <= 3:
            return f"Object({self.entries})"
        return f"Object({{...}} len={len(self.entries)})"


def kind_of(doc: Optional[Document]) -> Optional[Kind]:
    """Kind of a document, or None for the absent sentinel."""
    return None if doc is None else doc.kind


# ═══════════════════════════════════════════════════════════════════
#  DIFF
# ═══════════════════════════════════════════════════════════════════

def diff(original: Optional[Document],
         modified: Optional[Document]) -> Optional[Document]:
    """
    Compute the part of `modified` that differs from `original`.

    Returns None when the two are equal.  Otherwise returns a document
    of the same shape as `modified` that contains only the changes;
    see the module docstring for the exact rules.

    Never raises for well-formed documents, and never mutates its
    arguments.
    """
    # Kind mismatch, including absent vs present
    if type(original) is not type(modified):
        return modified

    if original is None:
        return None

    if isinstance(original, Array):
        return _array_diff(original, modified)

    if isinstance(original, Object):
        return _object_diff(original, modified)

    # Scalars of the same kind
    return None if original == modified else modified


def _array_diff(original: Array, modified: Array) -> Optional[Document]:
    """Position-wise diff.  Any length change replaces the whole array."""
    if len(original.items) != len(modified.items):
        return modified

    items = tuple(
        diff(old, new) for old, new in zip(original.items, modified.items)
    )
    if all(item is None for item in items):
        return None
    return Array(items)


def _object_diff(original: Object, modified: Object) -> Optional[Document]:
    """Key-wise diff over modified's keys.  Removed keys are not reported."""
    result: dict[str, Document] = {}

    for key, new in modified.entries.items():
        if key not in original.entries:
            result[key] = new
            continue
        sub = diff(original.entries[key], new)
        if sub is not None:
            result[key] = sub

    return Object(result) if result else None


# ═══════════════════════════════════════════════════════════════════
#  INSPECTING RESULTS
# ═══════════════════════════════════════════════════════════════════

KeyPath = tuple[Union[str, int], ...]


def iter_changes(result: Optional[Document],
                 path: KeyPath = ()) -> Iterator[tuple[KeyPath, Document]]:
    """
    Walk a diff result and yield (path, value) for every changed leaf.

    Leaves are scalars and empty containers.  Placeholders for unchanged
    array positions yield nothing.  A container that was replaced whole
    is reported through its leaves, since the result does not record
    whether a subtree was replaced or diffed.
    """
    if result is None:
        return
    if isinstance(result, Array) and result.items:
        for index, item in enumerate(result.items):
            yield from iter_changes(item, path + (index,))
    elif isinstance(result, Object) and result.entries:
        for key, value in result.entries.items():
            yield from iter_changes(value, path + (key,))
    else:
        yield path, result


def count_changes(result: Optional[Document]) -> int:
    """Number of changed leaves in a diff result (0 when absent)."""
    return sum(1 for _ in iter_changes(result))


_PLAIN_KEY = re.compile(r"^[A-Za-z_$][\w$-]*$")


def format_path(path: KeyPath) -> str:
    """
    Render a path for display.

        ("settings", "features", "caching")  →  settings.features.caching
        ("tags", 2)                          →  tags[2]
        ("a.b",)                             →  ["a.b"]
        ()                                   →  (root)
    """
    if not path:
        return "(root)"
    parts: list[str] = []
    for step in path:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        elif _PLAIN_KEY.fullmatch(step):
            parts.append(f".{step}" if parts else step)
        else:
            parts.append(f"[{json.dumps(step)}]")
    return "".join(parts)


def describe(doc: Any) -> str:
    """Short kind name for log and error messages ("absent" for None)."""
    kind = kind_of(doc)
    return "absent" if kind is None else kind.name.lower()

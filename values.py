"""
Runtime values for the step-by-step visualizer.

Every evaluated fragment becomes a Value tagged with a ValueKind.
Numbers are always floats; integral floats render without a fraction.
"""
import json
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class ValueKind(Enum):
    """Runtime tags understood by the evaluator."""
    NUMBER = auto()
    STRING = auto()
    BOOLEAN = auto()
    NULL = auto()
    UNDEFINED = auto()
    STRUCTURED = auto()  # JSON array / object
    SYMBOLIC = auto()    # raw text nobody could interpret


# Label shown in the variable table's "type" column
_TYPE_LABELS = {
    ValueKind.NUMBER: "number",
    ValueKind.STRING: "string",
    ValueKind.BOOLEAN: "boolean",
    ValueKind.NULL: "null",
    ValueKind.UNDEFINED: "undefined",
    ValueKind.STRUCTURED: "object",
    ValueKind.SYMBOLIC: "symbolic",
}


@dataclass(frozen=True)
class Value:
    kind: ValueKind
    data: Any = None
    unresolved_name: Optional[str] = None

    # ── constructors ──

    @classmethod
    def number(cls, n) -> 'Value':
        return cls(ValueKind.NUMBER, float(n))

    @classmethod
    def string(cls, s: str) -> 'Value':
        return cls(ValueKind.STRING, s)

    @classmethod
    def boolean(cls, b) -> 'Value':
        return cls(ValueKind.BOOLEAN, bool(b))

    @classmethod
    def null(cls) -> 'Value':
        return cls(ValueKind.NULL)

    @classmethod
    def undefined(cls) -> 'Value':
        return cls(ValueKind.UNDEFINED)

    @classmethod
    def structured(cls, data) -> 'Value':
        return cls(ValueKind.STRUCTURED, data)

    @classmethod
    def symbolic(cls, text: str) -> 'Value':
        return cls(ValueKind.SYMBOLIC, text)

    @classmethod
    def unresolved(cls, name: str) -> 'Value':
        """An identifier with no binding, rendered as ``<undefined: name>``."""
        return cls(ValueKind.SYMBOLIC, f"<undefined: {name}>", unresolved_name=name)

    # ── queries ──

    @property
    def type_label(self) -> str:
        return _TYPE_LABELS[self.kind]

    @property
    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    @property
    def is_textual(self) -> bool:
        return self.kind in (ValueKind.STRING, ValueKind.SYMBOLIC)

    @property
    def is_unresolved(self) -> bool:
        return self.unresolved_name is not None

    def same_as(self, other: 'Value') -> bool:
        """Value equality used for change detection (NaN equals NaN here)."""
        if other is None or self.kind is not other.kind:
            return False
        if self.is_number and math.isnan(self.data) and math.isnan(other.data):
            return True
        if self.kind is ValueKind.STRUCTURED:
            return same_json(self.data, other.data)
        return self.data == other.data

    # ── renderings ──

    def to_text(self) -> str:
        """Textual form used for output and string concatenation."""
        if self.kind is ValueKind.NUMBER:
            return format_number(self.data)
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.data else "false"
        if self.kind is ValueKind.NULL:
            return "null"
        if self.kind is ValueKind.UNDEFINED:
            return "undefined"
        if self.kind is ValueKind.STRUCTURED:
            return json.dumps(self.data)
        return self.data

    def to_json_text(self) -> str:
        """JSON-ish form used in history descriptions (strings are quoted)."""
        if self.kind in (ValueKind.STRING, ValueKind.SYMBOLIC):
            return json.dumps(self.data)
        if self.kind is ValueKind.NUMBER and not math.isfinite(self.data):
            return "null"
        return self.to_text()

    def is_truthy(self) -> bool:
        if self.kind is ValueKind.NUMBER:
            return self.data != 0 and not math.isnan(self.data)
        if self.kind is ValueKind.BOOLEAN:
            return self.data
        if self.kind in (ValueKind.NULL, ValueKind.UNDEFINED):
            return False
        if self.kind is ValueKind.STRUCTURED:
            return True
        return self.data != ""

    def to_number(self) -> float:
        """Numeric coercion used by loose comparisons."""
        if self.kind is ValueKind.NUMBER:
            return self.data
        if self.kind is ValueKind.BOOLEAN:
            return 1.0 if self.data else 0.0
        if self.kind is ValueKind.NULL:
            return 0.0
        if self.kind is ValueKind.UNDEFINED:
            return math.nan
        return parse_number_text(self.to_text())

    def __str__(self):
        return self.to_text()


def format_number(n: float) -> str:
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n == int(n) and abs(n) < 1e21:
        return str(int(n))
    return repr(n)


def parse_number_text(text: str) -> float:
    """Coerce text to a number: blank → 0, anything unparsable → NaN."""
    stripped = text.strip()
    if stripped == "":
        return 0.0
    if stripped in ("Infinity", "+Infinity"):
        return math.inf
    if stripped == "-Infinity":
        return -math.inf
    try:
        n = float(stripped)
    except ValueError:
        return math.nan
    # float() accepts "nan"/"inf" spellings the source language does not
    if math.isnan(n) or math.isinf(n):
        return math.nan
    return n


def same_json(a, b) -> bool:
    """Deep equality for decoded JSON that keeps true apart from 1."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict):
        return (isinstance(b, dict) and a.keys() == b.keys()
                and all(same_json(a[key], b[key]) for key in a))
    if isinstance(a, list):
        return (isinstance(b, list) and len(a) == len(b)
                and all(same_json(x, y) for x, y in zip(a, b)))
    if isinstance(b, (dict, list)):
        return False
    return a == b

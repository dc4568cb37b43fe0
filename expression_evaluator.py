"""
Shallow expression evaluator working directly on source text.

There is no grammar here: a fragment is tried against a fixed chain of
shapes (string, number, keyword, JSON literal, identifier, a left to
right arithmetic chain, one binary comparison split) and the first shape that
fits decides the result. Anything left over comes back as a symbolic
Value holding the trimmed text, so evaluation never raises.
"""
import json
import math
import re
from typing import Iterator, List, Mapping, Optional, Tuple

from values import Value, ValueKind, same_json

_NUMBER_RE = re.compile(r'^[+-]?\d+(\.\d+)?$')
_IDENTIFIER_RE = re.compile(r'^[\w$]+$')
_QUOTES = '"\'`'
_OPENERS = {'(': ')', '[': ']', '{': '}'}
_CLOSERS = set(_OPENERS.values())

# Longest spelling first so "===" is never read as "==" followed by "="
COMPARISON_OPERATORS = ('===', '!==', '==', '!=', '<=', '>=', '<', '>')
ARITHMETIC_OPERATORS = '+-*/%'

_KEYWORDS = {
    'true': Value.boolean(True),
    'false': Value.boolean(False),
    'null': Value.null(),
    'undefined': Value.undefined(),
}


class ExpressionEvaluator:
    """Resolve text fragments against a read-only environment.

    ``environment`` maps a name to anything with a ``value`` attribute
    (normally a Binding). The evaluator never writes to it.
    """

    def __init__(self, environment: Mapping):
        self.environment = environment

    def evaluate(self, fragment: str) -> Value:
        try:
            return self._evaluate(fragment.strip())
        except RecursionError:
            return Value.symbolic(fragment.strip())

    def _evaluate(self, text: str) -> Value:
        literal = self._literal(text)
        if literal is not None:
            return literal

        if _IDENTIFIER_RE.match(text):
            return self._lookup(text)

        split = find_comparison(text)
        if split is None:
            folded = self._fold_arithmetic(text)
            if folded is not None:
                return folded
            return Value.symbolic(text)

        left, op, right = split
        return Value.boolean(compare(op, self._evaluate(left.strip()),
                                     self._evaluate(right.strip())))

    def _fold_arithmetic(self, text: str) -> Optional[Value]:
        """Fold ``a op b op c ...`` left to right without precedence.

        Returns None when the last operator cannot combine its operands.
        A failing inner operator turns the text so far into a symbolic
        operand for the next one.
        """
        positions = arithmetic_positions(text)
        if not positions:
            return None
        result = self._evaluate(text[:positions[0]].strip())
        for n, i in enumerate(positions):
            end = positions[n + 1] if n + 1 < len(positions) else len(text)
            combined = combine(text[i], result, self._evaluate(text[i + 1:end].strip()))
            if combined is None:
                if n + 1 == len(positions):
                    return None
                combined = Value.symbolic(text[:end].strip())
            result = combined
        return result

    def evaluate_arguments(self, text: str) -> List[Value]:
        """Evaluate a comma separated argument list (top-level commas only)."""
        if not text.strip():
            return []
        return [self.evaluate(part) for part in split_top_level(text, ',')]

    # ── literal shapes (steps 1-4) ──

    def _literal(self, text: str) -> Optional[Value]:
        quoted = _string_body(text)
        if quoted is not None:
            return Value.string(quoted)
        if _NUMBER_RE.match(text):
            return Value.number(float(text))
        if text in _KEYWORDS:
            return _KEYWORDS[text]
        if (text.startswith('[') and text.endswith(']')) or \
                (text.startswith('{') and text.endswith('}')):
            try:
                return Value.structured(json.loads(text))
            except (ValueError, RecursionError):
                return Value.symbolic(text)
        return None

    def _lookup(self, name: str) -> Value:
        binding = self.environment.get(name)
        if binding is None:
            return Value.unresolved(name)
        return binding.value


def evaluate(fragment: str, environment: Mapping) -> Value:
    return ExpressionEvaluator(environment).evaluate(fragment)


# ══════════════════════════════════════════════════════
#  Operators
# ══════════════════════════════════════════════════════

def combine(op: str, left: Value, right: Value) -> Optional[Value]:
    """Apply an arithmetic operator.

    Returns None when the operands are not both numbers and the operator
    is not ``+`` (which falls back to string concatenation).
    """
    if left.is_number and right.is_number:
        return Value.number(_arithmetic(op, left.data, right.data))
    if op == '+':
        return Value.string(left.to_text() + right.to_text())
    return None


def _arithmetic(op: str, a: float, b: float) -> float:
    if op == '+':
        return a + b
    if op == '-':
        return a - b
    if op == '*':
        return a * b
    if op == '/':
        if b == 0:
            if a == 0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b
    if op == '%':
        if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
            return math.nan
        if math.isinf(b):
            return a
        return math.fmod(a, b)
    raise ValueError(f"Unknown arithmetic operator: {op}")


def compare(op: str, left: Value, right: Value) -> bool:
    if op == '===':
        return strict_equals(left, right)
    if op == '!==':
        return not strict_equals(left, right)
    if op == '==':
        return loose_equals(left, right)
    if op == '!=':
        return not loose_equals(left, right)
    return _ordering(op, left, right)


def strict_equals(left: Value, right: Value) -> bool:
    """Same tag and same value. NaN is never equal to anything."""
    if left.kind is not right.kind:
        return False
    if left.kind is ValueKind.STRUCTURED:
        return same_json(left.data, right.data)
    return left.data == right.data


_NULLISH = (ValueKind.NULL, ValueKind.UNDEFINED)


def loose_equals(left: Value, right: Value) -> bool:
    """Cross-type equality.

    Same tag: strict. null and undefined only equal each other. Text
    (string or symbolic) compares as text. Booleans turn into 1/0 and
    structured values into their text form, then the comparison repeats.
    Whatever remains is a number against text: both sides are coerced
    to numbers.
    """
    if left.kind is right.kind:
        return strict_equals(left, right)
    if left.kind in _NULLISH or right.kind in _NULLISH:
        return left.kind in _NULLISH and right.kind in _NULLISH
    if left.is_textual and right.is_textual:
        return left.data == right.data
    if left.kind is ValueKind.BOOLEAN:
        return loose_equals(Value.number(left.to_number()), right)
    if right.kind is ValueKind.BOOLEAN:
        return loose_equals(left, Value.number(right.to_number()))
    if left.kind is ValueKind.STRUCTURED:
        return loose_equals(Value.string(left.to_text()), right)
    if right.kind is ValueKind.STRUCTURED:
        return loose_equals(left, Value.string(right.to_text()))
    return left.to_number() == right.to_number()


def _ordering(op: str, left: Value, right: Value) -> bool:
    if _orders_as_text(left) and _orders_as_text(right):
        a, b = left.to_text(), right.to_text()
    else:
        a, b = left.to_number(), right.to_number()
        if math.isnan(a) or math.isnan(b):
            return False
    if op == '<':
        return a < b
    if op == '>':
        return a > b
    if op == '<=':
        return a <= b
    if op == '>=':
        return a >= b
    raise ValueError(f"Unknown comparison operator: {op}")


def _orders_as_text(value: Value) -> bool:
    return value.is_textual or value.kind is ValueKind.STRUCTURED


# ══════════════════════════════════════════════════════
#  Top-level scanning (outside quotes and brackets)
# ══════════════════════════════════════════════════════

def top_level_positions(text: str) -> Iterator[int]:
    """Yield indexes of characters not enclosed in quotes or brackets."""
    depth = 0
    quote = None
    escaped = False
    for i, ch in enumerate(text):
        if quote:
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif depth == 0:
            yield i


def split_top_level(text: str, separator: str) -> List[str]:
    parts = []
    start = 0
    for i in top_level_positions(text):
        if text[i] == separator:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def find_comparison(text: str) -> Optional[Tuple[str, str, str]]:
    """Split at the first top-level comparison operator."""
    for i in top_level_positions(text):
        for op in COMPARISON_OPERATORS:
            if text.startswith(op, i):
                left, right = text[:i].strip(), text[i + len(op):].strip()
                if left and right and not _is_arrow_or_assignment(text, i, op):
                    return left, op, right
                break
    return None


def _is_arrow_or_assignment(text: str, i: int, op: str) -> bool:
    # "a => b" and "a <== b" style text is not a comparison
    return op == '>' and i > 0 and text[i - 1] == '='


def find_arithmetic(text: str) -> Optional[Tuple[str, str, str]]:
    """Split at the last top-level binary arithmetic operator.

    A ``+``/``-`` right after another operator (or at the start) is a sign,
    not a binary operator.
    """
    positions = arithmetic_positions(text)
    if not positions:
        return None
    i = positions[-1]
    return text[:i].strip(), text[i], text[i + 1:].strip()


def arithmetic_positions(text: str) -> List[int]:
    """Indexes of the top-level binary arithmetic operators, left to right.

    Operators with nothing after them are dropped.
    """
    positions = [i for i in top_level_positions(text)
                 if text[i] in ARITHMETIC_OPERATORS and _is_binary_at(text, i)]
    while positions and not text[positions[-1] + 1:].strip():
        positions.pop()
    return positions


def _is_binary_at(text: str, i: int) -> bool:
    before = text[:i].rstrip()
    if not before:
        return False
    if text[i] in '+-' and before[-1] in ARITHMETIC_OPERATORS + '<>=!(,':
        return False
    return True


def _string_body(text: str) -> Optional[str]:
    """Return the inside of a single quoted literal, or None."""
    if len(text) < 2 or text[0] not in _QUOTES or text[-1] != text[0]:
        return None
    quote = text[0]
    body = text[1:-1]
    escaped = False
    for ch in body:
        if escaped:
            escaped = False
        elif ch == '\\':
            escaped = True
        elif ch == quote:
            return None
    if escaped:
        return None
    return body

import re
from dataclasses import dataclass
from enum import Enum
from typing import List


class LineKind(Enum):
    DECLARATION = "declaration"
    ASSIGNMENT = "assignment"
    CONDITIONAL = "conditional"
    LOOP = "loop"
    FUNCTION_CALL = "function-call"
    FUNCTION_DEFINITION = "function-definition"
    RETURN = "return"
    OUTPUT = "output"
    OTHER = "other"


@dataclass(frozen=True)
class ClassifiedLine:
    line_number: int     # 1-based
    kind: LineKind
    text: str            # trimmed source text
    indent: int          # column of first non-whitespace char


# Closing braces in front of a statement ("} else {") do not change its kind
_LEADING_CLOSERS = re.compile(r'^[}\s]+')

_ASSIGN_OPERATOR = r'(?:[+\-*/%]?=(?!=)|\+\+|--)'


class LineClassifier:
    # =====================================================================
    # ORDER IS SEMANTIC: first matching rule wins.
    # Declarations come before assignments because "let x = 1" also
    # matches the looser assignment shape.
    # =====================================================================
    RULES = [
        (LineKind.DECLARATION,         re.compile(r'^(let|const|var)\s+\w+')),
        (LineKind.ASSIGNMENT,          re.compile(r'^\w+\s*' + _ASSIGN_OPERATOR)),
        (LineKind.CONDITIONAL,         re.compile(r'^(if|else\s+if|else)\b')),
        (LineKind.LOOP,                re.compile(r'^(for|while|do)\b')),
        (LineKind.FUNCTION_DEFINITION, re.compile(r'^function\s+\w+|^\w+\s*=\s*(async\s*)?\(.*\)\s*=>')),
        (LineKind.RETURN,              re.compile(r'^return\b')),
        (LineKind.OUTPUT,              re.compile(r'console\.(log|warn|error)\(|^print\(')),
        (LineKind.FUNCTION_CALL,       re.compile(r'\w+\(.*\)')),
    ]

    def __init__(self, source: str):
        self.source = source
        self.lines = source.split('\n')

    def classify(self) -> List[ClassifiedLine]:
        return [self.classify_line(number, raw)
                for number, raw in enumerate(self.lines, start=1)]

    @classmethod
    def classify_line(cls, line_number: int, raw: str) -> ClassifiedLine:
        text = raw.strip()
        indent = len(raw) - len(raw.lstrip())
        return ClassifiedLine(line_number, cls.kind_of(text), text, indent)

    @classmethod
    def kind_of(cls, text: str) -> LineKind:
        if not text or is_comment(text):
            return LineKind.OTHER
        candidate = _LEADING_CLOSERS.sub('', strip_trailing_comment(text))
        for kind, pattern in cls.RULES:
            if pattern.search(candidate):
                return kind
        return LineKind.OTHER


def is_comment(text: str) -> bool:
    return text.startswith('//')


def strip_trailing_comment(text: str) -> str:
    """Drop a trailing ``// comment`` that is not inside a string literal."""
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
        elif ch in '"\'`':
            quote = ch
        elif text.startswith('//', i):
            return text[:i].rstrip()
    return text


def is_executable(line: ClassifiedLine) -> bool:
    """A line the step driver stops on: not blank, not a comment, not a lone brace."""
    text = strip_trailing_comment(line.text)
    if not text or is_comment(text):
        return False
    return text.rstrip(';') not in ('{', '}', '')


def classify_source(source: str) -> List[ClassifiedLine]:
    return LineClassifier(source).classify()

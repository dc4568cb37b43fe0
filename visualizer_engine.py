"""
Step-by-step execution simulator.

Loads a snippet, classifies its lines once, then advances one executable
line per ``advance_one_step()`` call. Each line is handed to the handler
for its kind, which reads expressions through the ExpressionEvaluator and
writes to the ExecutionState. After every step a Snapshot is returned.

The simulator walks the source top to bottom: loop bodies are not
repeated and branches are not skipped. It shows what each line would do,
it is not an interpreter.
"""
import logging
import re
from dataclasses import replace
from typing import List, Optional

from execution_state import ExecutionState, ExecutionStatus, HistoryKind
from expression_evaluator import ExpressionEvaluator, combine
from line_classifier import (ClassifiedLine, LineKind, classify_source, is_executable,
                             strip_trailing_comment)
from snapshot import Snapshot, build_snapshot
from values import Value

LOGGER = logging.getLogger(__name__)


class SimulationError(Exception):
    pass


# ── statement shapes ──

_DECLARATION_RE = re.compile(r'^(?:let|const|var)\s+(\w+)\s*(?:=\s*(.+?))?\s*;?$')
_ASSIGNMENT_RE = re.compile(r'^(\w+)\s*=\s*(.+?)\s*;?$')
_COMPOUND_RE = re.compile(r'^(\w+)\s*([+\-*/%])=\s*(.+?)\s*;?$')
_INCREMENT_RE = re.compile(r'^(\w+)\s*(\+\+|--)\s*;?$')
_OUTPUT_CALL_RE = re.compile(r'console\.(?:log|warn|error)\(|\bprint\(')
_IF_RE = re.compile(r'if\s*\((.+)\)')
_WHILE_RE = re.compile(r'while\s*\((.+)\)')
_FOR_RE = re.compile(r'for\s*\((.+?);(.+?);(.+?)\)')
_LOOP_INIT_RE = re.compile(r'(\w+)\s*=\s*(.+)')
_LOOP_CONDITION_RE = re.compile(r'(\w+)\s*(?:<=|>=|===|!==|==|!=|<|>)\s*(.+)')
_FUNCTION_NAME_RE = re.compile(r'function\s+(\w+)')
_RETURN_RE = re.compile(r'^return\s+(.+?)\s*;?$')
_CALLEE_RE = re.compile(r'(\w+)\(')


class VisualizerEngine:
    """Single-threaded step driver. Callers serialize access."""

    def __init__(self, max_steps: Optional[int] = None, entry_frame: str = "main"):
        self.max_steps = max_steps
        self.state = ExecutionState(entry_frame)
        self._source = ""
        self._lines: List[ClassifiedLine] = []
        self._last_snapshot: Snapshot = build_snapshot(self.state)
        self._init_dispatch_table()

    def _init_dispatch_table(self):
        self._handlers = {
            LineKind.DECLARATION: self.simulate_declaration,
            LineKind.ASSIGNMENT: self.simulate_assignment,
            LineKind.OUTPUT: self.simulate_output,
            LineKind.CONDITIONAL: self.simulate_conditional,
            LineKind.LOOP: self.simulate_loop,
            LineKind.FUNCTION_DEFINITION: self.simulate_function_definition,
            LineKind.RETURN: self.simulate_return,
            LineKind.FUNCTION_CALL: self.simulate_function_call,
            LineKind.OTHER: self.simulate_other,
        }

    # ══════════════════════════════════════════════════════
    #  Public contract
    # ══════════════════════════════════════════════════════

    def load_source(self, source: str):
        self._source = source
        self._lines = classify_source(source)
        LOGGER.debug("Loaded %d lines", len(self._lines))
        self.reset()

    def reset(self):
        self.state.reset()
        self._last_snapshot = build_snapshot(self.state)

    def advance_one_step(self) -> Snapshot:
        if self.state.status is ExecutionStatus.ERROR:
            return self._last_snapshot

        index = self._find_next_executable_line()
        if index is None:
            if self.state.status is not ExecutionStatus.COMPLETE:
                LOGGER.debug("Execution complete after %d steps", self.state.step_count)
            self.state.complete()
            self._last_snapshot = build_snapshot(self.state)
            return self._last_snapshot

        line = self._lines[index]
        self.state.current_index = index
        self.state.current_line = line.line_number
        previous = self.state.copy_environment()

        try:
            self._check_step_limit()
            self.state.step_count += 1
            self._handlers[line.kind](replace(line, text=strip_trailing_comment(line.text)))
        except Exception as e:
            LOGGER.warning("Step failed at line %d: %s", line.line_number, e)
            self.state.fail(f"Error at line {line.line_number}: {e}")
        else:
            self.state.status = ExecutionStatus.RUNNING

        self._last_snapshot = build_snapshot(self.state, previous)
        return self._last_snapshot

    def get_current_state(self) -> Snapshot:
        return build_snapshot(self.state)

    def get_status(self) -> ExecutionStatus:
        return self.state.status

    def get_line_count(self) -> int:
        return len(self._source.split('\n'))

    def get_source(self) -> str:
        return self._source

    @property
    def lines(self):
        return tuple(self._lines)

    # ══════════════════════════════════════════════════════
    #  Stepping helpers
    # ══════════════════════════════════════════════════════

    def _find_next_executable_line(self) -> Optional[int]:
        for i in range(self.state.current_index + 1, len(self._lines)):
            if is_executable(self._lines[i]):
                return i
        return None

    def _check_step_limit(self):
        if self.max_steps is not None and self.state.step_count >= self.max_steps:
            raise SimulationError(
                f"Stopped after {self.max_steps} steps (possible infinite loop)")

    def evaluate(self, fragment: str) -> Value:
        return ExpressionEvaluator(self.state.environment).evaluate(fragment)

    # ══════════════════════════════════════════════════════
    #  Statement handlers
    # ══════════════════════════════════════════════════════

    def simulate_declaration(self, line: ClassifiedLine):
        match = _DECLARATION_RE.match(line.text)
        if not match:
            self.simulate_other(line)
            return
        name, expression = match.groups()
        value = self.evaluate(expression) if expression else Value.undefined()
        self._write(name, value)
        self.state.add_history(line.line_number,
                               f"Set {name} = {value.to_json_text()}",
                               HistoryKind.ASSIGNMENT)

    def simulate_assignment(self, line: ClassifiedLine):
        target = self._assignment_target(line.text)
        if target is None:
            self.simulate_other(line)
            return
        name, value = target
        old = self.state.lookup(name)
        self._write(name, value)
        old_text = old.value.to_text() if old else "undefined"
        self.state.add_history(line.line_number,
                               f"{name}: {old_text} → {value.to_text()}",
                               HistoryKind.ASSIGNMENT)

    def _assignment_target(self, text: str):
        """Resolve plain, compound and ++/-- assignments to (name, value)."""
        match = _INCREMENT_RE.match(text)
        if match:
            name, operator = match.groups()
            return name, self._apply(name, operator[0], Value.number(1), f"{name}{operator}")
        match = _COMPOUND_RE.match(text)
        if match:
            name, op, expression = match.groups()
            return name, self._apply(name, op, self.evaluate(expression),
                                     f"{name} {op}= {expression}")
        match = _ASSIGNMENT_RE.match(text)
        if match:
            name, expression = match.groups()
            return name, self.evaluate(expression)
        return None

    def _apply(self, name: str, op: str, operand: Value, text: str) -> Value:
        result = combine(op, self.evaluate(name), operand)
        return result if result is not None else Value.symbolic(text)

    def _write(self, name: str, value: Value):
        self.state.bind(name, value)
        self.state.track_assignment(name, value)

    def simulate_output(self, line: ClassifiedLine):
        match = _OUTPUT_CALL_RE.search(line.text)
        if not match:
            self.simulate_other(line)
            return
        arguments = ExpressionEvaluator(self.state.environment).evaluate_arguments(
            _call_arguments(line.text, match.end()))
        text = " ".join(value.to_text() for value in arguments)
        self.state.write_output(text)
        self.state.add_history(line.line_number, f"Output: {text}", HistoryKind.OUTPUT)

    def simulate_conditional(self, line: ClassifiedLine):
        match = _IF_RE.search(line.text)
        if match:
            taken = self.evaluate(match.group(1)).is_truthy()
            label = "✓ true" if taken else "✗ false"
            self.state.add_history(line.line_number, f"Condition: {label}",
                                   HistoryKind.CONDITION)
            return
        self.state.add_history(line.line_number, "Else branch", HistoryKind.CONDITION)

    def simulate_loop(self, line: ClassifiedLine):
        match = _WHILE_RE.search(line.text)
        if match:
            self._simulate_while(line, match.group(1))
            return
        match = _FOR_RE.search(line.text)
        if match:
            self._simulate_for(line, *match.groups())
            return
        self.state.add_history(line.line_number, "Loop iteration", HistoryKind.LOOP)

    def _simulate_while(self, line: ClassifiedLine, condition: str):
        if self.state.loop_for_line(line.line_number) is None:
            parsed = self._loop_condition(condition)
            if parsed is not None:
                variable, bound = parsed
                binding = self.state.lookup(variable)
                current = binding.value.data if binding and binding.value.is_number else 0.0
                self.state.open_loop(line.line_number, variable, current, bound)
        continuing = self.evaluate(condition).is_truthy()
        self.state.add_history(line.line_number,
                               f"Loop: {'continuing' if continuing else 'finished'}",
                               HistoryKind.LOOP)

    def _simulate_for(self, line: ClassifiedLine, init: str, condition: str, _update: str):
        if self.state.loop_for_line(line.line_number) is None:
            init_match = _LOOP_INIT_RE.search(init)
            parsed = self._loop_condition(condition)
            if init_match and parsed is not None:
                variable, start_text = init_match.groups()
                start = self.evaluate(start_text)
                if start.is_number:
                    self.state.bind(variable, start)
                    self.state.open_loop(line.line_number, variable, start.data, parsed[1])
        self.state.add_history(line.line_number, "Loop started", HistoryKind.LOOP)

    def _loop_condition(self, condition: str):
        """Pull (controlling variable, numeric bound) out of ``i < limit``."""
        match = _LOOP_CONDITION_RE.search(condition)
        if not match:
            return None
        variable, bound_text = match.groups()
        bound = self.evaluate(bound_text)
        if not bound.is_number:
            return None
        return variable, bound.data

    def simulate_function_definition(self, line: ClassifiedLine):
        match = _FUNCTION_NAME_RE.search(line.text)
        if not match:
            self.simulate_other(line)
            return
        self.state.add_history(line.line_number, f"Function: {match.group(1)}")

    def simulate_return(self, line: ClassifiedLine):
        match = _RETURN_RE.match(line.text)
        if not match:
            self.state.add_history(line.line_number, "Return")
            return
        value = self.evaluate(match.group(1))
        self.state.add_history(line.line_number, f"Return: {value.to_json_text()}")

    def simulate_function_call(self, line: ClassifiedLine):
        match = _CALLEE_RE.search(line.text)
        if not match:
            self.simulate_other(line)
            return
        self.state.add_history(line.line_number, f"Called: {match.group(1)}()")

    def simulate_other(self, line: ClassifiedLine):
        self.state.add_history(line.line_number, f"Line {line.line_number}")


def _call_arguments(text: str, start: int) -> str:
    """Text between the opening paren ending at ``start`` and its partner."""
    depth = 1
    quote = None
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if quote:
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in '"\'`':
            quote = ch
        elif ch in '([{':
            depth += 1
        elif ch in ')]}':
            depth -= 1
            if depth == 0:
                return text[start:i]
    return text[start:].rstrip(';').rstrip(')')


def create_visualizer_engine(**kwargs) -> VisualizerEngine:
    return VisualizerEngine(**kwargs)

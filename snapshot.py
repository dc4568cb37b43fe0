"""
Immutable, UI-facing projection of the execution state.

Snapshots are built from copies: tuples instead of lists and detached
structured values, so a snapshot held by a caller never changes while
the engine keeps stepping.
"""
from copy import deepcopy
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from execution_state import Binding, ExecutionState, ExecutionStatus, HistoryEntry, LoopTracker
from values import Value, ValueKind


@dataclass(frozen=True)
class VariableView:
    name: str
    value: Value
    type: str
    changed: bool


@dataclass(frozen=True)
class LoopView:
    id: str
    controlling_variable: str
    current_value: float
    bound_value: float
    iteration_history: Tuple[float, ...]
    is_active: bool

    @property
    def progress(self) -> float:
        """Fraction of the bound reached, clamped to [0, 1]."""
        if self.bound_value == 0:
            return 1.0 if self.current_value else 0.0
        return min(max(self.current_value / self.bound_value, 0.0), 1.0)


@dataclass(frozen=True)
class Snapshot:
    current_line: int
    variables: Tuple[VariableView, ...]
    call_stack: Tuple[str, ...]
    history: Tuple[HistoryEntry, ...]
    output: Tuple[str, ...]
    error: Optional[str]
    is_complete: bool
    loops: Tuple[LoopView, ...]
    status: ExecutionStatus

    def variable(self, name: str) -> Optional[VariableView]:
        for view in self.variables:
            if view.name == name:
                return view
        return None

    @property
    def active_loops(self) -> Tuple[LoopView, ...]:
        return tuple(loop for loop in self.loops if loop.is_active)


def build_snapshot(state: ExecutionState,
                   previous_environment: Optional[Mapping[str, Binding]] = None) -> Snapshot:
    """Project ``state`` into a Snapshot.

    ``changed`` is only ever true when ``previous_environment`` is given:
    a binding is changed when it did not exist before or its value differs.
    """
    variables = tuple(
        VariableView(
            name=binding.name,
            value=_detached(binding.value),
            type=binding.declared_type,
            changed=_is_changed(binding, previous_environment),
        )
        for binding in state.environment.values()
    )
    return Snapshot(
        current_line=state.current_line,
        variables=variables,
        call_stack=tuple(state.call_stack),
        history=tuple(state.history),
        output=tuple(state.output),
        error=state.error,
        is_complete=state.status is ExecutionStatus.COMPLETE,
        loops=tuple(_loop_view(tracker) for tracker in state.loops.values()),
        status=state.status,
    )


def _is_changed(binding: Binding, previous_environment) -> bool:
    if previous_environment is None:
        return False
    before = previous_environment.get(binding.name)
    if before is None:
        return True
    return not binding.value.same_as(before.value)


def _detached(value: Value) -> Value:
    if value.kind is ValueKind.STRUCTURED:
        return deepcopy(value)
    return value


def _loop_view(tracker: LoopTracker) -> LoopView:
    return LoopView(
        id=tracker.id,
        controlling_variable=tracker.controlling_variable,
        current_value=tracker.current_value,
        bound_value=tracker.bound_value,
        iteration_history=tuple(tracker.iteration_history),
        is_active=tracker.is_active,
    )

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from values import Value


class ExecutionStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"      # reported by callers that stop stepping; never set here
    COMPLETE = "complete"
    ERROR = "error"


class HistoryKind(Enum):
    LOOP = "loop"
    CONDITION = "condition"
    ASSIGNMENT = "assignment"
    OUTPUT = "output"
    OTHER = "other"


@dataclass(frozen=True)
class Binding:
    """A named variable's current value and the tag it had when written."""
    name: str
    value: Value
    declared_type: str


@dataclass
class LoopTracker:
    """Progress of one loop instance, keyed by a synthetic id."""
    id: str
    controlling_variable: str
    current_value: float
    bound_value: float
    iteration_history: List[float] = field(default_factory=list)
    is_active: bool = True


@dataclass(frozen=True)
class HistoryEntry:
    line: int
    description: str
    timestamp: int         # logical creation order, starts at 1
    kind: HistoryKind


class ExecutionState:
    """All mutable state owned by one engine instance."""

    def __init__(self, entry_frame: str = "main"):
        self.entry_frame = entry_frame
        self.reset()

    def reset(self):
        self.environment: Dict[str, Binding] = {}
        self.loops: Dict[str, LoopTracker] = {}
        self.loops_by_line: Dict[int, str] = {}
        self.call_stack: List[str] = [self.entry_frame]
        self.history: List[HistoryEntry] = []
        self.output: List[str] = []
        self.status = ExecutionStatus.IDLE
        self.error: Optional[str] = None
        self.current_index = -1     # index into the classified lines
        self.current_line = 0       # 1-based line number, 0 before the first step
        self.step_count = 0
        self._loop_counter = 0
        self._clock = 0

    # ── variables ──

    def lookup(self, name: str) -> Optional[Binding]:
        return self.environment.get(name)

    def bind(self, name: str, value: Value) -> Optional[Binding]:
        """Write a binding (last write wins) and return the one it replaced."""
        previous = self.environment.get(name)
        self.environment[name] = Binding(name, value, value.type_label)
        return previous

    def copy_environment(self) -> Dict[str, Binding]:
        # Bindings are frozen, a shallow copy is a full copy
        return dict(self.environment)

    # ── loops ──

    def open_loop(self, line: int, variable: str, start: float, bound: float) -> LoopTracker:
        loop_id = f"loop_{self._loop_counter}"
        self._loop_counter += 1
        tracker = LoopTracker(loop_id, variable, start, bound, [start])
        self.loops[loop_id] = tracker
        self.loops_by_line[line] = loop_id
        return tracker

    def loop_for_line(self, line: int) -> Optional[LoopTracker]:
        loop_id = self.loops_by_line.get(line)
        return self.loops.get(loop_id) if loop_id else None

    def track_assignment(self, name: str, value: Value):
        """Feed a numeric write into every active loop controlled by ``name``."""
        if not value.is_number:
            return
        for tracker in self.loops.values():
            if tracker.is_active and tracker.controlling_variable == name:
                tracker.current_value = value.data
                tracker.iteration_history.append(value.data)

    def deactivate_loops(self):
        for tracker in self.loops.values():
            tracker.is_active = False

    # ── history / output ──

    def add_history(self, line: int, description: str,
                    kind: HistoryKind = HistoryKind.OTHER) -> HistoryEntry:
        self._clock += 1
        entry = HistoryEntry(line, description, self._clock, kind)
        self.history.append(entry)
        return entry

    def write_output(self, text: str):
        self.output.append(text)

    # ── status ──

    def fail(self, message: str):
        self.error = message
        self.status = ExecutionStatus.ERROR

    def complete(self):
        self.status = ExecutionStatus.COMPLETE
        self.deactivate_loops()

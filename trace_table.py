"""
Plain-text tables for the command line: execution timeline, variable
table, loop progress and sort step logs.
"""
from snapshot import Snapshot
from values import ValueKind, format_number as _number

MAX_COLUMN_WIDTH = 30


def format_ascii_table(headers, rows, max_width=MAX_COLUMN_WIDTH):
    """Render headers + rows as a fixed-width ASCII table."""
    col_w = [len(str(h)) for h in headers]
    for row in rows:
        for i, c in enumerate(row):
            col_w[i] = max(col_w[i], len(str(c)))
    col_w = [min(w, max_width) for w in col_w]

    def pad(s, w):
        return str(s)[:w].ljust(w)

    sep = '+' + '+'.join('-' * (w + 2) for w in col_w) + '+'
    hdr = '|' + '|'.join(f" {pad(h, w)} " for h, w in zip(headers, col_w)) + '|'
    lines = [sep, hdr, sep]
    for row in rows:
        lines.append('|' + '|'.join(f" {pad(c, w)} " for c, w in zip(row, col_w)) + '|')
    lines.append(sep)
    return '\n'.join(lines)


def format_value(value):
    """Display form of a Value: strings quoted, everything else as text."""
    if value.kind is ValueKind.STRING:
        return f'"{value.data}"'
    return value.to_text()


def format_history(snapshot: Snapshot):
    if not snapshot.history:
        return "No steps recorded."
    rows = [[entry.timestamp, entry.line, entry.kind.value, entry.description]
            for entry in snapshot.history]
    return format_ascii_table(['Step', 'Line', 'Kind', 'Description'], rows)


def format_variables(snapshot: Snapshot):
    if not snapshot.variables:
        return "No variables."
    rows = [[('* ' if view.changed else '  ') + view.name, view.type, format_value(view.value)]
            for view in snapshot.variables]
    return format_ascii_table(['Name', 'Type', 'Value'], rows)


def format_loops(snapshot: Snapshot):
    if not snapshot.loops:
        return "No loops."
    rows = []
    for loop in snapshot.loops:
        history = ", ".join(_number(v) for v in loop.iteration_history)
        rows.append([loop.id, loop.controlling_variable,
                     f"{_number(loop.current_value)} / {_number(loop.bound_value)}",
                     'active' if loop.is_active else 'done', history])
    return format_ascii_table(['Loop', 'Variable', 'Progress', 'State', 'Iterations'], rows)


def format_step(snapshot: Snapshot):
    """One-line summary of the most recent step."""
    if snapshot.error:
        return f"!! {snapshot.error}"
    if snapshot.is_complete:
        return "-- execution complete --"
    if not snapshot.history:
        return "(idle)"
    entry = snapshot.history[-1]
    return f"[line {entry.line:>3}] {entry.kind.value:<10} {entry.description}"


def format_sort_steps(steps):
    rows = [[i, ' '.join(str(v) for v in step.array), step.comparisons, step.swaps,
             step.description]
            for i, step in enumerate(steps, start=1)]
    return format_ascii_table(['#', 'Array', 'Cmp', 'Swp', 'Description'], rows,
                              max_width=60)


def format_algorithm_info(info):
    """Complexity line, description and numbered how-it-works steps."""
    lines = [f"{info.name}: best {info.best}, average {info.average}, worst {info.worst}, "
             f"space {info.space}, {'stable' if info.stable else 'not stable'}",
             info.description,
             "How it works:"]
    lines += [f"  {n}. {step}" for n, step in enumerate(info.how_it_works, start=1)]
    return "\n".join(lines)

from sort_trace import ALGORITHM_INFO, SortingEngine
from trace_table import (format_algorithm_info, format_ascii_table, format_history,
                         format_loops, format_sort_steps, format_step, format_variables)
from visualizer_engine import VisualizerEngine


def stepped(source, steps):
    engine = VisualizerEngine()
    engine.load_source(source)
    snapshot = engine.get_current_state()
    for _ in range(steps):
        snapshot = engine.advance_one_step()
    return snapshot


def test_ascii_table_layout():
    table = format_ascii_table(['A', 'Long header'], [[1, 'x'], [22, 'yy']])
    lines = table.split('\n')
    assert lines[0] == '+----+-------------+'
    assert lines[1] == '| A  | Long header |'
    assert lines[3] == '| 1  | x           |'
    assert lines[-1] == lines[0]


def test_ascii_table_truncates_wide_cells():
    table = format_ascii_table(['v'], [['z' * 50]])
    assert '| ' + 'z' * 30 + ' |' in table
    assert 'z' * 31 not in table


def test_history_and_variables():
    snapshot = stepped('let name = "Ada";\nlet n = 2;', 2)
    history = format_history(snapshot)
    assert 'Set name = "Ada"' in history
    assert 'assignment' in history
    variables = format_variables(snapshot)
    assert '"Ada"' in variables
    assert '* n' in variables
    assert '  name' in variables


def test_empty_tables():
    snapshot = stepped('', 0)
    assert format_history(snapshot) == "No steps recorded."
    assert format_variables(snapshot) == "No variables."
    assert format_loops(snapshot) == "No loops."
    assert format_step(snapshot) == "(idle)"


def test_loop_progress():
    snapshot = stepped('for (let i = 0; i < 4; i++) {\ni++;', 2)
    text = format_loops(snapshot)
    assert '1 / 4' in text
    assert 'active' in text
    assert '0, 1' in text


def test_step_summary():
    snapshot = stepped('console.log("hi");', 1)
    assert format_step(snapshot) == "[line   1] output     Output: hi"
    snapshot = stepped('console.log("hi");', 2)
    assert format_step(snapshot) == "-- execution complete --"


def test_sort_steps_table():
    engine = SortingEngine()
    engine.set_array([2, 1])
    text = format_sort_steps(engine.get_steps('bubble'))
    assert 'Comparing 2 and 1' in text
    assert 'Bubble sort complete!' in text


def test_algorithm_info_lists_description_and_steps():
    text = format_algorithm_info(ALGORITHM_INFO['merge'])
    lines = text.split('\n')
    assert lines[0] == ("Merge Sort: best O(n log n), average O(n log n), "
                        "worst O(n log n), space O(n), stable")
    assert lines[1].startswith('Divides the array in halves')
    assert lines[2] == 'How it works:'
    assert lines[3] == '  1. Split the array into two halves'
    assert len(lines) == 3 + len(ALGORITHM_INFO['merge'].how_it_works)

from main import main, run_sort


def test_sort_prints_details_and_steps(capsys):
    assert run_sort('bubble', size=4, seed=1) == 0
    out = capsys.readouterr().out
    assert 'Bubble Sort: best O(n)' in out
    assert 'How it works:' in out
    assert '1. Start from the first element' in out
    assert 'Bubble sort complete!' in out


def test_sort_on_reversed_input(capsys):
    assert main(['--sort', 'insertion', '--size', '3', '--order', 'reverse']) == 0
    out = capsys.readouterr().out
    assert '15 10 5' in out
    assert '5 10 15' in out


def test_sort_on_sorted_input_never_swaps(capsys):
    assert run_sort('bubble', size=3, order='sorted') == 0
    out = capsys.readouterr().out
    assert 'Swapping' not in out


def test_unknown_order_and_algorithm(capsys):
    assert run_sort('bubble', order='shuffled') == 1
    assert run_sort('bogo') == 1
    out = capsys.readouterr().out
    assert "Unknown array order 'shuffled'" in out
    assert "Unknown algorithm 'bogo'" in out


def test_run_file_reports_output(tmp_path, capsys):
    path = tmp_path / "snippet.js"
    path.write_text("let x = 2; // two\nconsole.log(x * 3);\n", encoding="utf-8")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert 'Output: 6' in out
    assert '-- execution complete --' in out

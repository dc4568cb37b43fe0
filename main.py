import sys
import logging
import random

from visualizer_engine import VisualizerEngine
from execution_state import ExecutionStatus
from sort_trace import SortingEngine, ALGORITHM_INFO, ALGORITHMS, ARRAY_ORDERS
from trace_table import (format_step, format_history, format_variables,
                         format_loops, format_sort_steps, format_algorithm_info)

USAGE = """\
Usage: python main.py <file.js> [--interactive] [--max-steps N] [--verbose]
       python main.py --sort <bubble|selection|insertion|quick|merge> [--size N] [--seed S]
                      [--order <random|sorted|reverse>]
       python main.py --gui"""


def run_file(filename, interactive=False, max_steps=None):
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            source = f.read()
    except OSError as e:
        print(f"Cannot read {filename}: {e}")
        return 1
    return run(source, interactive, max_steps)


def run(source, interactive=False, max_steps=None):
    engine = VisualizerEngine(max_steps=max_steps)
    engine.load_source(source)
    print(f"Loaded {engine.get_line_count()} lines")

    while True:
        if interactive:
            try:
                answer = input("[Enter] step, [q] quit > ")
            except EOFError:
                break
            if answer.strip().lower() == 'q':
                break
        snapshot = engine.advance_one_step()
        print(format_step(snapshot))
        if interactive and snapshot.variables:
            print(format_variables(snapshot))
        if engine.get_status() in (ExecutionStatus.COMPLETE, ExecutionStatus.ERROR):
            break

    snapshot = engine.get_current_state()
    print("\n" + "=" * 60)
    print("TIMELINE")
    print("=" * 60)
    print(format_history(snapshot))
    print("\nVARIABLES")
    print(format_variables(snapshot))
    print("\nLOOPS")
    print(format_loops(snapshot))
    if snapshot.output:
        print("\nOUTPUT")
        for line in snapshot.output:
            print(f"  {line}")
    if snapshot.error:
        print(f"\nRuntime Error: {snapshot.error}")
        return 1
    return 0


def run_sort(algorithm, size=15, seed=None, order='random'):
    if algorithm not in ALGORITHM_INFO:
        print(f"Unknown algorithm '{algorithm}'. Choose from: {', '.join(ALGORITHMS)}")
        return 1
    if order not in ARRAY_ORDERS:
        print(f"Unknown array order '{order}'. Choose from: {', '.join(ARRAY_ORDERS)}")
        return 1
    engine = SortingEngine(random.Random(seed))
    engine.generate(order, size)
    steps = engine.get_steps(algorithm)
    print(format_algorithm_info(ALGORITHM_INFO[algorithm]))
    print()
    print(format_sort_steps(steps))
    return 0


def run_gui():
    from visualizer_app import VisualizerApp
    VisualizerApp().start()
    return 0


def main(argv):
    filename = None
    interactive = False
    max_steps = None
    algorithm = None
    order = 'random'
    size = 15
    seed = None
    gui = False
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == '--interactive':
            interactive = True
        elif arg == '--verbose':
            logging.basicConfig(level=logging.DEBUG,
                                format="%(levelname)s %(name)s: %(message)s")
        elif arg == '--gui':
            gui = True
        elif arg in ('--max-steps', '--sort', '--size', '--seed', '--order') and i + 1 < len(argv):
            i += 1
            value = argv[i]
            try:
                if arg == '--max-steps':
                    max_steps = int(value)
                elif arg == '--size':
                    size = int(value)
                elif arg == '--seed':
                    seed = int(value)
                elif arg == '--order':
                    order = value
                else:
                    algorithm = value
            except ValueError:
                print(f"{arg} expects a number, got '{value}'")
                return 2
        elif arg.startswith('--'):
            print(USAGE)
            return 2
        else:
            filename = arg
        i += 1

    if algorithm:
        return run_sort(algorithm, size, seed, order)
    if filename:
        return run_file(filename, interactive, max_steps)
    if gui or not argv:
        return run_gui()
    print(USAGE)
    return 2


def console_entry():
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    console_entry()

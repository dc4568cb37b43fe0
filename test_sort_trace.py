import random
import unittest

from sort_trace import ALGORITHMS, ALGORITHM_INFO, SortingEngine, bar_heights


class TestSortingEngine(unittest.TestCase):
    def setUp(self):
        self.engine = SortingEngine(random.Random(7))
        self.engine.set_array([5, 1, 4, 2, 3])

    def test_every_algorithm_ends_sorted(self):
        for name in ALGORITHMS:
            steps = self.engine.get_steps(name)
            self.assertEqual(steps[-1].array, (1, 2, 3, 4, 5), name)
            self.assertTrue(steps[-1].description.endswith("complete!"), name)

    def test_original_array_is_untouched(self):
        self.engine.get_steps('quick')
        self.assertEqual(self.engine.original_array, [5, 1, 4, 2, 3])

    def test_counters_are_cumulative(self):
        steps = self.engine.get_steps('bubble')
        comparisons = [s.comparisons for s in steps]
        swaps = [s.swaps for s in steps]
        self.assertEqual(comparisons, sorted(comparisons))
        self.assertEqual(swaps, sorted(swaps))
        self.assertEqual(steps[-1].comparisons, 10)
        self.assertEqual(steps[-1].swaps, 6)

    def test_counters_restart_per_run(self):
        first = self.engine.get_steps('selection')
        second = self.engine.get_steps('selection')
        self.assertEqual(first[-1].comparisons, second[-1].comparisons)

    def test_bubble_first_step_compares_first_pair(self):
        step = self.engine.get_steps('bubble')[0]
        self.assertEqual(step.comparing, (0, 1))
        self.assertEqual(step.description, "Comparing 5 and 1")

    def test_final_step_marks_all_sorted(self):
        for name in ('bubble', 'selection', 'quick', 'merge'):
            steps = self.engine.get_steps(name)
            self.assertEqual(sorted(steps[-1].sorted), [0, 1, 2, 3, 4], name)

    def test_steps_are_copies(self):
        steps = self.engine.get_steps('insertion')
        self.assertEqual(steps[0].array, (5, 1, 4, 2, 3))

    def test_unknown_algorithm(self):
        with self.assertRaises(ValueError):
            self.engine.get_steps('bogo')

    def test_generated_arrays(self):
        values = self.engine.generate_array(20)
        self.assertEqual(len(values), 20)
        self.assertTrue(all(5 <= v <= 104 for v in values))
        self.assertEqual(self.engine.generate_sorted_array(3), [5, 10, 15])
        self.assertEqual(self.engine.generate_reverse_sorted_array(3), [15, 10, 5])

    def test_steps_cannot_be_mutated(self):
        step = self.engine.get_steps('bubble')[0]
        self.assertIsInstance(step.array, tuple)
        self.assertIsInstance(step.sorted, tuple)
        with self.assertRaises(AttributeError):
            step.array.append(0)

    def test_generate_by_order(self):
        self.assertEqual(self.engine.generate('sorted', 3), [5, 10, 15])
        self.assertEqual(self.engine.generate('reverse', 3), [15, 10, 5])
        self.assertEqual(self.engine.original_array, [15, 10, 5])
        self.assertEqual(len(self.engine.generate('random', 4)), 4)
        with self.assertRaises(ValueError):
            self.engine.generate('shuffled')

    def test_info_for_every_algorithm(self):
        self.assertEqual(set(ALGORITHM_INFO), set(ALGORITHMS))
        self.assertTrue(ALGORITHM_INFO['merge'].stable)
        self.assertFalse(ALGORITHM_INFO['quick'].stable)


class TestBarHeights(unittest.TestCase):
    def test_tallest_bar_fills_the_height(self):
        self.assertEqual(bar_heights([10, 5, 20], 100), [50.0, 25.0, 100.0])

    def test_all_zero_values(self):
        self.assertEqual(bar_heights([0, 0, 0], 100), [0.0, 0.0, 0.0])

    def test_empty_array(self):
        self.assertEqual(bar_heights([], 100), [])


if __name__ == '__main__':
    unittest.main()

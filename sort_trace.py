"""
Step logs for five classic sorting algorithms.

``SortingEngine.get_steps(name)`` replays the algorithm on a copy of the
loaded array and records a SortingStep at every comparison, swap and
milestone. The steps are plain data for a bar-chart view to play back.
"""
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class SortingStep:
    array: Tuple[int, ...]
    comparing: Tuple[int, ...]
    swapping: Tuple[int, ...]
    sorted: Tuple[int, ...]
    description: str
    comparisons: int = 0
    swaps: int = 0


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    description: str
    best: str
    average: str
    worst: str
    space: str
    stable: bool
    how_it_works: Tuple[str, ...] = ()


ALGORITHM_INFO: Dict[str, AlgorithmInfo] = {
    'bubble': AlgorithmInfo(
        name='Bubble Sort',
        description='Repeatedly steps through the list, compares adjacent '
                    'elements and swaps them if they are in the wrong order.',
        best='O(n)', average='O(n²)', worst='O(n²)', space='O(1)', stable=True,
        how_it_works=(
            'Start from the first element',
            'Compare it with the next element',
            'If the first is greater, swap them',
            'Move to the next pair and repeat',
            'After each pass the largest unsorted element bubbles up to its place',
        )),
    'selection': AlgorithmInfo(
        name='Selection Sort',
        description='Splits the input into a sorted and an unsorted region and '
                    'repeatedly moves the smallest unsorted element to the end '
                    'of the sorted region.',
        best='O(n²)', average='O(n²)', worst='O(n²)', space='O(1)', stable=False,
        how_it_works=(
            'Find the minimum of the unsorted region',
            'Swap it with the first unsorted element',
            'Grow the sorted region by one and repeat',
        )),
    'insertion': AlgorithmInfo(
        name='Insertion Sort',
        description='Builds the sorted array one element at a time by inserting '
                    'each new element into its place among the sorted ones.',
        best='O(n)', average='O(n²)', worst='O(n²)', space='O(1)', stable=True,
        how_it_works=(
            'Treat the first element as sorted',
            'Take the next element as the key',
            'Shift larger sorted elements one place right',
            'Drop the key into the gap',
        )),
    'quick': AlgorithmInfo(
        name='Quick Sort',
        description='Picks a pivot, partitions the array around it and sorts '
                    'both partitions recursively.',
        best='O(n log n)', average='O(n log n)', worst='O(n²)', space='O(log n)',
        stable=False,
        how_it_works=(
            'Pick the last element as pivot',
            'Move smaller elements to the left of the pivot',
            'Place the pivot between the two partitions',
            'Recurse into both partitions',
        )),
    'merge': AlgorithmInfo(
        name='Merge Sort',
        description='Divides the array in halves, sorts each half recursively '
                    'and merges the two sorted halves.',
        best='O(n log n)', average='O(n log n)', worst='O(n log n)', space='O(n)',
        stable=True,
        how_it_works=(
            'Split the array into two halves',
            'Sort each half recursively',
            'Merge the halves by repeatedly taking the smaller head element',
        )),
}

ALGORITHMS = tuple(ALGORITHM_INFO)
ARRAY_ORDERS = ('random', 'sorted', 'reverse')


class SortingEngine:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.original_array: List[int] = []
        self.steps: List[SortingStep] = []
        self.comparison_count = 0
        self.swap_count = 0

    # ── input arrays ──

    def generate_array(self, size: int = 15) -> List[int]:
        self.original_array = [self.rng.randint(5, 104) for _ in range(size)]
        return list(self.original_array)

    def generate_sorted_array(self, size: int = 15) -> List[int]:
        self.original_array = [(i + 1) * 5 for i in range(size)]
        return list(self.original_array)

    def generate_reverse_sorted_array(self, size: int = 15) -> List[int]:
        self.original_array = [(size - i) * 5 for i in range(size)]
        return list(self.original_array)

    def generate(self, order: str = 'random', size: int = 15) -> List[int]:
        """Load a fresh input array in one of ARRAY_ORDERS."""
        generator = {
            'random': self.generate_array,
            'sorted': self.generate_sorted_array,
            'reverse': self.generate_reverse_sorted_array,
        }.get(order)
        if generator is None:
            raise ValueError(f"Unknown array order: {order!r} "
                             f"(expected one of {', '.join(ARRAY_ORDERS)})")
        return generator(size)

    def set_array(self, values):
        self.original_array = list(values)

    # ── step generation ──

    def get_steps(self, algorithm: str) -> List[SortingStep]:
        runner = {
            'bubble': self._bubble_sort,
            'selection': self._selection_sort,
            'insertion': self._insertion_sort,
            'quick': self._run_quick_sort,
            'merge': self._run_merge_sort,
        }.get(algorithm)
        if runner is None:
            raise ValueError(f"Unknown sorting algorithm: {algorithm!r} "
                             f"(expected one of {', '.join(ALGORITHMS)})")
        self.steps = []
        self.comparison_count = 0
        self.swap_count = 0
        runner(list(self.original_array))
        return self.steps

    def _add_step(self, array, comparing, swapping, sorted_, description):
        if comparing:
            self.comparison_count += 1
        if swapping:
            self.swap_count += 1
        self.steps.append(SortingStep(
            array=tuple(array),
            comparing=tuple(comparing),
            swapping=tuple(swapping),
            sorted=tuple(sorted_),
            description=description,
            comparisons=self.comparison_count,
            swaps=self.swap_count,
        ))

    def _bubble_sort(self, arr):
        n = len(arr)
        done = []
        for i in range(n - 1):
            for j in range(n - i - 1):
                self._add_step(arr, [j, j + 1], [], done, f"Comparing {arr[j]} and {arr[j + 1]}")
                if arr[j] > arr[j + 1]:
                    self._add_step(arr, [], [j, j + 1], done, f"Swapping {arr[j]} and {arr[j + 1]}")
                    arr[j], arr[j + 1] = arr[j + 1], arr[j]
                    self._add_step(arr, [], [], done, "Swapped!")
            done.insert(0, n - 1 - i)
        done.insert(0, 0)
        self._add_step(arr, [], [], done, "Bubble sort complete!")

    def _selection_sort(self, arr):
        n = len(arr)
        done = []
        for i in range(n - 1):
            min_idx = i
            for j in range(i + 1, n):
                self._add_step(arr, [min_idx, j], [], done, f"Comparing {arr[min_idx]} with {arr[j]}")
                if arr[j] < arr[min_idx]:
                    min_idx = j
                    self._add_step(arr, [min_idx], [], done, f"New minimum found: {arr[min_idx]}")
            if min_idx != i:
                self._add_step(arr, [], [i, min_idx], done, f"Swapping {arr[i]} and {arr[min_idx]}")
                arr[i], arr[min_idx] = arr[min_idx], arr[i]
            done.append(i)
            self._add_step(arr, [], [], done, f"Position {i} is now sorted")
        done.append(n - 1)
        self._add_step(arr, [], [], done, "Selection sort complete!")

    def _insertion_sort(self, arr):
        n = len(arr)
        done = [0]
        self._add_step(arr, [], [], done, "Starting with first element as sorted")
        for i in range(1, n):
            key = arr[i]
            j = i - 1
            self._add_step(arr, [i], [], done, f"Inserting {key} into sorted portion")
            while j >= 0 and arr[j] > key:
                self._add_step(arr, [j, j + 1], [], done, f"{arr[j]} > {key}, shifting right")
                arr[j + 1] = arr[j]
                self._add_step(arr, [], [j, j + 1], done, f"Shifted {arr[j]}")
                j -= 1
            arr[j + 1] = key
            done.append(i)
            self._add_step(arr, [], [], done, f"Inserted {key} at position {j + 1}")
        self._add_step(arr, [], [], done, "Insertion sort complete!")

    def _run_quick_sort(self, arr):
        self._quick_sort(arr, 0, len(arr) - 1)
        self._add_step(arr, [], [], list(range(len(arr))), "Quick sort complete!")

    def _quick_sort(self, arr, low, high):
        if low < high:
            pivot_index = self._partition(arr, low, high)
            self._quick_sort(arr, low, pivot_index - 1)
            self._quick_sort(arr, pivot_index + 1, high)

    def _partition(self, arr, low, high):
        pivot = arr[high]
        self._add_step(arr, [high], [], [], f"Pivot selected: {pivot}")
        i = low - 1
        for j in range(low, high):
            self._add_step(arr, [j, high], [], [], f"Comparing {arr[j]} with pivot {pivot}")
            if arr[j] < pivot:
                i += 1
                if i != j:
                    self._add_step(arr, [], [i, j], [], f"Swapping {arr[i]} and {arr[j]}")
                    arr[i], arr[j] = arr[j], arr[i]
                    self._add_step(arr, [], [], [], "Swapped!")
        self._add_step(arr, [], [i + 1, high], [], f"Placing pivot {pivot} in correct position")
        arr[i + 1], arr[high] = arr[high], arr[i + 1]
        self._add_step(arr, [], [], [i + 1], f"Pivot {pivot} is now in place")
        return i + 1

    def _run_merge_sort(self, arr):
        self._merge_sort(arr, 0, len(arr) - 1)
        self._add_step(arr, [], [], list(range(len(arr))), "Merge sort complete!")

    def _merge_sort(self, arr, left, right):
        if left < right:
            mid = (left + right) // 2
            self._add_step(arr, [], [], [], f"Dividing: [{left}...{mid}] and [{mid + 1}...{right}]")
            self._merge_sort(arr, left, mid)
            self._merge_sort(arr, mid + 1, right)
            self._merge(arr, left, mid, right)

    def _merge(self, arr, left, mid, right):
        left_part = arr[left:mid + 1]
        right_part = arr[mid + 1:right + 1]
        i = j = 0
        k = left
        self._add_step(arr, [], [], [],
                       f"Merging [{_join(left_part)}] and [{_join(right_part)}]")
        while i < len(left_part) and j < len(right_part):
            self._add_step(arr, [left + i, mid + 1 + j], [], [],
                           f"Comparing {left_part[i]} and {right_part[j]}")
            if left_part[i] <= right_part[j]:
                arr[k] = left_part[i]
                i += 1
            else:
                arr[k] = right_part[j]
                j += 1
            k += 1
            self._add_step(arr, [], [], [], f"Placed {arr[k - 1]}")
        while i < len(left_part):
            arr[k] = left_part[i]
            i += 1
            k += 1
        while j < len(right_part):
            arr[k] = right_part[j]
            j += 1
            k += 1
        self._add_step(arr, [], [], [], f"Merged section: [{_join(arr[left:right + 1])}]")


def _join(values) -> str:
    return ", ".join(str(v) for v in values)


def bar_heights(array: Sequence[int], max_height: float) -> List[float]:
    """Scale values to bar heights; the tallest bar gets ``max_height``."""
    top = max(max(array, default=0), 1)
    return [max(value, 0) / top * max_height for value in array]

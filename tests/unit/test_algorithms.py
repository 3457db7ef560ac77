"""End-to-end tests: reference sorting algorithms recorded and synthesized."""

import pytest

from animator.algorithms import ALGORITHMS, get_algorithm, record_algorithm
from animator.animation_types import ElementVisualState
from animator.pseudocode import get_pseudocode_mapping
from animator.synthesizer import synthesize

ARRAYS = [
    [5, 3, 8, 1, 9, 2],
    [1, 2, 3, 4],
    [4, 3, 2, 1],
    [7, 7, 3, 7],
    [42],
    [],
]

TRANSIENT = {ElementVisualState.COMPARING, ElementVisualState.SWAPPING}


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
@pytest.mark.parametrize("array", ARRAYS)
class TestReferenceAlgorithms:
    def test_final_array_is_sorted(self, name, array):
        trace = record_algorithm(name, array)
        assert trace.final_array == sorted(array)

    def test_synthesis_is_consistent(self, name, array):
        trace = record_algorithm(name, array)
        result = synthesize(trace, get_pseudocode_mapping(name))
        assert result.warnings == []
        assert len(result.steps) == len(trace.operations)

    def test_every_element_ends_sorted(self, name, array):
        result = synthesize(record_algorithm(name, array))
        if result.steps:
            assert all(
                state == ElementVisualState.SORTED for state in result.steps[-1].states()
            )

    def test_sorted_elements_never_flash_transient(self, name, array):
        result = synthesize(record_algorithm(name, array))
        seen_sorted: set[int] = set()
        for step in result.steps:
            for index, state in enumerate(step.states()):
                if index in seen_sorted:
                    assert state not in TRANSIENT
                if state == ElementVisualState.SORTED:
                    seen_sorted.add(index)


class TestRegistry:
    def test_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            get_algorithm("bogo")

    def test_record_does_not_modify_input(self):
        array = [3, 1, 2]
        record_algorithm("quick", array)
        assert array == [3, 1, 2]

    def test_bubble_counts(self):
        trace = record_algorithm("bubble", [3, 2, 1])
        assert trace.stats.comparisons == 3
        assert trace.stats.swaps == 3

    def test_quick_marks_pivots(self):
        result = synthesize(record_algorithm("quick", [3, 1, 2]))
        assert ElementVisualState.PIVOT in result.steps[0].states()

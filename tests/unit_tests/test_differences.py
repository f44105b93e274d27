import difflib
import itertools
import random

import pytest

from seqdiff.differences import Differences, diff
from seqdiff.errors import ArgumentError, RangeError


def as_lists(differences):
    return [
        (list(chunk.a) if chunk.a is not None else None, list(chunk.b) if chunk.b is not None else None)
        for chunk in differences
    ]


def rebuild(differences):
    a = list(itertools.chain.from_iterable(chunk.a for chunk in differences if chunk.a is not None))
    b = list(itertools.chain.from_iterable(chunk.b for chunk in differences if chunk.b is not None))
    return a, b


# (a, b, expected chunks as (a items or None, b items or None))
CASES = {
    "no_changes": ([1, 2, 3, 4, 5], [1, 2, 3, 4, 5], [([1, 2, 3, 4, 5], [1, 2, 3, 4, 5])]),
    "all_changed": ([1, 2, 3, 4, 5], [6, 7, 8], [([1, 2, 3, 4, 5], None), (None, [6, 7, 8])]),
    "overlap": ([1, 2, 3, 4, 5], [2, 3, 4, 5, 6], [([1], None), ([2, 3, 4, 5], [2, 3, 4, 5]), (None, [6])]),
    "head": ([1, 2, 3, 4, 5], [2, 3, 4, 5], [([1], None), ([2, 3, 4, 5], [2, 3, 4, 5])]),
    "tail": ([1, 2, 3, 4], [1, 2, 3, 4, 5], [([1, 2, 3, 4], [1, 2, 3, 4]), (None, [5])]),
    "empty_a": ([], [1, 2, 3, 4, 5], [(None, [1, 2, 3, 4, 5])]),
    "empty_b": ([1, 2, 3, 4, 5], [], [([1, 2, 3, 4, 5], None)]),
    "both_empty": ([], [], []),
    "insertion": ([1, 2, 4, 5], [1, 2, 3, 4, 5], [([1, 2], [1, 2]), (None, [3]), ([4, 5], [4, 5])]),
    "deletion": ([1, 2, 3, 4, 5], [1, 2, 4, 5], [([1, 2], [1, 2]), ([3], None), ([4, 5], [4, 5])]),
    "move": (
        [1, 2, 3, 4, 5],
        [1, 2, 4, 3, 5],
        [([1, 2], [1, 2]), (None, [4]), ([3], [3]), ([4], None), ([5], [5])],
    ),
    "big_move": (
        [1, 2, 3, 4, 5, 6],
        [1, 4, 5, 2, 3, 6],
        [([1], [1]), (None, [4, 5]), ([2, 3], [2, 3]), ([4, 5], None), ([6], [6])],
    ),
    "surround": ([2], [1, 2, 3, 4], [(None, [1]), ([2], [2]), (None, [3, 4])]),
    "excise": ([1, 2, 3, 4], [2], [([1], None), ([2], [2]), ([3, 4], None)]),
    "multiple_changes": (
        [1, 2, 3, 4, 5],
        [1, 2, 6, 2, 3, 7, 5],
        [([1, 2], [1, 2]), (None, [6, 2]), ([3], [3]), ([4], None), (None, [7]), ([5], [5])],
    ),
}


@pytest.mark.parametrize("name", list(CASES))
def test_chunks(name):
    a, b, expected = CASES[name]
    differences = Differences(a, b)
    assert as_lists(differences) == expected
    assert rebuild(differences) == (a, b)


@pytest.mark.parametrize("name", list(CASES))
def test_edit_distance_is_symmetric(name):
    a, b, _ = CASES[name]
    assert Differences(a, b).edit_distance == Differences(b, a).edit_distance


def test_classic_pair_reconstructs_and_is_minimal():
    a = list("ABCABBA")
    b = list("CBABAC")
    differences = Differences(a, b)
    assert differences.edit_distance == 5
    assert Differences(b, a).edit_distance == 5
    assert rebuild(differences) == (a, b)
    assert not differences.are_equal


def test_identical_copy_gives_one_equal_chunk():
    a = list("the quick brown fox")
    differences = Differences(a, list(a))
    assert len(differences) == 1
    assert differences[0].are_equal
    assert differences.are_equal
    assert differences.edit_distance == 0


def test_both_empty_are_equal():
    differences = Differences([], [])
    assert len(differences) == 0
    assert differences.are_equal


def test_always_false_comparer():
    differences = Differences(["x", "y", "z"], ["x", "y", "z"], lambda x, y: False)
    assert as_lists(differences) == [(["x", "y", "z"], None), (None, ["x", "y", "z"])]
    assert not differences.are_equal
    assert differences.edit_distance == 6


def test_custom_comparer_on_objects():
    a = [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}]
    b = [{"id": 1, "v": "changed"}, {"id": 3, "v": "c"}, {"id": 2, "v": "b"}]
    differences = Differences(a, b, lambda x, y: x["id"] == y["id"])
    assert [chunk.are_equal for chunk in differences] == [True, False, True]
    # The equal chunk keeps each side's own items.
    assert differences[0].a[0]["v"] == "a"
    assert differences[0].b[0]["v"] == "changed"


def test_windows():
    a = [0, 0, 1, 2, 3, 0]
    b = [9, 1, 3, 9]
    differences = Differences(a, b, offset_a=2, length_a=3, offset_b=1, length_b=2)
    assert list(differences.a) == [1, 2, 3]
    assert list(differences.b) == [1, 3]
    assert as_lists(differences) == [([1], [1]), ([2], None), ([3], [3])]
    assert differences[1].a.offset == 3


def test_window_defaults_to_end():
    differences = Differences([5, 1, 2], [1, 2], offset_a=1)
    assert differences.are_equal


@pytest.mark.parametrize("kwargs", [
    {"offset_a": 4},
    {"offset_a": -1},
    {"offset_a": 1, "length_a": 3},
    {"length_b": 4},
    {"offset_b": 2, "length_b": 2},
])
def test_window_out_of_range(kwargs):
    with pytest.raises(RangeError):
        Differences([1, 2, 3], [1, 2, 3], **kwargs)


def test_missing_arguments():
    with pytest.raises(ArgumentError):
        Differences(None, [1])
    with pytest.raises(ArgumentError):
        Differences([1], None)
    with pytest.raises(ArgumentError):
        Differences([1], [1], None)
    with pytest.raises(ArgumentError):
        Differences([1], [1], "not callable")


def test_comparer_errors_propagate():
    def boom(x, y):
        raise KeyError("comparer failed")

    with pytest.raises(KeyError):
        Differences([1], [2], boom)


def test_sequence_protocol():
    differences = Differences([1, 2, 3], [1, 3])
    assert len(differences) == 3
    assert differences[-1].are_equal
    assert list(differences) == list(differences.chunks)
    assert len(differences[0:2]) == 2
    assert "Differences" in repr(differences)


def test_opcodes():
    differences = Differences([1, 2, 3, 4, 5], [1, 2, 6, 2, 3, 7, 5])
    assert differences.get_opcodes() == [
        ('equal', 0, 2, 0, 2),
        ('insert', 2, 2, 2, 4),
        ('equal', 2, 3, 4, 5),
        ('replace', 3, 4, 5, 6),
        ('equal', 4, 5, 6, 7),
    ]


def test_opcodes_use_backing_positions():
    a = [0, 0, 1, 2, 3, 0]
    b = [9, 1, 3, 9]
    differences = Differences(a, b, offset_a=2, length_a=3, offset_b=1, length_b=2)
    assert differences.get_opcodes() == [
        ('equal', 2, 3, 1, 2),
        ('delete', 3, 4, 2, 2),
        ('equal', 4, 5, 2, 3),
    ]


@pytest.mark.parametrize("a, b", [
    (["Apple\n", "Banana\n", "Cherry\n", "Date\n"], ["Apple\n", "Berry\n", "Cherry\n", "Date\n", "Elderberry\n"]),
    ([1, 2, 3, 4, 5], [2, 3, 4, 5, 6]),
    ([1, 2, 4, 5], [1, 2, 3, 4, 5]),
    ([1, 2, 3, 4, 5], [6, 7, 8]),
    ([], [1, 2]),
])
def test_opcodes_match_difflib(a, b):
    # These pairs have a unique longest common subsequence, so difflib agrees.
    std_opcodes = difflib.SequenceMatcher(None, a, b, autojunk=False).get_opcodes()
    assert Differences(a, b).get_opcodes() == std_opcodes


def test_diff_shorthand():
    differences = diff("abc", "abd", offset_a=1)
    assert list(differences.a) == ["b", "c"]
    assert not differences.are_equal


def lcs_length(a, b):
    """Longest common subsequence length by the classic dynamic-programming table."""
    previous = [0] * (len(b) + 1)
    for x in a:
        current = [0]
        for j, y in enumerate(b):
            current.append(previous[j] + 1 if x == y else max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


@pytest.mark.parametrize("seed", range(20))
def test_random_pairs_are_minimal(seed):
    rng = random.Random(seed)
    for _ in range(50):
        alphabet = "abcd"[:rng.randint(1, 4)]
        a = [rng.choice(alphabet) for _ in range(rng.randint(0, 15))]
        b = [rng.choice(alphabet) for _ in range(rng.randint(0, 15))]
        differences = Differences(a, b)
        assert differences.edit_distance == len(a) + len(b) - 2 * lcs_length(a, b), (a, b)
        assert rebuild(differences) == (a, b)
        for chunk in differences:
            if chunk.are_equal:
                assert list(chunk.a) == list(chunk.b)

"""Unit tests for randomize, safe_randomize, split and group."""

from __future__ import annotations

import random

import pytest

from callthrottle.utils.sequences import group, randomize, safe_randomize, split


class TestRandomize:

    def test_shuffles_in_place_and_returns_same_list(self):
        random.seed(7)
        items = list(range(50))
        result = randomize(items)

        assert result is items
        assert sorted(items) == list(range(50))

    def test_safe_randomize_leaves_input_alone(self):
        random.seed(7)
        items = list(range(50))
        result = safe_randomize(items)

        assert items == list(range(50))
        assert result is not items
        assert sorted(result) == items

    def test_safe_randomize_shares_elements(self):
        shared = {"k": 1}
        result = safe_randomize([shared])
        assert result[0] is shared

    def test_empty_list(self):
        assert randomize([]) == []


class TestSplit:

    @pytest.mark.parametrize(
        "text,sep,limit,expected",
        [
            ("a:b:c", ":", 2, ["a", "b:c"]),
            ("a:b:c", ":", 3, ["a", "b", "c"]),
            ("a:b:c", ":", 10, ["a", "b", "c"]),
            ("a:b:c", ":", 1, ["a:b:c"]),
            ("a:b:c", ":", 0, ["a:b:c"]),
            ("abc", ":", 3, ["abc"]),
            ("k=>v=>w", "=>", 2, ["k", "v=>w"]),
            (":lead", ":", 2, ["", "lead"]),
        ],
    )
    def test_split(self, text, sep, limit, expected):
        assert split(text, sep, limit) == expected

    def test_empty_separator_rejected(self):
        with pytest.raises(ValueError):
            split("abc", "", 2)


class TestGroup:

    def test_groups_consecutive_runs(self):
        assert group([1, 1, 2, 2, 2, 1]) == [[1, 1], [2, 2, 2], [1]]

    def test_all_distinct(self):
        assert group(["a", "b", "c"]) == [["a"], ["b"], ["c"]]

    def test_short_inputs_are_single_run(self):
        assert group([]) == [[]]
        assert group([5]) == [[5]]

    def test_works_on_strings(self):
        assert group("aab") == [["a", "a"], ["b"]]

"""Brutal tests for Levenshtein distance and similarity helpers."""

from __future__ import annotations

import pytest

from nlshell.parser.edit_distance import (
    best_similarity,
    length_ratio,
    levenshtein_distance,
    string_similarity,
)

WORDS = ["", "a", "memory", "memroy", "memori", "文件", "大文件", "kitten", "sitting", "disk", "dsik"]


class TestLevenshtein:
    @pytest.mark.parametrize("s", WORDS)
    def test_identity(self, s):
        assert levenshtein_distance(s, s) == 0

    def test_symmetry(self):
        for a in WORDS:
            for b in WORDS:
                assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    def test_known_values(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("memory", "memori") == 1
        assert levenshtein_distance("文件", "大文件") == 1

    def test_counts_characters_not_bytes(self):
        assert levenshtein_distance("查找", "查看") == 1


class TestSimilarity:
    @pytest.mark.parametrize("s", WORDS)
    def test_identity_is_one(self, s):
        assert string_similarity(s, s) == 1.0

    def test_empty_strings(self):
        assert string_similarity("", "") == 1.0
        assert string_similarity("", "abc") == 0.0

    def test_normalized(self):
        assert string_similarity("memory", "memori") == pytest.approx(5 / 6)

    def test_length_ratio_bounds_similarity(self):
        for a in WORDS:
            for b in WORDS:
                assert string_similarity(a, b) <= length_ratio(a, b) + 1e-12


class TestBestSimilarity:
    def test_best_token_wins(self):
        assert best_similarity("memory", ["usage", "memori"], 0.8) == pytest.approx(5 / 6)

    def test_no_tokens(self):
        assert best_similarity("memory", [], 0.8) == 0.0

    @pytest.mark.parametrize("threshold", [0.0, 0.3, 0.5, 0.8, 1.0])
    def test_prefilter_does_not_change_outcome(self, threshold):
        for keyword in WORDS:
            pruned = best_similarity(keyword, WORDS, threshold, prefilter=True)
            full = best_similarity(keyword, WORDS, threshold, prefilter=False)
            assert (pruned >= threshold) == (full >= threshold)
            if full >= threshold:
                assert pruned == full

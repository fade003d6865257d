"""Tests for text comparison helpers"""

import pytest

from capability_validation.scoring.text_scorers import (
    extract_keywords,
    jaccard_similarity,
    keyword_coverage,
    levenshtein_distance,
    levenshtein_similarity,
    normalize_text,
)


class TestNormalizeText:
    """normalize_text tests"""

    def test_case_punctuation_and_whitespace(self):
        assert normalize_text("  Hello,   World! ") == "hello world"

    def test_fullwidth_characters(self):
        assert normalize_text("ＡＢＣ") == "abc"

    def test_newlines_and_tabs_collapse(self):
        assert normalize_text("a\n\tb") == "a b"

    def test_empty(self):
        assert normalize_text("") == ""

    def test_punctuation_between_words_leaves_double_space(self):
        assert normalize_text("a - b") == "a  b"

    def test_trailing_punctuation_after_trim(self):
        assert normalize_text("Done !") == "done "


class TestExtractKeywords:
    """extract_keywords tests"""

    def test_punctuation_splits_tokens(self):
        assert extract_keywords("foo-bar is ok") == ["foo", "bar"]

    def test_min_length(self):
        assert extract_keywords("with the capital city", min_length=4) == ["with", "capital", "city"]

    def test_regex_pattern(self):
        assert extract_keywords(r"total: \d+ items") == ["total", "items"]

    def test_lowercased(self):
        assert extract_keywords("Python Code") == ["python", "code"]


class TestKeywordCoverage:
    """keyword_coverage tests"""

    def test_empty_keywords(self):
        assert keyword_coverage([], "anything") == 0.0

    def test_case_insensitive_substring(self):
        assert keyword_coverage(["foo", "bar"], "FOOD baz") == 0.5

    def test_all_present(self):
        assert keyword_coverage(["foo", "bar"], "bar foo") == 1.0


class TestLevenshtein:
    """Edit distance and similarity tests"""

    def test_classic_example(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_against_empty(self):
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_identical(self):
        assert levenshtein_distance("abc", "abc") == 0
        assert levenshtein_similarity("abc", "abc") == 1.0

    def test_two_empty_strings_are_identical(self):
        assert levenshtein_similarity("", "") == 1.0

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("flaw", "lawn"),
        ("hello world", "hello"),
        ("", "xyz"),
    ])
    def test_similarity_is_symmetric(self, a, b):
        assert levenshtein_similarity(a, b) == levenshtein_similarity(b, a)

    def test_similarity_value(self):
        assert levenshtein_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)


class TestJaccardSimilarity:
    """jaccard_similarity tests"""

    def test_partial_overlap(self):
        assert jaccard_similarity("a b", "b c") == pytest.approx(1 / 3)

    def test_case_insensitive(self):
        assert jaccard_similarity("Red Green", "red green") == 1.0

    def test_both_empty(self):
        assert jaccard_similarity("", "") == 0.0

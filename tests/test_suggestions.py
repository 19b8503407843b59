import pytest

from analyzer import levenshtein, suggest_name
from analyzer.suggestions import max_distance


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("", "", 0),
        ("", "abc", 3),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("consol", "console", 1),
        ("flaw", "lawn", 2),
    ],
)
def test_levenshtein(a, b, expected):
    assert levenshtein(a, b) == expected


@pytest.mark.parametrize("name, bound", [("ab", 1), ("abc", 1), ("abcd", 2), ("abcdef", 2), ("abcdefg", 3)])
def test_max_distance_depends_on_length(name, bound):
    assert max_distance(name) == bound


def test_unique_case_insensitive_match_wins():
    assert suggest_name("Console", ["console", "consoles"]) == "console"


def test_ambiguous_case_match_falls_back_to_distance():
    assert suggest_name("foo", ["FOO", "Foo"]) == "Foo"


def test_ties_resolve_lexicographically():
    assert suggest_name("cat", ["hat", "bat"]) == "bat"
    assert suggest_name("cat", ["bat", "hat"]) == "bat"


def test_candidates_outside_length_bound_are_ignored():
    assert suggest_name("ab", ["abcd"]) is None


def test_no_candidate_within_distance():
    assert suggest_name("zzzqqq123", ["console", "window", "document"]) is None


def test_exact_name_is_never_suggested():
    assert suggest_name("value", ["value"]) is None

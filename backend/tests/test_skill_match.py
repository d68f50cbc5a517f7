import pytest

from collabx.services.skill_match import match_band, match_score


def test_no_required_skills_is_full_match():
    assert match_score([], ["Python"]) == 100
    assert match_score(None, []) == 100


def test_partial_match_is_percentage_of_required():
    assert match_score(["React", "Node.js"], ["React"]) == 50
    assert match_score(["Python", "React", "FastAPI", "SQL"], ["Python", "React", "FastAPI"]) == 75


def test_comparison_ignores_case_and_whitespace():
    assert match_score(["React", "node.js"], ["  REACT ", "Node.JS"]) == 100


def test_repeated_candidate_skill_counts_once():
    assert match_score(["React", "Node.js"], ["react", "React", "REACT"]) == 50


def test_repeated_required_skill_counts_once():
    # {"react", "node.js"} after folding, so the candidate covers half
    assert match_score(["React", "react", "Node.js"], ["React"]) == 50


def test_no_overlap_is_zero():
    assert match_score(["Rust"], ["Python", "Go"]) == 0


@pytest.mark.parametrize(
    "required, candidate, expected",
    [
        (["a", "b", "c"], ["a"], 33),
        (["a", "b", "c"], ["a", "b"], 67),
        (["a", "b", "c", "d", "e", "f", "g", "h"], ["a", "b", "c"], 38),  # 37.5 rounds up
        (["a", "b", "c", "d", "e", "f", "g", "h"], ["a"], 13),  # 12.5 rounds up
    ],
)
def test_rounding_halves_up(required, candidate, expected):
    assert match_score(required, candidate) == expected


def test_score_stays_in_range():
    score = match_score(["x"], ["x", "X", "y", "z"])
    assert 0 <= score <= 100


@pytest.mark.parametrize(
    "score, band",
    [(100, "high"), (70, "high"), (69, "medium"), (40, "medium"), (39, "low"), (0, "low")],
)
def test_match_band_thresholds(score, band):
    assert match_band(score) == band

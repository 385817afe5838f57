import pytest

from repo_explorer.domain.criteria import Criteria, parse_keywords


def test_parse_keywords():
    assert parse_keywords(" CLI, web ,,") == ("cli", "web")
    assert parse_keywords("") == ()


def test_criteria_folds_keywords():
    assert Criteria(keywords=("CLI", "")).keywords == ("cli",)


def test_criteria_defaults_include_every_type():
    criteria = Criteria()

    assert criteria.include_public and criteria.include_private and criteria.include_forked
    assert not criteria.include_archived
    assert criteria.sort_by == "stars"


def test_criteria_rejects_unknown_sort_key():
    with pytest.raises(ValueError):
        Criteria(sort_by="name")


def test_from_repo_types():
    criteria = Criteria.from_repo_types(["forked"], min_stars=5)

    assert (criteria.include_public, criteria.include_private, criteria.include_forked) == (False, False, True)
    assert criteria.min_stars == 5


def test_from_repo_types_empty_means_all():
    criteria = Criteria.from_repo_types([])

    assert criteria.include_public and criteria.include_private and criteria.include_forked


def test_from_repo_types_rejects_unknown():
    with pytest.raises(ValueError):
        Criteria.from_repo_types(["internal"])


def test_criteria_trims_keywords():
    criteria = Criteria(keywords=(" CLI ", "  "))

    assert criteria.keywords == ("cli",)


def test_criteria_accepts_comma_separated_string():
    assert Criteria(keywords="cli, web").keywords == ("cli", "web")

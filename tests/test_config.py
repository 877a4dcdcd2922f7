from pathlib import Path

import pytest

from promptfinder.search import RankingConfig, SearchConfig
from promptfinder.settings import Settings


def test_defaults_match_documented_values():
    cfg = SearchConfig()
    assert cfg.weights == {"title": 0.4, "description": 0.2, "body": 0.2, "category": 0.1, "tags": 0.1}
    assert cfg.field_names == ("title", "description", "body", "category", "tags")
    assert cfg.tolerance == 0.4
    assert cfg.candidate_cap == 1000
    assert (cfg.default_limit, cfg.max_limit) == (20, 100)
    assert cfg.ranking == RankingConfig(0.001, 0.01, 0.95)


def test_from_settings_reads_env(monkeypatch):
    monkeypatch.setenv("MATCH_TOLERANCE", "0.25")
    monkeypatch.setenv("CANDIDATE_CAP", "50")
    monkeypatch.setenv("PREFIX_MATCH_SCORE", "0.005")
    cfg = SearchConfig.from_settings(Settings())
    assert cfg.tolerance == 0.25
    assert cfg.candidate_cap == 50
    assert cfg.ranking.prefix_match_score == 0.005
    assert cfg.ranking.exact_match_score == 0.001


def test_yaml_overrides(tmp_path: Path):
    path = tmp_path / "search.yaml"
    path.write_text(
        "search:\n"
        "  field_weights: {title: 0.6, tags: 0.3}\n"
        "  tolerance: 0.3\n"
        "  ranking:\n"
        "    multi_field_decay: 0.9\n",
        encoding="utf-8",
    )
    cfg = SearchConfig.from_settings(Settings(SEARCH_CONFIG_PATH=str(path)))
    assert cfg.field_weights == (("title", 0.6), ("tags", 0.3))
    assert cfg.tolerance == 0.3
    assert cfg.ranking.multi_field_decay == 0.9
    assert cfg.ranking.exact_match_score == 0.001


def test_missing_yaml_fails_fast(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        SearchConfig.from_settings(Settings(SEARCH_CONFIG_PATH=str(tmp_path / "nope.yaml")))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"field_weights": (("title", 0.0),)},
        {"field_weights": (("title", 1.5),)},
        {"field_weights": (("author", 0.5),)},
        {"field_weights": ()},
        {"tolerance": 1.2},
        {"candidate_cap": 0},
        {"default_limit": 200},
        {"min_raw_score": 0.0},
        {"ranking": RankingConfig(exact_match_score=0.01, prefix_match_score=0.01)},
        {"ranking": RankingConfig(exact_match_score=0.02, prefix_match_score=0.01)},
        {"ranking": RankingConfig(prefix_match_score=0.02)},
        {"ranking": RankingConfig(multi_field_decay=0.0)},
        {"ranking": RankingConfig(multi_field_decay=0.5)},
        {"min_raw_score": 0.005},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        SearchConfig(**kwargs)


def test_prefix_score_must_stay_below_fuzzy_scores(monkeypatch):
    monkeypatch.setenv("PREFIX_MATCH_SCORE", "0.02")
    with pytest.raises(ValueError):
        SearchConfig.from_settings(Settings())


@pytest.mark.parametrize(
    "ranking_yaml",
    [
        "    exact_match_score: 0.05\n",
        "    boost: 2\n",
    ],
)
def test_bad_ranking_yaml_rejected(tmp_path: Path, ranking_yaml):
    path = tmp_path / "search.yaml"
    path.write_text("search:\n  ranking:\n" + ranking_yaml, encoding="utf-8")
    with pytest.raises(ValueError):
        SearchConfig.from_settings(Settings(SEARCH_CONFIG_PATH=str(path)))

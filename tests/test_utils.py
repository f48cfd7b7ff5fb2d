from pathlib import Path

from birdcheck.fixtures import EXPECTED_LABELS, load_fixtures, resolve_fixture_path
from birdcheck.utils import artifact_name, parse_score


def test_artifact_name_replaces_extension():
    """Test per-case artifact names derived from the fixture filename."""
    assert artifact_name("tarin_triste.jpeg", ".json") == "tarin_triste.json"
    assert artifact_name("tarin_triste.jpeg", ".png") == "tarin_triste.png"


def test_artifact_name_drops_directories():
    """Test that only the bare filename is kept."""
    assert artifact_name("data/chevalier_aboyeur.jpeg", ".png") == "chevalier_aboyeur.png"


def test_parse_score():
    """Test the score formats shown on the result page."""
    assert parse_score("97%") == 97.0
    assert parse_score(" 85 % ") == 85.0
    assert parse_score("92,5%") == 92.5
    assert parse_score("100") == 100.0


def test_parse_score_unreadable():
    """Test that missing or non-numeric text scores 0."""
    assert parse_score(None) == 0.0
    assert parse_score("") == 0.0
    assert parse_score("%") == 0.0
    assert parse_score("n/a") == 0.0


def test_load_fixtures_follows_label_table(tmp_path):
    """Test fixtures built from the static label table."""
    fixtures = load_fixtures(str(tmp_path))

    assert [fixture.file for fixture in fixtures] == list(EXPECTED_LABELS)
    assert fixtures[1].expected == "Bergeronnette printanière"
    assert fixtures[0].path == (tmp_path / "tarin_triste.jpeg").resolve()


def test_load_fixtures_only():
    """Test restricting the run to some fixtures."""
    fixtures = load_fixtures(only=["chevalier_aboyeur.jpeg"])

    assert [fixture.expected for fixture in fixtures] == ["Chevalier aboyeur"]


def test_resolve_fixture_path_is_absolute():
    """Test that relative fixture directories resolve against the cwd."""
    path = resolve_fixture_path("tarin_triste.jpeg", "data")

    assert path.is_absolute()
    assert path == Path("data", "tarin_triste.jpeg").resolve()


def test_parse_score_non_finite():
    """Test that "nan" and "inf", which float() accepts, score 0."""
    assert parse_score("NaN%") == 0.0
    assert parse_score("inf") == 0.0
    assert parse_score("-Infinity %") == 0.0

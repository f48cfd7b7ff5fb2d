"""Known sample images and their expected labels."""

from pathlib import Path
from typing import Dict, List, Optional

from .models import Fixture

DEFAULT_FIXTURES_DIR = "data"

# Keep this table in sync with the images under data/.
EXPECTED_LABELS: Dict[str, str] = {
    "tarin_triste.jpeg": "Tarin triste",
    "bergeronnette_printaniere.jpeg": "Bergeronnette printanière",
    "chevalier_aboyeur.jpeg": "Chevalier aboyeur",
}


def resolve_fixture_path(file: str, fixtures_dir: str = DEFAULT_FIXTURES_DIR) -> Path:
    """Resolve a fixture filename to an absolute path under the fixtures directory."""
    return (Path(fixtures_dir) / file).resolve()


def load_fixtures(
    fixtures_dir: str = DEFAULT_FIXTURES_DIR, only: Optional[List[str]] = None
) -> List[Fixture]:
    """
    Build the fixture list from the static label table.

    Args:
        fixtures_dir: Directory holding the sample images
        only: Restrict to these fixture filenames (None for all)

    Returns:
        Fixtures in table order. Paths are resolved but not checked for
        existence; a missing image fails its own case at upload time.
    """
    fixtures = []
    for file, expected in EXPECTED_LABELS.items():
        if only is not None and file not in only:
            continue
        fixtures.append(
            Fixture(
                file=file,
                expected=expected,
                path=resolve_fixture_path(file, fixtures_dir),
            )
        )
    return fixtures

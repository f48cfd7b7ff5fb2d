"""Utility functions for birdcheck."""

import math
from pathlib import PurePath
from typing import Optional


def artifact_name(fixture_file: str, suffix: str) -> str:
    """
    Derive an artifact filename from a fixture filename.

    Args:
        fixture_file: Fixture filename (e.g., "tarin_triste.jpeg")
        suffix: New extension, with its dot (e.g., ".json")

    Returns:
        The bare filename with its extension replaced (e.g., "tarin_triste.json")
    """
    return PurePath(fixture_file).with_suffix(suffix).name


def parse_score(text: Optional[str]) -> float:
    """
    Parse a confidence score as displayed on the page.

    Accepts "97%", " 97 % ", "97,5%" and plain numbers. Anything that cannot
    be read as a finite number, including a missing region, scores 0.
    """
    if text is None:
        return 0.0

    cleaned = text.replace("%", "").replace(",", ".").strip()
    if not cleaned:
        return 0.0

    try:
        value = float(cleaned)
    except ValueError:
        return 0.0

    # float() also reads "nan" and "inf"
    if not math.isfinite(value):
        return 0.0
    return value

"""Heuristic explanations for failed recognition cases."""

from typing import Dict, List, Optional, Tuple

from .models import FailureReport

CONFIDENCE_THRESHOLD = 90
MAX_NAME_LENGTH = 120

# Page chrome that ends up in the extracted text when the name selector
# matches a container instead of the species label. Compared lowercased.
BOILERPLATE_KEYWORDS: Tuple[str, ...] = (
    "accueil",
    "home",
    "navigation",
    "menu",
    "espèces",
    "species",
    "résultats",
    "results",
    "identification",
    "actualités",
    "news",
    "aide",
    "help",
)

NAME_MISMATCH = "name_mismatch"
LOW_CONFIDENCE = "low_confidence"
SELECTOR_TOO_BROAD = "selector_too_broad"

RECOMMENDATIONS: Dict[str, str] = {
    NAME_MISMATCH: (
        "The detected species differs from the expected label: check the "
        "fixture image and its expected label."
    ),
    LOW_CONFIDENCE: (
        f"The confidence score is below {CONFIDENCE_THRESHOLD}%: try a sharper "
        "or better framed image."
    ),
    SELECTOR_TOO_BROAD: (
        "The extracted name is missing, too long or contains page boilerplate: "
        "tighten the result name selector."
    ),
}


def is_passing(name: Optional[str], expected: str, score: float) -> bool:
    """Exact trimmed name match and a score at or above the threshold."""
    return (
        name is not None
        and name.strip() == expected.strip()
        and score >= CONFIDENCE_THRESHOLD
    )


class FailureAnalyzer:
    """Classifies a failed case into reason codes."""

    def analyze(
        self, name: Optional[str], expected: str, score: float
    ) -> Optional[FailureReport]:
        """
        Explain why a detected name and score do not pass.

        Args:
            name: Detected name as read from the page (None if absent)
            expected: Expected species label
            score: Confidence percentage

        Returns:
            A FailureReport, or None when no reason applies
        """
        reasons = self.reasons(name, expected, score)
        if not reasons:
            return None

        recommendation = " ".join(RECOMMENDATIONS[reason] for reason in reasons)
        return FailureReport(reasons=tuple(reasons), recommendation=recommendation)

    def reasons(self, name: Optional[str], expected: str, score: float) -> List[str]:
        """Reason codes in precedence order."""
        reasons = []

        if name is None or name.strip() != expected.strip():
            reasons.append(NAME_MISMATCH)

        # Also catches NaN, which compares false both ways
        if not score >= CONFIDENCE_THRESHOLD:
            reasons.append(LOW_CONFIDENCE)

        if self._selector_too_broad(name):
            reasons.append(SELECTOR_TOO_BROAD)

        return reasons

    def _selector_too_broad(self, name: Optional[str]) -> bool:
        if name is None or not name.strip():
            return True

        if len(name.strip()) > MAX_NAME_LENGTH:
            return True

        lowered = name.lower()
        return any(keyword in lowered for keyword in BOILERPLATE_KEYWORDS)

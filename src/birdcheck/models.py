"""Data models for birdcheck."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Fixture:
    """A sample image with its expected species label."""

    file: str
    expected: str
    path: Path


@dataclass(frozen=True)
class FailureReport:
    """Why a case failed, and what to do about it."""

    reasons: Tuple[str, ...]
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {"reasons": list(self.reasons), "recommendation": self.recommendation}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FailureReport":
        return cls(
            reasons=tuple(data.get("reasons") or ()),
            recommendation=data.get("recommendation") or "",
        )


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class DiagnosticRecord:
    """The outcome of one fixture's evaluation."""

    file: str
    expected: str
    name: Optional[str]
    score: float
    passed: bool
    suggestions: Optional[FailureReport] = None
    screenshot: Optional[str] = None
    timestamp: str = field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "expected": self.expected,
            "name": self.name,
            "score": self.score,
            "passed": self.passed,
            "suggestions": self.suggestions.to_dict() if self.suggestions else None,
            "screenshot": self.screenshot,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiagnosticRecord":
        score = float(data.get("score", 0))
        if not math.isfinite(score):
            raise ValueError(f"Score is not a finite number: {score}")

        suggestions = data.get("suggestions")
        return cls(
            file=str(data["file"]),
            expected=str(data["expected"]),
            name=data.get("name"),
            score=score,
            passed=bool(data.get("passed")),
            suggestions=FailureReport.from_dict(suggestions) if suggestions else None,
            screenshot=data.get("screenshot"),
            timestamp=data.get("timestamp", ""),
        )

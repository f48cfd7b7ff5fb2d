"""Diagnostic recording and result persistence for birdcheck."""

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from .analyzer import FailureAnalyzer, is_passing
from .models import DiagnosticRecord
from .utils import artifact_name

DEFAULT_RESULTS_DIR = "test-results"
SUMMARY_FILE = "summary.json"


class ResultsStore:
    """Reads and writes run artifacts under a single results directory."""

    def __init__(self, results_dir: str = DEFAULT_RESULTS_DIR, verbose: bool = False):
        self.results_dir = Path(results_dir)
        self.verbose = verbose

    @property
    def summary_path(self) -> Path:
        return self.results_dir / SUMMARY_FILE

    def record_path(self, fixture_file: str) -> Path:
        return self.results_dir / artifact_name(fixture_file, ".json")

    def screenshot_path(self, fixture_file: str) -> Path:
        return self.results_dir / artifact_name(fixture_file, ".png")

    def reset(self) -> None:
        """Create the results directory and drop the previous run's summary."""
        self.results_dir.mkdir(parents=True, exist_ok=True)
        self.summary_path.unlink(missing_ok=True)

    def write_record(self, record: DiagnosticRecord) -> Path:
        """Write a single case's diagnostics to its own JSON file."""
        path = self.record_path(record.file)
        self._write_json(path, record.to_dict())
        if self.verbose:
            print(f"   💾 Saved diagnostics: {path}")
        return path

    def append_summary(self, record: DiagnosticRecord) -> None:
        """Append a record to the run summary (read-modify-write)."""
        entries = self._read_summary_entries()
        entries.append(record.to_dict())
        self._write_json(self.summary_path, entries)

    def load_summary(self) -> Optional[List[DiagnosticRecord]]:
        """
        Load the run summary.

        Returns:
            The summary records, or None if no summary file exists
        """
        if not self.summary_path.exists():
            return None

        records = []
        for index, entry in enumerate(self._read_summary_entries()):
            try:
                records.append(DiagnosticRecord.from_dict(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                print(
                    f"⚠️ Ignoring malformed summary entry #{index} "
                    f"in {self.summary_path}: {e!r}"
                )
        return records

    def _read_summary_entries(self) -> List[Dict[str, Any]]:
        try:
            data = json.loads(self.summary_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            print(f"⚠️ Ignoring unreadable summary {self.summary_path}: {e}")
            return []

        if not isinstance(data, list):
            print(f"⚠️ Ignoring malformed summary {self.summary_path}")
            return []

        return [entry for entry in data if isinstance(entry, dict)]

    def _write_json(self, path: Path, payload: Any) -> None:
        self.results_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )


class RunContext:
    """The records of one run, in completion order."""

    def __init__(self, store: Optional[ResultsStore] = None):
        self.store = store
        self.records: List[DiagnosticRecord] = []

    @classmethod
    def start(cls, store: Optional[ResultsStore] = None) -> "RunContext":
        """Begin a fresh run, discarding any summary left by a previous one."""
        if store is not None:
            store.reset()
        return cls(store)

    def append(self, record: DiagnosticRecord) -> None:
        self.records.append(record)
        if self.store is not None:
            self.store.write_record(record)
            self.store.append_summary(record)

    @property
    def passed(self) -> List[DiagnosticRecord]:
        return [record for record in self.records if record.passed]

    @property
    def failed(self) -> List[DiagnosticRecord]:
        return [record for record in self.records if not record.passed]

    def __len__(self) -> int:
        return len(self.records)


class DiagnosticRecorder:
    """Turns raw page results into diagnostic records."""

    def __init__(self, analyzer: Optional[FailureAnalyzer] = None):
        self.analyzer = analyzer or FailureAnalyzer()

    def record(
        self,
        context: RunContext,
        file: str,
        expected: str,
        name: Optional[str],
        score: float,
        screenshot: Optional[str] = None,
    ) -> DiagnosticRecord:
        """
        Build a diagnostic record and append it to the run.

        Args:
            context: The run the record belongs to
            file: Fixture filename
            expected: Expected species label
            name: Detected name (None if it could not be read)
            score: Confidence percentage
            screenshot: Screenshot artifact filename, if one was captured

        Returns:
            The recorded DiagnosticRecord
        """
        # NaN and infinity are not valid JSON
        if not math.isfinite(score):
            score = 0.0

        passed = is_passing(name, expected, score)
        suggestions = None if passed else self.analyzer.analyze(name, expected, score)

        record = DiagnosticRecord(
            file=file,
            expected=expected,
            name=name,
            score=score,
            passed=passed,
            suggestions=suggestions,
            screenshot=screenshot,
        )
        context.append(record)
        return record

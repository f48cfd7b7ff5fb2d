"""Main BirdCheck class: runs recognition cases against the identification site."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .fixtures import DEFAULT_FIXTURES_DIR, load_fixtures
from .models import DiagnosticRecord, Fixture
from .page_driver import (
    NAME_REGION,
    RESULT_TIMEOUT_MS,
    SCORE_REGION,
    DriverError,
    PageDriver,
    ResultTimeout,
    launch_browser,
)
from .recorder import DEFAULT_RESULTS_DIR, DiagnosticRecorder, ResultsStore, RunContext
from .report import ReportGenerator, format_score
from .utils import parse_score

DEFAULT_URL = "https://www.ornitho.com/"

# Upload, then two confirmation screens before results show up
WIZARD_STEPS = 2


@dataclass
class BirdCheck:
    """Runs every fixture through the site and records diagnostics."""

    base_url: str = DEFAULT_URL
    fixtures_dir: str = DEFAULT_FIXTURES_DIR
    results_dir: str = DEFAULT_RESULTS_DIR
    headless: bool = True
    slow_mo: int = 0
    timeout_ms: int = RESULT_TIMEOUT_MS
    keep_open: bool = False
    verbose: bool = False
    debug: bool = False

    # Keep main method at the top to make the structure clear
    def run_suite(
        self,
        fixtures: Optional[List[Fixture]] = None,
        driver: Optional[PageDriver] = None,
    ) -> RunContext:
        """
        Run all recognition cases, one after the other.

        Args:
            fixtures: Cases to run (None for the full fixture table)
            driver: Page driver to use (None to launch a browser)

        Returns:
            The RunContext holding one record per fixture, in run order
        """
        if fixtures is None:
            fixtures = load_fixtures(self.fixtures_dir)

        store = ResultsStore(self.results_dir, verbose=self.verbose)
        context = RunContext.start(store)
        recorder = DiagnosticRecorder()

        print("🚀 Starting bird recognition checks")
        print(f"🌐 Target: {self.base_url}")
        print(f"🐦 Cases: {len(fixtures)}")
        print(f"📁 Results: {store.results_dir}")

        if driver is None:
            with launch_browser(
                headless=self.headless,
                slow_mo=self.slow_mo,
                timeout_ms=self.timeout_ms,
                keep_open=self.keep_open,
                verbose=self.verbose,
            ) as browser_driver:
                self._run_cases(browser_driver, fixtures, context, recorder)
        else:
            self._run_cases(driver, fixtures, context, recorder)

        report_path = ReportGenerator().generate(store)
        self._print_summary(context, report_path)
        return context

    def run_case(
        self,
        driver: PageDriver,
        fixture: Fixture,
        context: RunContext,
        recorder: Optional[DiagnosticRecorder] = None,
    ) -> DiagnosticRecord:
        """
        Run a single fixture through the site and record the outcome.

        Driver failures, including timeouts, fail this case only.
        """
        recorder = recorder or DiagnosticRecorder()
        name = None
        score_text = None

        try:
            driver.open(self.base_url)
            driver.submit_file(fixture.path)
            for _ in range(WIZARD_STEPS):
                driver.advance()
            name = driver.read_text(NAME_REGION)
            score_text = driver.read_text(SCORE_REGION)
        except ResultTimeout as e:
            print(f"⏰ Timed out waiting for results: {e}")
        except DriverError as e:
            print(f"❌ Page error: {e}")

        if self.debug:
            print(f"🔍 DEBUG: name region: {name!r}")
            print(f"🔍 DEBUG: score region: {score_text!r}")

        score = parse_score(score_text)
        screenshot = self._capture_screenshot(driver, fixture, context)

        return recorder.record(
            context,
            file=fixture.file,
            expected=fixture.expected,
            name=name.strip() if name is not None else None,
            score=score,
            screenshot=screenshot,
        )

    def regenerate_report(self) -> Optional[Path]:
        """Rebuild the HTML report from the last run's summary."""
        store = ResultsStore(self.results_dir, verbose=self.verbose)
        report_path = ReportGenerator().generate(store)
        if report_path is None:
            print(f"⚠️ No summary found in {store.results_dir}, nothing to report")
        else:
            print(f"📄 Report written to {report_path}")
        return report_path

    def _run_cases(
        self,
        driver: PageDriver,
        fixtures: List[Fixture],
        context: RunContext,
        recorder: DiagnosticRecorder,
    ) -> None:
        for index, fixture in enumerate(fixtures, start=1):
            print(f"\n{'=' * 80}")
            print(f"🐦 CASE {index}/{len(fixtures)}: {fixture.expected} ({fixture.file})")
            print(f"{'=' * 80}")

            record = self.run_case(driver, fixture, context, recorder)

            print(
                f"🔎 Recognized: {record.name}, Confidence: {format_score(record.score)}"
            )
            if record.passed:
                print("✅ PASS")
            else:
                print("❌ FAIL")
                if record.suggestions:
                    print(f"   🏷️ Reasons: {', '.join(record.suggestions.reasons)}")
                    print(f"   💡 {record.suggestions.recommendation}")

    def _capture_screenshot(
        self, driver: PageDriver, fixture: Fixture, context: RunContext
    ) -> Optional[str]:
        if context.store is None:
            return None

        path = context.store.screenshot_path(fixture.file)
        try:
            driver.screenshot(path)
        except DriverError as e:
            print(f"⚠️ Screenshot failed: {e}")
            return None
        return path.name

    def _print_summary(self, context: RunContext, report_path: Optional[Path]) -> None:
        print(f"\n{'=' * 80}")
        print("📊 BIRD RECOGNITION SUMMARY")
        print(f"{'=' * 80}")
        print(f"✅ Passed: {len(context.passed)}")
        print(f"❌ Failed: {len(context.failed)}")
        for record in context.failed:
            print(f"   - {record.file}: expected {record.expected!r}, got {record.name!r}")
        if report_path is not None:
            print(f"📄 Report: {report_path}")

"""Live recognition checks against the identification site.

Run with:
    BIRDCHECK_E2E=1 pytest tests/e2e -m e2e -s
"""

import os

import pytest

from birdcheck.birdcheck import BirdCheck
from birdcheck.fixtures import load_fixtures
from birdcheck.page_driver import launch_browser
from birdcheck.recorder import ResultsStore, RunContext
from birdcheck.report import ReportGenerator

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(
        os.environ.get("BIRDCHECK_E2E") != "1",
        reason="set BIRDCHECK_E2E=1 to run against the live site",
    ),
]

BOT = BirdCheck(
    headless=os.environ.get("BIRDCHECK_HEADED") != "1",
    slow_mo=50,
    verbose=True,
)


@pytest.fixture(scope="module")
def run_context():
    """One fresh run for the module; the report is written when it ends."""
    store = ResultsStore(BOT.results_dir)
    context = RunContext.start(store)
    yield context
    report_path = ReportGenerator().generate(store)
    print(f"\n📄 Report: {report_path}")


@pytest.fixture(scope="module")
def driver():
    """A single browser shared by all cases, like the site is used by hand."""
    with launch_browser(
        headless=BOT.headless, slow_mo=BOT.slow_mo, timeout_ms=BOT.timeout_ms
    ) as page_driver:
        yield page_driver


@pytest.mark.parametrize(
    "fixture", load_fixtures(BOT.fixtures_dir), ids=lambda fixture: fixture.expected
)
def test_recognizes_species(fixture, driver, run_context):
    """The site should name the species with at least 90% confidence."""
    if not fixture.path.is_file():
        pytest.skip(f"missing sample image {fixture.path}")

    record = BOT.run_case(driver, fixture, run_context)

    print(f"The name is {record.name} and the score is {record.score}")
    assert record.passed, record.suggestions.recommendation
    assert record.name == fixture.expected
    assert record.score >= 90

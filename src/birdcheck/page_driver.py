"""Page driver interface and its Playwright implementation."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

RESULT_TIMEOUT_MS = 15000

FILE_INPUT_SELECTOR = "#NOM_DE_FICHIER"
NEXT_BUTTON_LABEL = "Suivant"

NAME_REGION = "name"
SCORE_REGION = "score"

REGION_SELECTORS: Dict[str, str] = {
    NAME_REGION: ".esp",
    SCORE_REGION: "div[class='especes'] div:nth-child(2) div:nth-child(1)",
}


class DriverError(Exception):
    """Raised when the page cannot be driven as expected."""

    pass


class ResultTimeout(DriverError):
    """Raised when a result region does not show up in time."""

    pass


class PageDriver(ABC):
    """The narrow set of page capabilities a recognition case needs."""

    @abstractmethod
    def open(self, url: str) -> None:
        """Navigate to the identification page."""
        pass

    @abstractmethod
    def submit_file(self, path: Path) -> None:
        """Attach an image to the upload input."""
        pass

    @abstractmethod
    def advance(self) -> None:
        """Confirm the current wizard step."""
        pass

    @abstractmethod
    def read_text(self, region: str) -> Optional[str]:
        """
        Read the text content of a result region.

        Args:
            region: NAME_REGION or SCORE_REGION

        Raises:
            ResultTimeout: if the region is not visible within the time budget
        """
        pass

    @abstractmethod
    def screenshot(self, path: Path) -> None:
        """Capture the full page to an image file."""
        pass


class PlaywrightPageDriver(PageDriver):
    """Drives the identification wizard through a Playwright sync Page."""

    def __init__(self, page, timeout_ms: int = RESULT_TIMEOUT_MS, verbose: bool = False):
        self.page = page
        self.timeout_ms = timeout_ms
        self.verbose = verbose

    def open(self, url: str) -> None:
        self._log(f"🌐 Opening {url}")
        try:
            self.page.goto(url)
        except PlaywrightError as e:
            raise DriverError(f"Failed to open {url}: {e}") from e

    def submit_file(self, path: Path) -> None:
        if not Path(path).is_file():
            raise DriverError(f"Fixture image not found: {path}")

        self._log(f"📤 Uploading {path}")
        try:
            self.page.set_input_files(FILE_INPUT_SELECTOR, str(path))
        except PlaywrightError as e:
            raise DriverError(f"Failed to upload {path}: {e}") from e

    def advance(self) -> None:
        self._log(f"➡️ Clicking '{NEXT_BUTTON_LABEL}'")
        try:
            self.page.get_by_role("button", name=NEXT_BUTTON_LABEL).click()
        except PlaywrightError as e:
            raise DriverError(f"Failed to advance the wizard: {e}") from e

    def read_text(self, region: str) -> Optional[str]:
        selector = REGION_SELECTORS[region]
        locator = self.page.locator(selector)
        try:
            # Multiple matches only happen when the selector is too broad;
            # the first one still gives the analyzer something to look at.
            locator.first.wait_for(state="visible", timeout=self.timeout_ms)
            return locator.first.text_content()
        except PlaywrightTimeoutError as e:
            raise ResultTimeout(
                f"No '{region}' result after {self.timeout_ms} ms ({selector})"
            ) from e
        except PlaywrightError as e:
            raise DriverError(f"Failed to read '{region}' result: {e}") from e

    def screenshot(self, path: Path) -> None:
        try:
            self.page.screenshot(path=str(path), full_page=True)
        except PlaywrightError as e:
            raise DriverError(f"Failed to capture screenshot {path}: {e}") from e
        self._log(f"📸 Screenshot saved: {path}")

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"   {message}")


@contextmanager
def launch_browser(
    headless: bool = True,
    slow_mo: int = 0,
    timeout_ms: int = RESULT_TIMEOUT_MS,
    keep_open: bool = False,
    verbose: bool = False,
) -> Iterator[PlaywrightPageDriver]:
    """
    Launch Chromium and yield a driver on a fresh page.

    Args:
        headless: Run without a visible window
        slow_mo: Delay in milliseconds added to every browser operation
        timeout_ms: Time budget for result regions to appear
        keep_open: Leave the browser running after the block exits
        verbose: Print each driver action
    """
    playwright = sync_playwright().start()
    browser = None
    try:
        browser = playwright.chromium.launch(headless=headless, slow_mo=slow_mo)
        context = browser.new_context()
        page = context.new_page()
        print("🧭 Browser launched")
        yield PlaywrightPageDriver(page, timeout_ms=timeout_ms, verbose=verbose)
        # Only on normal exit; an error or Ctrl+C closes right away
        if keep_open:
            print("🧭 Tests finished, browser stays open (Enter to close)")
            input()
    finally:
        if browser is not None:
            browser.close()
        playwright.stop()

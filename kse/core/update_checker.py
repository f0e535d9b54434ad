"""Update check: latest-version lookup, comparison and user notification.

Architecture:
  UpdateChecker: pure Python logic (no Qt dependency), blocking methods
  UpdateWorker : QThread wrapper with pyqtSignal for thread-safe UI updates

Manual checks run synchronously and report every outcome. Automatic checks
are throttled by AutoUpdateCheckSettings, fetch on the worker thread and only
interrupt the user when a newer release exists.
"""

import logging
from datetime import date
from typing import Callable, Protocol
from urllib.error import URLError
from urllib.request import Request, urlopen

from kse.branding import AppBranding
from kse.config.settings import AutoUpdateCheckSettings
from kse.core.models import CheckOutcome, FetchFailed, UpToDate, UpdateAvailable
from kse.core.version import Version, VersionError

logger = logging.getLogger(__name__)

# The version file is a single line; a larger body is rejected, not truncated
MAX_BODY_BYTES = 1024


class FetchError(Exception):
    """The latest version could not be retrieved or understood."""


class BrowserLaunchError(Exception):
    """The default browser could not be opened."""


class UpdatePrompter(Protocol):
    """Dialogs the checker needs from the UI."""

    def show_up_to_date(self, current: Version) -> None: ...

    def confirm_download(self, latest: Version) -> bool: ...

    def show_browser_failure(self, url: str) -> None: ...

    def show_error(self, error: Exception) -> None: ...


class UpdateChecker:
    """Decides when to check, fetches the latest version and reports it.

    All methods are synchronous (blocking). The automatic path is split in
    two: run_auto_check() is meant for a worker thread, report_auto_check()
    for the thread owning the UI.
    """

    def __init__(self, current_version: Version, prompter: UpdatePrompter,
                 browser_launcher: Callable[[str], None],
                 latest_version_url: str = AppBranding.LATEST_VERSION_URL,
                 downloads_url: str = AppBranding.DOWNLOADS_URL,
                 timeout: float = 30):
        self.current_version = current_version
        self.prompter = prompter
        self.browser_launcher = browser_launcher
        self.latest_version_url = latest_version_url
        self.downloads_url = downloads_url
        self.timeout = timeout

    # ── Scheduling policy ────────────────────────────────────────────

    @staticmethod
    def is_auto_check_due(settings: AutoUpdateCheckSettings, today: date) -> bool:
        """True if automatic checks are enabled and the interval has elapsed."""
        if not settings.enabled:
            return False
        elapsed = (today - settings.last_check).days
        return elapsed >= settings.check_interval

    @staticmethod
    def record_check_performed(settings: AutoUpdateCheckSettings, today: date):
        """Remember that an automatic check ran today (whatever its outcome)."""
        settings.last_check = today

    # ── Fetch ────────────────────────────────────────────────────────

    def fetch_latest_version(self, url: str | None = None) -> Version:
        """Download the one-line version file and parse it.

        Raises FetchError on network failure, timeout, HTTP error or a body
        that is not a valid version string.
        """
        url = url or self.latest_version_url
        req = Request(url, headers={
            'User-Agent': AppBranding.user_agent(),
            'Accept': 'text/plain',
        })

        try:
            with urlopen(req, timeout=self.timeout) as resp:
                body = resp.read(MAX_BODY_BYTES + 1)
        except (URLError, OSError) as e:
            # URLError covers HTTPError; socket timeouts are OSError
            raise FetchError(f"Could not read {url}: {e}") from e

        if len(body) > MAX_BODY_BYTES:
            raise FetchError(f"Version file at {url} is too large")

        try:
            text = body.decode('ascii')
        except UnicodeDecodeError as e:
            raise FetchError(f"Version file at {url} is not ASCII text") from e

        try:
            latest = Version.parse(text)
        except VersionError as e:
            raise FetchError(f"Version file at {url} is malformed: {e}") from e

        logger.info("Latest published version: %s", latest)
        return latest

    # ── Compare & report ─────────────────────────────────────────────

    def compare_and_report(self, latest: Version, automatic: bool) -> CheckOutcome:
        """Compare the running version with latest and tell the user.

        "Up to date" is only shown for manual checks; a newer release is
        offered in both modes.
        """
        current = self.current_version

        if Version.compare(current, latest) >= 0:
            logger.info("Version %s is up to date (latest %s)", current, latest)
            if not automatic:
                self.prompter.show_up_to_date(current)
            return UpToDate(current)

        logger.info("Newer version available: %s (running %s)", latest, current)
        if self.prompter.confirm_download(latest):
            self.open_download_page()
        return UpdateAvailable(current, latest)

    def open_download_page(self, url: str | None = None):
        """Open the downloads page, or tell the user where to find it."""
        url = url or self.downloads_url
        try:
            self.browser_launcher(url)
        except (BrowserLaunchError, OSError) as e:
            logger.warning("Could not launch browser for %s: %s", url, e)
            self.prompter.show_browser_failure(url)

    # ── Manual path ──────────────────────────────────────────────────

    def check_manually(self) -> CheckOutcome:
        """User-initiated check: never throttled, every outcome is shown."""
        try:
            latest = self.fetch_latest_version()
        except FetchError as e:
            logger.warning("Update check failed: %s", e)
            self.prompter.show_error(e)
            return FetchFailed(e)
        return self.compare_and_report(latest, automatic=False)

    # ── Automatic path ───────────────────────────────────────────────

    def run_auto_check(self, settings: AutoUpdateCheckSettings,
                       today: date | None = None) -> Version | None:
        """Background half of the automatic check.

        Returns None when no check is due. Otherwise records the check and
        returns the latest version; FetchError propagates to the caller.
        """
        today = today or date.today()
        if not self.is_auto_check_due(settings, today):
            logger.debug("Automatic update check not due (last check %s, every %d days)",
                         settings.last_check, settings.check_interval)
            return None

        self.record_check_performed(settings, today)
        logger.info("Running automatic update check")
        return self.fetch_latest_version()

    def report_auto_check(self, latest: Version) -> CheckOutcome:
        """UI-thread half of the automatic check."""
        return self.compare_and_report(latest, automatic=True)


# ── QThread Worker ───────────────────────────────────────────────────

# Import PyQt6 only when the worker is actually used (lazy import
# to keep UpdateChecker itself free of Qt dependency)

def _get_worker_class():
    """Lazy import to avoid PyQt6 at module level."""
    from PyQt6.QtCore import QThread, pyqtSignal

    class UpdateWorker(QThread):
        """Background worker for the network half of a check.

        Emits signals that are automatically dispatched to the main thread,
        so the report step always runs on the thread owning the UI.
        """

        latest_fetched = pyqtSignal(object)   # Version
        check_failed = pyqtSignal(object)     # FetchError
        not_due = pyqtSignal()

        def __init__(self, checker: UpdateChecker, parent=None):
            super().__init__(parent)
            self._checker = checker
            self._mode: str = ""        # "auto" or "fetch"
            self._settings: AutoUpdateCheckSettings | None = None
            self._today: date | None = None

        def auto_check(self, settings: AutoUpdateCheckSettings,
                       today: date | None = None):
            """Start a throttled background check."""
            if self.isRunning():
                logger.info("Update check already in progress")
                return
            self._mode = "auto"
            self._settings = settings
            self._today = today
            self.start()

        def fetch(self):
            """Start an unthrottled background fetch."""
            if self.isRunning():
                logger.info("Update check already in progress")
                return
            self._mode = "fetch"
            self.start()

        def run(self):
            """Thread entry point: dispatch to auto check or plain fetch."""
            try:
                if self._mode == "auto":
                    latest = self._checker.run_auto_check(self._settings, self._today)
                else:
                    latest = self._checker.fetch_latest_version()
            except FetchError as e:
                logger.warning("Update check failed: %s", e)
                self.check_failed.emit(e)
                return

            if latest is None:
                self.not_due.emit()
            else:
                self.latest_fetched.emit(latest)

    return UpdateWorker


# Module-level accessor
_UpdateWorkerClass = None


def get_update_worker_class():
    """Get the UpdateWorker class (lazy-imported to avoid PyQt6 at import time)."""
    global _UpdateWorkerClass
    if _UpdateWorkerClass is None:
        _UpdateWorkerClass = _get_worker_class()
    return _UpdateWorkerClass


def wait_for_update_workers(parent, timeout_ms: int):
    """Block until every UpdateWorker owned by parent has stopped.

    A QThread destroyed while running aborts the process, so workers still
    busy after timeout_ms are terminated.
    """
    worker_class = get_update_worker_class()
    for worker in parent.findChildren(worker_class):
        if not worker.isRunning():
            continue
        if not worker.wait(timeout_ms):
            logger.warning("Update check still running at shutdown, terminating it")
            worker.terminate()
            worker.wait()

"""Update check outcome models."""

from dataclasses import dataclass

from kse.core.version import Version


@dataclass(frozen=True)
class UpToDate:
    """Running version is the latest (or newer than the published one)."""

    current: Version


@dataclass(frozen=True)
class UpdateAvailable:
    """A newer release has been published."""

    current: Version
    latest: Version


@dataclass(frozen=True)
class FetchFailed:
    """The latest version could not be retrieved."""

    error: Exception


CheckOutcome = UpToDate | UpdateAvailable | FetchFailed

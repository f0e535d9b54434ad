"""Release version identifiers.

A version is a dotted run of non-negative integers ("5.8.0", "5.8", "12").
Missing trailing components count as zero, so "5.8" and "5.8.0" are equal.
"""

import re
from dataclasses import dataclass, field
from functools import total_ordering

from packaging.version import Version as ReleaseKey

_VERSION_RE = re.compile(r'^[0-9]+(?:\.[0-9]+)*$')


class VersionError(ValueError):
    """Raised when a version string cannot be parsed."""


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Immutable numeric version, created once by parse()."""

    components: tuple[int, ...]
    _key: ReleaseKey = field(init=False, repr=False)

    def __post_init__(self):
        if not self.components or any(c < 0 for c in self.components):
            raise VersionError(f"Invalid version components: {self.components!r}")
        # packaging ignores trailing zeros when ordering releases
        object.__setattr__(self, '_key', ReleaseKey(str(self)))

    @classmethod
    def parse(cls, text: str) -> 'Version':
        """Parse "1.2.3" style text. Raises VersionError if malformed."""
        if text is None:
            raise VersionError("No version string")
        stripped = text.strip()
        if not stripped:
            raise VersionError("Empty version string")
        # str.isdigit() accepts non-ASCII digits, the regex does not
        if not _VERSION_RE.match(stripped):
            raise VersionError(f"Malformed version string: {text!r}")
        return cls(tuple(int(part) for part in stripped.split('.')))

    @staticmethod
    def compare(a: 'Version', b: 'Version') -> int:
        """Return -1, 0 or 1 as a is older than, equal to or newer than b."""
        if a._key < b._key:
            return -1
        if a._key > b._key:
            return 1
        return 0

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return Version.compare(self, other) == 0

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return Version.compare(self, other) < 0

    def __hash__(self):
        return hash(self._key)

    def __str__(self):
        return '.'.join(str(c) for c in self.components)

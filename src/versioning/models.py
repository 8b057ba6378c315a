"""Data models for version classification and tag resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


SATISFIES_TAG = "satisfies"
LATEST_TAG = "latest"


class MatchOutcome(Enum):
    """Outcome of matching a requested expression against published versions."""
    MATCHED = "matched"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class MatchResult:
    """Matching step result; version is set only when outcome is MATCHED."""
    outcome: MatchOutcome
    version: Optional[str]
    candidate_count: int


@dataclass(frozen=True)
class Classification:
    """Stable releases and pre-release channels, both in discovery order."""
    stable_releases: Tuple[str, ...] = ()
    channels: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def latest(self) -> Optional[str]:
        """First stable release; the input list is assumed newest-first."""
        return self.stable_releases[0] if self.stable_releases else None


# Display payload key for each optional flag.
_FLAG_KEYS = (
    ("is_newer_than_latest", "isNewerThanLatest"),
    ("is_latest_version", "isLatestVersion"),
    ("satisfies_latest", "satisfiesLatest"),
    ("is_invalid", "isInvalid"),
    ("version_match_not_found", "versionMatchNotFound"),
    ("is_fixed_version", "isFixedVersion"),
)


@dataclass(frozen=True)
class TaggedVersion:
    """A named pointer to one published version.

    Only the synthetic ``satisfies`` entry carries the boolean flags; the
    ``latest`` and channel entries leave them as None.
    """
    name: str
    version: Optional[str]
    is_newer_than_latest: Optional[bool] = None
    is_latest_version: Optional[bool] = None
    satisfies_latest: Optional[bool] = None
    is_invalid: Optional[bool] = None
    version_match_not_found: Optional[bool] = None
    is_fixed_version: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render as a display payload, omitting flags that were never set."""
        data: Dict[str, Any] = {"name": self.name, "version": self.version}
        for attr, key in _FLAG_KEYS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

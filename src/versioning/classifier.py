"""Split published versions into stable releases and pre-release channels."""

import logging
import re
from typing import Dict, List, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from .models import Classification
from .semver import gtr, is_valid_range, ltr, match_block, normalize_range, prerelease_components, strip_prerelease

logger = logging.getLogger(__name__)

# Leading run of the first pre-release identifier: "alpha2" -> "alpha".
_CHANNEL_NAME_RE = re.compile(r"^[^0-9\-]*")


def channel_name(identifier: str) -> str:
    """Normalize a pre-release identifier to its channel name.

    ``alpha``, ``alpha1`` and ``alpha-2`` all collapse to ``alpha``. A purely
    numeric identifier has no alphabetic run and is used as-is.
    """
    name = _CHANNEL_NAME_RE.match(identifier).group(0)
    return name or identifier


def is_fixed_version(requested: str) -> bool:
    """True when requested pins exactly one version (no relational operator)."""
    if not is_valid_range(requested):
        return False
    groups = normalize_range(requested).split("||")
    first = groups[0].strip()
    if not first or " - " in first:
        return False
    match = match_block(first.split()[0])
    if match.group("op") not in ("", "="):
        return False
    return all(
        part is not None and part not in ("x", "X", "*")
        for part in (match.group("major"), match.group("minor"), match.group("patch"))
    )


def is_older_version(version: str, requested: str) -> bool:
    """True when a pre-release candidate should be hidden relative to requested.

    Against a stable request the candidate is compared without its pre-release
    suffix, and anything not clearly newer than the request counts as older.
    """
    if prerelease_components(requested) is None and prerelease_components(version) is not None:
        stripped = strip_prerelease(version)
        return ltr(stripped, requested) or not gtr(stripped, requested)
    return ltr(version, requested)


def classify(raw_versions: Sequence[str], requested: str) -> Classification:
    """Partition raw_versions into stable releases and named pre-release groups.

    Args:
        raw_versions: Published versions, newest first.
        requested: Requested version expression from the manifest.

    Returns:
        Classification preserving input order in both partitions.
    """
    if raw_versions is None:
        raise TypeError("raw_versions must be a sequence of version strings")

    requested_is_valid = is_valid_range(requested)
    releases: List[str] = []
    channels: Dict[str, List[str]] = {}
    dropped = 0

    for version in raw_versions:
        components = prerelease_components(version)
        if not components:
            releases.append(version)
            continue

        if requested_is_valid and is_older_version(version, requested):
            dropped += 1
            continue

        # already the requested version
        if version == requested:
            dropped += 1
            continue

        channels.setdefault(channel_name(components[0]), []).append(version)

    if is_debug_enabled(logger):
        logger.debug(
            "Classified versions",
            extra=extra_context(
                event="classify",
                component="classifier",
                action="classify",
                releases=len(releases),
                channels=len(channels),
                dropped=dropped,
            ),
        )

    return Classification(
        stable_releases=tuple(releases),
        channels={name: tuple(found) for name, found in channels.items()},
    )

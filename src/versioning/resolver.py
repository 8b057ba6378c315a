"""Resolve which published version a requested expression selects."""

import logging
from typing import Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from .classifier import is_fixed_version
from .models import MatchOutcome, MatchResult, SATISFIES_TAG, TaggedVersion
from .semver import compare, is_valid_range, max_satisfying, parse_version, satisfies

logger = logging.getLogger(__name__)


def strip_non_semver_versions(raw_versions: Sequence[str]) -> list:
    """Keep only strings that parse as semantic versions, preserving order."""
    return [v for v in raw_versions if parse_version(v) is not None]


def match_version(raw_versions: Sequence[str], requested: str) -> MatchResult:
    """Pick the highest published version satisfying requested.

    Never raises for bad data: an invalid expression yields ``INVALID`` and a
    failed or empty match yields ``NOT_FOUND``.
    """
    candidates = strip_non_semver_versions(raw_versions)
    if not is_valid_range(requested):
        return MatchResult(MatchOutcome.INVALID, None, len(candidates))

    try:
        matched = max_satisfying(candidates, requested)
    except ValueError as exc:
        logger.debug("Version matching failed for %r: %s", requested, exc)
        matched = None

    if matched is None:
        return MatchResult(MatchOutcome.NOT_FOUND, None, len(candidates))
    return MatchResult(MatchOutcome.MATCHED, matched, len(candidates))


def _is_newer(matched: str, latest: Optional[str]) -> bool:
    matched_version = parse_version(matched)
    latest_version = parse_version(latest)
    if matched_version is None or latest_version is None:
        return False
    return compare(matched_version, latest_version) > 0


def resolve(raw_versions: Sequence[str], requested: str, stable_releases: Sequence[str]) -> TaggedVersion:
    """Build the ``satisfies`` entry for requested.

    Args:
        raw_versions: Every published version, newest first.
        requested: Requested version expression.
        stable_releases: Stable releases from classification; the first one is latest.

    Returns:
        TaggedVersion named ``satisfies`` carrying the relational flags.
    """
    if raw_versions is None or stable_releases is None:
        raise TypeError("raw_versions and stable_releases are required")
    if not isinstance(requested, str):
        raise TypeError("requested must be a string")

    is_valid = is_valid_range(requested)
    is_fixed = is_valid and is_fixed_version(requested)
    result = match_version(raw_versions, requested)
    matched = result.version

    latest = stable_releases[0] if stable_releases else None
    satisfies_latest = matched is not None and latest is not None and satisfies(matched, latest)
    is_newer_than_latest = matched is not None and not satisfies_latest and _is_newer(matched, latest)
    # substring of the raw request: "^2.0.0" asks for latest "2.0.0"
    is_latest_version = satisfies_latest and latest in requested

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved requested version",
            extra=extra_context(
                event="resolve",
                component="resolver",
                action="match_version",
                outcome=result.outcome.value,
                requested=requested,
                matched=matched,
                latest=latest,
                count=result.candidate_count,
            ),
        )

    return TaggedVersion(
        name=SATISFIES_TAG,
        version=matched,
        is_newer_than_latest=is_newer_than_latest,
        is_latest_version=is_latest_version,
        satisfies_latest=satisfies_latest,
        is_invalid=not is_valid,
        version_match_not_found=matched is None,
        is_fixed_version=is_fixed,
    )

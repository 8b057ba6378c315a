"""Assemble, order and filter the tagged versions shown beside a dependency."""

import logging
from functools import cmp_to_key
from typing import Iterable, List, Mapping, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from .classifier import classify
from .models import LATEST_TAG, SATISFIES_TAG, TaggedVersion
from .resolver import resolve
from .semver import compare, parse_version

logger = logging.getLogger(__name__)

SYNTHETIC_TAGS = (SATISFIES_TAG, LATEST_TAG)


def sort_descending(a: str, b: str) -> int:
    """String comparator placing later strings first."""
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def sort_tags_recent_first(tag_a: TaggedVersion, tag_b: TaggedVersion) -> int:
    """Comparator: higher version first, then names in reverse lexicographic order.

    Tags whose version does not parse sort after every parseable one.
    """
    a = parse_version(tag_a.version)
    b = parse_version(tag_b.version)
    if a is None and b is not None:
        return 1
    if b is None and a is not None:
        return -1
    if a is not None and b is not None:
        order = compare(a, b)
        if order:
            return -order
    return sort_descending(tag_a.name, tag_b.name)


def assemble(
    satisfies_entry: TaggedVersion,
    latest_entry: TaggedVersion,
    channels: Mapping[str, Sequence[str]],
) -> List[TaggedVersion]:
    """Combine the satisfies entry, latest entry and one entry per channel.

    ``latest`` is left out when the satisfies entry already is the latest
    version. Each channel is represented by the first version found for it.
    """
    tags = [satisfies_entry]
    if not satisfies_entry.is_latest_version:
        tags.append(latest_entry)

    # tag names stay unique; a "latest" pre-release channel cannot shadow the real one
    channel_tags = [
        TaggedVersion(name=name, version=versions[0])
        for name, versions in channels.items()
        if versions and name not in SYNTHETIC_TAGS
    ]
    tags.extend(sorted(channel_tags, key=cmp_to_key(sort_tags_recent_first)))
    return tags


def tag_filter(
    tags: List[TaggedVersion],
    allowed: Optional[Iterable[str]],
    keep_synthetic: bool = False,
) -> List[TaggedVersion]:
    """Keep tags whose name is in allowed, compared case-insensitively.

    An absent or empty allow-list returns tags unchanged. With keep_synthetic
    the ``satisfies`` and ``latest`` entries survive regardless of the list.
    """
    if not allowed:
        return tags
    names = {entry.lower() for entry in allowed}
    if not names:
        return tags
    return [
        tag for tag in tags
        if tag.name.lower() in names or (keep_synthetic and tag.name in SYNTHETIC_TAGS)
    ]


def extract_tags_from_version_list(raw_versions: Sequence[str], requested: str) -> List[TaggedVersion]:
    """Classify, resolve and assemble the tagged versions for requested."""
    classification = classify(raw_versions, requested)
    satisfies_entry = resolve(raw_versions, requested, classification.stable_releases)
    latest_entry = TaggedVersion(name=LATEST_TAG, version=classification.latest)
    tags = assemble(satisfies_entry, latest_entry, classification.channels)

    if is_debug_enabled(logger):
        logger.debug(
            "Assembled tagged versions",
            extra=extra_context(
                event="assemble",
                component="tags",
                action="extract_tags",
                count=len(tags),
                names=[tag.name for tag in tags],
            ),
        )
    return tags


def tagged_versions(
    raw_versions: Sequence[str],
    requested: str,
    allowed: Optional[Iterable[str]] = None,
    keep_synthetic: bool = False,
) -> List[TaggedVersion]:
    """Full pipeline: extract the tagged versions, then apply the tag filter."""
    tags = extract_tags_from_version_list(raw_versions, requested)
    return tag_filter(tags, allowed, keep_synthetic=keep_synthetic)

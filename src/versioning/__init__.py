"""Tagged-version resolution for dependency declarations."""

from .classifier import classify, is_fixed_version, is_older_version
from .models import Classification, MatchOutcome, MatchResult, TaggedVersion
from .resolver import match_version, resolve
from .tags import assemble, extract_tags_from_version_list, sort_tags_recent_first, tag_filter, tagged_versions

__all__ = [
    "Classification",
    "MatchOutcome",
    "MatchResult",
    "TaggedVersion",
    "assemble",
    "classify",
    "extract_tags_from_version_list",
    "is_fixed_version",
    "is_older_version",
    "match_version",
    "resolve",
    "sort_tags_recent_first",
    "tag_filter",
    "tagged_versions",
]

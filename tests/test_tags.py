"""Tests for assembling, ordering and filtering tagged versions."""

from functools import cmp_to_key

from versioning.models import TaggedVersion
from versioning.tags import (
    assemble,
    extract_tags_from_version_list,
    sort_descending,
    sort_tags_recent_first,
    tag_filter,
    tagged_versions,
)

SCENARIO_B = ["2.0.0", "2.1.0-alpha.1", "2.1.0-alpha.2", "2.1.0-beta.1"]


def names(tags):
    return [tag.name for tag in tags]


def test_sort_descending():
    assert sort_descending("b", "a") == -1
    assert sort_descending("a", "b") == 1
    assert sort_descending("a", "a") == 0


class TestSortTagsRecentFirst:
    """Channel ordering."""

    def test_higher_version_first(self):
        tags = [
            TaggedVersion("alpha", "2.1.0-alpha.1"),
            TaggedVersion("rc", "3.0.0-rc.1"),
            TaggedVersion("beta", "2.1.0-beta.1"),
        ]
        ordered = sorted(tags, key=cmp_to_key(sort_tags_recent_first))
        assert names(ordered) == ["rc", "beta", "alpha"]

    def test_equal_versions_use_reverse_name_order(self):
        a = TaggedVersion("beta", "1.0.0-x.1")
        b = TaggedVersion("next", "1.0.0-x.1")
        assert sort_tags_recent_first(a, b) == 1
        assert sort_tags_recent_first(b, a) == -1
        assert sort_tags_recent_first(a, a) == 0

    def test_order_is_stable_across_input_permutations(self):
        tags = [
            TaggedVersion("alpha", "2.1.0-alpha.1"),
            TaggedVersion("beta", "2.1.0-beta.1"),
            TaggedVersion("canary", "2.1.0-alpha.1"),
        ]
        first = sorted(tags, key=cmp_to_key(sort_tags_recent_first))
        second = sorted(reversed(tags), key=cmp_to_key(sort_tags_recent_first))
        assert first == second
        assert names(first) == ["beta", "canary", "alpha"]


class TestAssemble:
    """Combining satisfies, latest and channel entries."""

    def test_latest_included_when_not_latest_version(self):
        satisfies = TaggedVersion("satisfies", "1.5.0", is_latest_version=False)
        latest = TaggedVersion("latest", "2.0.0")
        tags = assemble(satisfies, latest, {"beta": ("2.1.0-beta.1",)})
        assert names(tags) == ["satisfies", "latest", "beta"]

    def test_latest_omitted_when_satisfies_is_latest(self):
        satisfies = TaggedVersion("satisfies", "2.0.0", is_latest_version=True)
        latest = TaggedVersion("latest", "2.0.0")
        assert names(assemble(satisfies, latest, {})) == ["satisfies"]

    def test_channel_uses_first_version(self):
        satisfies = TaggedVersion("satisfies", "2.0.0", is_latest_version=True)
        latest = TaggedVersion("latest", "2.0.0")
        tags = assemble(satisfies, latest, {"alpha": ("2.1.0-alpha.1", "2.1.0-alpha.2")})
        assert tags[1] == TaggedVersion("alpha", "2.1.0-alpha.1")


class TestExtractTags:
    """End-to-end tag extraction."""

    def test_range_request(self):
        tags = extract_tags_from_version_list(["2.0.0", "1.5.0", "1.0.0"], "1.x")
        assert names(tags) == ["satisfies", "latest"]
        assert tags[0].version == "1.5.0"
        assert tags[0].is_newer_than_latest is False
        assert tags[0].satisfies_latest is False
        assert tags[1].version == "2.0.0"

    def test_prerelease_channels(self):
        tags = extract_tags_from_version_list(SCENARIO_B, "2.0.0")
        assert names(tags) == ["satisfies", "beta", "alpha"]
        assert tags[1].version == "2.1.0-beta.1"
        assert tags[2].version == "2.1.0-alpha.1"

    def test_invalid_request(self):
        tags = extract_tags_from_version_list(SCENARIO_B, "not-a-version")
        satisfies = tags[0]
        assert satisfies.is_invalid is True
        assert satisfies.version_match_not_found is True
        assert satisfies.version is None
        assert names(tags) == ["satisfies", "latest", "beta", "alpha"]

    def test_prerelease_channel_named_latest_is_skipped(self):
        tags = extract_tags_from_version_list(["1.0.0", "2.0.0-latest.1"], "1.0.0")
        assert names(tags) == ["satisfies"]

    def test_idempotent(self):
        first = extract_tags_from_version_list(SCENARIO_B, "^2.0.0")
        second = extract_tags_from_version_list(SCENARIO_B, "^2.0.0")
        assert first == second

    def test_names_are_unique(self):
        tags = extract_tags_from_version_list(SCENARIO_B + ["1.0.0"], "1.0.0")
        assert len(names(tags)) == len(set(names(tags)))

    def test_to_dict_payload(self):
        tags = extract_tags_from_version_list(["2.0.0", "1.5.0"], "1.x")
        assert tags[0].to_dict() == {
            "name": "satisfies",
            "version": "1.5.0",
            "isNewerThanLatest": False,
            "isLatestVersion": False,
            "satisfiesLatest": False,
            "isInvalid": False,
            "versionMatchNotFound": False,
            "isFixedVersion": False,
        }
        assert tags[1].to_dict() == {"name": "latest", "version": "2.0.0"}


class TestTagFilter:
    """Allow-list filtering."""

    def test_empty_or_missing_filter_returns_input(self):
        tags = extract_tags_from_version_list(SCENARIO_B, "2.0.0")
        assert tag_filter(tags, []) is tags
        assert tag_filter(tags, None) is tags

    def test_filter_is_case_insensitive(self):
        tags = extract_tags_from_version_list(SCENARIO_B, "2.0.0")
        assert names(tag_filter(tags, ["BETA"])) == ["beta"]

    def test_filter_preserves_order(self):
        tags = extract_tags_from_version_list(SCENARIO_B, "not-a-version")
        filtered = tag_filter(tags, ["alpha", "Satisfies", "beta"])
        assert names(filtered) == ["satisfies", "beta", "alpha"]

    def test_keep_synthetic(self):
        tags = extract_tags_from_version_list(SCENARIO_B, "not-a-version")
        filtered = tag_filter(tags, ["beta"], keep_synthetic=True)
        assert names(filtered) == ["satisfies", "latest", "beta"]

    def test_tagged_versions_pipeline(self):
        assert names(tagged_versions(SCENARIO_B, "2.0.0", ["beta"])) == ["beta"]
        assert names(tagged_versions(SCENARIO_B, "2.0.0")) == ["satisfies", "beta", "alpha"]


def test_spaced_operator_request_hides_older_prerelease():
    tags = extract_tags_from_version_list(["2.0.0", "1.0.0-beta.1"], "< 3.0.0")
    assert names(tags) == ["satisfies", "latest"]
    assert tags[0].is_invalid is False


def test_unparseable_versions_sort_last():
    tags = [
        TaggedVersion("zeta", "garbage"),
        TaggedVersion("alpha", "1.0.0-alpha.1"),
        TaggedVersion("beta", "2.0.0-beta.1"),
        TaggedVersion("omega", None),
    ]
    ordered = sorted(tags, key=cmp_to_key(sort_tags_recent_first))
    assert names(ordered) == ["beta", "alpha", "zeta", "omega"]
    assert sorted(reversed(tags), key=cmp_to_key(sort_tags_recent_first)) == ordered

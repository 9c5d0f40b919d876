"""
Tests for vermatch.versioning module.

Tests version parsing, ordering and matching including:
- Segment parsing and round-tripping
- Development phase classification and ordering
- Validity rules
- Unsafe comparison propagation
- Wildcard patterns ("17*", "*", "*!")
- Pattern resolution against sorted catalogs
"""

from __future__ import annotations

import pytest

from vermatch.exceptions import VersionResolutionError
from vermatch.versioning import (
    LATEST,
    LATEST_UNSTABLE,
    VersionComparisonResult,
    VersionIdentifier,
    VersionLetters,
    VersionMatchResult,
    VersionPhase,
    VersionSegment,
    parse_segments,
    resolve_version_pattern,
    sort_versions,
)


def v(text: str) -> VersionIdentifier:
    return VersionIdentifier.of(text)


class RecordingLogger:
    """Logger that records debug calls for assertions."""

    def __init__(self):
        self.debug_calls: list[tuple[str, str]] = []

    def step(self, step, total, message):
        pass

    def warning(self, prefix, message):
        pass

    def verbose(self, prefix, message):
        pass

    def debug(self, prefix, message):
        self.debug_calls.append((prefix, message))


class TestVersionPhase:
    """Tests for phase keyword lookup and ranking."""

    def test_keywords_are_case_insensitive(self):
        """Test that phase keywords match regardless of case."""
        assert VersionPhase.from_keyword("RC") is VersionPhase.RELEASE_CANDIDATE
        assert VersionPhase.from_keyword("SNAPSHOT") is VersionPhase.SNAPSHOT
        assert VersionPhase.from_keyword("Beta") is VersionPhase.BETA

    def test_unknown_keyword(self):
        """Test that unknown letters are not a phase."""
        assert VersionPhase.from_keyword("foo") is None
        assert VersionPhase.from_keyword("") is None

    def test_ranking(self):
        """Test maturity order of the phases."""
        ranks = [phase.rank for phase in VersionPhase]
        assert ranks == sorted(ranks)
        assert VersionPhase.ALPHA.rank < VersionPhase.BETA.rank
        assert VersionPhase.MILESTONE.rank < VersionPhase.RELEASE_CANDIDATE.rank

    def test_release_is_not_development_phase(self):
        """Test that only pre-release phases are development phases."""
        assert VersionPhase.SNAPSHOT.is_development_phase()
        assert VersionPhase.RELEASE_CANDIDATE.is_development_phase()
        assert not VersionPhase.RELEASE.is_development_phase()


class TestVersionLetters:
    """Tests for letter classification and comparison."""

    def test_sentinels(self):
        """Test that EMPTY and UNDEFINED are distinguishable."""
        assert VersionLetters.EMPTY.is_empty()
        assert not VersionLetters.UNDEFINED.is_empty()
        assert VersionLetters.EMPTY != VersionLetters.UNDEFINED
        assert VersionLetters.of("") is VersionLetters.EMPTY

    def test_development_phase_detection(self):
        """Test development phase classification."""
        assert VersionLetters.of("alpha").is_development_phase()
        assert not VersionLetters.of("final").is_development_phase()
        assert not VersionLetters.of("foo").is_development_phase()
        assert not VersionLetters.UNDEFINED.is_development_phase()

    def test_known_phases_compare_by_rank(self):
        """Test that two phases are ordered safely by rank."""
        result = VersionLetters.of("alpha").compare_version(VersionLetters.of("beta"))
        assert result is VersionComparisonResult.LESS
        result = VersionLetters.of("RC").compare_version(VersionLetters.of("rc"))
        assert result is VersionComparisonResult.EQUAL

    def test_phase_vs_empty(self):
        """Test that pre-releases precede and release keywords equal empty."""
        empty = VersionLetters.EMPTY
        assert VersionLetters.of("rc").compare_version(empty) is VersionComparisonResult.LESS
        assert empty.compare_version(VersionLetters.of("rc")) is VersionComparisonResult.GREATER
        assert VersionLetters.of("final").compare_version(empty) is VersionComparisonResult.EQUAL

    def test_unknown_letters_are_unsafe(self):
        """Test that free text is ordered heuristically."""
        empty = VersionLetters.EMPTY
        foo = VersionLetters.of("foo")
        assert foo.compare_version(empty) is VersionComparisonResult.GREATER_UNSAFE
        assert empty.compare_version(foo) is VersionComparisonResult.LESS_UNSAFE
        assert VersionLetters.of("alpha").compare_version(foo) is VersionComparisonResult.LESS_UNSAFE
        assert foo.compare_version(VersionLetters.of("goo")) is VersionComparisonResult.LESS_UNSAFE
        assert foo.compare_version(VersionLetters.of("FOO")) is VersionComparisonResult.EQUAL_UNSAFE

    def test_identical_unknown_letters_are_safe(self):
        """Test that identical free text compares safely equal."""
        foo = VersionLetters.of("foo")
        assert foo.compare_version(VersionLetters.of("foo")) is VersionComparisonResult.EQUAL


class TestVersionComparisonResult:
    """Tests for the comparison result vocabulary."""

    def test_with_unsafe(self):
        """Test that with_unsafe keeps the ordering."""
        assert VersionComparisonResult.LESS.with_unsafe() is VersionComparisonResult.LESS_UNSAFE
        assert VersionComparisonResult.EQUAL_UNSAFE.with_unsafe() is VersionComparisonResult.EQUAL_UNSAFE

    def test_reverse(self):
        """Test reversing keeps the unsafe flag."""
        assert VersionComparisonResult.GREATER_UNSAFE.reverse() is VersionComparisonResult.LESS_UNSAFE
        assert VersionComparisonResult.EQUAL.reverse() is VersionComparisonResult.EQUAL

    def test_of_normalizes_sign(self):
        """Test building results from arbitrary integers."""
        assert VersionComparisonResult.of(-42) is VersionComparisonResult.LESS
        assert VersionComparisonResult.of(7, unsafe=True) is VersionComparisonResult.GREATER_UNSAFE
        assert VersionComparisonResult.of(0).to_int() == 0


class TestSegmentParsing:
    """Tests for splitting version text into segments."""

    def test_segments_of_prerelease_version(self):
        """Test the segment chain of a version with a phase."""
        segments = list(v("1.0-alpha1"))
        assert [str(s) for s in segments] == ["1", ".0", "-alpha", "1"]
        assert segments[2].separator == "-"
        assert segments[2].number == 0
        assert segments[2].letters.phase is VersionPhase.ALPHA

    def test_pattern_segment(self):
        """Test that wildcards attach to the preceding digits."""
        segment = parse_segments("17*")
        assert segment.digits == "17"
        assert segment.pattern == "*"
        assert segment.next is None
        assert segment.is_pattern()
        assert not segment.is_valid()

    def test_empty_text(self):
        """Test that empty text parses to a single empty segment."""
        segment = parse_segments("")
        assert segment.is_empty()
        assert segment.next is None

    def test_chain_links_every_segment(self):
        """Test that each segment points at its successor and the tail ends the chain."""
        head = parse_segments("1.2-rc3")
        chain = []
        segment = head
        while segment is not None:
            chain.append(str(segment))
            last = segment
            segment = segment.next
        assert chain == ["1", ".2", "-rc", "3"]
        assert last.next is None

    def test_long_version_text(self):
        """Test that very long versions parse without deep recursion."""
        text = ".".join(["1"] * 5000)
        assert len(list(v(text))) == 5000
        assert str(v(text)) == text

    def test_leading_zeros_are_kept(self):
        """Test that digits keep their text while number is numeric."""
        segment = parse_segments("007")
        assert segment.digits == "007"
        assert segment.number == 7

    def test_invalid_separator(self):
        """Test that multi-character or unknown separators are invalid."""
        segments = list(v("1..2"))
        assert segments[1].separator == ".."
        assert not segments[1].is_valid()
        assert not list(v("1~2"))[1].is_valid()

    def test_invalid_pattern_rejected(self):
        """Test that segments only accept known wildcard markers."""
        with pytest.raises(ValueError, match="Invalid pattern"):
            VersionSegment(pattern="?")

    @pytest.mark.parametrize(
        "text",
        ["1.0", "17.0.2+8", "1.0-SNAPSHOT", "2024.1.3", "17*", "*!", "007.1", "1..x~", ""],
    )
    def test_round_trip(self, text):
        """Test that str() reproduces the parsed text."""
        assert str(v(text)) == text


class TestVersionIdentifierParsing:
    """Tests for VersionIdentifier.of()."""

    def test_none_input(self):
        """Test that None parses to None."""
        assert VersionIdentifier.of(None) is None

    def test_latest_alias(self):
        """Test that "latest" is an alias for the LATEST pattern."""
        assert v("latest") is LATEST
        assert str(LATEST) == "*"
        assert LATEST.is_pattern()
        assert str(LATEST_UNSTABLE) == "*!"
        assert LATEST_UNSTABLE.is_pattern()

    def test_structural_equality(self):
        """Test equality and hashing by segment structure."""
        assert v("1.2.3") == v("1.2.3")
        assert hash(v("1.2.3")) == hash(v("1.2.3"))
        assert v("1.0") != v("1")
        assert v("1.0") != "1.0"

    def test_repr(self):
        assert repr(v("1.0")) == "VersionIdentifier('1.0')"


class TestValidity:
    """Tests for is_valid() and development phase aggregation."""

    @pytest.mark.parametrize(
        "text",
        ["1", "1.0", "0.1", "17.2.final", "1.0-alpha1", "1.0-SNAPSHOT", "3.9.6_rc2", "1.0.1a"],
    )
    def test_valid_versions(self, text):
        assert v(text).is_valid()

    @pytest.mark.parametrize(
        "text",
        [".1.0", "-1-2", "rc1", "beta", "0.0.0", "0.alpha", "", "1..0", "17*", "*", "*!"],
    )
    def test_invalid_versions(self, text):
        assert not v(text).is_valid()

    def test_multiple_phases_undefined(self):
        """Test that two development phases make the version invalid."""
        identifier = v("1.0-alpha1.rc2")
        assert not identifier.is_valid()
        assert identifier.get_development_phase() is VersionLetters.UNDEFINED

    def test_single_phase(self):
        """Test that the single development phase is reported."""
        phase = v("1.0-beta2").get_development_phase()
        assert phase.letters == "beta"
        assert phase.phase is VersionPhase.BETA

    def test_no_phase(self):
        """Test that release keywords do not count as development phase."""
        assert v("17.2.final").get_development_phase() is VersionLetters.EMPTY
        assert v("1.0").development_phase.is_empty()

    def test_stability(self):
        """Test stable and unstable classification."""
        assert v("1.0").is_stable()
        assert not v("1.0-rc1").is_stable()
        assert v("1.0-rc1").is_unstable()
        assert not v("1.0").is_unstable()

    def test_min_max(self):
        """Test that a single version is its own range bounds."""
        identifier = v("1.2")
        assert identifier.get_min() is identifier
        assert identifier.get_max() is identifier


class TestCompareVersion:
    """Tests for ordering of identifiers."""

    def test_numeric_ordering(self):
        """Test numeric (not lexical) segment comparison."""
        assert v("1.10").compare_version(v("1.9")) is VersionComparisonResult.GREATER
        assert v("1.2.3").compare_version(v("1.2.4")) is VersionComparisonResult.LESS
        assert v("141.0.7390.123").is_greater(v("141.0.7390.122"))

    def test_trailing_zero_equivalence(self):
        """Test that missing segments compare as zero."""
        assert v("1.0").compare_version(v("1")) is VersionComparisonResult.EQUAL
        assert v("1").compare_version(v("1.0.0")) is VersionComparisonResult.EQUAL

    def test_longer_version_is_newer(self):
        assert v("1.0.1").compare_version(v("1.0")) is VersionComparisonResult.GREATER

    def test_prerelease_precedes_release(self):
        """Test that development phases are older than the release."""
        assert v("1.0-alpha1").compare_version(v("1.0")) is VersionComparisonResult.LESS
        assert v("1.0").compare_version(v("1.0-rc1")) is VersionComparisonResult.GREATER

    def test_phase_ordering(self):
        """Test ordering across development phases."""
        ordered = ["1.0-SNAPSHOT", "1.0-alpha1", "1.0-beta1", "1.0-M1", "1.0-rc1", "1.0"]
        for older, newer in zip(ordered, ordered[1:]):
            assert v(older).is_less(v(newer)), (older, newer)

    def test_phase_number_ordering(self):
        assert v("1.0-rc1").is_less(v("1.0-rc2"))

    def test_reflexive_and_safe(self):
        """Test that every version equals itself safely."""
        for text in ("1.0", "1.0.1a", "1.0-alpha1", "17*", ""):
            assert v(text).compare_version(v(text)) is VersionComparisonResult.EQUAL

    def test_antisymmetric(self):
        """Test that swapping operands reverses the direction."""
        pairs = [("1.2", "1.10"), ("1.0-rc1", "1.0"), ("1.0a", "1.0b"), ("2.0", "1.0x")]
        for a, b in pairs:
            forward = v(a).compare_version(v(b))
            backward = v(b).compare_version(v(a))
            assert forward.to_int() == -backward.to_int()

    def test_none_is_unsafe_greater(self):
        """Test that any version is unsafely newer than no version."""
        assert v("1.0").compare_version(None) is VersionComparisonResult.GREATER_UNSAFE

    def test_unknown_suffix_is_unsafe(self):
        """Test heuristic ordering of unknown letter suffixes."""
        assert v("1.0x").compare_version(v("1.0y")) is VersionComparisonResult.LESS_UNSAFE

    def test_unsafe_tie_propagates(self):
        """Test that an unsafe tie flags a later certain difference."""
        assert v("1.Foo.2").compare_version(v("1.foo.3")) is VersionComparisonResult.LESS_UNSAFE
        assert v("1.Foo").compare_version(v("1.foo")) is VersionComparisonResult.EQUAL_UNSAFE

    def test_safe_tie_does_not_flag(self):
        """Test that release keywords tie safely."""
        assert v("1.final.2").compare_version(v("1.ga.3")) is VersionComparisonResult.LESS

    def test_unknown_suffix_vs_empty(self):
        """Test that an unknown suffix is unsafely newer than none."""
        assert v("1x.2").compare_version(v("1.3")) is VersionComparisonResult.GREATER_UNSAFE

    def test_rich_comparison(self):
        """Test Python operators derived from compare_version()."""
        assert v("1.0-alpha1") < v("1.0")
        assert v("2.0") > v("1.9.9")
        assert v("1.0") <= v("1")
        assert v("1.0") >= v("1")

    def test_sort_versions(self):
        """Test sorting newest first and oldest first."""
        versions = [v(t) for t in ("1.0", "2.0", "1.0-rc1", "1.10", "1.9")]
        assert [str(x) for x in sort_versions(versions)] == ["2.0", "1.10", "1.9", "1.0", "1.0-rc1"]
        assert [str(x) for x in sort_versions(versions, descending=False)] == [
            "1.0-rc1",
            "1.0",
            "1.9",
            "1.10",
            "2.0",
        ]


class TestMatches:
    """Tests for pattern matching and containment."""

    def test_prefix_wildcard(self):
        """Test that "17*" matches versions starting with 17."""
        assert v("17*").matches(v("17.2.final"))
        assert v("17*").matches(v("17"))
        assert not v("17*").matches(v("18.0"))
        assert not v("17*").matches(v("170.1"))

    def test_dotted_wildcard(self):
        """Test that "17.*" matches 17 and its sub-versions."""
        assert v("17.*").matches(v("17.0.2"))
        assert v("17.*").matches(v("17"))
        assert not v("17.*").matches(v("17-beta1"))
        assert not v("17.*").matches(v("18.0"))

    def test_latest_matches_everything(self):
        assert LATEST.matches(v("1.0"))
        assert LATEST.matches(v("1.0-SNAPSHOT"))

    def test_unstable_wildcard_requires_phase(self):
        """Test that "*!" only matches unstable versions."""
        assert not v("*!").matches(v("1.0"))
        assert v("*!").matches(v("1.0-snapshot"))
        assert v("*!").matches(v("1.0-alpha1.rc2"))

    def test_concrete_matches_itself(self):
        """Test that concrete versions only contain equal versions."""
        assert v("1.2.3").matches(v("1.2.3"))
        assert v("1.2").matches(v("1.2.0"))
        assert not v("1.2.3").matches(v("1.2.4"))
        assert not v("1.2.3").matches(v("1.2"))
        assert v("1.2.3").contains(v("1.2.3"))

    def test_none_never_matches(self):
        assert not LATEST.matches(None)

    def test_segment_match_results(self):
        """Test the per-segment trinary outcome."""
        one = parse_segments("1")
        assert one.matches(parse_segments("1")) is VersionMatchResult.CONTINUE
        assert one.matches(parse_segments("2")) is VersionMatchResult.MISMATCH
        empty = VersionSegment.EMPTY
        assert empty.matches(VersionSegment.EMPTY) is VersionMatchResult.MATCH
        assert parse_segments("*").matches(one) is VersionMatchResult.MATCH


class TestResolveVersionPattern:
    """Tests for resolving patterns against catalogs."""

    @pytest.fixture
    def candidates(self):
        return sort_versions([v("3.0.5"), v("2.9.0"), v("3.1.0")])

    def test_newest_match_wins(self, candidates):
        """Test that the first (newest) matching candidate is returned."""
        assert resolve_version_pattern(v("3*"), candidates, RecordingLogger()) == v("3.1.0")
        assert resolve_version_pattern(v("3.0*"), candidates, RecordingLogger()) == v("3.0.5")

    def test_none_means_latest(self, candidates):
        assert resolve_version_pattern(None, candidates, RecordingLogger()) == v("3.1.0")

    def test_concrete_version_returned_as_is(self):
        """Test that concrete versions skip the catalog lookup."""
        pinned = v("4.0")
        assert resolve_version_pattern(pinned, [], RecordingLogger()) is pinned

    def test_logs_resolution(self, candidates):
        """Test that a successful resolution emits one debug message."""
        logger = RecordingLogger()
        resolve_version_pattern(v("2*"), candidates, logger)
        assert logger.debug_calls == [
            ("VERSION", "Resolved version pattern 2* to version 2.9.0")
        ]

    def test_no_match_raises(self):
        """Test the error when no candidate matches."""
        with pytest.raises(VersionResolutionError) as exc_info:
            resolve_version_pattern(v("9*"), [v("1.0")], RecordingLogger())
        assert exc_info.value.pattern == "9*"
        assert exc_info.value.candidate_count == 1
        assert "'9*'" in str(exc_info.value)
        assert "1 version(s)" in str(exc_info.value)

    def test_uses_global_logger_by_default(self, candidates):
        """Test that resolution works without an explicit logger."""
        assert resolve_version_pattern(v("2*"), candidates) == v("2.9.0")

"""
Unit tests for the path filter policy.
"""

import io
import pytest

from pr_change_filter.filtering.errors import RegexSyntaxError
from pr_change_filter.filtering.policy import FilterConfiguration, DEFAULT_MATCH_ALL_REGEX
from pr_change_filter.models.pull_request import ChangedFile


class TestFilterConfigurationBuild:
    """Construction and compilation of patterns."""

    def test_defaults(self):
        config = FilterConfiguration.build()

        assert config.inclusion_pattern == DEFAULT_MATCH_ALL_REGEX
        assert config.exclusion_pattern is None
        assert config.has_exclusion is False

    def test_blank_exclusion_means_none(self):
        assert FilterConfiguration.build(".*", "").exclusion_pattern is None
        assert FilterConfiguration.build(".*", "   ").exclusion_pattern is None

    def test_invalid_inclusion_raises(self):
        with pytest.raises(RegexSyntaxError) as exc_info:
            FilterConfiguration.build("src/[a-z")

        assert exc_info.value.field == "inclusion_pattern"
        assert exc_info.value.pattern == "src/[a-z"
        assert str(exc_info.value).startswith("Invalid Regex : ")
        assert exc_info.value.diagnostic in str(exc_info.value)

    def test_invalid_exclusion_raises(self):
        with pytest.raises(RegexSyntaxError) as exc_info:
            FilterConfiguration.build(".*", "(docs")

        assert exc_info.value.field == "exclusion_pattern"

    def test_regex_syntax_error_is_value_error(self):
        with pytest.raises(ValueError):
            FilterConfiguration.build("*.py")

    def test_equality_by_patterns(self):
        assert FilterConfiguration.build("a", "b") == FilterConfiguration.build("a", "b")
        assert FilterConfiguration.build("a", "") == FilterConfiguration.build("a", None)
        assert FilterConfiguration.build("a") != FilterConfiguration.build("b")


class TestShouldInclude:
    """Inclusion predicate."""

    def test_none_and_empty_never_match(self):
        config = FilterConfiguration.build()

        assert config.should_include(None) is False
        assert config.should_include("") is False

    def test_sentinel_matches_any_path(self):
        config = FilterConfiguration.build()

        assert config.should_include("anything/at/all.txt") is True
        assert config.should_include("line\nbreak") is True

    def test_full_string_match(self):
        config = FilterConfiguration.build(r"^src/.*\.go$")

        assert config.should_include("src/main.go") is True
        assert config.should_include("x/src/main.go") is False

    def test_no_substring_match(self):
        config = FilterConfiguration.build(r"src")

        assert config.should_include("src") is True
        assert config.should_include("src/main.go") is False

    def test_case_insensitive(self):
        config = FilterConfiguration.build("DOCS/.*")

        assert config.should_include("docs/readme.md") is True
        assert config.should_include("Docs/Guide.MD") is True


class TestNotExcluded:
    """Exclusion predicate."""

    def test_none_and_empty_are_not_excluded(self):
        config = FilterConfiguration.build(".*", ".*")

        assert config.not_excluded(None) is True
        assert config.not_excluded("") is True

    def test_no_exclusion_configured(self):
        config = FilterConfiguration.build("src/.*")

        assert config.not_excluded("README.md") is True

    def test_sentinel_excludes_everything(self):
        config = FilterConfiguration.build(".*", ".*")

        assert config.not_excluded("main.go") is False
        assert config.not_excluded("docs/readme.md") is False

    def test_exclusion_full_match(self):
        config = FilterConfiguration.build(".*", r".*\.md$")

        assert config.not_excluded("readme.md") is False
        assert config.not_excluded("README.MD") is False
        assert config.not_excluded("readme.md.bak") is True
        assert config.not_excluded("main.go") is True


class TestMatching:
    """Combined predicate and per-file matching."""

    def test_exclusion_overrides_inclusion(self):
        config = FilterConfiguration.build(".*", r".*\.md$")

        assert config.matches("readme.md") is False
        assert config.matches("main.go") is True

    def test_match_file_prefers_current_path(self):
        config = FilterConfiguration.build(r".*\.txt")

        assert config.match_file(ChangedFile("new.txt", "old.txt")) == ("new.txt", False)

    def test_match_file_on_previous_path(self):
        config = FilterConfiguration.build(r"old\.txt")

        assert config.match_file(ChangedFile("new.txt", "old.txt")) == ("old.txt", True)

    def test_match_file_without_match(self):
        config = FilterConfiguration.build(r"a\.txt")

        assert config.match_file(ChangedFile("b.txt")) is None
        assert config.match_file(ChangedFile(None, None)) is None

    def test_excluded_current_path_falls_back_to_previous(self):
        config = FilterConfiguration.build(".*", r"docs/.*")

        assert config.match_file(ChangedFile("docs/a.txt", "src/a.txt")) == ("src/a.txt", True)


class TestEvaluate:
    """Pull request level decisions."""

    def test_scenario_single_matching_file(self):
        config = FilterConfiguration.build(r"a\.txt")

        decision = config.evaluate(1, [ChangedFile("a.txt")])

        assert decision.excluded is False
        assert decision.matched_path == "a.txt"
        assert decision.matched_previous is False

    def test_scenario_no_matching_file(self):
        config = FilterConfiguration.build(r"a\.txt")

        decision = config.evaluate(2, [ChangedFile("b.txt")])

        assert decision.excluded is True
        assert decision.matched_path is None
        assert decision.log_lines == []

    def test_scenario_rename_matches_previous(self):
        config = FilterConfiguration.build(r"old\.txt")

        decision = config.evaluate(3, [ChangedFile("new.txt", "old.txt", "renamed")])

        assert decision.excluded is False
        assert decision.matched_path == "old.txt"
        assert decision.matched_previous is True

    def test_scenario_exclude_everything(self):
        config = FilterConfiguration.build(".*", ".*")

        assert config.is_excluded(4, [ChangedFile("a.txt"), ChangedFile("b/c.go", "d.go")]) is True
        assert config.is_excluded(4, []) is True

    def test_scenario_empty_file_list(self):
        config = FilterConfiguration.build(r"a\.txt")

        assert config.is_excluded(5, []) is True

    def test_build_line_written_to_output(self):
        config = FilterConfiguration.build(r"src/.*")
        output = io.StringIO()

        config.evaluate(42, [ChangedFile("README.md"), ChangedFile("src/app.py")], output)

        assert output.getvalue() == "\n    Will Build PR #42. Found matching file : src/app.py\n"

    def test_previous_build_line_written_to_output(self):
        config = FilterConfiguration.build(r"old\.txt")
        output = io.StringIO()

        config.evaluate(7, [ChangedFile("new.txt", "old.txt")], output)

        assert output.getvalue() == "\n    Will Build PR #7. Found matching (previous) file : old.txt\n"

    def test_stops_at_first_match(self):
        config = FilterConfiguration.build(r".*\.py")
        output = io.StringIO()
        consumed = []

        def files():
            for name in ["a.py", "b.py", "c.py"]:
                consumed.append(name)
                yield ChangedFile(name)

        decision = config.evaluate(9, files(), output)

        assert decision.matched_path == "a.py"
        assert consumed == ["a.py"]
        assert output.getvalue().count("Will Build PR") == 1

    def test_no_output_when_excluded(self):
        config = FilterConfiguration.build(r"a\.txt")
        output = io.StringIO()

        config.evaluate(2, [ChangedFile("b.txt")], output)

        assert output.getvalue() == ""

    def test_idempotent(self):
        config = FilterConfiguration.build(r"src/.*", r".*\.md")
        files = [ChangedFile("src/readme.md"), ChangedFile("lib/x.py", "src/x.py")]
        first, second = io.StringIO(), io.StringIO()

        decision_1 = config.evaluate(11, files, first)
        decision_2 = config.evaluate(11, files, second)

        assert decision_1 == decision_2
        assert first.getvalue() == second.getvalue()

"""
Tests for the CheckState dataclass.
"""
import pytest
from expectdiag.utils.state import CheckState
from expectdiag.compare import CheckResult
from expectdiag.parsing.annotations import ExpectedError
from expectdiag.parsing.diagnostics import Diagnostic


class TestCheckStateDefaults:

    def test_default_fields(self):
        state = CheckState()
        assert state.source_path == ""
        assert state.source_lines == []
        assert state.cfg is None
        assert state.expected == []
        assert state.annotation_error is None
        assert state.compiler_output == ""
        assert state.diagnostics == []
        assert state.result is None

    def test_not_passed_before_check(self):
        assert CheckState().passed is False

    def test_has_errors_false_by_default(self):
        assert CheckState().has_errors is False


class TestCheckStateResults:

    def test_has_errors_with_error(self):
        state = CheckState()
        state.diagnostics = [Diagnostic(line=1, column=1, severity="error", message="bad")]
        assert state.has_errors is True

    def test_has_errors_with_warning_only(self):
        state = CheckState()
        state.diagnostics = [Diagnostic(line=1, column=1, severity="warning", message="warn")]
        assert state.has_errors is False

    def test_passed_with_clean_result(self):
        state = CheckState()
        state.update_result([], CheckResult())
        assert state.passed is True

    def test_annotation_error_fails(self):
        state = CheckState()
        state.update_result([], CheckResult())
        state.annotation_error = "line 1: encountered //~| without preceding //~^ line"
        assert state.passed is False

    def test_update_expected_clears_annotation_error(self):
        state = CheckState(annotation_error="old")
        state.update_expected([ExpectedError(1, "error", "x")])
        assert state.annotation_error is None
        assert len(state.expected) == 1


class TestGetSourceLine:

    def test_valid_line(self):
        state = CheckState(source_lines=["a", "b", "c"])
        assert state.get_source_line(2) == "b"

    def test_out_of_range(self):
        state = CheckState(source_lines=["a"])
        assert state.get_source_line(2) is None

    def test_non_positive(self):
        state = CheckState(source_lines=["a"])
        assert state.get_source_line(0) is None
        assert state.get_source_line(-3) is None


class TestClearResults:

    def test_clears_derived_fields(self):
        state = CheckState(source_lines=["a"])
        state.update_expected([ExpectedError(1, "error", "x")])
        state.update_result([Diagnostic(line=1, column=1, severity="error", message="x")], CheckResult())
        state.clear_results()
        assert state.expected == []
        assert state.diagnostics == []
        assert state.result is None
        assert state.source_lines == ["a"]

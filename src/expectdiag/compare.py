"""
Matches expected errors from annotations against the compiler's actual diagnostics.
"""
from dataclasses import dataclass, field
from typing import List, Tuple
from .parsing.annotations import ExpectedError
from .parsing.diagnostics import Diagnostic

# Actual diagnostics that fail a test when nobody expected them
REQUIRED_SEVERITIES = ("error", "warning")


@dataclass
class CheckResult:
    matched: List[Tuple[ExpectedError, Diagnostic]] = field(default_factory=list)
    not_found: List[ExpectedError] = field(default_factory=list)
    unexpected: List[Diagnostic] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.not_found and not self.unexpected


def expectation_matches(expected: ExpectedError, actual: Diagnostic) -> bool:
    """
    Same line, kind is a prefix of the severity ('warn' matches 'warning'),
    and the expected message appears in the actual one.
    """
    if expected.line_num != actual.line:
        return False
    if not actual.severity.startswith(expected.kind):
        return False
    return expected.msg in actual.message


def check_expected_errors(expected: List[ExpectedError], actual: List[Diagnostic]) -> CheckResult:
    result = CheckResult()
    used = [False] * len(actual)

    for ee in expected:
        for i, diag in enumerate(actual):
            if not used[i] and expectation_matches(ee, diag):
                used[i] = True
                result.matched.append((ee, diag))
                break
        else:
            result.not_found.append(ee)

    result.unexpected = [
        diag for i, diag in enumerate(actual)
        if not used[i] and diag.severity in REQUIRED_SEVERITIES
    ]
    return result

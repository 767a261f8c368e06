from dataclasses import dataclass, field
from typing import List, Optional
from ..parsing.annotations import ExpectedError
from ..parsing.diagnostics import Diagnostic
from ..compare import CheckResult

@dataclass
class CheckState:
    """
    Everything known about the test file after the latest check.
    """
    source_path: str = ""
    source_lines: List[str] = field(default_factory=list)
    cfg: Optional[str] = None

    # Annotations
    expected: List[ExpectedError] = field(default_factory=list)
    annotation_error: Optional[str] = None

    # Compiler Output
    compiler_output: str = ""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    result: Optional[CheckResult] = None
    last_update: float = 0.0

    @property
    def has_errors(self) -> bool:
        """Returns True if any actual diagnostic is marked as an error."""
        return any(d.severity == "error" for d in self.diagnostics)

    @property
    def passed(self) -> bool:
        if self.annotation_error is not None or self.result is None:
            return False
        return self.result.passed

    def get_source_line(self, line_num: int) -> Optional[str]:
        if 0 < line_num <= len(self.source_lines):
            return self.source_lines[line_num - 1]
        return None

    def update_expected(self, expected: List[ExpectedError]):
        self.expected = expected
        self.annotation_error = None

    def update_result(self, diagnostics: List[Diagnostic], result: CheckResult):
        self.diagnostics = diagnostics
        self.result = result

    def clear_results(self):
        """Drops everything derived from the previous scan and compile."""
        self.expected = []
        self.diagnostics = []
        self.result = None

from .parsing.annotations import load_errors_from_file
from .parsing.diagnostics import parse_diagnostics
from .compare import check_expected_errors


def check_file(source_path: str, stderr: str, cfg: str = None):
    """
    Pipeline: Test File + Compiler Stderr -> Expected vs Actual -> CheckResult
    """
    expected = load_errors_from_file(source_path, cfg)
    actual = parse_diagnostics(stderr, source_path)
    return check_expected_errors(expected, actual)

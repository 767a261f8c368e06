from .annotations import (
    AnnotationError,
    AnnotationScanner,
    ExpectedError,
    load_errors,
    load_errors_from_file,
    read_source_lines,
    make_tag,
)
from .diagnostics import parse_diagnostics, Diagnostic

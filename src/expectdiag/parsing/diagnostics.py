import os
import re
from dataclasses import dataclass
from typing import List, Optional

SEVERITIES = ("error", "warning", "note", "help")

@dataclass
class Diagnostic:
    line: int
    column: int
    severity: str # 'error', 'warning', 'note' or 'help'
    message: str
    code: Optional[str] = None
    path: Optional[str] = None

# Pattern: filename:line:col: severity[code]: message
# GCC/Clang and `rustc --error-format=short`
RE_LOCATED = re.compile(
    r"^(?P<path>.*?):(?P<line>\d+):(?P<col>\d+):\s+(?P<sev>error|warning|note|help)"
    r"(?:\[(?P<code>[A-Za-z0-9_]+)\])?:\s+(?P<msg>.*)$"
)

# rustc human format: header, then " --> file:line:col" a few lines down
RE_HEADER = re.compile(
    r"^(?P<sev>error|warning|note|help)(?:\[(?P<code>[A-Za-z0-9_]+)\])?:\s+(?P<msg>.*)$"
)
RE_ARROW = re.compile(r"^\s*-->\s+(?P<path>.*?):(?P<line>\d+):(?P<col>\d+)\s*$")

def _same_file(path: Optional[str], source_filename: Optional[str]) -> bool:
    if not source_filename or path is None:
        return True
    return os.path.basename(path) == os.path.basename(source_filename)

def parse_diagnostics(stderr: str, source_filename: str = None) -> List[Diagnostic]:
    """
    Parses compiler error output into structured objects.
    Example: hello.cpp:10:5: error: expected ';'
    Example: main.rs:5:18: error[E0308]: mismatched types
    Lines without a location (e.g. 'error: aborting due to ...') are skipped.
    """
    diagnostics = []
    pending = None

    for raw in stderr.splitlines():
        line = raw.rstrip()

        match = RE_LOCATED.match(line)
        if match:
            pending = None
            diagnostics.append(Diagnostic(
                line=int(match.group("line")),
                column=int(match.group("col")),
                severity=match.group("sev"),
                message=match.group("msg").strip(),
                code=match.group("code"),
                path=match.group("path"),
            ))
            continue

        header = RE_HEADER.match(line)
        if header:
            pending = header
            continue

        arrow = RE_ARROW.match(line)
        if arrow and pending is not None:
            diagnostics.append(Diagnostic(
                line=int(arrow.group("line")),
                column=int(arrow.group("col")),
                severity=pending.group("sev"),
                message=pending.group("msg").strip(),
                code=pending.group("code"),
                path=arrow.group("path"),
            ))
            pending = None

    diagnostics = [d for d in diagnostics if _same_file(d.path, source_filename)]
    diagnostics.sort(key=lambda d: (d.line, d.column))
    return diagnostics

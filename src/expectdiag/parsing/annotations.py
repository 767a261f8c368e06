"""
Expected-diagnostic annotation scanner.

Test files declare the diagnostics they expect in comments:

    let x: i32 = "a"; //~ ERROR mismatched types
    foo();
    //~^ ERROR cannot find function
    //~| NOTE not found in this scope
    //~^^^ WARN unused variable

`//~` targets its own line, each `^` moves the target one line up, and `|`
reuses the target of the most recent annotation that was not a `|`.
With a revision such as `cfg1`, only `//[cfg1]~` is recognised.
"""
from dataclasses import dataclass
from itertools import dropwhile, takewhile
from typing import Iterable, Iterator, List, Optional, Tuple, Union

FOLLOW_MARKER = "|"
ADJUST_MARKER = "^"


@dataclass
class ExpectedError:
    line_num: int
    kind: str
    msg: str


@dataclass(frozen=True)
class ThisLine:
    pass


@dataclass(frozen=True)
class AdjustBackward:
    adjusts: int


@dataclass(frozen=True)
class FollowPrevious:
    line_num: int


WhichLine = Union[ThisLine, AdjustBackward, FollowPrevious]


class AnnotationError(Exception):
    """A malformed annotation in the file being scanned."""

    def __init__(self, message: str, line_num: int, line: str):
        super().__init__(f"line {line_num}: {message}: {line.strip()!r}")
        self.line_num = line_num
        self.line = line


def make_tag(cfg: Optional[str] = None) -> str:
    """Trigger token for the given revision (interpolated verbatim)."""
    if cfg is None:
        return "//~"
    return f"//[{cfg}]~"


def _count_run(text: str, start: int, marker: str) -> int:
    return len(list(takewhile(lambda c: c == marker, text[start:])))


def parse_expected(
    last_nonfollow_line: Optional[int], line_num: int, line: str, tag: str
) -> Optional[Tuple[WhichLine, ExpectedError]]:
    """
    Parse one line. Returns None when the line holds no trigger.
    Raises AnnotationError for `|` without an anchor or `|` mixed with `^`.
    """
    start = line.find(tag)
    if start < 0:
        return None

    marker_start = start + len(tag)
    follow = line.startswith(FOLLOW_MARKER, marker_start)
    if follow:
        adjusts = _count_run(line, marker_start + 1, ADJUST_MARKER)
        if adjusts:
            raise AnnotationError("use either //~| or //~^, not both", line_num, line)
    else:
        adjusts = _count_run(line, marker_start, ADJUST_MARKER)

    kind_start = marker_start + adjusts + (1 if follow else 0)

    # kind and msg are scanned independently from the same offset
    letters = line[kind_start:].lstrip()
    kind = "".join(c.lower() for c in takewhile(lambda c: not c.isspace(), letters))
    letters = line[kind_start:].lstrip()
    msg = "".join(dropwhile(lambda c: not c.isspace(), letters)).strip()

    if follow:
        if last_nonfollow_line is None:
            raise AnnotationError(
                "encountered //~| without preceding //~^ line", line_num, line
            )
        which: WhichLine = FollowPrevious(last_nonfollow_line)
        target = last_nonfollow_line
    elif adjusts > 0:
        which = AdjustBackward(adjusts)
        target = line_num - adjusts
    else:
        which = ThisLine()
        target = line_num

    return which, ExpectedError(line_num=target, kind=kind, msg=msg)


class AnnotationScanner:
    """
    Single forward pass over a file's lines.

    `last_nonfollow_line` is the anchor that `|` annotations resolve to. It can
    be seeded when scanning a slice that starts in the middle of a file.
    """

    def __init__(self, cfg: Optional[str] = None, last_nonfollow_line: Optional[int] = None):
        self.cfg = cfg
        self.tag = make_tag(cfg)
        self.last_nonfollow_line = last_nonfollow_line

    def scan_line(self, line_num: int, line: str) -> Optional[ExpectedError]:
        parsed = parse_expected(self.last_nonfollow_line, line_num, line, self.tag)
        if parsed is None:
            return None

        which, error = parsed
        if not isinstance(which, FollowPrevious):
            self.last_nonfollow_line = error.line_num
        return error

    def scan(self, lines: Iterable[str], start: int = 1) -> Iterator[ExpectedError]:
        for line_num, line in enumerate(lines, start):
            error = self.scan_line(line_num, line)
            if error is not None:
                yield error


def load_errors(lines: Iterable[str], cfg: Optional[str] = None) -> List[ExpectedError]:
    return list(AnnotationScanner(cfg).scan(lines))


def read_source_lines(path) -> List[str]:
    """
    Lines of a test file, numbered the way compilers number them: only `\\n`
    ends a line, and one trailing `\\r` is dropped. Form feeds and lone `\\r`
    stay inside their line.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        content = f.read()

    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_errors_from_file(path, cfg: Optional[str] = None) -> List[ExpectedError]:
    """Read a test file and return its expected errors in line order."""
    return load_errors(read_source_lines(path), cfg)

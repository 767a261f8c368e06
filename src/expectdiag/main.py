import sys
import os
import time
import argparse
from .engine import CheckEngine
from .parsing import AnnotationError
from .utils.report import display_expectations, display_result
from .utils.lang import is_supported


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="expectdiag: check //~ diagnostic annotations")
    parser.add_argument("file", nargs="?", help="Annotated C, C++ or Rust test file")
    parser.add_argument("--cfg", default=None, help="Revision tag: only //[CFG]~ annotations are active")
    parser.add_argument("--stderr", default=None, help="Read compiler output from this file instead of compiling")
    parser.add_argument("--list", action="store_true", help="Only print the expected diagnostics")
    parser.add_argument("--watch", action="store_true", help="Re-check every time the file is saved")
    return parser


def _watch(engine: CheckEngine):
    engine.on_update_callback = display_result
    engine.start()
    try:
        while True:
            time.sleep(0.5)
    finally:
        engine.stop()


def run():
    parser = _build_parser()
    args = parser.parse_args()

    if not args.file:
        print("Error: No test file specified.")
        print("Usage: expectdiag <file.rs|file.cpp> [--cfg REV]")
        sys.exit(1)

    # Resolve to absolute path immediately
    abs_path = os.path.abspath(args.file)

    if not os.path.exists(abs_path):
        print(f"Error: File not found: {abs_path}")
        sys.exit(1)

    engine = CheckEngine(abs_path, cfg=args.cfg, stderr_path=args.stderr)

    if args.list:
        try:
            expected = engine.scan()
        except AnnotationError as e:
            print(f"Annotation Error: {e}")
            sys.exit(1)
        display_expectations(expected)
        sys.exit(0)

    if not args.stderr and not is_supported(abs_path):
        print("Error: Unsupported file type. Use .c, .cpp, .cc, .cxx or .rs, or pass --stderr")
        sys.exit(1)

    if args.watch:
        try:
            _watch(engine)
        except KeyboardInterrupt:
            pass
        sys.exit(0)

    try:
        engine.check()
    except AnnotationError as e:
        print(f"Annotation Error: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Fatal Error: {e}")
        sys.exit(1)

    display_result(engine.state)
    sys.exit(0 if engine.state.passed else 1)

if __name__ == "__main__":
    run()

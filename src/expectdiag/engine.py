from typing import Callable, Optional
from .compiler.driver import CompilerDriver
from .compare import check_expected_errors
from .parsing import AnnotationError, load_errors, parse_diagnostics, read_source_lines
from .utils.config import ConfigManager
from .utils.state import CheckState
from .utils.watcher import FileWatcher
import time

class CheckEngine:
    def __init__(self, source_file: str, cfg: Optional[str] = None,
                 stderr_path: Optional[str] = None,
                 config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        if cfg is None:
            cfg = self.config.get("cfg")
        self.state = CheckState(source_path=source_file, cfg=cfg)
        self.stderr_path = stderr_path
        self.driver = CompilerDriver(self.config)
        self.watcher = FileWatcher()
        self.on_update_callback: Optional[Callable[[CheckState], None]] = None
        self.log_file = self.config.get("log_file", "/tmp/expectdiag_engine.log")
        self.user_flags: list[str] = []

    def _log(self, msg: str):
        with open(self.log_file, "a") as f:
            f.write(f"[{time.time()}] {msg}\n")

    def start(self):
        self.refresh()
        self.watcher.start_watching(self.state.source_path, self._on_file_saved)

    def stop(self):
        self.watcher.stop_watching()

    def _on_file_saved(self, path: str):
        self.refresh()

    def set_flags(self, flags: list[str]):
        self.user_flags = flags
        self.refresh()

    def _read_stderr(self) -> str:
        if self.stderr_path:
            with open(self.stderr_path, "r") as f:
                return f.read()
        return self.driver.compile(self.state.source_path, cfg=self.state.cfg, user_flags=self.user_flags)

    def scan(self):
        """Reads the test file and extracts its annotations. Raises AnnotationError."""
        self.state.source_lines = read_source_lines(self.state.source_path)
        expected = load_errors(self.state.source_lines, self.state.cfg)
        self.state.update_expected(expected)
        self._log(f"Found {len(expected)} expected diagnostics (cfg={self.state.cfg})")
        return expected

    def check(self):
        """Single check. Annotation errors propagate to the caller."""
        self._log(f"Checking {self.state.source_path} with flags {self.user_flags}")
        expected = self.scan()

        stderr = self._read_stderr()
        self.state.compiler_output = stderr
        diagnostics = parse_diagnostics(stderr, self.state.source_path)
        self._log(f"Parsed {len(diagnostics)} diagnostics from compiler output")

        result = check_expected_errors(expected, diagnostics)
        self.state.update_result(diagnostics, result)
        self.state.last_update = time.time()
        self._log(
            f"Result: {len(result.matched)} matched, {len(result.not_found)} not found, "
            f"{len(result.unexpected)} unexpected"
        )
        return result

    def refresh(self):
        """Check and notify. Used by watch mode, so failures land on the state."""
        try:
            self.check()
        except AnnotationError as e:
            self._log(f"Annotation Error: {e}")
            self.state.annotation_error = str(e)
            self.state.clear_results()
        except Exception as e:
            self._log(f"Refresh Error: {str(e)}")
            self.state.compiler_output = f"Internal Engine Error: {str(e)}"
            self.state.result = None

        if self.on_update_callback:
            self.on_update_callback(self.state)

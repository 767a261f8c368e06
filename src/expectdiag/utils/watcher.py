import hashlib
from pathlib import Path
from typing import Callable, Optional
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

def content_digest(path: Path) -> Optional[str]:
    """sha1 of the file's bytes, or None while the file is missing."""
    try:
        return hashlib.sha1(path.read_bytes()).hexdigest()
    except FileNotFoundError:
        return None

class SourceChangeHandler(FileSystemEventHandler):
    """
    Fires the callback when the test file's content changes.

    Editors touch files without changing them, write them in several chunks,
    or save by renaming a temp file over them; only a new digest counts.
    """
    def __init__(self, target_file: str, callback: Callable[[str], None]):
        self.target = Path(target_file).resolve()
        self.callback = callback
        self.last_digest = content_digest(self.target)

    def _is_target(self, path) -> bool:
        return bool(path) and Path(path).resolve() == self.target

    def _check(self):
        digest = content_digest(self.target)
        if digest is None or digest == self.last_digest:
            return
        self.last_digest = digest
        self.callback(str(self.target))

    def on_modified(self, event):
        if not event.is_directory and self._is_target(event.src_path):
            self._check()

    def on_created(self, event):
        self.on_modified(event)

    def on_moved(self, event):
        if not event.is_directory and self._is_target(getattr(event, "dest_path", None)):
            self._check()

class FileWatcher:
    """
    Manages the watchdog observer thread for one test file.
    """
    def __init__(self):
        self.observer = Observer()
        self.handler: Optional[SourceChangeHandler] = None

    def start_watching(self, file_path: str, callback: Callable[[str], None]):
        path = Path(file_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Cannot watch non-existent file: {file_path}")

        self.handler = SourceChangeHandler(str(path), callback)
        # Renames land on the directory, not the file
        self.observer.schedule(self.handler, str(path.parent), recursive=False)
        self.observer.start()

    def stop_watching(self):
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()

"""
Per-language compiler profiles, selected from the test file's extension.
A profile says which config entry names the compiler, how to ask it for
diagnostics only, and how a revision (`--cfg REV`) is handed to it.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class Language(str, Enum):
    CPP = "cpp"
    RUST = "rust"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CompilerProfile:
    config_key: str
    default_compiler: str
    diagnostic_flags: Tuple[str, ...]
    revision_flag: str            # "--cfg" takes the revision as its own argument
    writes_output: bool = False   # needs "-o" even when only checking
    fallback_compiler: Optional[str] = None

    def revision_flags(self, cfg: Optional[str]) -> List[str]:
        if not cfg:
            return []
        if self.revision_flag.startswith("--"):
            return [self.revision_flag, cfg]
        return [f"{self.revision_flag}{cfg}"]


PROFILES = {
    Language.RUST: CompilerProfile(
        config_key="rust_compiler",
        default_compiler="rustc",
        diagnostic_flags=("--error-format=short", "--emit=metadata"),
        revision_flag="--cfg",
        writes_output=True,
    ),
    Language.CPP: CompilerProfile(
        config_key="cpp_compiler",
        default_compiler="g++",
        diagnostic_flags=("-fsyntax-only",),
        revision_flag="-D",
        fallback_compiler="clang++",
    ),
}

_EXT_MAP = {
    ".cpp": Language.CPP,
    ".cc": Language.CPP,
    ".cxx": Language.CPP,
    ".c": Language.CPP,
    ".C": Language.CPP,
    ".rs": Language.RUST,
}

SUPPORTED_EXTENSIONS = set(_EXT_MAP.keys())


def detect_language(file_path: str) -> Language:
    ext = Path(file_path).suffix
    return _EXT_MAP.get(ext, Language.UNKNOWN)


def is_supported(file_path: str) -> bool:
    return Path(file_path).suffix in SUPPORTED_EXTENSIONS


def profile_for(language: Language) -> CompilerProfile:
    """Unknown sources are handed to the C/C++ compiler."""
    return PROFILES.get(language, PROFILES[Language.CPP])

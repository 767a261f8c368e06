"""
Compiler driver — runs the compiler on a test file only to collect its diagnostics.
"""
import subprocess
import tempfile
import shutil
from pathlib import Path
from typing import List, Optional
from ..utils.config import ConfigManager
from ..utils.lang import detect_language, profile_for, Language

class CompilerDriver:
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        # Use provided config or load default
        self.config = config_manager if config_manager else ConfigManager()

    def resolve_compiler(self, language: Language) -> Optional[str]:
        """
        Returns the path of the configured compiler for the language, or None.
        """
        profile = profile_for(language)
        compiler = self.config.get(profile.config_key, profile.default_compiler)
        path = shutil.which(compiler)
        # Fallback for machines that only ship clang
        if not path and compiler == profile.default_compiler and profile.fallback_compiler:
            path = shutil.which(profile.fallback_compiler)
        return path

    def build_command(self, compiler_path: str, source_file: str, language: Language,
                      output_file: str, cfg: Optional[str] = None,
                      user_flags: List[str] = []) -> List[str]:
        profile = profile_for(language)

        # --- 1. System Flags (MANDATORY) ---
        command = [compiler_path, *profile.diagnostic_flags]

        # --- 2. Revision ---
        command.extend(profile.revision_flags(cfg))

        # --- 3. Config Flags (USER PREFERENCE) ---
        command.extend(self.config.get("flags", []) or [])

        # --- 4. Runtime Overrides (HIGHEST PRIORITY) ---
        command.extend(user_flags)

        command.append(str(Path(source_file).resolve()))
        if profile.writes_output:
            command.extend(["-o", output_file])
        return command

    def compile(self, source_file: str, cfg: Optional[str] = None,
                user_flags: List[str] = []) -> str:
        """
        Compiles the source file for its diagnostics.
        Returns: Error String (the compiler's stderr)
        """
        language = detect_language(source_file)
        compiler_path = self.resolve_compiler(language)
        if not compiler_path:
            return f"Error: no compiler found for {language.value} sources."

        with tempfile.NamedTemporaryFile(suffix=".rmeta", delete=False) as tmp:
            output_file = tmp.name

        command = self.build_command(
            compiler_path, source_file, language, output_file, cfg, user_flags
        )

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False
            )
            return result.stderr

        except OSError as e:
            return f"Error: failed to run {compiler_path}: {e}"

        finally:
            if Path(output_file).exists():
                Path(output_file).unlink()

import json
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "rust_compiler": "rustc",
    "cpp_compiler": "g++",
    "flags": [],
    "cfg": None,
    "log_file": "/tmp/expectdiag_engine.log",
}


class ConfigManager:
    """
    Persists user preferences in ~/.expectdiag/config.json.
    Unknown or missing keys fall back to DEFAULT_CONFIG.
    """
    def __init__(self):
        self.config_dir = Path.home() / ".expectdiag"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = DEFAULT_CONFIG.copy()
        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r") as f:
                user_config = json.load(f)
        except (json.JSONDecodeError, OSError):
            # Corrupt config: keep the defaults rather than refusing to start
            return config

        if isinstance(user_config, dict):
            config.update(user_config)
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=4)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

CONFIG_ENV_VAR = "FOLREASONER_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "search": {
        "max_given": 1000,
        "max_clauses": 10000,
        "max_seconds": None,
        "max_depth": None,
        "max_clause_size": 100,
        "max_weight": None,
    },
    "engine": {
        "selector": "smallest",
        "pick_given_ratio": 4,
        "factoring": True,
        "backward_subsumption": True,
        "occurs_check": True,
        "hyperresolution": False,
        "unit_deletion": False,
    },
}


class Config:
    """YAML configuration with dot-separated key access.

    String values of the form ``${VAR:default}`` are taken from the
    environment (after loading a ``.env`` file) and parsed as YAML scalars,
    so ``${FOLREASONER_MAX_GIVEN:500}`` yields an int.
    """

    def __init__(self, config_path: Optional[str] = None):
        load_dotenv()
        self.config_path = config_path or self._find_config_file()
        self.config = self._load_config()
        self._resolve_environment_variables()

    def _find_config_file(self) -> Optional[str]:
        """Find the default config file, if there is one."""
        possible_paths = [
            Path.cwd() / "configs" / "default.yaml",
            Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml",
            Path.home() / ".folreasoner" / "config.yaml",
        ]
        if os.environ.get(CONFIG_ENV_VAR):
            possible_paths.insert(0, Path(os.environ[CONFIG_ENV_VAR]))

        for path in possible_paths:
            if path.exists():
                return str(path)

        return None

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file on top of the built-in defaults."""
        config = _deep_update({}, DEFAULTS)
        if self.config_path is None:
            return config
        with open(self.config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {self.config_path} must contain a mapping")
        return _deep_update(config, loaded)

    def _resolve_environment_variables(self):
        """Resolve environment variables in config values."""
        def resolve_value(value):
            if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                var_default = value[2:-1].split(":", 1)
                var_name = var_default[0]
                default_value = var_default[1] if len(var_default) > 1 else ""
                return yaml.safe_load(os.environ.get(var_name, default_value))
            elif isinstance(value, dict):
                return {k: resolve_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [resolve_value(v) for v in value]
            return value

        self.config = resolve_value(self.config)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return self.get(key)

    def update(self, updates: Dict[str, Any]):
        """Update configuration with new values."""
        self.config = _deep_update(self.config, updates)


def _deep_update(d, u):
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(dict(d.get(k) or {}), v)
        else:
            d[k] = v
    return d


# Global config instance
_config = None

def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Forget the global configuration so the next ``get_config`` reloads it."""
    global _config
    _config = None

import yaml
from pathlib import Path
import copy
import os
from typing import Any, Dict, Optional
import logging
import re

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "database": {
        "path": "~/.masjid_widgets/local_store.db",
    },
    "http": {
        "timeout": None,  # seconds per request; None waits for the server however long it takes
        "wait": 10,  # seconds start() waits for all fetches; slower ones keep their cached paint
        "user_agent": "masjid-widgets",
    },
    "site": {
        "root": "site",
        "output": "build",
        "timezone": "Europe/Dublin",
        "ramadan_start": "2026-02-17T17:56:00",
    },
    "api": {
        "host": "127.0.0.1",
        "port": 8765,
    },
    "widgets": {
        "salah_timetable": {"url": "https://getsalahtimes-rds3nxm6za-ew.a.run.app"},
        "iqamah": {"url": "https://getiqamahtimes-rds3nxm6za-ew.a.run.app"},
        "hadith": {"url": "https://randomhadith-rds3nxm6za-ew.a.run.app"},
        "announcements": {"url": "https://getannouncements-rds3nxm6za-ew.a.run.app"},
        "notices": {"url": "https://getnotices-rds3nxm6za-ew.a.run.app"},
        "programmes": {
            "url": "https://getmasjidprogrammes-rds3nxm6za-ew.a.run.app?type=programme&active=true",
        },
        "live_event": {"url": "https://api.mixlr.com/users/7752720"},
        "chat_widget": {"phone_number": "353862440556"},
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay override on a copy of base"""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


_ENV_LINE = re.compile(r'^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$')
_ENV_REF = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}|^\$([A-Za-z_][A-Za-z0-9_]*)$')


def _expand_env(value: str) -> str:
    """Replace ${VAR} anywhere in a string, or a whole-string $VAR; unknown names stay as written"""
    return _ENV_REF.sub(lambda m: os.environ.get(m.group(1) or m.group(2), m.group(0)), value)


class Config:
    """Site configuration: config.yaml layered over DEFAULT_CONFIG.

    Relative site paths are resolved against the directory holding the config file.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_file = Path(config_path).resolve() if config_path else Path.cwd() / "config.yaml"
        self.config_dir = self.config_file.parent
        logging.debug(f"Using config file: {self.config_file}")

        self._load_env_file()
        self._ensure_config_exists()
        self._load_config()

    def _ensure_config_exists(self) -> None:
        """Write the defaults when there is no config file yet"""
        if self.config_file.exists():
            return
        self.config_dir.mkdir(parents=True, exist_ok=True)
        logging.info(f"No config at {self.config_file}, writing defaults")
        self.config_file.write_text(yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False))

    def _load_env_file(self) -> None:
        """Export KEY=value lines from the first .env found; the real environment wins"""
        env_file = next(
            (path for path in (self.config_dir / ".env", Path.cwd() / ".env") if path.is_file()),
            None,
        )
        if env_file is None:
            logging.debug("No .env file found")
            return

        logging.info(f"Loading environment variables from: {env_file}")
        try:
            lines = env_file.read_text().splitlines()
        except OSError as e:
            logging.warning(f"Error reading {env_file}: {e}")
            return

        for line in lines:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            match = _ENV_LINE.match(line)
            if match is None:
                logging.debug(f"Ignoring .env line: {line}")
                continue
            key, value = match.groups()
            os.environ.setdefault(key, value.strip('"').strip("'"))

    def _substitute_env_vars(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        if isinstance(data, str):
            return _expand_env(data)
        return data

    def _load_config(self) -> None:
        """Read config.yaml; any problem with it means running on the defaults"""
        try:
            loaded = yaml.safe_load(self.config_file.read_text()) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"{self.config_file} must hold a mapping at the top level")
        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.error(f"Error loading config: {e}")
            logging.info("Using default configuration")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
            return

        self.data = _merge(DEFAULT_CONFIG, self._substitute_env_vars(loaded))
        log_file = self.data["logging"].get("file")
        if log_file:
            self.data["logging"]["file"] = os.path.expanduser(log_file)
        logging.debug(f"Loaded config from {self.config_file}")

    def get_widget_config(self, widget_name: str) -> Dict[str, Any]:
        """Get config for a specific widget"""
        widgets = self.data.get("widgets") or {}
        return widgets.get(widget_name) or {}

    @property
    def site_root(self) -> Path:
        """Directory holding the host HTML pages"""
        return (self.config_dir / Path(self.data["site"]["root"]).expanduser()).resolve()

    @property
    def output_dir(self) -> Path:
        return (self.config_dir / Path(self.data["site"]["output"]).expanduser()).resolve()

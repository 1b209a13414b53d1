# viewextract/config.py
from __future__ import annotations
import copy
import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "log_level": "WARNING",
    "scheduler": {"backend": "qt"},
    "extractor": {"deduplicate": False},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Singleton config loader that supports:
      - an embedded config module (default name: _embedded_config, attribute: CONFIG)
      - a fallback YAML file (viewextract.yaml)

    Loaded values are layered over ``DEFAULTS``, so every known key always
    has a value.

    Usage:
        cfg = Config()
        backend = cfg.get_nested("scheduler.backend")
        cfg.reload()
        Config.reset()   # drop the singleton (tests, or after changing cwd)

    Parameters:
      config_file: path to YAML config (relative or absolute).
      prefer_embedded: when True (default) try the embedded module first.
      embedded_module_name: module to import when looking for embedded config.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(
        self,
        config_file: str = "viewextract.yaml",
        prefer_embedded: bool = True,
        embedded_module_name: str = "_embedded_config",
    ):
        # initialize only once
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self.config_file_arg = config_file
        self.prefer_embedded = bool(prefer_embedded)
        self.embedded_module_name = embedded_module_name

        self._config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._source: Optional[str] = None  # 'embedded' or 'file' or None
        self._resolved_config_path: Optional[Path] = self._resolve_config_path(config_file)

        self.reload()

    @classmethod
    def reset(cls) -> None:
        """Forget the shared instance; the next ``Config()`` loads afresh."""
        cls._instance = None

    # ----- public API -----
    def reload(self, prefer_embedded: Optional[bool] = None) -> None:
        """
        Reload the configuration. If prefer_embedded is provided, it overrides
        the instance preference just for this reload.
        """
        prefer = self.prefer_embedded if prefer_embedded is None else bool(prefer_embedded)

        if prefer:
            loaded = self._try_load_embedded() or self._try_load_file()
        else:
            loaded = self._try_load_file() or self._try_load_embedded()

        if not loaded:
            self._source = None
            self._config = copy.deepcopy(DEFAULTS)

    def as_dict(self) -> Dict[str, Any]:
        """Return the effective configuration as a dict."""
        return copy.deepcopy(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "extractor.deduplicate").
        Returns default if any step is missing.
        """
        cur: Any = self._config
        if not path:
            return default
        for part in path.split(sep):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur

    @property
    def source(self) -> Optional[str]:
        """Return 'embedded'|'file'|None depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: str) -> Optional[Path]:
        """
        Resolve the YAML path: absolute path first, then relative to the
        current working directory.
        """
        candidate = Path(config_file)
        if candidate.is_absolute():
            return candidate.resolve() if candidate.exists() else None

        in_cwd = (Path.cwd() / config_file).resolve()
        if in_cwd.exists():
            return in_cwd
        return None

    def _try_load_embedded(self) -> bool:
        try:
            module = importlib.import_module(self.embedded_module_name)
        except ModuleNotFoundError:
            return False
        cfg = getattr(module, "CONFIG", None)
        if not isinstance(cfg, dict):
            logger.warning("Embedded config module %s has no CONFIG dict; ignoring it", self.embedded_module_name)
            return False
        self._config = _merge(DEFAULTS, cfg)
        self._source = "embedded"
        logger.debug("Loaded embedded config from %s", self.embedded_module_name)
        return True

    def _try_load_file(self) -> bool:
        if not self._resolved_config_path:
            return False
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read %s: %s", self._resolved_config_path, e)
            return False
        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning("%s does not contain a mapping; ignoring it", self._resolved_config_path)
            return False
        self._config = _merge(DEFAULTS, data)
        self._source = "file"
        logger.debug("Loaded config file %s", self._resolved_config_path)
        return True


def get_config(*args, **kwargs) -> Config:
    """
    Convenience factory that returns the singleton Config instance.
    Arguments forwarded to Config() only on the first call.
    """
    return Config(*args, **kwargs)


def configure_logging(level: Optional[str] = None) -> None:
    """Configures the ``viewextract`` logger from ``level`` or the ``log_level`` setting."""
    level_name = (level or Config().get("log_level", "WARNING")).upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("viewextract").setLevel(getattr(logging, level_name, logging.WARNING))

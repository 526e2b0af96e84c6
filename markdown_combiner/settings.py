"""
Combiner settings.

The settings are a flat record persisted as YAML. Values loaded from disk
(or handed over by a host application) are merged over the defaults and
validated once, when the ``Settings`` object is built, so the rest of the
package can trust every field.
"""
import string
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
import ascii_colors as logging
from ascii_colors import trace_exception

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
SUFFIX_TIMESTAMP = "timestamp"
SUFFIX_RANDOM = "random"
SUFFIX_OPTIONS = [SUFFIX_TIMESTAMP, SUFFIX_RANDOM]

DEFAULT_TIMESTAMP_FORMAT = "%Y-%b-%d-%H%M%S"
DEFAULT_RANDOM_LENGTH = 6
MIN_RANDOM_LENGTH = 1
MAX_RANDOM_LENGTH = 32
DEFAULT_RANDOM_CHARS = string.ascii_letters + string.digits

# Keys used by the host application when it persists the settings itself.
CAMEL_CASE_KEYS: Dict[str, str] = {
    "showRibbonIcon": "show_ribbon_icon",
    "includeDirectoryContext": "include_directory_context",
    "filenameSuffix": "filename_suffix",
    "timestampFormat": "timestamp_format",
    "randomLength": "random_length",
    "randomChars": "random_chars",
}


@dataclass(frozen=True)
class Settings:
    show_ribbon_icon: bool = True
    include_directory_context: bool = True
    filename_suffix: str = SUFFIX_TIMESTAMP
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    random_length: int = DEFAULT_RANDOM_LENGTH
    random_chars: str = DEFAULT_RANDOM_CHARS

    def __post_init__(self):
        # frozen: write the validated values back through object.__setattr__
        checked = {
            "show_ribbon_icon": _coerce_bool(self.show_ribbon_icon, "show_ribbon_icon", True),
            "include_directory_context": _coerce_bool(
                self.include_directory_context, "include_directory_context", True
            ),
            "filename_suffix": _coerce_suffix(self.filename_suffix),
            "timestamp_format": _coerce_format(self.timestamp_format),
            "random_length": clamp_random_length(self.random_length),
            "random_chars": _coerce_chars(self.random_chars),
        }
        for name, value in checked.items():
            object.__setattr__(self, name, value)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """
        Builds settings from a loosely typed mapping.

        Unknown keys are ignored and camelCase keys are accepted. Values are
        validated by the constructor, so missing or invalid ones fall back to
        their defaults and ``random_length`` is clamped into [1, 32].
        """
        values: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            key = CAMEL_CASE_KEYS.get(key, key)
            if key in cls.__dataclass_fields__:
                values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def updated(self, **changes: Any) -> "Settings":
        """Returns a copy with ``changes`` applied and re-validated."""
        merged = self.to_dict()
        merged.update(changes)
        return Settings.from_dict(merged)


def clamp_random_length(value: Any) -> int:
    # bool is an int subclass, but True is not a length
    if isinstance(value, bool):
        logger.warning(f"Invalid random length {value!r}, using {DEFAULT_RANDOM_LENGTH}.")
        return DEFAULT_RANDOM_LENGTH
    try:
        length = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid random length {value!r}, using {DEFAULT_RANDOM_LENGTH}.")
        return DEFAULT_RANDOM_LENGTH
    return max(MIN_RANDOM_LENGTH, min(MAX_RANDOM_LENGTH, length))


def _coerce_bool(value: Any, key: str, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    logger.warning(f"Invalid value {value!r} for '{key}', using {default}.")
    return default


def _coerce_suffix(value: Any) -> str:
    if value in SUFFIX_OPTIONS:
        return value
    logger.warning(f"Unknown filename suffix {value!r}, falling back to '{SUFFIX_TIMESTAMP}'.")
    return SUFFIX_TIMESTAMP


def _coerce_format(value: Any) -> str:
    if isinstance(value, str):
        return value
    logger.warning(f"Invalid timestamp format {value!r}, using '{DEFAULT_TIMESTAMP_FORMAT}'.")
    return DEFAULT_TIMESTAMP_FORMAT


def _coerce_chars(value: Any) -> str:
    if isinstance(value, str) and value:
        return value
    logger.warning("Random character set is empty or invalid, using the default alphabet.")
    return DEFAULT_RANDOM_CHARS


def load_settings(path: Union[str, Path]) -> Settings:
    """
    Loads settings from a YAML file.

    A missing file, an unreadable file or a document that is not a mapping
    all yield the defaults.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults.")
        return Settings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Could not load settings from {path}, using defaults.")
        trace_exception(e)
        return Settings()
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        logger.warning(f"Settings file {path} does not contain a mapping, using defaults.")
        return Settings()
    return Settings.from_dict(data)


def save_settings(settings: Settings, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(settings.to_dict(), sort_keys=False), encoding="utf-8")
    logger.debug(f"Settings saved to {path}")

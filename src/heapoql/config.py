import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_CLASS_INTERFACE = "org.eclipse.mat.snapshot.model.IClass"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    # Interface every heap class object implements, used by the class-loader queries
    class_interface: str
    merge_unions: bool
    log_level: str


def merge_unions_enabled() -> bool:
    """HEAPOQL_MERGE_UNIONS from the process environment only; never raises."""
    return os.getenv("HEAPOQL_MERGE_UNIONS", "true").lower() not in {"0", "false", "no"}


def _raw_log_level() -> str:
    return (os.getenv("HEAPOQL_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()


def log_level_or_default() -> str:
    """HEAPOQL_LOG_LEVEL if it names a known level, else WARNING."""
    level = _raw_log_level()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def get_settings() -> Settings:
    load_dotenv()
    class_interface = (os.getenv("HEAPOQL_CLASS_INTERFACE", DEFAULT_CLASS_INTERFACE) or "").strip()
    if not class_interface:
        raise RuntimeError("HEAPOQL_CLASS_INTERFACE must not be empty.")

    log_level = _raw_log_level()
    if log_level not in _LOG_LEVELS:
        raise RuntimeError(f"HEAPOQL_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {log_level!r}.")

    return Settings(
        class_interface=class_interface,
        merge_unions=merge_unions_enabled(),
        log_level=log_level,
    )

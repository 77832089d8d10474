import os
from dataclasses import dataclass

DEFAULT_PATTERNS = "src/**/*.ts,runners/**/*.ts"
DEFAULT_OUTPUT = "runner-schemas.json"
DEFAULT_CWD = "."
DEFAULT_WORKERS = 1


class SettingsError(ValueError):
    """An environment variable holds a value the extractor cannot use."""


@dataclass(frozen=True)
class ExtractSettings:
    patterns: str
    output: str
    cwd: str
    workers: int


def _workers_from_env() -> int:
    raw = os.getenv("RUNNERS_WORKERS")
    if raw is None or not raw.strip():
        return DEFAULT_WORKERS
    try:
        workers = int(raw)
    except ValueError:
        raise SettingsError(f"RUNNERS_WORKERS must be a positive integer, got {raw!r}") from None
    if workers < 1:
        raise SettingsError(f"RUNNERS_WORKERS must be a positive integer, got {raw!r}")
    return workers


def get_settings() -> ExtractSettings:
    """Extraction defaults, overridable through ``RUNNERS_*`` environment variables.

    Raises:
        SettingsError: If ``RUNNERS_WORKERS`` is not a positive integer.
    """
    return ExtractSettings(
        patterns=os.getenv("RUNNERS_PATTERNS", DEFAULT_PATTERNS),
        output=os.getenv("RUNNERS_OUTPUT", DEFAULT_OUTPUT),
        cwd=os.getenv("RUNNERS_CWD", DEFAULT_CWD),
        workers=_workers_from_env(),
    )

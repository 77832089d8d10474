import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

EXCLUDED_SEGMENTS: frozenset[str] = frozenset({"node_modules", "dist", ".nitro"})


def split_patterns(patterns: str) -> list[str]:
    return [pattern.strip() for pattern in patterns.split(",") if pattern.strip()]


def is_excluded(path: Path) -> bool:
    return any(part in EXCLUDED_SEGMENTS for part in path.parts)


def discover_files(patterns: Iterable[str], cwd: str | Path = ".") -> list[Path]:
    """Expand glob *patterns* below *cwd* in pattern order, each pattern sorted.

    Paths are returned as ``cwd / match`` and appear once even when several
    patterns match them.  Invalid patterns are logged and skipped.
    """
    root = Path(cwd)
    seen: set[Path] = set()
    files: list[Path] = []
    for pattern in patterns:
        try:
            matches = sorted(root.glob(pattern))
        except (ValueError, NotImplementedError) as exc:
            logger.warning("Invalid glob pattern %s: %s", pattern, exc)
            continue
        for match in matches:
            if match in seen or not match.is_file() or is_excluded(match.relative_to(root)):
                continue
            seen.add(match)
            files.append(match)
    logger.debug("Discovered %d file(s) under %s", len(files), root)
    return files

# src/utils/path_resolver.py
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def data_root() -> Path | None:
    root_env = os.getenv("DATA_ROOT")
    return Path(root_env) if root_env else None


def resolve_data_path(p: str | Path) -> Path:
    """
    Resolve a configured data path.

    Absolute paths are kept; relative ones are prefixed with $DATA_ROOT
    when it is set.
    """
    path = Path(p)
    root = data_root()
    if path.is_absolute() or root is None:
        return path

    resolved = root / path
    logger.debug("Resolved data path", extra={"path": str(path), "resolved": str(resolved)})
    return resolved

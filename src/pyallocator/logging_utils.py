"""File logging for allocation runs."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from pyallocator.config import get_settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(log_dir: Path | None = None, level: str | None = None) -> Path:
    """Send optimizer, metrics and workflow logs to a fresh timestamped file.

    ``pyallocator analyse --log-dir DIR`` calls this before running the
    pipeline. Calling it again replaces the previous root handlers, so each
    run writes to its own file.

    Args:
        log_dir: Folder for the log file. Defaults to ``PYALLOCATOR_LOG_DIR``
            or ``logs``.
        level: Level name such as ``"debug"``; defaults to
            ``PYALLOCATOR_LOG_LEVEL``. The optimizer reports out-of-range
            desired returns at DEBUG.

    Returns:
        Path of the ``pyallocator_<UTC timestamp>.log`` file.

    Example:
        >>> from pathlib import Path
        >>> from pyallocator.logging_utils import configure_logging
        >>> from pyallocator.workflows import analyse_allocation
        >>> log_file = configure_logging(Path("runs"), level="debug")
        >>> _ = analyse_allocation("low", 15)
        >>> "exceeds the low profile ceiling" in log_file.read_text()
        True
    """
    settings = get_settings()
    target_dir = log_dir or settings.log_dir
    target_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
    log_path = target_dir / f"pyallocator_{timestamp}.log"

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        filename=str(log_path),
        format=LOG_FORMAT,
        force=True,
    )
    logging.getLogger(__name__).info(
        "Allocation logging to %s (reference data: %s)", log_path, settings.reference_path
    )
    return log_path


__all__ = ["LOG_FORMAT", "configure_logging"]

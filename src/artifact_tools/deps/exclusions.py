"""Reading identity exclusion lists published by other modules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def read_excluded_identities(files: Iterable[Path]) -> set[str]:
    """Union of identity lines from every regular file in ``files``.

    Missing paths and directories contribute nothing. Read errors on existing
    files propagate.
    """

    identities: set[str] = set()
    for path in files:
        if not path.is_file():
            logger.debug("Skipping exclusion list %s: not a regular file", path)
            continue
        lines = path.read_text("utf-8").splitlines()
        logger.debug("Read %d excluded identities from %s", len(lines), path)
        identities.update(lines)
    return identities

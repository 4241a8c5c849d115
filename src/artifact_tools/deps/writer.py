"""Writer for the list of transitive dependency identities of a module."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from artifact_tools.deps.identity import artifact_identity
from artifact_tools.deps.models import ResolvedArtifact

logger = logging.getLogger(__name__)


def collect_identities(artifacts: Iterable[ResolvedArtifact]) -> set[str]:
    return {artifact_identity(artifact) for artifact in artifacts}


def write_transitive_deps(
    artifacts: Iterable[ResolvedArtifact],
    output_path: Path,
    line_separator: str = os.linesep,
) -> set[str]:
    """Write one identity per line to ``output_path`` and return the written identities.

    Identities are sorted so the file content only changes when the set does.
    """

    identities = collect_identities(artifacts)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as writer:
        writer.write(line_separator.join(sorted(identities)))
    logger.info("Wrote %d transitive dependency identities to %s", len(identities), output_path)
    return identities

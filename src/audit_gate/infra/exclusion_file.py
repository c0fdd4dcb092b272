from __future__ import annotations

import logging
from pathlib import Path

from ..core.domain.exclusions import parse_exclusions

logger = logging.getLogger(__name__)

EXCLUSION_FILENAME = ".iyarc"


def load_exclusion_file(path: Path) -> frozenset[str]:
    """Read advisory exclusions from an ``.iyarc`` style file.

    Lines starting with ``#`` are comments; every other line is a CSV list of
    advisory ids and GHSA codes. A missing file means no exclusions.

    Raises:
        ExclusionConfigError: If the file holds an invalid identifier
    """
    if not path.is_file():
        return frozenset()
    content = [
        line
        for line in path.read_text(encoding="utf-8").splitlines()
        if not line.strip().startswith("#")
    ]
    return parse_exclusions(",".join(content), source=str(path))


def resolve_exclusions(cli_value: str | None, file_path: Path) -> frozenset[str]:
    """Pick exclusions from the command line, falling back to the file.

    The command line takes exclusive precedence; the file is not read then.
    """
    if cli_value is not None and cli_value.strip():
        if file_path.is_file():
            logger.warning(
                "Exclusions were passed on the command line, ignoring %s",
                file_path,
                extra={"payload": {"type": "exclusion_file_ignored", "path": str(file_path)}},
            )
        return parse_exclusions(cli_value, source="--exclude")
    return load_exclusion_file(file_path)

"""
Manifest patching and project name rules.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from chico.core.errors import InvalidProjectNameError, ManifestError

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"

# Letters, digits, dot, dash, underscore; no leading dot/dash
_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_project_name(name: str | None) -> str:
    """Return the stripped name, or raise if it is not usable.

    The name becomes both a directory and the manifest ``name``, and is
    echoed in ``cd <name>``, so whitespace, path separators and shell
    metacharacters are rejected outright.

    Raises:
        InvalidProjectNameError: For empty or unsafe names.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidProjectNameError("Please provide a name for the project")
    if not _PROJECT_NAME_RE.match(cleaned):
        raise InvalidProjectNameError(
            f"Invalid project name '{cleaned}': use letters, digits, '.', '-' or '_' "
            "and start with a letter or digit"
        )
    return cleaned


def patch_manifest(project_dir: Path, name: str) -> Path:
    """Set ``name`` in ``<project_dir>/package.json`` and rewrite it.

    Returns:
        Path of the rewritten manifest.

    Raises:
        ManifestError: If the manifest is missing, unreadable or not an object.
    """
    path = project_dir / MANIFEST_FILE
    if not path.is_file():
        raise ManifestError(f"No {MANIFEST_FILE} found in {project_dir}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    data["name"] = name
    try:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot write {path}: {e}") from e

    logger.debug("Set %s name to %r", path, name)
    return path

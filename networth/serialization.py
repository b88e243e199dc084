"""
Serialization module for networth snapshots and projections.

Purpose
-------
Reads and writes household snapshots as JSON and exports projection
results as JSON or CSV, so data can be edited by hand, shared and kept
under version control.

Design Principles
-----------------
- Type-safe: snapshot files are validated through the Pydantic models in
  ``config``
- Human-readable: indented JSON with the same camelCase keys the data-entry
  layer produces
- Versioned: files carry a ``schema_version``; a different major version is
  rejected, any other difference only warns

Example
-------
>>> from pathlib import Path
>>> from networth.serialization import save_snapshot, load_snapshot
>>> save_snapshot(snapshot, Path("household.json"))  # doctest: +SKIP
>>> loaded = load_snapshot(Path("household.json"))  # doctest: +SKIP
>>> save_projection(project(loaded, 5), Path("projection.csv"))  # doctest: +SKIP
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .config import SnapshotConfig
from .exceptions import SchemaVersionError, ValidationError
from .projection import ProjectionPoint, Snapshot, projection_to_frame
from .types import ProjectionPointDict

__all__ = [
    "SCHEMA_VERSION",
    "snapshot_to_dict",
    "snapshot_from_dict",
    "save_snapshot",
    "load_snapshot",
    "projection_to_records",
    "save_projection",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema_version(version: str) -> None:
    """Reject other major versions, warn on any other difference."""
    if version == SCHEMA_VERSION:
        return
    major = version.split(".", 1)[0]
    if major != SCHEMA_VERSION.split(".", 1)[0]:
        raise SchemaVersionError(
            f"Snapshot schema version {version} is not compatible with "
            f"version {SCHEMA_VERSION}."
        )
    warnings.warn(
        f"Snapshot schema version {version} differs from current "
        f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
        UserWarning,
    )


# ---------------------------------------------------------------------------
# Snapshot Serialization
# ---------------------------------------------------------------------------

def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    """
    Convert a Snapshot to its JSON-ready dictionary.

    Parameters
    ----------
    snapshot : Snapshot
        Snapshot to serialize

    Returns
    -------
    dict
        Dictionary with camelCase keys and a ``schema_version`` entry
    """
    data = SnapshotConfig.from_snapshot(snapshot).model_dump(mode="json", by_alias=True)
    return {"schema_version": SCHEMA_VERSION, **data}


def snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    """
    Create a Snapshot from its dictionary representation.

    Files exported by the data-entry layer carry no ``schema_version``;
    they are read as the current version.

    Parameters
    ----------
    data : dict
        Snapshot dictionary (camelCase or snake_case keys)

    Returns
    -------
    Snapshot

    Raises
    ------
    pydantic.ValidationError
        If the data does not match the snapshot schema.
    SchemaVersionError
        If the file was written with another major schema version.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Snapshot must be a JSON object, got {type(data).__name__}.")
    payload = dict(data)
    version = payload.pop("schema_version", None)
    if version is not None:
        _check_schema_version(str(version))
    return SnapshotConfig.model_validate(payload).to_snapshot()


def save_snapshot(snapshot: Snapshot, path: Path) -> None:
    """
    Save a Snapshot to a JSON file.

    Examples
    --------
    >>> save_snapshot(snapshot, Path("household.json"))  # doctest: +SKIP
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(snapshot_to_dict(snapshot), f, indent=2)


def load_snapshot(path: Path) -> Snapshot:
    """
    Load a Snapshot from a JSON file.

    Examples
    --------
    >>> snapshot = load_snapshot(Path("household.json"))  # doctest: +SKIP
    """
    with open(path, "r") as f:
        data = json.load(f)
    return snapshot_from_dict(data)


# ---------------------------------------------------------------------------
# Projection Export
# ---------------------------------------------------------------------------

def projection_to_records(points: Sequence[ProjectionPoint]) -> List[ProjectionPointDict]:
    """Projection points as a list of JSON-ready dictionaries."""
    return [p.to_dict() for p in points]


def save_projection(points: Sequence[ProjectionPoint], path: Path) -> None:
    """
    Save projection points as CSV or JSON, chosen by file extension.

    ``.csv`` writes one row per point with a ``date`` column; anything else
    writes a JSON document with ``schema_version`` and ``points``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".csv":
        projection_to_frame(points).to_csv(path)
        return
    with open(path, "w") as f:
        json.dump(
            {"schema_version": SCHEMA_VERSION, "points": projection_to_records(points)},
            f,
            indent=2,
        )

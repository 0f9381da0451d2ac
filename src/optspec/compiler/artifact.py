# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of compiled usage strings.

A compiled usage string is the pair of its grammar and doc tree. Artifacts
are stored as compact JSON files; the format is versioned so future schema
changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path

from optspec.model.doc import Doc
from optspec.model.grammar import Grammar

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".optspec.json"


def serialize(grammar: Grammar, doc: Doc) -> str:
    """Serialize a grammar and its doc tree to a compact JSON string."""
    obj = {
        "v": ARTIFACT_FORMAT_VERSION,
        "grammar": grammar.model_dump(mode="json"),
        "doc": doc.model_dump(mode="json"),
    }
    return json.dumps(obj, separators=(",", ":"))


def deserialize(data: str) -> tuple[Grammar, Doc]:
    """Deserialize a grammar and doc tree from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed ``(grammar, doc)`` pair.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return Grammar.model_validate(obj["grammar"]), Doc.model_validate(obj["doc"])


def write_artifact(grammar: Grammar, doc: Doc, path: Path) -> None:
    """Write a compiled artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(grammar, doc), encoding="utf-8")


def read_artifact(path: Path) -> tuple[Grammar, Doc]:
    """Read and deserialize a compiled artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))

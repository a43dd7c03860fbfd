"""Sibling node record groups and the file-backed storage engine holding them."""

from __future__ import annotations

import base64
import datetime as _dt
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from .errors import EmbeddedDocumentDBError, ErrorCode

_FORMAT = "embeddocdb"
_VERSION = 1


@dataclass(frozen=True, order=True)
class NodeID:
    """Identifier of a node; 0 means the node has no identifier."""

    value: int = 0

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value


@dataclass
class SiblingNodeRecordGroup:
    """One node stored among its siblings: name, value and own identifier."""

    name: str
    value: Any = None
    node_id: NodeID = field(default_factory=NodeID)


class SiblingNodesRecordGroup:
    """All children of one parent node, in order."""

    def __init__(self, parent_node_id: NodeID, *nodes: SiblingNodeRecordGroup) -> None:
        self.parent_node_id = parent_node_id
        self._nodes: list[SiblingNodeRecordGroup] = list(nodes)

    def append(self, node: SiblingNodeRecordGroup) -> None:
        self._nodes.append(node)

    def find(self, name: str) -> SiblingNodeRecordGroup | None:
        """Return the first node with this name, or None."""
        return next((node for node in self._nodes if node.name == name), None)

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> SiblingNodeRecordGroup:
        return self._nodes[index]

    def __iter__(self) -> Iterator[SiblingNodeRecordGroup]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"SiblingNodesRecordGroup({self.parent_node_id!r}, {self._nodes!r})"


def _encode_value(value: Any) -> dict:
    if value is None:
        return {"type": "null"}
    if isinstance(value, bool):
        return {"type": "boolean", "data": value}
    if isinstance(value, int):
        return {"type": "integer", "data": value}
    if isinstance(value, float):
        return {"type": "double", "data": value}
    if isinstance(value, str):
        return {"type": "utf8string", "data": value}
    if isinstance(value, (bytes, bytearray)):
        return {"type": "binary", "data": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, _dt.datetime):
        return {"type": "datetime", "data": value.isoformat()}
    if isinstance(value, _dt.date):
        return {"type": "date", "data": value.isoformat()}
    raise TypeError(f"cannot store value of type {type(value).__name__}")


def _decode_value(encoded: dict) -> Any:
    kind = encoded["type"]
    data = encoded.get("data")
    if kind == "null":
        return None
    if kind in ("boolean", "integer", "double", "utf8string"):
        return data
    if kind == "binary":
        return base64.b64decode(data)
    if kind == "datetime":
        return _dt.datetime.fromisoformat(data)
    if kind == "date":
        return _dt.date.fromisoformat(data)
    raise ValueError(f"unknown value type {kind!r}")


def _encode_group(group: SiblingNodesRecordGroup) -> dict:
    return {
        "parent": group.parent_node_id.value,
        "nodes": [
            {"name": node.name, "id": node.node_id.value, "value": _encode_value(node.value)}
            for node in group
        ],
    }


def _decode_group(encoded: dict) -> SiblingNodesRecordGroup:
    return SiblingNodesRecordGroup(
        NodeID(encoded["parent"]),
        *(
            SiblingNodeRecordGroup(node["name"], _decode_value(node["value"]), NodeID(node["id"]))
            for node in encoded["nodes"]
        ),
    )


class StorageEngine:
    """Keeps sibling node record groups in a master file and caches them."""

    def __init__(self) -> None:
        self._path: Path | None = None
        self._groups: list[SiblingNodesRecordGroup] = []
        self._index: dict[NodeID, SiblingNodesRecordGroup] = {}

    @property
    def is_open(self) -> bool:
        return self._path is not None

    def create_master_file(self, path: str | os.PathLike) -> None:
        """Create a new master file holding only the root node."""
        self._path = Path(path)
        self._groups = []
        self._index = {}
        self._insert(SiblingNodesRecordGroup(NodeID(0), SiblingNodeRecordGroup("/", None, NodeID(1))))
        self._save()

    def open_master_file(self, path: str | os.PathLike) -> None:
        """Open an existing master file and load its record groups."""
        file_path = Path(path)
        try:
            document = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise EmbeddedDocumentDBError(ErrorCode.GENERIC_ERROR, f"cannot open {file_path}: {exc}") from exc
        except ValueError as exc:
            raise EmbeddedDocumentDBError(ErrorCode.GENERIC_ERROR, f"corrupt master file {file_path}") from exc
        if not isinstance(document, dict) or document.get("format") != _FORMAT:
            raise EmbeddedDocumentDBError(ErrorCode.GENERIC_ERROR, f"not a master file: {file_path}")
        try:
            groups = [_decode_group(entry) for entry in document["groups"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise EmbeddedDocumentDBError(ErrorCode.GENERIC_ERROR, f"corrupt master file {file_path}") from exc
        self._path = file_path
        self._groups = []
        self._index = {}
        for group in groups:
            self._insert(group)

    def close(self) -> None:
        self._path = None
        self._groups = []
        self._index = {}

    def find_sibling_nodes_record_group(self, parent_node_id: NodeID) -> SiblingNodesRecordGroup | None:
        """Return the cached group of children of a parent, or None."""
        self._require_open()
        return self._index.get(parent_node_id)

    def add_sibling_nodes_record_group(self, group: SiblingNodesRecordGroup) -> None:
        self._require_open()
        self._insert(group)
        self._save()

    def update_sibling_nodes_record_group(self, group: SiblingNodesRecordGroup) -> None:
        self._require_open()
        for position, stored in enumerate(self._groups):
            if stored is group or stored.parent_node_id == group.parent_node_id:
                self._groups[position] = group
                self._index[group.parent_node_id] = group
                self._save()
                return
        raise EmbeddedDocumentDBError(
            ErrorCode.GENERIC_ERROR, f"no record group for parent node {group.parent_node_id.value}"
        )

    def _insert(self, group: SiblingNodesRecordGroup) -> None:
        self._groups.append(group)
        self._index.setdefault(group.parent_node_id, group)

    def _require_open(self) -> None:
        if self._path is None:
            raise EmbeddedDocumentDBError(ErrorCode.GENERIC_ERROR, "master file is not open")

    def _save(self) -> None:
        assert self._path is not None
        document = {
            "format": _FORMAT,
            "version": _VERSION,
            "groups": [_encode_group(group) for group in self._groups],
        }
        temporary = self._path.with_name(self._path.name + ".tmp")
        try:
            temporary.write_text(json.dumps(document), encoding="utf-8")
            os.replace(temporary, self._path)
        except OSError as exc:
            raise EmbeddedDocumentDBError(ErrorCode.GENERIC_ERROR, f"cannot write {self._path}: {exc}") from exc
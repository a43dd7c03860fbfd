"""Handles to nodes of the document tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .records import NodeID, SiblingNodeRecordGroup


@dataclass(eq=False)
class TreeDBNode:
    """A node: its name, value, and the identifiers linking it into the tree.

    Nodes compare equal only when they are the same handle.
    """

    name: str = "/"
    value: Any = None
    parent_node_id: NodeID = field(default_factory=NodeID)
    node_id: NodeID = field(default_factory=NodeID)

    def is_root(self) -> bool:
        return self.name == "/"

    @classmethod
    def from_record(cls, parent_node_id: NodeID, record: SiblingNodeRecordGroup) -> TreeDBNode:
        """Build a node handle from a stored sibling record."""
        return cls(record.name, record.value, parent_node_id, record.node_id)
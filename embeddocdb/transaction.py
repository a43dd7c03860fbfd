"""Transactions that batch node additions before writing them to storage."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from .nodes import TreeDBNode
from .records import NodeID, SiblingNodeRecordGroup, SiblingNodesRecordGroup, StorageEngine


class _Found(Enum):
    NOT_FOUND = auto()
    IN_NEW = auto()
    IN_UPDATED = auto()
    IN_STORAGE = auto()


class Transaction:
    """Pending changes to a document tree, applied together on commit.

    Children appended to a parent that has no stored children go into a new
    record group. Children appended to a parent whose group is already
    stored go into a working copy of that group. Storage is left alone
    until commit.
    """

    def __init__(self) -> None:
        self._new: list[SiblingNodesRecordGroup] = []
        self._updated: list[SiblingNodesRecordGroup] = []

    @property
    def new_groups(self) -> tuple[SiblingNodesRecordGroup, ...]:
        """Record groups that commit will add to storage."""
        return tuple(self._new)

    @property
    def updated_groups(self) -> tuple[SiblingNodesRecordGroup, ...]:
        """Record groups that commit will write over their stored versions."""
        return tuple(self._updated)

    def append_child_node(
        self, storage: StorageEngine, parent: TreeDBNode, name: str, value: Any = None
    ) -> TreeDBNode:
        """Queue a new last child of ``parent`` and return a handle to it."""
        node = TreeDBNode(name, value, parent.node_id, NodeID(0))
        record = SiblingNodeRecordGroup(node.name, node.value, node.node_id)

        found, group = self._find(storage, parent.node_id)
        if found is _Found.NOT_FOUND:
            self._new.append(SiblingNodesRecordGroup(node.parent_node_id, record))
        elif found is _Found.IN_STORAGE:
            working_copy = SiblingNodesRecordGroup(group.parent_node_id, *group)
            working_copy.append(record)
            self._updated.append(working_copy)
        else:
            group.append(record)
        return node

    def commit(self, storage: StorageEngine) -> None:
        """Write every pending group to storage, updates first."""
        for group in self._updated:
            storage.update_sibling_nodes_record_group(group)
        for group in self._new:
            storage.add_sibling_nodes_record_group(group)
        self._updated.clear()
        self._new.clear()

    def rollback(self) -> None:
        """Discard every pending change."""
        self._updated.clear()
        self._new.clear()

    def _find(
        self, storage: StorageEngine, parent_node_id: NodeID
    ) -> tuple[_Found, SiblingNodesRecordGroup | None]:
        for group in self._new:
            if group.parent_node_id == parent_node_id:
                return _Found.IN_NEW, group
        for group in self._updated:
            if group.parent_node_id == parent_node_id:
                return _Found.IN_UPDATED, group
        stored = storage.find_sibling_nodes_record_group(parent_node_id)
        if stored is None:
            return _Found.NOT_FOUND, None
        return _Found.IN_STORAGE, stored
"""An embedded database storing a tree of named nodes with values."""

from __future__ import annotations

import os
from typing import Any

from .nodes import TreeDBNode
from .records import NodeID, SiblingNodeRecordGroup, SiblingNodesRecordGroup, StorageEngine
from .transaction import Transaction

_ROOT_PARENT_ID = NodeID(0)
_ROOT_ID = NodeID(1)


class EmbeddedDocumentDB:
    """A document tree kept in a single master file.

    Every node has a name and an optional value. The children of a node are
    stored together as one record group keyed by the parent's identifier.
    """

    def __init__(self, storage: StorageEngine | None = None) -> None:
        self._storage = storage if storage is not None else StorageEngine()
        self._root: TreeDBNode | None = None

    def __enter__(self) -> EmbeddedDocumentDB:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create(self, path: str | os.PathLike) -> None:
        """Create a new database file holding only the root node."""
        self._storage.create_master_file(path)
        self._root = self._new_root()

    def open(self, path: str | os.PathLike) -> None:
        """Open an existing database file."""
        self._storage.open_master_file(path)
        self._root = self._new_root()

    def close(self) -> None:
        self._storage.close()

    def root(self) -> TreeDBNode | None:
        """Return the root node, or None before the database is created or opened."""
        return self._root

    def value(self, node: TreeDBNode, type: type | None = None) -> Any:
        """Return the value of a node.

        With ``type`` given, the value is returned only if it is exactly of
        that type; otherwise None is returned.
        """
        if type is None or builtin_type(node.value) is type:
            return node.value
        return None

    def child_value(self, parent: TreeDBNode, name: str, type: type | None = None) -> Any:
        """Return the value of the named child, or None if there is no such child."""
        child = self.child(parent, name)
        if child is None:
            return None
        return self.value(child, type)

    def child_nodes(self, parent: TreeDBNode) -> list[TreeDBNode]:
        """Return handles to all children of a node, in order."""
        group = self._storage.find_sibling_nodes_record_group(parent.node_id)
        if group is None:
            return []
        return [TreeDBNode.from_record(group.parent_node_id, record) for record in group]

    def child(self, parent: TreeDBNode, name: str) -> TreeDBNode | None:
        """Return the first child with this name, or None."""
        group = self._storage.find_sibling_nodes_record_group(parent.node_id)
        if group is None:
            return None
        record = group.find(name)
        if record is None:
            return None
        return TreeDBNode.from_record(group.parent_node_id, record)

    def create_transaction(self) -> Transaction:
        return Transaction()

    def commit_transaction(self, transaction: Transaction) -> None:
        transaction.commit(self._storage)

    def rollback_transaction(self, transaction: Transaction) -> None:
        transaction.rollback()

    def set_value(self, node: TreeDBNode, value: Any) -> None:
        """Store a record for ``node`` carrying ``value`` under its parent."""
        group = SiblingNodesRecordGroup(
            node.parent_node_id, SiblingNodeRecordGroup(node.name, value, node.node_id)
        )
        self._storage.add_sibling_nodes_record_group(group)

    def insert_child_node(self, parent: TreeDBNode, index: int, name: str, value: Any = None) -> TreeDBNode:
        """Add a child under ``parent`` in a record group of its own."""
        return self._add_in_new_group(parent, name, value)

    def insert_child_node_before(
        self, parent: TreeDBNode, next_child: TreeDBNode, name: str, value: Any = None
    ) -> TreeDBNode:
        """Add a child under ``parent`` in a record group of its own."""
        return self._add_in_new_group(parent, name, value)

    def insert_child_node_after(
        self, parent: TreeDBNode, previous_child: TreeDBNode, name: str, value: Any = None
    ) -> TreeDBNode:
        """Add a child under ``parent`` in a record group of its own."""
        return self._add_in_new_group(parent, name, value)

    def append_child_node(
        self,
        parent: TreeDBNode,
        name: str,
        value: Any = None,
        transaction: Transaction | None = None,
    ) -> TreeDBNode:
        """Add a new last child of ``parent``.

        With a transaction the change is queued until the transaction is
        committed; without one it is written at once.
        """
        if transaction is not None:
            return transaction.append_child_node(self._storage, parent, name, value)

        node = TreeDBNode(name, value, parent.node_id, NodeID(0))
        record = SiblingNodeRecordGroup(node.name, node.value, node.node_id)
        existing = self._storage.find_sibling_nodes_record_group(parent.node_id)
        if existing is not None:
            existing.append(record)
            self._storage.update_sibling_nodes_record_group(existing)
        else:
            self._storage.add_sibling_nodes_record_group(SiblingNodesRecordGroup(parent.node_id, record))
        return node

    def _add_in_new_group(self, parent: TreeDBNode, name: str, value: Any) -> TreeDBNode:
        node = TreeDBNode(name, value, parent.node_id, NodeID(0))
        group = SiblingNodesRecordGroup(
            node.parent_node_id, SiblingNodeRecordGroup(node.name, node.value, node.node_id)
        )
        self._storage.add_sibling_nodes_record_group(group)
        return node

    @staticmethod
    def _new_root() -> TreeDBNode:
        return TreeDBNode("/", None, _ROOT_PARENT_ID, _ROOT_ID)


builtin_type = type
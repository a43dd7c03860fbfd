# embeddocdb

An embedded tree database. Each node has a name, may hold a value, and may have
child nodes. Everything is kept in one master file on disk, written as JSON.

## Installation

```
pip install embeddocdb
```

## Usage

```python
from embeddocdb.database import EmbeddedDocumentDB

with EmbeddedDocumentDB() as db:
    db.create("example.dpdb")

    root = db.root()
    db.append_child_node(root, "key1", "value1")
    db.append_child_node(root, "key2")

    node = db.child(root, "key1")
    print(db.value(node))                          # "value1"
    print(db.value(node, int))                     # None: the value is not an int
    print(db.child_value(root, "key1"))            # "value1"
    print([n.name for n in db.child_nodes(root)])  # ["key1", "key2"]
```

`EmbeddedDocumentDB.open(path)` opens an existing file. `close()` closes it;
leaving a `with` block does the same.

The nodes returned by `root()`, `child()`, `child_nodes()` and
`append_child_node()` are `embeddocdb.nodes.TreeDBNode` handles with `name`,
`value`, `parent_node_id` and `node_id` fields. Two handles are equal only if
they are the same object. `child()` and `child_value()` return `None` when there
is no child of that name.

Values may be `None`, `bool`, `int`, `float`, `str`, `bytes`,
`datetime.date` or `datetime.datetime`. Storing any other type raises
`TypeError`.

### Transactions

Changes can be grouped in a transaction. They are written to the file only
when the transaction is committed:

```python
transaction = db.create_transaction()
db.append_child_node(root, "key3", transaction=transaction)
db.append_child_node(root, "key4", transaction=transaction)
db.commit_transaction(transaction)
```

`db.rollback_transaction(transaction)` discards every pending change. The
transaction itself is `embeddocdb.transaction.Transaction`; its `new_groups`
and `updated_groups` show what a commit will write.

### Keys

`embeddocdb.keys.TreeDBKey` works on slash-separated paths:

```python
from embeddocdb.keys import TreeDBKey

key = TreeDBKey("/key1/key2")
key.parent_key()             # TreeDBKey("/key1")
key.base()                   # "key2"
TreeDBKey("/").is_root()     # True
TreeDBKey("/").parent_key()  # TreeDBKey(""), which is_null()
```

### Storage

`embeddocdb.records.StorageEngine` holds the file. The children of a node are
kept together as a `SiblingNodesRecordGroup` under the parent's `NodeID`;
each child is a `SiblingNodeRecordGroup` with a name, a value and its own id.
A fresh file holds one group with parent id 0 containing the root node `/`,
whose id is 1.

### Errors

Failures in the storage engine raise `embeddocdb.errors.EmbeddedDocumentDBError`:
opening a missing, unreadable or malformed file, writing the file, working on
a closed database, or updating a record group that is not stored. The error's
`code` is an `ErrorCode`, and `error_message(code)` gives its description.

## What it does not do

- There is no navigation to a node's parent or siblings, no traversal, and no
  way to remove nodes or to replace a child by name.
- New nodes get node id 0, so a node added through the database cannot itself
  be given children that are found again.
- `insert_child_node`, `insert_child_node_before` and `insert_child_node_after`
  ignore the position they are given: each stores the new node in a record
  group of its own. Lookups use the first group stored for a parent, so the
  node is only found when the parent had no children before.
- `set_value` stores a new record group for the node rather than changing the
  existing record; `value()` reads the value held by the handle passed to it.
- Rolling back a transaction drops its pending changes; nothing is locked.
- There is no command-line tool and no server.

## Running the tests

```
pip install embeddocdb[test]
pytest
```
import datetime

import pytest

from embeddocdb.errors import EmbeddedDocumentDBError
from embeddocdb.records import (
    NodeID,
    SiblingNodeRecordGroup,
    SiblingNodesRecordGroup,
    StorageEngine,
)


def test_node_id_truthiness():
    assert not NodeID(0)
    assert NodeID(1)
    assert NodeID(1) == NodeID(1)


def test_group_append_len_iter_getitem():
    group = SiblingNodesRecordGroup(NodeID(1), SiblingNodeRecordGroup("key1"))
    group.append(SiblingNodeRecordGroup("key2"))
    assert len(group) == 2
    assert group[1].name == "key2"
    assert [node.name for node in group] == ["key1", "key2"]


def test_group_find():
    group = SiblingNodesRecordGroup(NodeID(1), SiblingNodeRecordGroup("key1", "value1"))
    assert group.find("key1").value == "value1"
    assert group.find("key2") is None


def test_create_has_root_group(tmp_path):
    engine = StorageEngine()
    engine.create_master_file(tmp_path / "db.dpdb")
    root_group = engine.find_sibling_nodes_record_group(NodeID(0))
    assert len(root_group) == 1
    assert root_group[0].name == "/"
    assert root_group[0].node_id == NodeID(1)


def test_add_and_reopen(tmp_path):
    path = tmp_path / "db.dpdb"
    engine = StorageEngine()
    engine.create_master_file(path)
    group = SiblingNodesRecordGroup(
        NodeID(1),
        SiblingNodeRecordGroup("key1", "value1"),
        SiblingNodeRecordGroup("key2", "value2"),
    )
    engine.add_sibling_nodes_record_group(group)
    engine.close()

    reopened = StorageEngine()
    reopened.open_master_file(path)
    found = reopened.find_sibling_nodes_record_group(NodeID(1))
    assert [(node.name, node.value) for node in found] == [("key1", "value1"), ("key2", "value2")]
    assert reopened.find_sibling_nodes_record_group(NodeID(0))[0].name == "/"


def test_find_returns_cached_object(tmp_path):
    engine = StorageEngine()
    engine.create_master_file(tmp_path / "db.dpdb")
    first = engine.find_sibling_nodes_record_group(NodeID(0))
    second = engine.find_sibling_nodes_record_group(NodeID(0))
    assert first is second


def test_find_missing_parent(tmp_path):
    engine = StorageEngine()
    engine.create_master_file(tmp_path / "db.dpdb")
    assert engine.find_sibling_nodes_record_group(NodeID(3)) is None
    assert engine.find_sibling_nodes_record_group(NodeID(3)) is None


def test_update_persists(tmp_path):
    path = tmp_path / "db.dpdb"
    engine = StorageEngine()
    engine.create_master_file(path)
    engine.add_sibling_nodes_record_group(SiblingNodesRecordGroup(NodeID(1), SiblingNodeRecordGroup("key1")))
    group = engine.find_sibling_nodes_record_group(NodeID(1))
    group.append(SiblingNodeRecordGroup("key2"))
    engine.update_sibling_nodes_record_group(group)
    engine.close()

    reopened = StorageEngine()
    reopened.open_master_file(path)
    assert [node.name for node in reopened.find_sibling_nodes_record_group(NodeID(1))] == ["key1", "key2"]


def test_update_unknown_group_raises(tmp_path):
    engine = StorageEngine()
    engine.create_master_file(tmp_path / "db.dpdb")
    with pytest.raises(EmbeddedDocumentDBError):
        engine.update_sibling_nodes_record_group(SiblingNodesRecordGroup(NodeID(5)))


@pytest.mark.parametrize(
    "value",
    [None, True, 123, 123.45, "value1", b"\x00\x01", datetime.date(2021, 12, 25)],
)
def test_value_round_trip(tmp_path, value):
    path = tmp_path / "db.dpdb"
    engine = StorageEngine()
    engine.create_master_file(path)
    engine.add_sibling_nodes_record_group(SiblingNodesRecordGroup(NodeID(1), SiblingNodeRecordGroup("key1", value)))
    engine.close()
    reopened = StorageEngine()
    reopened.open_master_file(path)
    assert reopened.find_sibling_nodes_record_group(NodeID(1))[0].value == value


def test_unsupported_value_raises(tmp_path):
    engine = StorageEngine()
    engine.create_master_file(tmp_path / "db.dpdb")
    with pytest.raises(TypeError):
        engine.add_sibling_nodes_record_group(
            SiblingNodesRecordGroup(NodeID(1), SiblingNodeRecordGroup("key1", object()))
        )


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(EmbeddedDocumentDBError):
        StorageEngine().open_master_file(tmp_path / "doesnotexist")


def test_open_corrupt_file_raises(tmp_path):
    path = tmp_path / "bad.dpdb"
    path.write_text("not json", encoding="utf-8")
    with pytest.raises(EmbeddedDocumentDBError):
        StorageEngine().open_master_file(path)


def test_use_after_close_raises(tmp_path):
    engine = StorageEngine()
    engine.create_master_file(tmp_path / "db.dpdb")
    engine.close()
    with pytest.raises(EmbeddedDocumentDBError):
        engine.find_sibling_nodes_record_group(NodeID(0))
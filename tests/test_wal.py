import pytest

from toyos.wal import WAL, WALAction, WALEntry


def test_write_then_recover(tmp_path):
    path = tmp_path / "test_wal.log"
    with WAL(path) as wal:
        wal.append_put("foo", "123")
        wal.append_put("bar", "456")
        wal.append_delete("foo")
        wal.append_put("baz", "789")

    with WAL(path) as wal:
        entries = wal.recover()

    assert entries == [
        WALEntry(WALAction.PUT, "foo", "123"),
        WALEntry(WALAction.PUT, "bar", "456"),
        WALEntry(WALAction.DELETE, "foo", ""),
        WALEntry(WALAction.PUT, "baz", "789"),
    ]


def test_file_format(tmp_path):
    path = tmp_path / "test_wal.log"
    with WAL(path) as wal:
        wal.append_put("foo", "123")
        wal.append_delete("foo")
    assert path.read_text(encoding="utf-8") == "PUT foo 123\nDELETE foo\n"


def test_reopen_appends(tmp_path):
    path = tmp_path / "test_wal.log"
    with WAL(path) as wal:
        wal.append_put("a", "1")
    with WAL(path) as wal:
        wal.append_put("b", "2")
        entries = wal.recover()
    assert [e.key for e in entries] == ["a", "b"]


def test_recover_readable_while_open(tmp_path):
    with WAL(tmp_path / "w.log") as wal:
        wal.append_put("k", "v")
        assert wal.recover() == [WALEntry(WALAction.PUT, "k", "v")]


def test_recover_skips_blank_lines(tmp_path):
    path = tmp_path / "w.log"
    path.write_text("PUT a 1\n\nDELETE a\n", encoding="utf-8")
    with WAL(path) as wal:
        entries = wal.recover()
    assert [e.action for e in entries] == [WALAction.PUT, WALAction.DELETE]


def test_recover_empty_log(tmp_path):
    with WAL(tmp_path / "fresh.log") as wal:
        assert wal.recover() == []


@pytest.mark.parametrize(
    "entry",
    [
        WALEntry(WALAction.PUT, "foo", "123"),
        WALEntry(WALAction.DELETE, "foo"),
    ],
)
def test_serialize_round_trip(entry):
    assert WALEntry.deserialize(entry.serialize()) == entry


def test_serialize_format():
    assert WALEntry(WALAction.PUT, "foo", "123").serialize() == "PUT foo 123"
    assert WALEntry(WALAction.DELETE, "foo").serialize() == "DELETE foo"


def test_deserialize_put_without_value():
    assert WALEntry.deserialize("PUT foo") == WALEntry(WALAction.PUT, "foo", "")


def test_deserialize_unknown_type_is_delete():
    assert WALEntry.deserialize("ERASE foo") == WALEntry(WALAction.DELETE, "foo", "")


def test_deserialize_value_takes_one_token():
    assert WALEntry.deserialize("PUT foo 1 2").value == "1"
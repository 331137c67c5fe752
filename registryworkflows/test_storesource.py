import sqlite3

import pytest

from .sources import RegistryError, RegistryKeyPath
from .storesource import ForensicstoreRegistrySource, merge_conditions, value_data

SID = "S-1-5-21-1111111111-2222222222-3333333333-1001"
EXPLORER = "HKEY_USERS\\%s\\Software\\Microsoft\\Windows\\CurrentVersion\\Explorer" % SID


def test_merge_1():
    filters = [{'type': 'file'}, {'type': 'dictionary'}]

    conditions = [{
        'key': "HKEY_LOCAL_MACHINE\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\%"
    }, {
        'key': "HKEY_USERS\\%\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\%"
    }]

    result = merge_conditions(filters, conditions)

    expected = [{
        'type': 'file',
        'key': "HKEY_LOCAL_MACHINE\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\%"
    }, {
        'type': 'file',
        'key': "HKEY_USERS\\%\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\%"
    }, {
        'type': 'dictionary',
        'key': "HKEY_LOCAL_MACHINE\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\%"
    }, {
        'type': 'dictionary',
        'key': "HKEY_USERS\\%\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\%"
    }]

    assert result == expected


def test_merge_none():
    assert merge_conditions(None, [{'key': 'a'}]) == [{'key': 'a'}]
    assert merge_conditions([{'key': 'a'}], None) == [{'key': 'a'}]


@pytest.mark.parametrize("value,expected", [
    ({"data": b"\x01\x02", "data_type": "REG_BINARY"}, b"\x01\x02"),
    ({"data": "0102ff", "data_type": "REG_BINARY"}, b"\x01\x02\xff"),
    ({"data": "01 02 ff", "data_type": "REG_BINARY"}, b"\x01\x02\xff"),
    ({"data": [1, 2, 255], "data_type": "REG_NONE"}, b"\x01\x02\xff"),
    ({"data": None, "data_type": "REG_BINARY"}, b""),
    ({"data": ["ab", "cd"], "data_type": "REG_BINARY"}, ["ab", "cd"]),
    ({"data": [1, 256], "data_type": "REG_BINARY"}, [1, 256]),
    ({"data": "not hex", "data_type": "REG_BINARY"}, "not hex"),
    ({"data": "cafe", "data_type": "REG_SZ"}, "cafe"),
    ({"data": 5, "data_type": "REG_DWORD"}, 5),
])
def test_value_data(value, expected):
    assert value_data(value) == expected


@pytest.fixture
def source(fake_store, registry_key):
    store = fake_store([
        registry_key(EXPLORER + "\\UserAssist\\{GUID}\\Count", [("a", "00", "REG_BINARY")]),
        registry_key(EXPLORER + "\\RunMRU", [("a", "cmd", "REG_SZ"), ("MRUList", "a", "REG_SZ")]),
        registry_key("HKEY_USERS\\%s_Classes\\Local Settings" % SID),
        registry_key("HKEY_USERS\\S-1-5-18\\Software\\Microsoft"),
        registry_key("HKEY_LOCAL_MACHINE\\Software\\Microsoft\\Windows\\CurrentVersion\\Run"),
    ])
    return ForensicstoreRegistrySource(store)


def test_user_sids(source):
    assert source.user_sids() == [SID]


def test_keys(source):
    keys = source.keys("HKEY_USERS", SID + "\\Software\\Microsoft\\Windows\\CurrentVersion\\Explorer")
    assert [key.name for key in keys] == ["UserAssist", "RunMRU"]
    assert keys[0].full_path == EXPLORER + "\\UserAssist"


def test_keys_recurse(source):
    keys = source.keys("HKEY_USERS", SID + "\\Software\\Microsoft\\Windows\\CurrentVersion\\Explorer", recurse=True)
    assert [key.name for key in keys] == ["UserAssist", "{GUID}", "Count", "RunMRU"]


def test_keys_missing(source):
    assert source.keys("HKEY_USERS", SID + "\\Software\\Nothing") == []


def test_values(source):
    key = RegistryKeyPath("HKEY_USERS", EXPLORER[len("HKEY_USERS\\"):] + "\\RunMRU")
    assert [value.data for value in source.values(key)] == ["cmd", "a"]
    assert [value.name for value in source.values(key, "mrulist")] == ["MRUList"]
    assert source.values(RegistryKeyPath("HKEY_USERS", SID + "\\Nothing")) == []


def test_values_binary(source):
    key = RegistryKeyPath("HKEY_USERS", EXPLORER[len("HKEY_USERS\\"):] + "\\UserAssist\\{GUID}\\Count")
    assert source.values(key)[0].data == b"\x00"


def test_filter_conditions(fake_store, registry_key):
    store = fake_store([
        dict(registry_key(EXPLORER + "\\RunMRU", [("a", "cmd", "REG_SZ")]), artifact="WindowsRunMRU"),
        dict(registry_key(EXPLORER + "\\TypedPaths", [("url1", "C:\\", "REG_SZ")]), artifact="WindowsTypedPaths"),
    ])
    source = ForensicstoreRegistrySource(store, conditions=[{"artifact": "WindowsRunMRU"}])

    keys = source.keys("HKEY_USERS", SID + "\\Software\\Microsoft\\Windows\\CurrentVersion\\Explorer")

    assert [key.name for key in keys] == ["RunMRU"]


def test_store_error():
    class BrokenStore:
        def select(self, item_type, conditions=None):
            raise sqlite3.OperationalError("database is locked")

    with pytest.raises(RegistryError):
        ForensicstoreRegistrySource(BrokenStore()).user_sids()

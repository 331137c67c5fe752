import contextlib
import io
import re
import struct

import pytest

from .sources import LOCALHOST, RegistryError, RegistryKeyPath, RegistrySource, RegistryValue


class FakeStore:
    """ In-memory stand-in for a forensicstore with LIKE-style select conditions """

    def __init__(self, items=None):
        self.items = list(items or [])
        self.inserted = []
        self.files = {}
        self.closed = False

    def select(self, item_type, conditions=None):
        for item in self.items + self.inserted:
            if item.get("type") != item_type:
                continue
            if conditions and not any(self._matches(item, condition) for condition in conditions):
                continue
            yield item

    @staticmethod
    def _matches(item, condition):
        for key, pattern in condition.items():
            regex = ".*".join(re.escape(part) for part in pattern.split("%"))
            if not re.fullmatch(regex, str(item.get(key, "")), re.IGNORECASE | re.DOTALL):
                return False
        return True

    def insert(self, item):
        self.inserted.append(item)
        return len(self.inserted)

    @contextlib.contextmanager
    def store_file(self, path):
        file_io = io.BytesIO()
        try:
            yield path, file_io
        finally:
            self.files[path] = file_io.getvalue()

    def close(self):
        self.closed = True


class MemorySource(RegistrySource):
    """ Registry source over a dict of key path -> {value name: data} """

    def __init__(self, keys, host=LOCALHOST, failing_sids=()):
        super(MemorySource, self).__init__(host)
        self._keys = keys
        self.failing_sids = set(failing_sids)
        self.closed = False

    def user_sids(self):
        sids = []
        for path in self._keys:
            sid = path.split("\\")[1]
            if sid not in sids:
                sids.append(sid)
        return sids

    def keys(self, hive, path, recurse=False):
        sid = path.split("\\")[0]
        if sid in self.failing_sids:
            raise RegistryError("access denied for %s" % sid)
        prefix = "\\".join([hive, path]) + "\\"
        results = []
        for key_path in self._keys:
            if not key_path.startswith(prefix):
                continue
            rest = key_path[len(prefix):].split("\\")
            depths = range(1, len(rest) + 1) if recurse else [1]
            for depth in depths:
                key = RegistryKeyPath(hive, "\\".join([path] + rest[:depth]), self.host)
                if key not in results:
                    results.append(key)
        return results

    def values(self, key, name=None):
        return [
            RegistryValue(value_name, data, key, self.host)
            for value_name, data in self._keys.get(key.full_path, {}).items()
            if name is None or value_name.lower() == name.lower()
        ]

    def close(self):
        self.closed = True


def _registry_key(key, values=None):
    return {
        "type": "windows-registry-key",
        "key": key,
        "values": [
            {"name": name, "data": data, "data_type": data_type}
            for name, data, data_type in (values or [])
        ],
    }


def _userassist_payload(filetime=0, run_count=0, focus_count=0, focus_time=0, length=72):
    if length == 8:
        return struct.pack("<II", 0, run_count)
    if length == 16:
        return struct.pack("<IIQ", 0, run_count, filetime)
    payload = struct.pack("<IIII44sQ4s", 0, run_count, focus_count, focus_time, b"\x00" * 44, filetime, b"\xff" * 4)
    return payload[:length]


@pytest.fixture
def fake_store():
    return FakeStore


@pytest.fixture
def memory_source():
    return MemorySource


@pytest.fixture
def registry_key():
    return _registry_key


@pytest.fixture
def userassist_payload():
    return _userassist_payload

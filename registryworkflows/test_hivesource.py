import pytest

from . import hivesource
from .hivesource import HiveRegistrySource, find_subkey, profile_to_relative_path
from .process.rdphistory import rdphistory
from .sources import RegistryError, RegistryKeyPath

SID_A = "S-1-5-21-1111111111-2222222222-3333333333-1001"
SID_B = "S-1-5-21-1111111111-2222222222-3333333333-1002"
SERVERS = "Software\\Microsoft\\Terminal Server Client\\Servers"


class FakeValue:

    def __init__(self, name, data, binary=False):
        self.name = name
        self.data = data
        self.binary = binary

    def DataIsBinaryData(self):
        return self.binary

    def GetDataAsObject(self):
        return self.data


class FakeKey:

    def __init__(self, name, subkeys=(), values=()):
        self.name = name
        self.subkeys = list(subkeys)
        self.values = list(values)

    def GetSubkeys(self):
        return iter(self.subkeys)

    def GetValues(self):
        return iter(self.values)


def path_keys(path, leaf):
    key = leaf
    for name in reversed(path.split("\\")):
        key = FakeKey(name, [key])
    return FakeKey("", [key])


HIVES = {
    "software": path_keys("Microsoft\\Windows NT\\CurrentVersion", FakeKey("ProfileList", [
        FakeKey(SID_A, values=[FakeValue("ProfileImagePath", "C:\\Users\\alice")]),
        FakeKey("S-1-5-18", values=[FakeValue("ProfileImagePath", "%systemroot%\\system32\\config\\systemprofile")]),
        FakeKey(SID_B, values=[FakeValue("ProfileImagePath", "C:\\Users\\bob")]),
    ])),
    "alice": path_keys("Software\\Microsoft\\Terminal Server Client", FakeKey("Servers", [
        FakeKey("host.example.com", values=[
            FakeValue("UsernameHint", "alice"),
            FakeValue("CertHash", b"\x01\x02", binary=True),
        ]),
    ])),
}


class FakeRegFile:

    def __init__(self, ascii_codepage='cp1252'):
        self.ascii_codepage = ascii_codepage
        self.root = None

    def Open(self, file_object):
        self.root = HIVES[file_object.read().decode()]

    def GetRootKey(self):
        return self.root


@pytest.fixture
def image(tmp_path, monkeypatch):
    monkeypatch.setattr(hivesource.regfile_impl, "REGFWinRegistryFile", FakeRegFile)
    config = tmp_path / "windows" / "System32" / "config"
    config.mkdir(parents=True)
    (config / "SOFTWARE").write_bytes(b"software")
    profile = tmp_path / "Users" / "alice"
    profile.mkdir(parents=True)
    (profile / "ntuser.dat").write_bytes(b"alice")
    return str(tmp_path)


def test_profile_to_relative_path():
    assert profile_to_relative_path("C:\\Users\\alice") == "/Users/alice"
    assert profile_to_relative_path("%systemroot%\\system32") == "%systemroot%/system32"
    assert profile_to_relative_path("") == ""


def test_find_subkey():
    root = HIVES["alice"]
    assert find_subkey(root, ["software", "MICROSOFT"]).name == "Microsoft"
    assert find_subkey(root, []) is root
    assert find_subkey(root, ["Software", "Nothing"]) is None


def test_user_sids(image):
    with HiveRegistrySource(image) as source:
        assert source.user_sids() == [SID_A, SID_B]
        assert source.users[SID_A] == "/Users/alice"


def test_keys_and_values(image):
    with HiveRegistrySource(image, host="ws01") as source:
        keys = source.keys("HKEY_USERS", SID_A + "\\" + SERVERS)
        assert keys == [RegistryKeyPath("HKEY_USERS", SID_A + "\\" + SERVERS + "\\host.example.com", "ws01")]

        values = source.values(keys[0])
        assert [(value.name, value.data) for value in values] == [
            ("UsernameHint", "alice"), ("CertHash", b"\x01\x02")]
        assert [value.name for value in source.values(keys[0], "usernamehint")] == ["UsernameHint"]


def test_keys_recurse(image):
    with HiveRegistrySource(image) as source:
        keys = source.keys("HKEY_USERS", SID_A + "\\Software", recurse=True)
        assert [key.name for key in keys] == ["Microsoft", "Terminal Server Client", "Servers", "host.example.com"]


def test_keys_missing(image):
    with HiveRegistrySource(image) as source:
        assert source.keys("HKEY_USERS", SID_A + "\\Software\\Nothing") == []
        assert source.keys("HKEY_USERS", "S-1-5-21-0-0-0-0\\Software") == []
        assert source.keys("HKEY_LOCAL_MACHINE", "Software") == []


def test_missing_user_hive(image):
    with HiveRegistrySource(image) as source:
        with pytest.raises(RegistryError):
            source.keys("HKEY_USERS", SID_B + "\\" + SERVERS)


def test_missing_software_hive(tmp_path, monkeypatch):
    monkeypatch.setattr(hivesource.regfile_impl, "REGFWinRegistryFile", FakeRegFile)
    with pytest.raises(RegistryError):
        HiveRegistrySource(str(tmp_path))


def test_rdphistory_from_image(image):
    with HiveRegistrySource(image) as source:
        items = rdphistory.transform(source)

    assert items == [{
        "UserSid": SID_A,
        "UsernameHint": "alice",
        "Server": "host.example.com",
        "Key": "HKEY_USERS\\" + SID_A + "\\" + SERVERS + "\\host.example.com",
        "type": "rdp-session",
    }]


def test_close(image):
    source = HiveRegistrySource(image)
    source.keys("HKEY_USERS", SID_A + "\\Software")
    handles = list(source.open_handles)
    source.close()
    assert len(handles) == 2
    assert all(handle.closed for handle in handles)

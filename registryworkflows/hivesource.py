# Copyright (c) 2020 Siemens AG
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of
# this software and associated documentation files (the "Software"), to deal in
# the Software without restriction, including without limitation the rights to
# use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of
# the Software, and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS
# FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR
# COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER
# IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
""" Registry source reading the hive files of a mounted Windows installation """
import logging

import fs
import fs.path
from dfwinreg import errors as dfwinreg_errors
from dfwinreg import regf as regfile_impl
from fs.errors import FSError

from .sources import HKEY_USERS, LOCALHOST, RegistryError, RegistryKeyPath, RegistrySource, RegistryValue, \
    is_user_sid, split_key_path

LOGGER = logging.getLogger(__name__)

SOFTWARE_HIVE = 'Windows/System32/config/SOFTWARE'
PROFILE_LIST = 'Microsoft\\Windows NT\\CurrentVersion\\ProfileList'


def find_subkey(registry_key, parts):
    """
    Walks down from registry_key along parts, matching key names case-insensitively
    :return: the dfwinreg key or None if any part does not exist
    """
    for part in parts:
        match = None
        for subkey in registry_key.GetSubkeys():
            if subkey.name.lower() == part.lower():
                match = subkey
                break
        if match is None:
            return None
        registry_key = match
    return registry_key


def profile_to_relative_path(profilepath):
    # ProfileImagePath can be 'C:\Users\Someone' OR '%Systemroot%\Something'
    rel_profilepath = profilepath.replace('\\', '/')
    if len(profilepath) > 1 and profilepath[1] == ':':
        rel_profilepath = rel_profilepath[2:]
    return rel_profilepath


class HiveRegistrySource(RegistrySource):
    """
    Serves HKEY_USERS queries from the NTUSER.DAT hives of a Windows file
    system. Users and their profile folders are read from the ProfileList
    key of the SOFTWARE hive.
    """

    def __init__(self, root, host=LOCALHOST, ascii_codepage='cp1252'):
        """
        :param root: path or pyfilesystem2 URL of the system partition root
        :param host: source host identifier attached to all results
        :param ascii_codepage: codepage of ASCII strings in the hives
        """
        super(HiveRegistrySource, self).__init__(host)
        self.ascii_codepage = ascii_codepage
        self.open_handles = []
        self.users = {}
        self._hives = {}
        try:
            self.fs = fs.open_fs(root)
        except FSError as err:
            raise RegistryError("Could not open %s: %s" % (root, err)) from err
        try:
            self._read_users()
        except RegistryError:
            self.close()
            raise

    def _resolve_path(self, path):
        """ Finds path case-insensitively, returns the real path or None """
        current = '/'
        for part in split_key_path(path.replace('/', '\\')):
            try:
                entries = self.fs.listdir(current)
            except FSError:
                return None
            match = next((entry for entry in entries if entry.lower() == part.lower()), None)
            if match is None:
                return None
            current = fs.path.join(current, match)
        return current

    def _open_hive(self, path):
        realpath = self._resolve_path(path)
        if realpath is None:
            LOGGER.warning("Could not find registry hive %s", path)
            return None

        LOGGER.info("open registry %s", realpath)
        try:
            file_object = self.fs.openbin(realpath)
        except FSError as err:
            raise RegistryError("Could not open registry hive %s: %s" % (realpath, err)) from err
        self.open_handles.append(file_object)
        reg_file = regfile_impl.REGFWinRegistryFile(ascii_codepage=self.ascii_codepage)
        try:
            reg_file.Open(file_object)
        except OSError as err:
            raise RegistryError("Could not parse registry hive %s: %s" % (realpath, err)) from err
        return reg_file

    def _read_users(self):
        """
        Reads the SIDs and profile folders from the ProfileList of the SOFTWARE hive
        """
        software = self._open_hive(SOFTWARE_HIVE)
        if software is None:
            raise RegistryError("No SOFTWARE hive found")
        registry_key = find_subkey(software.GetRootKey(), split_key_path(PROFILE_LIST))
        if not registry_key:
            LOGGER.error("Could not get SOFTWARE key for ProfileList")
            return
        for subkey in registry_key.GetSubkeys():
            sid = subkey.name
            profilepath = ''
            for val in subkey.GetValues():
                if val.name == 'ProfileImagePath':
                    profilepath = val.GetDataAsObject() or ''
                    break
            LOGGER.info("Found user %s with SID: %s", profilepath.split('\\')[-1], sid)
            self.users[sid] = profile_to_relative_path(profilepath)

    def _user_hive(self, sid):
        if sid not in self._hives:
            if not self.users[sid]:
                raise RegistryError("No profile folder known for %s" % sid)
            hive = self._open_hive(fs.path.join(self.users[sid], 'NTUSER.DAT'))
            if hive is None:
                raise RegistryError("Could not find NTUSER.DAT for %s" % sid)
            self._hives[sid] = hive
        return self._hives[sid]

    def _get_key(self, hive, path):
        if hive.upper() != HKEY_USERS:
            LOGGER.warning("Only %s is supported for hive files, not %s", HKEY_USERS, hive)
            return None
        parts = split_key_path(path)
        if not parts or parts[0] not in self.users:
            return None
        return find_subkey(self._user_hive(parts[0]).GetRootKey(), parts[1:])

    def user_sids(self):
        return [sid for sid in self.users if is_user_sid(sid)]

    def keys(self, hive, path, recurse=False):
        registry_key = self._get_key(hive, path)
        if registry_key is None:
            return []
        results = []
        base = '\\'.join(split_key_path(path))
        pending = [(base, registry_key)]
        while pending:
            parent_path, parent = pending.pop(0)
            for subkey in parent.GetSubkeys():
                key_path = '\\'.join([parent_path, subkey.name])
                results.append(RegistryKeyPath(hive=hive, path=key_path, host=self.host))
                if recurse:
                    pending.append((key_path, subkey))
        return results

    def values(self, key, name=None):
        registry_key = self._get_key(key.hive, key.path)
        if registry_key is None:
            return []
        results = []
        for value in registry_key.GetValues():
            value_name = value.name or '(Default)'
            if name is not None and value_name.lower() != name.lower():
                continue
            if value.DataIsBinaryData():
                data = value.data
            else:
                try:
                    data = value.GetDataAsObject()
                except dfwinreg_errors.WinRegistryValueError:
                    LOGGER.warning("Could not parse value %s of %s", value_name, key.full_path)
                    data = value.data
            results.append(RegistryValue(name=value_name, data=data, key=key, host=self.host))
        return results

    def close(self):
        for handle in self.open_handles:
            try:
                handle.close()
            except (OSError, FSError) as err:
                LOGGER.warning("Error cleaning up %s: %s", handle, err)
        self.open_handles = []
        self._hives = {}
        self.fs.close()

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
""" Registry source reading windows-registry-key items from a forensicstore """

import logging
import sqlite3

from .sources import HKEY_USERS, LOCALHOST, RegistryError, RegistryKeyPath, RegistrySource, RegistryValue, \
    is_user_sid, split_key_path

LOGGER = logging.getLogger(__name__)

BINARY_TYPES = ('REG_BINARY', 'REG_NONE')


def merge_conditions(list_a, list_b):
    if list_a is None:
        return list_b
    if list_b is None:
        return list_a
    list_c = []
    for item_a in list_a:
        for item_b in list_b:
            list_c.append({**item_a, **item_b})
    return list_c


def value_data(value):
    """
    Binary registry data is not stored uniformly by all collectors, it can be
    raw bytes, a list of byte values or a hex string like "0a ff 00".
    """
    data = value.get("data")
    if value.get("data_type") not in BINARY_TYPES:
        return data
    if data is None:
        return b""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, list):
        try:
            return bytes(data)
        except (TypeError, ValueError):
            LOGGER.warning("Binary value %s is not a list of byte values", value.get("name"))
            return data
    if isinstance(data, str):
        try:
            return bytes.fromhex(data.replace(" ", ""))
        except ValueError:
            LOGGER.warning("Binary value %s is not hex encoded", value.get("name"))
            return data
    return data


class ForensicstoreRegistrySource(RegistrySource):
    """
    Serves registry queries from the windows-registry-key items of a
    forensicstore. The store is owned by the caller and not closed here.
    """

    ITEM_TYPE = "windows-registry-key"

    def __init__(self, store, host=LOCALHOST, conditions=None):
        super(ForensicstoreRegistrySource, self).__init__(host)
        self.store = store
        self.conditions = conditions

    def _select(self, key_pattern):
        conditions = merge_conditions(self.conditions, [{'key': key_pattern}])
        try:
            return list(self.store.select(self.ITEM_TYPE, conditions))
        except sqlite3.Error as err:
            raise RegistryError("Could not select %s from forensicstore: %s" % (key_pattern, err)) from err

    def user_sids(self):
        sids = []
        for item in self._select(HKEY_USERS + "\\%"):
            parts = split_key_path(item.get("key", ""))
            if len(parts) < 2 or parts[0].upper() != HKEY_USERS:
                continue
            if is_user_sid(parts[1]) and parts[1] not in sids:
                sids.append(parts[1])
        return sids

    def keys(self, hive, path, recurse=False):
        base = [hive] + split_key_path(path)
        base_lower = [part.lower() for part in base]
        seen = set()
        results = []
        for item in self._select("\\".join(base) + "\\%"):
            parts = split_key_path(item.get("key", ""))
            if len(parts) <= len(base) or [part.lower() for part in parts[:len(base)]] != base_lower:
                continue
            # stores may only hold the keys that carry values, intermediate keys are derived
            depths = range(len(base) + 1, len(parts) + 1) if recurse else [len(base) + 1]
            for depth in depths:
                key_path = "\\".join(parts[1:depth])
                if key_path.lower() in seen:
                    continue
                seen.add(key_path.lower())
                results.append(RegistryKeyPath(hive=hive, path=key_path, host=self.host))
        return results

    def values(self, key, name=None):
        results = []
        full_path = key.full_path.lower()
        for item in self._select(key.full_path):
            if "\\".join(split_key_path(item.get("key", ""))).lower() != full_path:
                continue
            for value in item.get("values") or []:
                value_name = value.get("name") or "(Default)"
                if name is not None and value_name.lower() != name.lower():
                    continue
                results.append(RegistryValue(name=value_name, data=value_data(value), key=key, host=self.host))
        return results

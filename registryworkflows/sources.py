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
""" Registry access interface shared by all processing workflows """

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

LOCALHOST = "localhost"

HKEY_USERS = "HKEY_USERS"

# local and domain user accounts, no well-known service SIDs or *_Classes hives
USER_SID_PATTERN = re.compile(r'^S-1-5-21-\d+-\d+-\d+-\d+$', re.IGNORECASE)


class RegistryError(RuntimeError):
    """ Raised by a registry source if a hive, key or value cannot be read """


@dataclass
class RegistryKeyPath:
    """ A registry key as returned by RegistrySource.keys """
    hive: str
    path: str
    host: str = LOCALHOST

    @property
    def name(self) -> str:
        return self.path.split('\\')[-1]

    @property
    def full_path(self) -> str:
        return '\\'.join([self.hive, self.path])


@dataclass
class RegistryValue:
    """ A single value of a registry key """
    name: str
    data: Any
    key: RegistryKeyPath
    host: str = LOCALHOST


def is_user_sid(sid: str) -> bool:
    return bool(USER_SID_PATTERN.match(sid))


def split_key_path(path: str) -> List[str]:
    return [part for part in path.split('\\') if part]


class RegistrySource:
    """
    Base class for everything the workflows can read registry data from.

    Subclasses implement user_sids, keys and values. All of them raise
    RegistryError if the underlying data cannot be accessed. Missing keys
    are not an error, they simply yield nothing.
    """

    def __init__(self, host: str = LOCALHOST):
        self.host = host or LOCALHOST

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def remote(self) -> bool:
        return self.host != LOCALHOST

    def user_sids(self) -> List[str]:
        """ Returns the SIDs of all user hives below HKEY_USERS """
        raise NotImplementedError

    def keys(self, hive: str, path: str, recurse: bool = False) -> Iterable[RegistryKeyPath]:
        """
        Lists the subkeys of a key
        :param hive: name of the hive, e.g. HKEY_USERS
        :param path: path of the parent key below the hive
        :param recurse: also return all subkeys of the subkeys
        """
        raise NotImplementedError

    def values(self, key: RegistryKeyPath, name: Optional[str] = None) -> Iterable[RegistryValue]:
        """
        Lists the values of a key
        :param key: a key returned by keys()
        :param name: only return the value with this name (case-insensitive)
        """
        raise NotImplementedError

    def close(self):
        pass

#!/usr/bin/env python
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
"""
Process the UserAssist keys of all users.

Every value below a UserAssist Count key is one program or shell item the
user started. Value names are ROT13 encoded and often start with a known
folder GUID, the value data carries the run counters and the last execution
time as a FILETIME.
"""

import codecs
import logging
import re
import struct
import sys
from datetime import datetime, timedelta

from ...knownfolders import KNOWN_FOLDERS
from ...sources import HKEY_USERS, RegistryError
from ...util import run_workflow, script_argument_parser, setup_logging

LOGGER = logging.getLogger(__name__)

USERASSIST_PATH = r"Software\Microsoft\Windows\CurrentVersion\Explorer\UserAssist"

GUID_LENGTH = 38
GUID_PATTERN = re.compile(r'\{[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\}')

FILETIME_EPOCH = datetime(1601, 1, 1)

PAYLOAD_LEGACY = "legacy"
PAYLOAD_STANDARD = "standard"
PAYLOAD_EXTENDED = "extended"

# start and end of the FILETIME per payload shape, legacy payloads have none
TIMESTAMP_OFFSETS = {
    PAYLOAD_LEGACY: None,
    PAYLOAD_STANDARD: (8, 16),
    PAYLOAD_EXTENDED: (60, 68),
}

COUNTER_OFFSETS = {
    PAYLOAD_LEGACY: {"RunCount": 4},
    PAYLOAD_STANDARD: {"RunCount": 4},
    PAYLOAD_EXTENDED: {"RunCount": 4, "FocusCount": 8, "FocusTime": 12},
}


class PayloadError(ValueError):
    """ A UserAssist value does not contain the data its format requires """


def decode_name(name):
    """ Reverses the ROT13 encoding of UserAssist value names, only ASCII letters are rotated """
    return codecs.decode(name, "rot-13")


def resolve_known_folder(name, known_folders=KNOWN_FOLDERS):
    """
    Replaces a known folder GUID at the start of name by the folder name.
    Names without a GUID prefix or with an unknown GUID are returned unchanged.
    """
    prefix = name[:GUID_LENGTH]
    if not GUID_PATTERN.fullmatch(prefix) or prefix not in known_folders:
        return name
    return known_folders[prefix] + name[GUID_LENGTH:]


def payload_shape(data):
    if len(data) == 8:
        return PAYLOAD_LEGACY
    if len(data) == 16:
        return PAYLOAD_STANDARD
    return PAYLOAD_EXTENDED


def filetime_to_iso(filetime):
    """
    Formats a FILETIME like the ISO-8601 round-trip format, e.g. 2021-06-01T12:34:56.7890000Z
    :param filetime: 100 nanosecond intervals since 1601-01-01 UTC
    """
    try:
        timestamp = FILETIME_EPOCH + timedelta(microseconds=filetime // 10)
    except OverflowError as err:
        raise PayloadError("FILETIME %d is out of range" % filetime) from err
    return "%s%dZ" % (timestamp.isoformat(timespec='microseconds'), filetime % 10)


def read_filetime(data):
    offsets = TIMESTAMP_OFFSETS[payload_shape(data)]
    if offsets is None:
        return 0
    start, end = offsets
    if len(data) < end:
        raise PayloadError("%d byte value is too short for a timestamp at offset %d" % (len(data), start))
    return struct.unpack("<Q", data[start:end])[0]


def last_executed(data):
    if not isinstance(data, (bytes, bytearray)):
        raise PayloadError("value data is %s, not binary" % type(data).__name__)
    return filetime_to_iso(read_filetime(bytes(data)))


def read_counters(data):
    counters = {"RunCount": None, "FocusCount": None, "FocusTime": None}
    if not isinstance(data, (bytes, bytearray)):
        return counters
    for field, offset in COUNTER_OFFSETS[payload_shape(data)].items():
        if len(data) >= offset + 4:
            counters[field] = struct.unpack_from("<I", data, offset)[0]
    return counters


def userassist_entry(value, sid, remote=False):
    item = {
        "Name": resolve_known_folder(decode_name(value.name)),
        "UserSid": sid,
        "Key": value.key.full_path,
        "type": "userassist",
    }
    try:
        item["LastExecutedTime"] = last_executed(value.data)
    except PayloadError as err:
        LOGGER.warning("Invalid UserAssist value %s in %s: %s", value.name, value.key.full_path, err)
        item["LastExecutedTime"] = None
        item["errors"] = [str(err)]
    item.update(read_counters(value.data))
    if remote:
        item["Host"] = value.host
    return item


def user_entries(source, sid):
    results = []
    path = "\\".join([sid, USERASSIST_PATH])
    for key in source.keys(HKEY_USERS, path, recurse=True):
        if key.name.lower() != "count":
            continue
        LOGGER.debug("reading %s", key.full_path)
        for value in source.values(key):
            results.append(userassist_entry(value, sid, remote=source.remote))
    return results


def transform(source):
    results = []
    for sid in source.user_sids():
        try:
            results.extend(user_entries(source, sid))
        except RegistryError as err:
            LOGGER.exception("Could not read UserAssist keys of %s: %s", sid, err)
    LOGGER.info("found %d UserAssist entries", len(results))
    return results


def main(args=None):
    parser = script_argument_parser('userassist', description='Process windows UserAssist keys')
    args = parser.parse_args(args)
    setup_logging(args.verbose)
    run_workflow(args, transform)


if __name__ == '__main__':
    main(sys.argv[1:])

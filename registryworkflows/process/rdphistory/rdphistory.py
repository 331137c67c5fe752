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

import logging
import re
import sys

from ...sources import HKEY_USERS, RegistryError
from ...util import run_workflow, script_argument_parser, setup_logging

LOGGER = logging.getLogger(__name__)

TERMINAL_SERVER_CLIENT = r"Software\Microsoft\Terminal Server Client"

MRU_PATTERN = re.compile(r'^MRU(\d+)$', re.IGNORECASE)


def session_entries(source, sid):
    results = []
    path = "\\".join([sid, TERMINAL_SERVER_CLIENT, "Servers"])
    for key in source.keys(HKEY_USERS, path):
        for value in source.values(key, "UsernameHint"):
            item = {
                "UserSid": sid,
                "UsernameHint": value.data,
                "Server": key.name,
                "Key": key.full_path,
                "type": "rdp-session",
            }
            if source.remote:
                item["Host"] = value.host
            results.append(item)
    return results


def mru_entries(source, sid):
    results = []
    path = "\\".join([sid, TERMINAL_SERVER_CLIENT])
    for key in source.keys(HKEY_USERS, path):
        if key.name.lower() != "default":
            continue
        for value in source.values(key):
            match = MRU_PATTERN.match(value.name)
            if not match:
                continue
            item = {
                "UserSid": sid,
                "Server": value.data,
                "Position": int(match.group(1)),
                "Key": key.full_path,
                "type": "rdp-mru",
            }
            if source.remote:
                item["Host"] = value.host
            results.append(item)
    results.sort(key=lambda item: item["Position"])
    return results


def transform(source):
    results = []
    for sid in source.user_sids():
        try:
            results.extend(session_entries(source, sid))
            results.extend(mru_entries(source, sid))
        except RegistryError as err:
            LOGGER.exception("Could not read Terminal Server Client keys of %s: %s", sid, err)
    LOGGER.info("found %d RDP history entries", len(results))
    return results


def main(args=None):
    parser = script_argument_parser('rdp-history', description='Process windows RDP connection history')
    args = parser.parse_args(args)
    setup_logging(args.verbose)
    run_workflow(args, transform)


if __name__ == '__main__':
    main(sys.argv[1:])

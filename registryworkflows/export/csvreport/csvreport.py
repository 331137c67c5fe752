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
""" Output processed items to CSV reports, quoting is enabled for every non-numeric field for easier parsing """
import argparse
import csv
import logging
import sys
from io import StringIO

import forensicstore

LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "userassist": ["Name", "UserSid", "LastExecutedTime", "RunCount", "FocusCount", "FocusTime", "Host"],
    "rdp-session": ["UserSid", "UsernameHint", "Server", "Host"],
    "rdp-mru": ["UserSid", "Position", "Server", "Host"],
}


def render(items, header):
    """ Renders items as ';' separated rows, columns missing in an item stay empty """
    string_io = StringIO()
    writer = csv.DictWriter(string_io, fieldnames=header, delimiter=';', extrasaction='ignore',
                            quoting=csv.QUOTE_NONNUMERIC)
    writer.writeheader()
    writer.writerows(items)
    return string_io.getvalue()


def transform(store, items, item_type, header):
    if not items:
        LOGGER.warning("no %s items to export", item_type)
        return []
    report_name = "Reports/%s.csv" % item_type
    with store.store_file(report_name) as (report_path, file_io):
        file_io.write(render(items, header).encode('utf-8'))
    LOGGER.info("wrote %d %s rows to %s", len(items), item_type, report_path)
    return [{
        "type": "report",
        "report_path": report_path,
        "format": "csv",
        "item_type": item_type,
        "rows": len(items),
    }]


def main(args=None):
    parser = argparse.ArgumentParser(prog='csv', description='Export processed items as CSV report')
    parser.add_argument("type", help="Item type to export, e.g. userassist")
    parser.add_argument("header", nargs="*", help="Columns of the report")
    parser.add_argument("--store", default=".", help="Forensicstore to export from")
    args = parser.parse_args(args)

    header = args.header or DEFAULT_HEADERS.get(args.type)
    if not header:
        parser.error("no default header for %s, columns are required" % args.type)

    store = forensicstore.connect(args.store)
    try:
        items = list(store.select(args.type))
        LOGGER.info("exporting %d %s items", len(items), args.type)
        results = transform(store, items, args.type, header)
        for result in results:
            store.insert(result)
    finally:
        store.close()


if __name__ == '__main__':
    main(sys.argv[1:])

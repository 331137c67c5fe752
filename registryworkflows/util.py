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
""" Shared command line handling and source setup for the processing workflows """

import argparse
import logging

import forensicstore

from .hivesource import HiveRegistrySource
from .sources import LOCALHOST, RegistryError
from .storesource import ForensicstoreRegistrySource

LOGGER = logging.getLogger(__name__)


class StoreDictKeyPair(argparse.Action):
    # pylint: disable=too-few-public-methods

    def __call__(self, parser, namespace, values, option_string=None):
        new_dict = {}
        for element in values.split(","):
            key, value = element.split("=", 1)
            new_dict[key] = value
        if hasattr(namespace, self.dest):
            dict_list = getattr(namespace, self.dest)
            if dict_list is not None:
                dict_list.append(new_dict)
                setattr(namespace, self.dest, dict_list)
                return
        setattr(namespace, self.dest, [new_dict])


def script_argument_parser(name, description):
    parser = argparse.ArgumentParser(prog=name, description=description)
    parser.add_argument(
        "forensicstore",
        nargs="*",
        help="Forensicstore(s) to read registry keys from, results are written back into them (default: .)"
    )
    parser.add_argument(
        "-i",
        "--image",
        action="append",
        dest="images",
        default=[],
        help="Root of a mounted Windows file system to read hives from (can be repeated)"
    )
    parser.add_argument(
        "-o",
        "--output",
        default=".",
        help="Forensicstore receiving the results of --image sources"
    )
    parser.add_argument(
        "--host",
        default=LOCALHOST,
        help="Source host identifier attached to every record"
    )
    parser.add_argument("--filter", dest="filter", action=StoreDictKeyPair, metavar="type=file,name=System.evtx...")
    parser.add_argument('-v', '--verbose', action='count', default=0)
    return parser


def setup_logging(verbose=0):
    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    level = levels[min(len(levels) - 1, verbose)]
    logging.basicConfig(format="[%(asctime)s] %(message)s", datefmt='%Y-%m-%d %H:%M:%S', level=level)


def run_workflow(args, transform):
    """
    Run a processing workflow over every target given on the command line.

    Stores are processed in place, images write into the --output store.
    A failing target is logged and skipped.
    :param args: parsed arguments of script_argument_parser
    :param transform: callable taking a RegistrySource and returning a list of items
    :return: number of inserted items
    """
    urls = args.forensicstore
    if not urls and not args.images:
        urls = ["."]

    inserted = 0
    for url in urls:
        LOGGER.info("processing forensicstore %s", url)
        try:
            store = forensicstore.connect(url)
        except (OSError, RegistryError) as err:
            LOGGER.exception("Could not open forensicstore %s: %s", url, err)
            continue
        try:
            with ForensicstoreRegistrySource(store, host=args.host, conditions=args.filter) as source:
                inserted += _insert(store, transform(source))
        except (OSError, RegistryError) as err:
            LOGGER.exception("Encountered exception during processing of %s: %s", url, err)
        finally:
            store.close()

    if args.images:
        store = forensicstore.connect(args.output)
        try:
            for image in args.images:
                LOGGER.info("processing image %s", image)
                try:
                    with HiveRegistrySource(image, host=args.host) as source:
                        inserted += _insert(store, transform(source))
                except (OSError, RegistryError) as err:
                    LOGGER.exception("Encountered exception during processing of %s: %s", image, err)
        finally:
            store.close()

    return inserted


def _insert(store, items):
    for item in items:
        store.insert(item)
    return len(items)

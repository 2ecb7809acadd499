# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for downloading and caching element sets.

Usage:
    # Download a CelesTrak group (cached copy reused while younger than a day)
    satellite-utilities fetch --group visual --format json
    satellite-utilities fetch --group stations --format tle --refresh

    # Parse a local file and cache it
    satellite-utilities load visual.txt --format tle --name visual

    # Inspect the store
    satellite-utilities list
    satellite-utilities age visualjson
    satellite-utilities show visualjson --norad 25544 --tle

    # Clean up
    satellite-utilities delete visualjson
    satellite-utilities delete --all
"""
import argparse
import logging
import sys

from satellite_utilities.adapters.celestrak import (
    CelesTrakLoader,
    DEFAULT_GROUP,
    load_file,
)
from satellite_utilities.adapters.file_store import DEFAULT_STORE_NAME, ElementsStore
from satellite_utilities.adapters.http_fetch import DEFAULT_TIMEOUT_S
from satellite_utilities.domain.errors import ElementsError
from satellite_utilities.domain.formats import ElementFormat
from satellite_utilities.domain.tle import format_tle


def _open_store(args) -> ElementsStore:
    return ElementsStore(store_name=args.store_name, base_directory=args.cache_dir)


def _cmd_fetch(args) -> int:
    store = _open_store(args)
    loader = CelesTrakLoader(timeout=args.timeout)
    if args.refresh:
        catalog = loader.fetch_group(args.group, args.format, store=store)
    else:
        catalog = loader.load(args.group, args.format, store=store, max_age_days=args.max_age)
    print(catalog.describe())
    return 0


def _cmd_load(args) -> int:
    catalog = load_file(args.path, args.format, name=args.name)
    print(catalog.describe())
    if not args.no_cache:
        path = _open_store(args).insert(catalog, as_of=catalog.as_of)
        print(f"Cached as {path}")
    return 0


def _cmd_show(args) -> int:
    catalog = _open_store(args).extract(args.name)
    if catalog is None:
        print(f"Error: '{args.name}' is not in the store", file=sys.stderr)
        return 1

    if args.norad is not None:
        record = catalog.lookup(args.norad)
        if record is None:
            print(f"Error: NORAD {args.norad} is not in '{args.name}'", file=sys.stderr)
            return 1
        records = [record]
    else:
        print(catalog.describe())
        records = list(catalog)

    for record in records:
        if args.tle:
            print("\n".join(format_tle(record)))
        else:
            print(record.describe())
    return 0


def _cmd_age(args) -> int:
    age = _open_store(args).age(args.name)
    if age is None:
        print(f"Error: '{args.name}' is not in the store", file=sys.stderr)
        return 1
    print(f"{args.name}: {age:.3f} days")
    return 0


def _cmd_list(args) -> int:
    print(_open_store(args).describe())
    return 0


def _cmd_delete(args) -> int:
    store = _open_store(args)
    if args.store:
        store.delete_store()
        print(f"Deleted {store.directory}")
    elif args.all:
        print(f"Deleted {store.delete_all()} entries")
    elif args.name:
        if not store.delete(args.name):
            print(f"Error: '{args.name}' is not in the store", file=sys.stderr)
            return 1
        print(f"Deleted '{args.name}'")
    else:
        print("Error: give an entry name, --all or --store", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="satellite-utilities",
        description="Download, parse and cache satellite element sets",
    )
    parser.add_argument(
        '--cache-dir',
        help="Base cache directory (default: $SATELLITE_UTILITIES_CACHE_DIR or the platform cache)"
    )
    parser.add_argument(
        '--store-name', default=DEFAULT_STORE_NAME,
        help=f"Store directory name (default: {DEFAULT_STORE_NAME})"
    )
    parser.add_argument(
        '--timeout', type=float, default=DEFAULT_TIMEOUT_S,
        help=f"Download timeout in seconds (default: {DEFAULT_TIMEOUT_S:g})"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log store and download activity"
    )
    sub = parser.add_subparsers(dest='command', required=True)

    fetch = sub.add_parser('fetch', help="Download a CelesTrak group")
    fetch.add_argument('--group', default=DEFAULT_GROUP,
                       help=f"CelesTrak group (default: {DEFAULT_GROUP})")
    fetch.add_argument('--format', type=ElementFormat.parse, default=ElementFormat.JSON,
                       help="tle, json, xml or csv (default: json)")
    fetch.add_argument('--max-age', type=float, default=1.0,
                       help="Reuse a cached copy younger than this many days (default: 1)")
    fetch.add_argument('--refresh', action='store_true', default=False,
                       help="Always download, ignoring the cache")
    fetch.set_defaults(func=_cmd_fetch)

    load = sub.add_parser('load', help="Parse a local element-set file")
    load.add_argument('path', help="File to parse")
    load.add_argument('--format', type=ElementFormat.parse, default=ElementFormat.TLE,
                      help="tle, json, xml or csv (default: tle)")
    load.add_argument('--name', help="Catalog name (default: file name without extension)")
    load.add_argument('--no-cache', action='store_true', default=False,
                      help="Do not store the parsed catalog")
    load.set_defaults(func=_cmd_load)

    show = sub.add_parser('show', help="Print a cached catalog")
    show.add_argument('name', help="Store entry name")
    show.add_argument('--norad', type=int, help="Only this NORAD catalog number")
    show.add_argument('--tle', action='store_true', default=False,
                      help="Print records as two-line element sets")
    show.set_defaults(func=_cmd_show)

    age = sub.add_parser('age', help="Days since a cached catalog was produced")
    age.add_argument('name', help="Store entry name")
    age.set_defaults(func=_cmd_age)

    listing = sub.add_parser('list', help="List cached catalogs")
    listing.set_defaults(func=_cmd_list)

    delete = sub.add_parser('delete', help="Remove cached catalogs")
    delete.add_argument('name', nargs='?', help="Store entry name")
    delete.add_argument('--all', action='store_true', default=False,
                        help="Remove every entry")
    delete.add_argument('--store', action='store_true', default=False,
                        help="Remove the store directory itself")
    delete.set_defaults(func=_cmd_delete)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        status = args.func(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (ElementsError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()

"""
devchart command line
=====================

Massive Dev Chart lookups backed by the local cache, plus a dilution calculator.

Names are matched in their compact form: lowercase without spaces or dashes
("Kodak HC-110" -> "kodakhc110"); `devchart list developers` prints them that way.

Commands
--------
list developers|stocks
    Print every developer / film stock on the chart.

get <developer> [stock] [iso]
    Print development times. stock supports "*" wildcards ("tri*x*").

getall
    Fetch every developer's table, effectively caching the whole chart.

calc <developer> <ratio> <volume> [stock] [iso]
    Split a working volume (ml) into concentrate and water. When the developer
    is an alias with a stored density, the concentrate weight is printed too.
    With a stock, matching development times at that ratio follow.

alias <alias> <developer> [density]
    Store a personal name for a developer, optionally with a density
    (decimal or fraction, e.g. 0.7 or 280/200).

Examples
--------
devchart get rodinal "tri*x*" 400
devchart calc rodinal 1+50 500
devchart alias adonal rodinal 280/200
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from devchart_db.aliases import Alias, aliases_path, load_aliases, parse_density, save_aliases
from devchart_db.errors import DevchartError, NoSuchDeveloper
from devchart_db.mixing import SimpleChem, calc, scale_parts, scale_ratio, scale_string
from devchart_db.models import Entry
from devchart_db.query import open_default_api
from devchart_db.query.filters import format_duration, sort_entries, strip_name
from devchart_db.scrapers.common.http import HttpFetcher


def format_entry(e: Entry) -> str:
    durs = []
    for label, d in (("135", e.time_135), ("120", e.time_120), ("sheet", e.time_sheet)):
        if d:
            durs.append(f"[{label}: {format_duration(d)}]")

    line = f"{e.iso:>6}) {strip_name(e.name)} {e.dilution} {e.temperature:.1f}C {' '.join(durs)}"
    for n in e.notes:
        line += f"\n        {n}"
    return line


def print_entries(entries: list[Entry]) -> None:
    for e in entries:
        print(format_entry(e))


def _cmd_list(api, args: argparse.Namespace) -> int:
    names = api.list_developers() if args.what == "developers" else api.list_stocks()
    for n in names:
        print(strip_name(n))
    return 0


def _cmd_get(api, args: argparse.Namespace) -> int:
    print_entries(api.find_entries(args.developer, stock=args.stock, iso=args.iso))
    return 0


def _cmd_getall(api, args: argparse.Namespace) -> int:
    for dev in api.list_developers():
        try:
            entries = sort_entries(api.get_entries(dev))
        except NoSuchDeveloper:
            continue
        print(strip_name(dev))
        print_entries(entries)
        print("")
    return 0


def _cmd_calc(api, args: argparse.Namespace) -> int:
    by_alias = {a.alias: a for a in load_aliases(aliases_path(args.config_dir))}
    alias = by_alias.get(args.developer)

    try:
        volume = float(args.volume)
        ratio = scale_ratio(args.ratio)
    except ValueError as e:
        raise SystemExit(f"invalid volume or ratio: {e}") from None

    print(calc(SimpleChem(alias.density() if alias else 0.0, ratio), volume))
    if not args.stock:
        return 0

    developer = alias.developer if alias else args.developer
    qratio = scale_string(scale_parts(args.ratio))
    print_entries(api.find_entries(developer, stock=args.stock, iso=args.iso, ratio=qratio))
    return 0


def _cmd_alias(api, args: argparse.Namespace) -> int:
    _, found = api.resolve_developer(args.developer)
    if not found:
        raise NoSuchDeveloper(args.developer)

    density = (0.0, 0.0)
    if args.density:
        try:
            density = parse_density(args.density)
        except ValueError as e:
            raise SystemExit(str(e)) from None

    path = aliases_path(args.config_dir)
    aliases = load_aliases(path)
    aliases.append(Alias(alias=args.alias, developer=args.developer, density_parts=density))
    save_aliases(path, aliases)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="devchart", description="Massive Dev Chart lookups and dilution calculator.")
    ap.add_argument("--cache-dir", type=Path, default=None, help="Cache directory. Default: DEVCHART_DB_CACHE_DIR or the user cache dir.")
    ap.add_argument("--config-dir", type=Path, default=None, help="Directory holding the aliases file. Default: DEVCHART_DB_CONFIG_DIR or the user config dir.")
    ap.add_argument("--timeout-s", type=float, default=60.0, help="HTTP timeout (seconds).")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("list", help="List developers or film stocks.")
    p.add_argument("what", choices=["developers", "stocks"])
    p.set_defaults(func=_cmd_list)

    p = sub.add_parser("get", help="Development times for a developer.")
    p.add_argument("developer")
    p.add_argument("stock", nargs="?", default="", help='Film stock; supports "*" wildcards.')
    p.add_argument("iso", nargs="?", default="", help="Only entries rated at this ISO.")
    p.set_defaults(func=_cmd_get)

    p = sub.add_parser("getall", help="Fetch and print every developer's table.")
    p.set_defaults(func=_cmd_getall)

    p = sub.add_parser("calc", help="Calculate developing volumes.")
    p.add_argument("developer", help="Developer or one of your aliases.")
    p.add_argument("ratio", help="Dilution, e.g. 1+9.")
    p.add_argument("volume", help="Total working volume (ml).")
    p.add_argument("stock", nargs="?", default="")
    p.add_argument("iso", nargs="?", default="")
    p.set_defaults(func=_cmd_calc)

    p = sub.add_parser("alias", help="Alias a developer and optionally store its density.")
    p.add_argument("alias")
    p.add_argument("developer")
    p.add_argument("density", nargs="?", default="", help="Decimal or fraction, e.g. 0.7 or 300.5/1000.")
    p.set_defaults(func=_cmd_alias)

    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    api = open_default_api(cache_dir=args.cache_dir, fetch=HttpFetcher(timeout_s=args.timeout_s))
    try:
        return args.func(api, args)
    except (DevchartError, ValueError) as e:
        print(e, file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

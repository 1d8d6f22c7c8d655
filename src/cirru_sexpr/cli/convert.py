import sys
import logging
import argparse
from pathlib import Path

from cirru_sexpr.core.converter import parse
from cirru_sexpr.io.config import load_config
from cirru_sexpr.io.json_io import to_json_str
from cirru_sexpr.render.printer import Printer
from cirru_sexpr.render.writer import format_cirru
from cirru_sexpr.syntax.errors import CirruParseError

logger = logging.getLogger(__name__)

DEMO_SOURCE = """
echo a
"""


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="cirru-sexpr", description="Convert Cirru text to S-expressions")
    parser.add_argument("input", nargs="?", default="-", help="Cirru file to convert ('-' reads stdin)")
    parser.add_argument("--config", default=None, help="YAML file with notation settings")
    parser.add_argument("--separator", default=None, help="Text placed between top-level expressions")
    out = parser.add_mutually_exclusive_group()
    out.add_argument("--json", action="store_true", help="Print the parsed tree as JSON instead")
    out.add_argument("--pretty", action="store_true", help="Spread nested expressions over indented lines")
    out.add_argument("--cirru", action="store_true", help="Write the tree back as indented Cirru text")
    parser.add_argument("--inline", action="store_true", help="With --cirru, keep runs of short groups on one line")
    parser.add_argument("--demo", action="store_true", help="Convert the built-in sample and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"error: bad config: {e}", file=sys.stderr)
        return 2
    logger.debug(f"Converter config: {cfg.to_dict()}")

    try:
        source = DEMO_SOURCE if args.demo else _read_source(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read input: {e}", file=sys.stderr)
        return 2

    try:
        doc = parse(source, cfg)
    except CirruParseError as e:
        print(e.format_detailed(source), file=sys.stderr)
        return 1

    if args.json:
        print(to_json_str(doc))
    elif args.cirru:
        print(format_cirru(doc, cfg, use_inline=args.inline), end="")
    else:
        print(Printer(cfg).render_document(doc, args.separator, pretty=args.pretty))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
CLI entry point for suo.

Usage:
    suo transform <file>               Print the canonical form of a timeline
    suo parse <file>                   Parse a file and show AST summary
    suo parse <file> --json            Dump the AST as JSON
    suo tokens <file>                  Dump the token stream
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from suo import __version__

logger = logging.getLogger(__name__)


def _load_config(args):
    from .config import SuoConfig
    return SuoConfig(Path(args.config) if args.config else None)


def cmd_transform(args):
    """Print the canonical form of a timeline file."""
    from .parser import TimelineError
    from .pipeline import transform_file

    config = _load_config(args)
    options = {"target": args.target} if args.target else None

    try:
        result = transform_file(args.file, options, config)
    except (TimelineError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(result)
        logger.info(f"Wrote {args.output}")
    else:
        print(result)
    return 0


def cmd_parse(args):
    """Parse a file and show AST summary."""
    from .parser import TimelineError
    from .parser.ast_serde import node_to_dict
    from .pipeline import parse_file

    config = _load_config(args)

    try:
        program = parse_file(args.file, config)
    except (TimelineError, OSError, UnicodeDecodeError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(node_to_dict(program, include_location=not args.no_location),
                         indent=2, ensure_ascii=False))
        return 0

    print(f"Parsed: {args.file}")
    print(f"Statements: {len(program.body)}")
    print(f"Comments: {len(program.comments)}")

    if args.verbose:
        for stmt in program.body[:20]:
            name = getattr(stmt, 'name', None)
            label = name.value if name is not None else ''
            print(f"  - L{stmt.span.line} {stmt.node_type.value} {label}")
        if len(program.body) > 20:
            print(f"  ... and {len(program.body) - 20} more")

    return 0


def cmd_tokens(args):
    """Dump the token stream of a file."""
    from .parser.lexer import TokenType, tokenize_file

    config = _load_config(args)

    try:
        tokens = tokenize_file(args.file, include_whitespace=args.whitespace, **config.lexer_kwargs())
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for token in tokens:
        print(f"{token.line}:{token.column}\t{token.type.name}\t{token.raw!r}")

    return 1 if tokens and tokens[-1].type == TokenType.UNKNOWN else 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='suo',
        description="Raid timeline parser and formatter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    suo transform raid/p1s.txt
    suo transform raid/p1s.txt -o p1s.canonical.txt
    suo parse raid/p1s.txt --json
    suo tokens raid/p1s.txt --whitespace
"""
    )
    parser.add_argument('--version', action='version', version=f'suo {__version__}')
    parser.add_argument('--config', help='Path to a YAML config file')
    parser.add_argument('--log-level', help='Logging level (DEBUG, INFO, WARNING, ...)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # transform
    transform_p = subparsers.add_parser('transform', help='Print canonical timeline text')
    transform_p.add_argument('file', help='Timeline file')
    transform_p.add_argument('-o', '--output', help='Write to this file instead of stdout')
    transform_p.add_argument('--target', help='Output dialect (default: cactbot)')
    transform_p.set_defaults(func=cmd_transform)

    # parse
    parse_p = subparsers.add_parser('parse', help='Parse a timeline file')
    parse_p.add_argument('file', help='File to parse')
    parse_p.add_argument('--json', action='store_true', help='Dump the AST as JSON')
    parse_p.add_argument('--no-location', action='store_true', help='Leave spans out of the JSON')
    parse_p.add_argument('-v', '--verbose', action='store_true')
    parse_p.set_defaults(func=cmd_parse)

    # tokens
    tokens_p = subparsers.add_parser('tokens', help='Dump the token stream')
    tokens_p.add_argument('file', help='File to tokenize')
    tokens_p.add_argument('--whitespace', action='store_true', help='Include whitespace tokens')
    tokens_p.set_defaults(func=cmd_tokens)

    args = parser.parse_args(argv)

    level = args.log_level or _load_config(args).log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

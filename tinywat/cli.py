"""
Command line entry point for the tinywat compiler.

Reads one source file, compiles it and prints the module text. Compile
errors are printed as `Err <message>` and exit with status 1.

Author: xwest
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .lexer.errors import CompileError
from .lexer.lexer import tokenize_string
from .driver import compile_with_diagnostics


EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_IO_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinywat",
        description="Compile a tinywat source file to an S-expression module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    tinywat add.tw                    # Print the module to stdout
    tinywat add.tw -o add.wat         # Write the module to a file
    tinywat add.tw --tokens           # Dump the token stream
    tinywat add.tw -W                 # Also report silent type errors
        """
    )

    parser.add_argument('source', help='Path to the source file')
    parser.add_argument('-o', '--output',
                        help='Write the module to this file instead of stdout')
    parser.add_argument('--tokens', action='store_true',
                        help='Print the token stream instead of compiling')
    parser.add_argument('-W', '--warnings', action='store_true',
                        help='Print type warnings to stderr')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print pipeline progress to stderr')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')

    return parser


def _report(message: str):
    print(message, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    args = build_arg_parser().parse_args(argv)

    try:
        with open(args.source, 'r', encoding='utf-8') as f:
            source = f.read()
    except OSError as e:
        _report(f"Err cannot read {args.source}: {e.strerror or e}")
        return EXIT_IO_ERROR
    except UnicodeDecodeError as e:
        _report(f"Err cannot read {args.source}: {e.reason} at byte {e.start}")
        return EXIT_IO_ERROR

    if args.verbose:
        _report(f"Read {len(source)} characters from {args.source}")

    try:
        if args.tokens:
            for token in tokenize_string(source):
                print(token)
            return EXIT_OK

        result = compile_with_diagnostics(source)
    except CompileError as e:
        print(f"Err {e}")
        if args.verbose:
            _report(str(e.diagnostic).rstrip())
        return EXIT_COMPILE_ERROR

    if args.verbose:
        _report(f"Parsed {len(result.ast)} functions")

    if args.warnings:
        for warning in result.warnings:
            _report(str(warning).rstrip())

    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(result.output + "\n")
        except OSError as e:
            _report(f"Err cannot write {args.output}: {e.strerror or e}")
            return EXIT_IO_ERROR
        if args.verbose:
            _report(f"Wrote module to {args.output}")
    else:
        print(result.output)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

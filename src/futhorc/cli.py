#!/usr/bin/env python3
"""
Latin-to-futhorc command line.

Loads settings from futhorc.toml when present, or override with flags:

    python -m futhorc.cli --convert "the cat sat"
    python -m futhorc.cli --file notes.txt --mark-separators
    python -m futhorc.cli --type "know the way" --lexicon data/spellings.tsv
    echo "hello" | python -m futhorc.cli --file -
    python -m futhorc.cli --type "t.he end" -v --log-format json
"""

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Transliterate Latin text into futhorc runes"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect futhorc.toml)",
    )
    parser.add_argument(
        "--convert",
        help="Convert a string with the rule table",
    )
    parser.add_argument(
        "--file",
        metavar="PATH",
        help="Convert a UTF-8 text file ('-' for stdin)",
    )
    parser.add_argument(
        "--type",
        dest="keys",
        metavar="TEXT",
        help="Replay TEXT keystroke by keystroke through a live editor session",
    )
    parser.add_argument(
        "--mark-separators",
        action="store_true",
        default=None,
        help="Show spaces as the runic separator (overrides config)",
    )
    parser.add_argument(
        "--no-pronunciation",
        action="store_true",
        help="Turn off word tracking and lexicon spellings (overrides config)",
    )
    parser.add_argument(
        "--lexicon",
        nargs="+",
        metavar="PATH",
        help="Spelling lexicon file(s) to use for completed words",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the session configuration",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--log-format",
        choices=["pretty", "json"],
        default="pretty",
        help="Log record format on stderr (default: pretty)",
    )
    args = parser.parse_args(argv)

    from futhorc.log import setup_logging

    setup_logging("DEBUG" if args.verbose else "WARNING", args.log_format)

    # ── Build session ────────────────────────────────────────────────────

    from futhorc.conversion import convert_string
    from futhorc.session import EditorSession
    from futhorc.settings import find_default_config

    config_path = Path(args.config) if args.config else find_default_config()
    if config_path is not None:
        try:
            session = EditorSession.from_config(config_path)
        except FileNotFoundError as e:
            parser.error(str(e))
    else:
        session = EditorSession()

    if args.mark_separators:
        session.settings.mark_separators = True
    if args.no_pronunciation:
        session.settings.pronunciation = False
    if args.lexicon:
        from futhorc.lexicon import SpellingLexicon

        if session.converter is None:
            session.converter = SpellingLexicon()
        for path in args.lexicon:
            try:
                session.converter.load(path)
            except (OSError, UnicodeDecodeError) as e:
                print(f"ERROR: cannot read lexicon {path}: {e}", file=sys.stderr)
                return 1

    if not session.settings.pronunciation:
        session.converter = None

    if not (args.convert or args.file or args.keys or args.summary):
        parser.error("nothing to do: pass --convert, --file, --type or --summary")

    mark = session.settings.mark_separators

    if args.summary:
        print(session.summary())
        print()

    # ── Convert ─────────────────────────────────────────────────────────

    if args.convert:
        print(convert_string(args.convert, mark_separators=mark))

    # ── File ────────────────────────────────────────────────────────────

    if args.file:
        if args.file == "-":
            text = sys.stdin.read()
        else:
            try:
                text = Path(args.file).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                print(f"ERROR: cannot read {args.file}: {e}", file=sys.stderr)
                return 1
        sys.stdout.write(convert_string(text, mark_separators=mark))

    # ── Type ────────────────────────────────────────────────────────────

    if args.keys:
        session.clear()
        session.type(args.keys)
        print(session.finalize())

    return 0


if __name__ == "__main__":
    sys.exit(main())

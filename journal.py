import argparse
import json
import sys
from typing import List, Optional, Sequence

from config import load_env_file, make_config
from journal_tools._utils import _log_line, debug
from journal_tools.errors import JournalError
from journal_tools.journal_write import enter_message, parse_message


__version__ = "0.3.0"


def _join_words(words: Sequence[str]) -> str:
    # Words that already carry newlines were passed as separate lines.
    if any("\n" in w for w in words):
        return "\n".join(w.rstrip("\n") for w in words)
    return " ".join(words)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="journal",
        description="Journal note - add entry to this week's journal file",
        epilog="Start the message with '...' to continue the previous entry line.",
    )
    parser.add_argument("content", nargs="*", help="Content words or lines")
    parser.add_argument("--header", default=None, help="Header to use for content")
    parser.add_argument("--time", dest="time_label", action="store_true", help="Prefix the entry with HH:MM")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    message = parse_message(_join_words(args.content))

    config = None
    try:
        load_env_file()
        config = make_config()
        debug(config.debug, f"message={message!r} header={args.header!r}")
        result = enter_message(config, message, header=args.header, time_label=args.time_label)
        _log_line(config.log_dir, f"Wrote {result.bytes_written} bytes to {result.path} (created={result.created})")
    except JournalError as exc:
        print(f"journal: error: {exc}", file=sys.stderr)
        if config is not None:
            _log_line(config.log_dir, f"Journal error: {exc}")
        if args.as_json:
            print(json.dumps({"success": False, "error": str(exc)}, ensure_ascii=False))
        return 1

    if args.as_json:
        data = {
            "path": str(result.path),
            "created": result.created,
            "added_day_header": result.added_day_header,
            "bytes_written": result.bytes_written,
        }
        print(json.dumps({"success": True, "data": data}, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

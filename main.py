import argparse
import sys

from typing import Hashable, List, Optional, Tuple
from codec import MalformedBitStringError, decode_text
from session import HuffmanSession

DEFAULT_ENCODING = "utf-8"  #: Encoding used to read ``--file`` inputs

_SPECIAL_SYMBOLS = {" ": "(space)", "\n": "(newline)", "\t": "(tab)"}


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman coding of text: frequencies, codes and statistics"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    compress = subparsers.add_parser(
        "compress", aliases=["c"], help="Encode text and show the code tables"
    )
    _add_input_arguments(compress)
    compress.add_argument(
        "-T",
        "--no-tables",
        action="store_true",
        help="Hide the frequency and code tables",
    )
    compress.add_argument(
        "-b",
        "--bits-only",
        action="store_true",
        help="Print only the encoded bit-string",
    )

    roundtrip = subparsers.add_parser(
        "roundtrip", aliases=["r"], help="Encode, decode and verify text"
    )
    _add_input_arguments(roundtrip)

    decode = subparsers.add_parser(
        "decode",
        aliases=["d"],
        help="Decode a bit-string with the code built from reference text",
    )
    _add_input_arguments(decode)
    decode.add_argument(
        "-B", "--bits", required=True, help="Bit-string of 0/1 characters"
    )
    decode.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed bit-strings instead of ignoring them",
    )

    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the text/file input options shared by all subcommands.

    :param parser: Subcommand parser to extend.
    :type parser: argparse.ArgumentParser
    :returns: None
    :rtype: None
    """
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "text",
        nargs="?",
        help="Text to process (read from stdin when omitted)",
    )
    source.add_argument("-f", "--file", help="Read the text from a file")
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Encoding of --file (default: {DEFAULT_ENCODING})",
    )


def _read_input(args: argparse.Namespace) -> Optional[str]:
    """Resolve the input text from the parsed arguments.

    :param args: Parsed CLI arguments.
    :type args: argparse.Namespace
    :returns: The text, or ``None`` if the file could not be read.
    :rtype: Optional[str]
    """
    if args.text is not None:
        return args.text
    if args.file:
        try:
            with open(args.file, "r", encoding=args.encoding, newline="") as f:
                return f.read()
        except FileNotFoundError:
            print(f"[!] Input file not found: {args.file}")
            return None
        except UnicodeDecodeError:
            print(f"[!] Input file is not valid {args.encoding}: {args.file}")
            return None
    return sys.stdin.read()


def _display_symbol(symbol: Hashable) -> str:
    """Render a symbol for a table cell.

    :param symbol: Symbol to render.
    :type symbol: Hashable
    :returns: Printable label.
    :rtype: str
    """
    if symbol in _SPECIAL_SYMBOLS:
        return _SPECIAL_SYMBOLS[symbol]
    if isinstance(symbol, str) and symbol.isprintable():
        return symbol
    return repr(symbol)


def _fmt_pct(ratio: float) -> str:
    """Format a compression ratio like ``37.50%``."""
    return f"{ratio:.2f}%"


def _fmt_table(title: str, headers: Tuple[str, str], rows: List[tuple]) -> str:
    """Format two-column rows as a plain-text table.

    :param title: Heading printed above the table.
    :type title: str
    :param headers: Column headers.
    :type headers: Tuple[str, str]
    :param rows: ``(symbol, value)`` rows.
    :type rows: List[tuple]
    :returns: The table, one line per row.
    :rtype: str
    """
    cells = [(_display_symbol(sym), str(value)) for sym, value in rows]
    width = max([len(headers[0])] + [len(c[0]) for c in cells])
    lines = [title, f"  {headers[0]:<{width}}  {headers[1]}"]
    lines.extend(f"  {sym:<{width}}  {value}" for sym, value in cells)
    return "\n".join(lines)


def _print_stats(session: HuffmanSession) -> None:
    """Print the statistics block of a compressed session.

    :param session: A session after :meth:`HuffmanSession.compress`.
    :type session: HuffmanSession
    :returns: None
    :rtype: None
    """
    st = session.stats
    print("Original size:  ", st.original_bits, "bits")
    print("Compressed size:", st.compressed_bits, "bits")
    print("Compression ratio:", _fmt_pct(st.ratio_percent))
    print("Space saved:    ", st.saved_bits, "bits")


def _compress_text(text: Optional[str]) -> Optional[HuffmanSession]:
    """Compress ``text`` in a fresh session, rejecting blank input.

    :param text: Input text, ``None`` if reading it failed.
    :type text: Optional[str]
    :returns: The compressed session, or ``None`` on bad input.
    :rtype: Optional[HuffmanSession]
    """
    if text is None:
        return None
    if not text.strip():
        print("[!] Please enter some text to compress!")
        return None
    return HuffmanSession().compress(text)


def run_compress(text: Optional[str], show_tables: bool, bits_only: bool) -> int:
    """Compress ``text`` and print the results.

    :param text: Input text, ``None`` if reading it failed.
    :type text: Optional[str]
    :param show_tables: Whether to print the frequency and code tables.
    :type show_tables: bool
    :param bits_only: Print only the encoded bit-string.
    :type bits_only: bool
    :returns: Process exit status.
    :rtype: int
    """
    session = _compress_text(text)
    if session is None:
        return 1
    if bits_only:
        print(session.encoded)
        return 0

    _print_stats(session)
    if show_tables:
        print()
        print(_fmt_table(
            "Character frequencies", ("Char", "Frequency"),
            session.frequency_rows(),
        ))
        print()
        print(_fmt_table(
            "Huffman codes", ("Char", "Code"), session.code_rows()
        ))
    print()
    print("Encoded:")
    sys.stdout.write(session.encoded + "\n")
    sys.stdout.flush()
    return 0


def run_roundtrip(text: Optional[str]) -> int:
    """Compress ``text``, decode it again and report whether it matches.

    :param text: Input text, ``None`` if reading it failed.
    :type text: Optional[str]
    :returns: Process exit status, non-zero if decoding failed.
    :rtype: int
    """
    session = _compress_text(text)
    if session is None:
        return 1
    _print_stats(session)
    session.decompress()
    if not session.verify():
        print("[!] Decoding failed!")
        return 1
    print("Decoding successful!")
    return 0


def run_decode(text: Optional[str], bits: str, strict: bool) -> int:
    """Decode user-supplied ``bits`` with the code built from ``text``.

    Tree construction is deterministic, so the same reference text always
    rebuilds the tree that ``compress`` used for it.

    :param text: Reference text, ``None`` if reading it failed.
    :type text: Optional[str]
    :param bits: Bit-string to decode.
    :type bits: str
    :param strict: Use strict decoding.
    :type strict: bool
    :returns: Process exit status, non-zero if strict decoding failed.
    :rtype: int
    """
    session = _compress_text(text)
    if session is None:
        return 1
    try:
        decoded = decode_text(bits, session.tree, strict=strict)
    except MalformedBitStringError as e:
        print(f"[!] Malformed bit-string: {e}")
        return 1
    sys.stdout.write(decoded + "\n")
    sys.stdout.flush()
    return 0


def main(argv=None):
    """Entry point for the CLI tool.

    :param argv: Argument list, defaults to ``sys.argv[1:]``.
    :type argv: list | None
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    text = _read_input(args)

    if args.cmd in ["compress", "c"]:
        return run_compress(text, not args.no_tables, args.bits_only)
    elif args.cmd in ["roundtrip", "r"]:
        return run_roundtrip(text)
    elif args.cmd in ["decode", "d"]:
        return run_decode(text, args.bits, args.strict)
    return 2


if __name__ == "__main__":
    sys.exit(main())

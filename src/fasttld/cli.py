"""
Command line interface for fasttld.

Usage:
    fasttld https://maps.google.com.ua/a/long/path
    fasttld --json --include-private waiterrant.blogspot.com
    fasttld --update
"""
import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from fasttld.errors import FastTLDError
from fasttld.extractor import FastTLD
from fasttld.utils.logging import setup_logging

logger = logging.getLogger(__name__)

VERSION = "0.4.1"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fasttld",
        description="fasttld is a high performance top level domains (TLD) extraction module.",
    )
    parser.add_argument("urls", nargs="*", metavar="URL", help="URLs or hostnames to split")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--punycode",
        action="store_true",
        help="Convert hostnames to punycode before matching",
    )
    parser.add_argument(
        "--ignore-subdomains",
        action="store_true",
        help="Do not report subdomains",
    )
    parser.add_argument(
        "--include-private",
        action="store_true",
        help="Include PRIVATE section suffixes such as blogspot.com",
    )
    parser.add_argument(
        "--suffix-list",
        metavar="PATH",
        help="Custom Public Suffix List file (default: managed cache)",
    )
    parser.add_argument(
        "--update",
        action="store_true",
        help="Re-download the managed Public Suffix List before extracting",
    )
    parser.add_argument("--json", action="store_true", help="Print one JSON object per URL")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def format_result(url: str, result, as_json: bool) -> str:
    if as_json:
        return json.dumps({"url": url, **result.to_dict()})
    return " ".join([
        url,
        f"subdomain={result.subdomain}",
        f"domain={result.domain}",
        f"suffix={result.suffix}",
        f"registered_domain={result.registered_domain}",
    ])


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the ``fasttld`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else "WARNING", json_output=False, stream=sys.stderr)

    if not args.urls and not args.update:
        parser.print_usage(sys.stderr)
        return 1

    try:
        extractor = FastTLD(
            suffix_source_path=args.suffix_list,
            include_private_suffixes=args.include_private,
        )
        if args.update:
            extractor.refresh()
    except FastTLDError as e:
        print(f"fasttld: {e}", file=sys.stderr)
        return 1

    for url in args.urls:
        result = extractor.extract(
            url,
            convert_to_punycode=args.punycode,
            ignore_subdomains=args.ignore_subdomains,
        )
        print(format_result(url, result, args.json))

    return 0


if __name__ == "__main__":
    sys.exit(main())

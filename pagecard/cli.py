#!/usr/bin/env python3
"""
pagecard - command-line interface.

Print the Open Graph and Twitter card metadata of a webpage, either fetched
from a URL or read from a local HTML file.
"""
import sys
import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pagecard import info as pageinfo
from pagecard.config import init_config, get_config
from pagecard.content import Meta, create_reader, extract_meta
from pagecard.errors import PagecardError
from pagecard.info import Info

logger = logging.getLogger(__name__)


console = Console()
err_console = Console(stderr=True)


def setup_logging(level: str):
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
    )


def print_json(data):
    config = get_config()
    print(json.dumps(data, indent=config.json_indent or None, ensure_ascii=False))


def output_info(info: Info, format: str = "json"):
    """Output both cards in the specified format."""
    if format == "json":
        print_json(info.to_dict())
        return

    og = info.open_graph
    table = Table(title="Open Graph")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    for key in ("title", "type", "url", "description", "locale", "site_name"):
        value = getattr(og, key)
        if value:
            table.add_row(key, escape(value))
    if og.alternate_locales:
        table.add_row("locale:alternate", escape(", ".join(og.alternate_locales)))
    if og.determiners:
        table.add_row("determiner", escape(", ".join(og.determiners)))
    for kind, items in (("image", og.images), ("video", og.videos), ("audio", og.audios)):
        for item in items:
            details = [item.media.type, item.media.secure_url]
            size = getattr(item, "size", None)
            if size is not None and (size.width or size.height):
                details.append(f"{size.width}x{size.height}")
            extra = " ".join(d for d in details if d)
            table.add_row(kind, escape(f"{item.media.url} {extra}".strip()))
    console.print(table)

    card = info.twitter
    table = Table(title="Twitter Card")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_row("card", card.type.value if card.type else "(none)")
    for key, value in (
        ("title", card.title),
        ("description", card.description),
        ("site", card.site.user),
        ("site:id", card.site.id),
        ("creator", card.creator.user),
        ("creator:id", card.creator.id),
        ("image", card.image.url),
        ("image:alt", card.image.alt),
    ):
        if value:
            table.add_row(key, escape(value))
    if card.player:
        table.add_row("player", escape(card.player.url))
        if card.player.width or card.player.height:
            table.add_row("player size", f"{card.player.width}x{card.player.height}")
        if card.player.stream:
            table.add_row("player:stream", escape(card.player.stream))
        if card.player.stream_content_type:
            table.add_row("player:stream:content_type", escape(card.player.stream_content_type))
    if card.app:
        for platform in ("iphone", "ipad", "googleplay"):
            app_info = getattr(card.app, platform)
            values = [v for v in (app_info.name, app_info.id, app_info.url) if v]
            if values:
                table.add_row(f"app:{platform}", escape(" | ".join(values)))
        if card.app.country:
            table.add_row("app:country", escape(card.app.country))
    console.print(table)


def output_meta(meta: List[Meta], format: str = "json"):
    """Output raw metatags in the specified format."""
    if format == "json":
        print_json([{"name": m.name, "value": m.value} for m in meta])
        return

    table = Table(title="Metatags")
    table.add_column("Name", style="cyan")
    table.add_column("Value", style="green")
    for m in meta:
        table.add_row(escape(m.name), escape(m.value))
    console.print(table)


def read_source(source: str) -> bytes:
    """Read an HTML document from a file path, or stdin when source is '-'."""
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def cmd_fetch(args):
    """Fetch a URL and print its cards."""
    info = pageinfo.get(args.url, reader=create_reader())
    output_info(info, args.output)


def cmd_parse(args):
    """Parse a local HTML file and print its cards."""
    info = pageinfo.from_html(read_source(args.file))
    output_info(info, args.output)


def cmd_meta(args):
    """Print the raw metatags of a URL or file."""
    if is_url(args.source):
        meta = create_reader().read(args.source)
    else:
        meta = extract_meta(read_source(args.source))
    output_meta(meta, args.output)


def cmd_config_show(args):
    """Show the active configuration."""
    config = get_config()
    if args.output == "json":
        print_json(config.to_dict())
        return

    table = Table(title="Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key, value in config.to_dict().items():
        table.add_row(key, escape(str(value)))
    console.print(table)


def cmd_config_init(args):
    """Write the active configuration to a TOML file."""
    path = get_config().save(Path(args.path) if args.path else None)
    console.print(f"[green]✓ Wrote configuration to {escape(str(path))}[/green]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagecard",
        description="pagecard: Open Graph and Twitter card metadata of webpages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagecard fetch https://example.com
  pagecard -o table fetch https://example.com
  pagecard parse page.html
  curl -s https://example.com | pagecard parse -
  pagecard meta https://example.com
  pagecard config show

Configuration:
  Config file: ~/.config/pagecard/config.toml or ./pagecard.toml
  Environment: PAGECARD_TIMEOUT, PAGECARD_USER_AGENT, PAGECARD_OUTPUT_FORMAT
        """
    )

    # Global options
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("-o", "--output", choices=["json", "table"], help="Output format")
    parser.add_argument("--timeout", type=int, help="Request timeout in seconds")
    parser.add_argument("--user-agent", help="User-Agent header to send")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Commands")

    fetch = subparsers.add_parser("fetch", help="Fetch a URL and print its cards")
    fetch.add_argument("url", help="Page URL")
    fetch.set_defaults(func=cmd_fetch)

    parse = subparsers.add_parser("parse", help="Print the cards of a local HTML file")
    parse.add_argument("file", help="HTML file, or - for stdin")
    parse.set_defaults(func=cmd_parse)

    meta = subparsers.add_parser("meta", help="Print the raw metatags of a URL or file")
    meta.add_argument("source", help="Page URL, HTML file, or - for stdin")
    meta.set_defaults(func=cmd_meta)

    config_parser = subparsers.add_parser("config", help="Configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_command", required=True)

    config_show = config_subparsers.add_parser("show", help="Show the active configuration")
    config_show.set_defaults(func=cmd_config_show)

    config_init = config_subparsers.add_parser("init", help="Save the configuration to a file")
    config_init.add_argument("--path", help="Destination (default: ~/.config/pagecard/config.toml)")
    config_init.set_defaults(func=cmd_config_init)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = init_config(
            config_file=Path(args.config) if args.config else None,
            timeout=args.timeout,
            user_agent=args.user_agent,
            output_format=args.output,
        )
        if args.verbose:
            config.log_level = "DEBUG"
        elif args.quiet:
            config.log_level = "ERROR"
        setup_logging(config.log_level)

        args.output = config.output_format
        args.func(args)
    except (PagecardError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        err_console.print(f"Error: {e}", style="red", markup=False, soft_wrap=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

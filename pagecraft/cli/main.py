"""Main entry point for the Pagecraft CLI."""
from __future__ import annotations

import asyncio
import json
import logging
import sys
import webbrowser
from pathlib import Path

from pagecraft import __version__
from pagecraft.config import settings
from pagecraft.kernel.document import DocumentModel
from pagecraft.kernel.export import write_preview
from pagecraft.kernel.generator import generate_html
from pagecraft.kernel.types import Document
from pagecraft.services.http_gateway import HttpGateway


def print_help():
    """Print help message."""
    print(f"""
Pagecraft CLI v{__version__}

Usage:
  pagecraft [options] <command>

Commands:
  render FILE       Print markup generated from a page JSON file
  preview ID        Load a page and write a standalone preview file

Options:
  --api-url URL     Override API endpoint (default: {settings.API_URL})
  --open            Open the preview in a browser (preview only)
  --out DIR         Directory for the preview file (default: system temp)
  --verbose         Log gateway activity to stderr
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  PAGECRAFT_API_URL   Override API endpoint (same as --api-url)
  PAGECRAFT_TOKEN     Bearer credential for the content service
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (render, preview)
        target: str | None (file for render, page id for preview)
        api_url: str | None
        open: bool
        out: str | None
        verbose: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "target": None,
        "api_url": None,
        "open": False,
        "out": None,
        "verbose": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("render", "preview") and result["command"] is None:
            result["command"] = arg
        elif arg == "--api-url":
            if i + 1 < len(args):
                result["api_url"] = args[i + 1]
                i += 1
            else:
                print("Error: --api-url requires a URL")
                sys.exit(1)
        elif arg == "--out":
            if i + 1 < len(args):
                result["out"] = args[i + 1]
                i += 1
            else:
                print("Error: --out requires a directory")
                sys.exit(1)
        elif arg == "--open":
            result["open"] = True
        elif arg == "--verbose":
            result["verbose"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'pagecraft --help' for usage.")
            sys.exit(1)
        elif result["command"] is not None and result["target"] is None:
            result["target"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'pagecraft --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def render_file(path: str) -> int:
    """Print generated markup for a page JSON file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read {path}: {e}")
        return 1
    if not isinstance(raw, dict):
        print(f"Error: {path} must contain a JSON object")
        return 1

    # Accept the service's {"data": {...}} envelope as well as a bare page
    page = raw["data"] if isinstance(raw.get("data"), dict) else raw
    document = Document.from_dict(page)
    print(generate_html(document.components, document.sections))
    return 0


async def preview_page(identifier: str, api_url: str, *, out: str | None = None, open_browser: bool = False) -> int:
    """Load a page through the content service and write its standalone preview."""
    async with HttpGateway(
        api_url,
        settings.TOKEN or None,
        timeout=settings.TIMEOUT,
        max_retries=settings.MAX_RETRIES,
    ) as gateway:
        model = DocumentModel(gateway, identifier)
        result = await model.load()

    if result.status == "auth_pending":
        print(f"Not authenticated to {api_url}")
        print("Set PAGECRAFT_TOKEN and try again.")
        return 1
    if not result.ok:
        print(f"Error: could not load page {identifier}: {result.error}")
        return 1

    path = write_preview(model.preview_html(title=settings.PREVIEW_TITLE), directory=out)
    print(str(path))
    if open_browser:
        webbrowser.open(path.as_uri())
    return 0


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"pagecraft {__version__}")
        return

    if args["verbose"]:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args["command"] is None or args["target"] is None:
        print_help()
        sys.exit(1)

    if args["command"] == "render":
        sys.exit(render_file(args["target"]))

    api_url = (args["api_url"] or settings.API_URL).rstrip("/")
    sys.exit(asyncio.run(preview_page(args["target"], api_url, out=args["out"], open_browser=args["open"])))


if __name__ == "__main__":
    main()

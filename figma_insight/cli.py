"""
CLI для анализа файла Figma без MCP.

  figma-insight analyze <figma_url>
  figma-insight ui --input saved_file.json
  figma-insight components            # ссылка из FIGMA_DEFAULT_URL
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from .config import config
from .errors import FigmaInsightError
from .figma_client import figma_client
from .models import FigmaFile, parse_file
from .reports import (
    analyze_report, button_report, card_report, component_usage_report,
    components_export, inventory_report, page_palettes, render_text_report,
    ui_components_report,
)
from .validators import parse_figma_url

logger = logging.getLogger("figma_insight.cli")

Report = Callable[[FigmaFile, str], Dict[str, Any]]

REPORTS: Dict[str, Report] = {
    "analyze": lambda f, key: analyze_report(f, key, config.analysis),
    "palettes": lambda f, key: page_palettes(f, key, config.analysis),
    "components": component_usage_report,
    "inventory": inventory_report,
    "ui": lambda f, key: ui_components_report(f, key, config.classifier),
    "buttons": lambda f, key: button_report(f, key, config.analysis),
    "cards": lambda f, key: card_report(f, key, config.classifier, config.analysis),
    "export-components": components_export,
}

HELP = {
    "analyze": "Pages, color palette, fill styles and per-view statistics",
    "palettes": "Color palette of every page",
    "components": "Component usage counts per page",
    "inventory": "Components, component sets and styles with instance counts",
    "ui": "Buttons, inputs and cards per page (icons excluded)",
    "buttons": "Inspect button-like nodes",
    "cards": "Inspect card-like nodes with inferred role",
    "export-components": "Export COMPONENT nodes as simplified JSON",
}


def _load_raw(args: argparse.Namespace) -> Dict[str, Any]:
    if args.input == "-":
        return json.load(sys.stdin)
    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            return json.load(f)
    return asyncio.run(figma_client.get_file(args.file_key))


def _resolve_file_key(args: argparse.Namespace) -> str:
    url = args.url or config.figma.default_url
    if url:
        return parse_figma_url(url).file_key
    if args.input:
        return "-"
    raise ValueError("Provide a Figma URL as an argument or set FIGMA_DEFAULT_URL")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="figma-insight", description="Analyze a Figma file")
    p.add_argument("--log-level", default=config.server.log_level, help="Logging level (default: %(default)s)")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name, help_text in HELP.items():
        p_cmd = sub.add_parser(name, help=help_text)
        p_cmd.add_argument("url", nargs="?", default=None, help="Figma file URL (default: FIGMA_DEFAULT_URL)")
        p_cmd.add_argument("--input", default=None, help='Saved Files API JSON instead of fetching, or "-" for stdin')
        p_cmd.add_argument("--pretty", action="store_true", help="Indent JSON output")
        if name == "analyze":
            p_cmd.add_argument("--json", action="store_true", help="Print JSON instead of the text report")
    return p


def run(args: argparse.Namespace) -> int:
    args.file_key = _resolve_file_key(args)
    raw = _load_raw(args)
    figma_file = parse_file(raw, max_nodes=config.analysis.max_nodes, max_depth=config.analysis.max_depth)
    result = REPORTS[args.cmd](figma_file, args.file_key)

    if args.cmd == "analyze" and not args.json:
        sys.stdout.write(render_text_report(result))
    else:
        print(json.dumps(result, indent=2 if args.pretty else None, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    try:
        return run(args)
    except (FigmaInsightError, ValueError, OSError) as e:
        logger.error(f"{args.cmd} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

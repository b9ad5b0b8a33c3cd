"""Command-line interface for OpenPronounce.

Lists pronunciation projects from the configured content repository and
filters them with the fuzzy search.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.markup import escape

from openpronounce.core.config.loader import load_app_config
from openpronounce.core.config.models import AppConfig
from openpronounce.core.config.repo import ConfigurationError
from openpronounce.core.projects.aggregation import PipelineError
from openpronounce.core.projects.models import Snapshot
from openpronounce.core.render import render_count, render_projects
from openpronounce.core.session import OpenPronounceSession
from openpronounce.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)

BROWSE_PROMPT = "Search (empty line to quit): "


def _load_config(args: argparse.Namespace) -> AppConfig:
    """Load config and configure logging from it; exits on a bad config."""
    try:
        app_config = load_app_config(args.config)
    except ConfigurationError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        sys.exit(1)

    log_cfg = app_config.logging
    configure_logging(
        level="DEBUG" if args.verbose else log_cfg.level,
        format_string=log_cfg.format,
        filename=log_cfg.filename,
        structured=log_cfg.structured,
    )
    return app_config


def _print_warnings(snapshot: Snapshot) -> None:
    for warning in snapshot.warnings:
        console.print(f"[yellow]Skipped: {escape(warning)}[/yellow]")


def _print_results(session: OpenPronounceSession, query: str) -> None:
    projects = session.search(query)
    console.print(render_projects(projects))
    console.print(render_count(len(projects)))


async def _refresh(session: OpenPronounceSession) -> Snapshot | None:
    try:
        snapshot = await session.refresh()
    except PipelineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return None
    _print_warnings(snapshot)
    return snapshot


async def list_projects_async(app_config: AppConfig, query: str) -> int:
    """Load all projects once and print the ones matching ``query``.

    Returns:
        Process exit code
    """
    async with OpenPronounceSession(app_config) as session:
        console.print(f"[bold]Loading projects from[/bold] {session.repo_url}")
        if await _refresh(session) is None:
            return 1
        _print_results(session, query)
    return 0


async def browse_async(app_config: AppConfig) -> int:
    """Load projects once, then filter on each entered query.

    Stops on an empty line or end of input.
    """
    async with OpenPronounceSession(app_config) as session:
        console.print(f"[bold]Loading projects from[/bold] {session.repo_url}")
        if await _refresh(session) is None:
            return 1
        _print_results(session, "")

        while True:
            try:
                query = console.input(BROWSE_PROMPT)
            except EOFError:
                break
            if not query.strip():
                break
            _print_results(session, query)
    return 0


def list_projects(args: argparse.Namespace) -> None:
    """Print matching projects as cards."""
    app_config = _load_config(args)
    sys.exit(asyncio.run(list_projects_async(app_config, args.query)))


def browse(args: argparse.Namespace) -> None:
    """Interactive search over one loaded snapshot."""
    app_config = _load_config(args)
    sys.exit(asyncio.run(browse_async(app_config)))


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to app config (.yaml/.yml/.json, default: openpronounce.yaml if present)",
    )
    common.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(
        prog="openpronounce",
        description="OpenPronounce - browse and search pronunciation projects",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    lst = sub.add_parser("list", parents=[common], help="List projects, optionally filtered")
    lst.add_argument("--query", "-q", default="", help="Fuzzy search query (default: all)")

    sub.add_parser("browse", parents=[common], help="Load once, then search interactively")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "list":
        list_projects(args)
    elif args.cmd == "browse":
        browse(args)


if __name__ == "__main__":
    main()

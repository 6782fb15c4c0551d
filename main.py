#!/usr/bin/env python3
"""
PR Graph - Main CLI entrypoint

Fetches the open pull requests of the current repository and renders them
as a Mermaid dependency graph in a static HTML page, then opens it in the
browser.

Usage:
    python main.py graph                      # REST API + GitHub device flow
    python main.py graph --source gh          # use the gh CLI instead
    python main.py graph --direction RL --label status --no-zoom
    python main.py login                      # authenticate and cache the token
    python main.py logout                     # forget the cached token
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional

from auth.credential_store import CredentialStore
from auth.device_flow import DeviceFlowClient
from auth.provider import CredentialProvider
from fetchers.gh_cli import GhCliFetcher
from fetchers.github import GitHubFetcher
from fetchers.repository import get_repository_from_gh, resolve_repository
from graph.launcher import file_url, open_in_browser, write_document
from graph.mermaid_builder import build_mermaid_code
from graph.renderer import build_index_html
from models.config_models import Config
from utils.config_loader import load_config
from utils.errors import PRGraphError
from utils.logger import setup_logger

logger = setup_logger()


def build_credential_provider(config: Config) -> CredentialProvider:
    """
    Wire the credential cache and device flow from configuration.

    A missing client id only matters once the device flow has to run.
    """
    device_flow = DeviceFlowClient(
        client_id=config.github_client_id,
        scope=config.oauth_scope,
        base_url=config.github_oauth_url,
    )
    return CredentialProvider(
        store=CredentialStore(config.credential_cache_path),
        device_flow=device_flow,
        api_base_url=config.github_api_url,
    )


def generate_graph(
    config: Config,
    provider: Optional[CredentialProvider] = None,
    opener: Optional[Callable[[str], bool]] = None,
) -> Path:
    """
    Run the whole pipeline: resolve → authenticate → fetch → build → write → open.

    Nothing is written unless every earlier step succeeded.

    Args:
        config: Validated configuration
        provider: CredentialProvider (optional, built from config if not provided)
        opener: Browser opener (optional, defaults to webbrowser.open)

    Returns:
        Path of the written HTML file

    Raises:
        PRGraphError: Any fatal resolution, auth, API or storage failure
    """
    if config.source == "gh":
        repository = get_repository_from_gh()
        change_requests = GhCliFetcher(limit=config.per_page).fetch_open_pull_requests()
    else:
        repository = resolve_repository(config.git_remote)

        if provider is None:
            provider = build_credential_provider(config)
        token = provider.get_token()

        fetcher = GitHubFetcher(token, base_url=config.github_api_url)
        change_requests = fetcher.fetch_open_pull_requests(
            repository.owner,
            repository.repo_name,
            per_page=config.per_page,
        )

    mermaid_code = build_mermaid_code(
        change_requests,
        direction=config.diagram_direction,
        label_mode=config.label_mode,
    )
    logger.debug(f"Mermaid code:\n{mermaid_code}")

    document = build_index_html(
        mermaid_code,
        repository_name=repository.repo_name,
        zoom=config.zoom,
    )
    output_path = write_document(document, config.output_path)

    if config.open_browser and not open_in_browser(file_url(output_path), opener=opener):
        logger.warning(f"Open this file manually: {output_path}")
    else:
        logger.info(f"If the browser does not open, open this file manually: {output_path}")

    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PR Graph - Visualize open pull requests as a dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Graph the current repository (GitHub device flow login on first run)
  python main.py graph

  # Use the gh CLI's credentials and repository context
  python main.py graph --source gh

  # Right-to-left graph with Draft/Open edge labels, written elsewhere
  python main.py graph --direction RL --label status --output /tmp/prs.html
        """
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    # Also accepted after the subcommand; SUPPRESS keeps a top-level value
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        type=str,
        default=argparse.SUPPRESS,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Graph command
    graph_parser = subparsers.add_parser(
        "graph",
        parents=[common],
        help="Generate the pull request graph and open it"
    )
    graph_parser.add_argument(
        "--source",
        choices=["api", "gh"],
        default=None,
        help="Where to read pull requests from (default: api)"
    )
    graph_parser.add_argument(
        "--remote",
        type=str,
        default=None,
        help="Git remote that identifies the repository (default: origin)"
    )
    graph_parser.add_argument(
        "--direction",
        choices=["LR", "RL"],
        default=None,
        help="Graph direction (default: LR)"
    )
    graph_parser.add_argument(
        "--label",
        choices=["number", "status"],
        default=None,
        help="Edge labels: 'PR #n title' or Draft/Open (default: number)"
    )
    graph_parser.add_argument(
        "--no-zoom",
        action="store_true",
        help="Do not load D3 zoom/pan support"
    )
    graph_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output HTML path (default: dist/index.html)"
    )
    graph_parser.add_argument(
        "--no-open",
        action="store_true",
        help="Write the page but do not open a browser"
    )

    # Login command
    login_parser = subparsers.add_parser(
        "login",
        parents=[common],
        help="Authenticate with the GitHub device flow and cache the token"
    )
    login_parser.add_argument(
        "--force",
        action="store_true",
        help="Ignore any cached token and log in again"
    )

    # Logout command
    subparsers.add_parser(
        "logout",
        parents=[common],
        help="Delete the cached token"
    )

    return parser


def main(argv: Optional[list[str]] = None):
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Show help if no command provided
    if not args.command:
        parser.print_help()
        sys.exit(1)

    overrides = {"log_level": args.log_level}
    if args.command == "graph":
        overrides.update(
            source=args.source,
            git_remote=args.remote,
            diagram_direction=args.direction,
            label_mode=args.label,
            output_path=args.output,
            zoom=False if args.no_zoom else None,
            open_browser=False if args.no_open else None,
        )

    try:
        config = load_config(**overrides)
        setup_logger(config.log_level)

        if args.command == "graph":
            generate_graph(config)

        elif args.command == "login":
            provider = build_credential_provider(config)
            provider.login(force=args.force)
            logger.info("Logged in to GitHub")

        elif args.command == "logout":
            provider = build_credential_provider(config)
            if not provider.logout():
                logger.info("No cached token to remove")

    except PRGraphError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    sys.exit(0)


if __name__ == "__main__":
    main()

"""
Command-line interface for the Google Search MCP server.

Without a subcommand the server runs over stdio, which is how MCP clients
launch it.
"""

import argparse

from loguru import logger

from google_search_mcp.config import Settings, load_settings, setup_logging
from google_search_mcp.errors import ConfigurationError, GoogleSearchMCPError
from google_search_mcp.search import (
    GoogleSearchClient,
    format_search_results,
    validate_search_arguments,
)

LOG_LEVEL_CHOICES = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def run_stdio(_args: argparse.Namespace, settings: Settings) -> int:
    """Run MCP server with stdio transport."""
    from google_search_mcp.mcp.launcher import run_stdio_server

    logger.info('Starting MCP server with stdio transport...')
    run_stdio_server(settings)
    return 0


def run_http(args: argparse.Namespace, settings: Settings) -> int:
    """Run MCP server with HTTP transport."""
    from google_search_mcp.mcp.launcher import run_http_server

    logger.info(f'Starting MCP HTTP server at {args.host}:{args.port}...')
    run_http_server(settings, host=args.host, port=args.port)
    return 0


def run_search(args: argparse.Namespace, settings: Settings) -> int:
    """Run a single search and print the formatted results."""
    arguments = {'query': args.query}
    if args.num_results is not None:
        arguments['num_results'] = args.num_results

    try:
        request = validate_search_arguments(arguments)
        with GoogleSearchClient(
            settings.get_credentials(), timeout=settings.request_timeout
        ) as client:
            response = client.search(request)
    except ConfigurationError:
        raise
    except GoogleSearchMCPError as e:
        logger.error(f'search failed: {e}')
        return 1

    print(format_search_results(response), end='')
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='google-search-mcp',
        description='MCP server exposing Google Custom Search as a tool',
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVEL_CHOICES,
        type=str.upper,
        default=None,
        help='Log level (default: LOG_LEVEL setting or INFO)',
    )
    parser.set_defaults(func=run_stdio)

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    stdio_parser = subparsers.add_parser(
        'stdio', help='Run MCP server with stdio transport (default)'
    )
    stdio_parser.set_defaults(func=run_stdio)

    http_parser = subparsers.add_parser(
        'http', help='Run MCP server with HTTP transport'
    )
    http_parser.add_argument(
        '--host', default='localhost', help='HTTP server host (default: localhost)'
    )
    http_parser.add_argument(
        '--port', type=int, default=8000, help='HTTP server port (default: 8000)'
    )
    http_parser.set_defaults(func=run_http)

    search_parser = subparsers.add_parser(
        'search', help='Run one search and print the results'
    )
    search_parser.add_argument('query', help='The search query')
    search_parser.add_argument(
        '-n',
        '--num-results',
        dest='num_results',
        type=int,
        default=None,
        help='Number of results to return (max 10, default 5)',
    )
    search_parser.set_defaults(func=run_search)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        setup_logging(args.log_level or settings.log_level, settings.log_file)
        return args.func(args, settings)
    except ConfigurationError as e:
        logger.error(f'Configuration error: {e}')
        return 1

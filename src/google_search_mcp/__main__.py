#!/usr/bin/env python3
"""
Main entry point for the Google Search MCP server.

Allows the server to be run with 'python -m google_search_mcp'.
"""

import sys

from google_search_mcp.cli import main

if __name__ == '__main__':
    sys.exit(main())

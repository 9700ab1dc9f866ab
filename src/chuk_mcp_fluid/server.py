#!/usr/bin/env python3
"""
Entry point for the CHUK Fluid MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Fluid MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--structures-dir",
        type=Path,
        default=None,
        help="Project structures directory (default: ./structures)",
    )
    parser.add_argument(
        "--list-structures",
        action="store_true",
        help="Print the available structures and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Import after argument parsing so --debug applies to server setup
    from chuk_mcp_fluid.async_server import mcp, set_structures_dir, structure_library

    if args.structures_dir is not None:
        set_structures_dir(args.structures_dir)

    if args.list_structures:
        for meta in structure_library.list_structures():
            labels = " ".join(str(label) for label in meta.labels)
            print(f"{meta.name:<24} [{meta.source}] {labels}")
        return

    if args.transport == "stdio":
        logger.info("Starting CHUK Fluid MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Fluid MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()

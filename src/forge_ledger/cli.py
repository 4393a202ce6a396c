"""Command line interface for forge-ledger."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ExtractConfig
from .constants import DEFAULT_RPC_ENV, DEFAULT_SCRIPT_NAME
from .exceptions import ExtractionError
from .extract import ensure_script_exists, generate_ledger, generate_markdown

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forge-ledger",
        description=(
            "Extract contract deployments from a Foundry broadcast (run-latest.json) into "
            "deployments/json/<CHAIN_ID>.json and deployments/<CHAIN_ID>.md"
        ),
    )
    parser.add_argument(
        "-c", "--chain", type=int, required=True, metavar="CHAIN_ID",
        help="Chain ID of the network where the script was executed",
    )
    parser.add_argument(
        "-r", "--rpc-url", metavar="RPC_URL",
        help=f"RPC URL used to fetch onchain data (defaults to ${DEFAULT_RPC_ENV})",
    )
    parser.add_argument(
        "-n", "--name", default=DEFAULT_SCRIPT_NAME, metavar="SCRIPT",
        help=f"Name of the executed script (default: {DEFAULT_SCRIPT_NAME})",
    )
    parser.add_argument(
        "-f", "--force", action="store_true",
        help="Force the generation of the json file with the same commit",
    )
    parser.add_argument(
        "-s", "--skip-json", action="store_true",
        help="Skip the JSON generation and create the markdown file from the existing JSON file",
    )
    parser.add_argument(
        "--reader", choices=("cast", "rpc"), default="cast",
        help="Backend for onchain queries: the cast CLI or direct JSON-RPC (default: cast)",
    )
    parser.add_argument(
        "--root", type=Path, default=None,
        help="Foundry project root (default: current directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the extraction and report fatal errors.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ExtractConfig.create(
        chain_id=args.chain,
        rpc_url=args.rpc_url,
        script_name=args.name,
        force=args.force,
        skip_json=args.skip_json,
        root=args.root,
        reader=args.reader,
    )

    if config.reader == "rpc" and not config.rpc_url and not config.skip_json:
        parser.error(f"--reader rpc requires --rpc-url or ${DEFAULT_RPC_ENV}")

    try:
        ensure_script_exists(config)

        ledger = generate_ledger(config)
        if ledger is None:
            return 0

        markdown_path = generate_markdown(config, ledger)
        logger.info(f"Wrote {markdown_path}")
    except ExtractionError as e:
        print(f"\nError: {e}\n", file=sys.stderr)
        return 1

    return 0

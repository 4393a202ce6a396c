"""Main API for forge-ledger."""

import logging
from pathlib import Path
from typing import Callable, Optional

from .chain import ChainReader, create_reader
from .classifier import classify_transactions
from .config import ExtractConfig
from .exceptions import BroadcastNotFoundError, LedgerNotFoundError, ScriptNotFoundError
from .ledger import append_history, ensure_commit_unprocessed, load_ledger, save_ledger
from .markdown import render_markdown
from .parsers import load_broadcast
from .paths import get_artifacts_dir, get_broadcast_path, get_ledger_paths, get_script_path
from .project import build_artifacts, get_project_url, project_name_from_url
from .reconciler import reconcile
from .types import Ledger

logger = logging.getLogger(__name__)


def ensure_script_exists(config: ExtractConfig) -> None:
    """
    Raises:
        ScriptNotFoundError: If script/<name> doesn't exist in the project
    """
    if not get_script_path(config.script_name, config.root).exists():
        raise ScriptNotFoundError(f"script/{config.script_name} does not exist")


def generate_ledger(
    config: ExtractConfig,
    reader: Optional[ChainReader] = None,
    build: Optional[Callable[[Path], None]] = None,
) -> Optional[Ledger]:
    """
    Process the latest broadcast of a script into the chain's ledger.

    With `skip_json` set, the existing ledger is returned untouched.

    Args:
        config: Run configuration
        reader: Chain reader (defaults to the one selected in config)
        build: Function building ABI artifacts for a project root
            (defaults to build_artifacts)

    Returns:
        The updated ledger, or None if the broadcast contained no new contracts
        (in which case nothing is written)

    Raises:
        LedgerNotFoundError: If skip_json is set and no ledger exists
        BroadcastNotFoundError: If the broadcast file doesn't exist
        CommitAlreadyProcessedError: If the commit was processed and force is False
        ImplementationMismatchError: If a proxy doesn't point to the deployed implementation
        ArtifactNotFoundError: If a contract ABI is missing
        ConstructorArgumentsMismatchError: If constructor arguments don't match the ABI
    """
    ledger_path, _ = get_ledger_paths(config.chain_id, config.root)
    ledger = load_ledger(ledger_path, config.chain_id)

    if config.skip_json:
        if not ledger.latest:
            raise LedgerNotFoundError(f"{ledger_path} does not exist")
        return ledger

    broadcast_path = get_broadcast_path(config.script_name, config.chain_id, config.root)
    if not broadcast_path.exists():
        raise BroadcastNotFoundError(f"{broadcast_path} does not exist")
    broadcast = load_broadcast(broadcast_path)

    ensure_commit_unprocessed(ledger, broadcast.commit, config.force)

    if build is None:
        build = build_artifacts
    build(config.root)

    if reader is None:
        reader = create_reader(config.reader, config.rpc_url)

    classified = classify_transactions(broadcast.transactions, reader)
    contracts = reconcile(classified, ledger, broadcast, reader, get_artifacts_dir(config.root))

    if not append_history(ledger, contracts, broadcast.timestamp, broadcast.commit):
        return None

    save_ledger(ledger, ledger_path)
    logger.info(f"Recorded {len(contracts)} contract(s) from commit {broadcast.commit} in {ledger_path}")

    return ledger


def generate_markdown(
    config: ExtractConfig,
    ledger: Ledger,
    project_name: Optional[str] = None,
    project_url: Optional[str] = None,
) -> Path:
    """
    Write deployments/<chainId>.md for a ledger.

    Args:
        config: Run configuration
        ledger: Ledger to render
        project_name: Page title (defaults to the origin repository name)
        project_url: Repository URL (defaults to the origin remote)

    Returns:
        Path of the written Markdown file

    Raises:
        UnsupportedChainError: If the chain has no known block explorer
    """
    if project_url is None:
        try:
            project_url = get_project_url(config.root)
        except RuntimeError as e:
            logger.warning(f"Cannot determine repository URL: {e}")
            project_url = ""

    if project_name is None:
        if project_url:
            project_name = project_name_from_url(project_url)
        else:
            project_name = project_name_from_url(config.root.name)

    content = render_markdown(ledger, project_name, project_url)

    _, markdown_path = get_ledger_paths(config.chain_id, config.root)
    markdown_path.parent.mkdir(parents=True, exist_ok=True)
    with open(markdown_path, "w", encoding="utf-8") as f:
        f.write(content)

    return markdown_path

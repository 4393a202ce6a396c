"""Ledger store for forge-ledger."""

import json
import logging
from pathlib import Path
from typing import Dict

from .exceptions import CommitAlreadyProcessedError
from .types import ContractSnapshot, HistoryEntry, Ledger

logger = logging.getLogger(__name__)


def load_ledger(ledger_path: Path, chain_id: int) -> Ledger:
    """
    Load an existing ledger or return an empty one.

    Args:
        ledger_path: Path to deployments/json/<chainId>.json
        chain_id: Chain id used when the file doesn't exist

    Returns:
        Ledger instance
    """
    if not ledger_path.exists():
        return Ledger(chain_id=chain_id)

    with open(ledger_path) as f:
        return Ledger.from_dict(json.load(f))


def save_ledger(ledger: Ledger, ledger_path: Path) -> None:
    """
    Write the whole ledger to disk with 4-space indentation.

    Creates parent directories if they don't exist.
    """
    ledger_path.parent.mkdir(parents=True, exist_ok=True)
    with open(ledger_path, "w") as f:
        json.dump(ledger.to_dict(), f, indent=4)


def has_commit(ledger: Ledger, commit: str) -> bool:
    """Check whether a commit is already recorded in the history."""
    return any(entry.commit == commit for entry in ledger.history)


def ensure_commit_unprocessed(ledger: Ledger, commit: str, force: bool = False) -> None:
    """
    Reject a broadcast whose commit was already processed.

    Raises:
        CommitAlreadyProcessedError: If the commit is in history and force is False
    """
    if has_commit(ledger, commit) and not force:
        raise CommitAlreadyProcessedError(f"Commit {commit} already processed")


def is_duplicate(ledger: Ledger, contract_name: str, address: str, tx_hash: str) -> bool:
    """Check if a contract with the same address and hash is already in history."""
    for entry in ledger.history:
        recorded = entry.contracts.get(contract_name)
        if recorded is not None and recorded.address == address and recorded.hash == tx_hash:
            return True

    return False


def sort_latest(ledger: Ledger) -> None:
    """Sort the latest section case-insensitively by contract name."""
    ledger.latest = {name: ledger.latest[name] for name in sorted(ledger.latest, key=str.lower)}


def append_history(
    ledger: Ledger, contracts: Dict[str, ContractSnapshot], timestamp: int, commit: str
) -> bool:
    """
    Record a processed broadcast in the ledger.

    Args:
        ledger: Ledger to update in place
        contracts: Name-sorted snapshots of the new deployments
        timestamp: Broadcast timestamp
        commit: Broadcast commit

    Returns:
        False if there was nothing to record, True otherwise
    """
    if not contracts:
        logger.info("New contracts not found")
        return False

    sort_latest(ledger)

    ledger.history.insert(0, HistoryEntry(contracts=contracts, timestamp=timestamp, commit=commit))
    ledger.history.sort(key=lambda h: h.timestamp, reverse=True)

    return True

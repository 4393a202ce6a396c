"""Broadcast and artifact parsers for forge-ledger."""

import json
from pathlib import Path
from typing import Any, Dict, List

from .exceptions import ArtifactNotFoundError, InvalidBroadcastError
from .types import AdditionalContract, Broadcast, BroadcastTransaction


def parse_transaction(data: Dict[str, Any]) -> BroadcastTransaction:
    """
    Convert one raw broadcast transaction into a BroadcastTransaction.

    Args:
        data: Entry of the broadcast "transactions" list

    Returns:
        BroadcastTransaction with Foundry field names mapped to attributes
    """
    tx = data.get("transaction") or {}

    return BroadcastTransaction(
        hash=data.get("hash"),
        transaction_type=data.get("transactionType"),
        contract_name=data.get("contractName"),
        contract_address=data.get("contractAddress"),
        function=data.get("function"),
        arguments=data.get("arguments"),
        sender=tx.get("from"),
        to=tx.get("to"),
        # Older Foundry versions name the calldata "data"
        input=tx.get("input") or tx.get("data") or "",
        additional_contracts=[
            AdditionalContract(
                transaction_type=c.get("transactionType"),
                address=c.get("address"),
            )
            for c in data.get("additionalContracts") or []
        ],
    )


def parse_broadcast(data: Dict[str, Any]) -> Broadcast:
    """
    Validate and convert a decoded broadcast document.

    Raises:
        InvalidBroadcastError: If commit, timestamp or transactions are missing
    """
    missing = [key for key in ("commit", "timestamp", "transactions") if key not in data]
    if missing:
        raise InvalidBroadcastError(f"Broadcast is missing required fields: {', '.join(missing)}")

    if not isinstance(data["transactions"], list):
        raise InvalidBroadcastError("Broadcast transactions must be a list")

    return Broadcast(
        commit=data["commit"],
        timestamp=int(data["timestamp"]),
        transactions=[parse_transaction(tx) for tx in data["transactions"]],
        chain=data.get("chain"),
    )


def load_broadcast(file_path: Path) -> Broadcast:
    """
    Load a Foundry run-latest.json broadcast file.

    Args:
        file_path: Path to run-latest.json

    Returns:
        Parsed Broadcast

    Raises:
        FileNotFoundError: If the broadcast does not exist
        InvalidBroadcastError: If required fields are missing
    """
    with open(file_path) as f:
        data = json.load(f)

    return parse_broadcast(data)


def load_abi(artifacts_dir: Path, contract_name: str) -> List[Dict[str, Any]]:
    """
    Load the ABI of a contract from its Foundry build artifact.

    Args:
        artifacts_dir: Foundry output directory (usually ./out)
        contract_name: Contract name; the artifact is <Name>.sol/<Name>.json

    Returns:
        ABI entries

    Raises:
        ArtifactNotFoundError: If the artifact file does not exist
    """
    artifact_path = artifacts_dir / f"{contract_name}.sol" / f"{contract_name}.json"
    if not artifact_path.exists():
        raise ArtifactNotFoundError(f"Contract ABI not found: {contract_name}")

    with open(artifact_path) as f:
        return json.load(f)["abi"]

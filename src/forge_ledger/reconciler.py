"""Reconciliation of classified broadcast transactions with the ledger."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .chain import (
    ChainReader,
    get_account_version,
    get_implementation,
    get_name,
    get_proxy_admin,
    get_version,
)
from .constants import ACCOUNT_CONTRACT_NAMES, PROXY_INITIALIZER_INDEX
from .constructor import decode_constructor_inputs
from .exceptions import ImplementationMismatchError
from .ledger import is_duplicate
from .parsers import load_abi
from .types import Broadcast, BroadcastTransaction, ContractSnapshot, Deployment, DeploymentRecord, Ledger

logger = logging.getLogger(__name__)


def is_proxy(contract_name: Optional[str]) -> bool:
    return contract_name in PROXY_INITIALIZER_INDEX


@dataclass
class _Creation:
    """A contract creation resolved from a classified transaction."""

    name: Optional[str]
    address: Optional[str]
    deployer: Optional[str]
    hash: Optional[str]
    arguments: Optional[Union[List[Any], str]]
    factory: Optional[str] = None
    salt: Optional[str] = None


def _resolve_creation(tx: BroadcastTransaction, reader: ChainReader) -> Optional[_Creation]:
    if tx.transaction_type == "CALL":
        # deployModule(bytes32 salt, bytes initCode, bytes args): the module is the CREATE2 child
        child = next(
            (c for c in tx.additional_contracts if c.transaction_type == "CREATE2"), None
        )
        if child is None or child.address is None:
            logger.warning(f"Skipping module deployment without CREATE2 child: {tx.hash}")
            return None

        arguments = tx.arguments if isinstance(tx.arguments, list) else []
        encoded_args = arguments[2] if len(arguments) > 2 else None

        return _Creation(
            name=get_name(reader, child.address) or tx.contract_name,
            address=child.address,
            deployer=tx.sender,
            hash=tx.hash,
            arguments=encoded_args[2:] if encoded_args else None,
            factory=tx.contract_address,
            salt=arguments[0] if arguments else None,
        )

    return _Creation(
        name=tx.contract_name,
        address=tx.contract_address,
        deployer=tx.sender,
        hash=tx.hash,
        arguments=tx.arguments,
        salt=tx.input[:66] if tx.transaction_type == "CREATE2" else None,
    )


def find_proxy_creation(
    transactions: List[BroadcastTransaction], implementation: Optional[str], reader: ChainReader
) -> Optional[BroadcastTransaction]:
    """
    Find the proxy deployed in front of an implementation.

    Args:
        transactions: Classified transactions following the implementation's deployment
        implementation: Checksummed implementation address
        reader: Chain reader used to checksum the proxy's first constructor argument

    Returns:
        The proxy creation transaction, or None
    """
    if implementation is None:
        return None
    for tx in transactions:
        if not is_proxy(tx.contract_name) or not isinstance(tx.arguments, list) or not tx.arguments:
            continue
        target = reader.to_checksum_address(tx.arguments[0])
        if target is not None and target == implementation:
            return tx
    return None


def _snapshot(deployment: Deployment, inputs: Dict[str, Any]) -> ContractSnapshot:
    values = {f.name: getattr(deployment, f.name) for f in fields(Deployment)}
    return ContractSnapshot(**values, input=inputs)


def reconcile(
    transactions: List[BroadcastTransaction],
    ledger: Ledger,
    broadcast: Broadcast,
    reader: ChainReader,
    artifacts_dir: Path,
) -> Dict[str, ContractSnapshot]:
    """
    Merge classified creation transactions into the ledger's latest section.

    Proxy creations are folded into the record of the contract they point to,
    and contracts already recorded with the same address and hash are skipped.

    Args:
        transactions: Output of classify_transactions()
        ledger: Ledger whose `latest` section is updated in place
        broadcast: Broadcast providing timestamp and commit
        reader: Chain reader for on-chain metadata
        artifacts_dir: Foundry output directory holding contract ABIs

    Returns:
        Snapshots of new deployments keyed by contract name, sorted
        case-insensitively, for the history entry

    Raises:
        ImplementationMismatchError: If a proxy doesn't point to the deployed implementation
        ArtifactNotFoundError: If a contract ABI is missing
        ConstructorArgumentsMismatchError: If constructor arguments don't match the ABI
    """
    snapshots: List[tuple[str, ContractSnapshot]] = []

    def record(name: str, deployment: Deployment, inputs: Dict[str, Any]) -> None:
        ledger.latest[name] = DeploymentRecord.from_deployment(
            deployment, broadcast.timestamp, broadcast.commit
        )
        snapshots.append((name, _snapshot(deployment, inputs)))

    for idx, tx in enumerate(transactions):
        creation = _resolve_creation(tx, reader)
        if creation is None:
            continue

        name = creation.name
        if name is None:
            logger.warning(f"Skipping unnamed contract at {creation.address}")
            continue

        if is_proxy(name):
            logger.warning(f"Skipping proxy contract: {name}({creation.address})")
            continue

        if is_duplicate(ledger, name, creation.address, creation.hash):
            logger.warning(f"Skipping duplicate contract: {name}({creation.address})")
            continue

        existing = ledger.latest.get(name)

        if existing is None:
            proxy_tx = find_proxy_creation(transactions[idx + 1 :], creation.address, reader)

            # New upgradeable contract
            if proxy_tx is not None:
                proxy_address = proxy_tx.contract_address
                deployment = Deployment(
                    address=proxy_address,
                    deployer=creation.deployer,
                    hash=proxy_tx.hash,
                    implementation=creation.address,
                    proxy_admin=get_proxy_admin(reader, proxy_address),
                    proxy_type=proxy_tx.contract_name,
                    salt=creation.salt,
                    version=get_version(reader, proxy_address),
                )
                initializer_index = PROXY_INITIALIZER_INDEX[proxy_tx.contract_name]
                proxy_args = proxy_tx.arguments
                inputs = {
                    "constructor": decode_constructor_inputs(
                        load_abi(artifacts_dir, name), creation.arguments, reader
                    ),
                    "initializer": (
                        proxy_args[initializer_index] if len(proxy_args) > initializer_index else None
                    ),
                }
                record(name, deployment, inputs)
                continue

        # New implementation behind an existing proxy
        elif is_proxy(existing.proxy_type):
            proxy_address = existing.address

            if get_implementation(reader, proxy_address) != creation.address:
                raise ImplementationMismatchError(
                    f"Mismatched implementations for {name}({creation.address})"
                )

            deployment = Deployment(
                address=proxy_address,
                deployer=creation.deployer,
                hash=existing.hash,
                implementation=creation.address,
                proxy_admin=get_proxy_admin(reader, proxy_address),
                proxy_type=existing.proxy_type,
                salt=creation.salt,
                version=get_version(reader, proxy_address),
            )
            inputs = {
                "constructor": decode_constructor_inputs(
                    load_abi(artifacts_dir, name), creation.arguments, reader
                ),
            }
            record(name, deployment, inputs)
            continue

        # New or redeployed non-upgradeable contract
        if name in ACCOUNT_CONTRACT_NAMES:
            version = get_account_version(reader, creation.address)
        else:
            version = get_version(reader, creation.address)

        deployment = Deployment(
            address=creation.address,
            deployer=creation.deployer,
            factory=creation.factory,
            hash=creation.hash,
            salt=creation.salt,
            version=version,
        )
        inputs = {
            "constructor": decode_constructor_inputs(
                load_abi(artifacts_dir, name), creation.arguments, reader
            ),
        }
        record(name, deployment, inputs)

    snapshots.sort(key=lambda item: item[0].lower())
    return dict(snapshots)

"""Selection of contract-creating broadcast transactions."""

from dataclasses import replace
from typing import Iterable, List

from .chain import ChainReader
from .constants import CREATE_TRANSACTION_TYPES, MODULE_DEPLOY_SIGNATURE
from .types import AdditionalContract, BroadcastTransaction


def is_creation(tx: BroadcastTransaction) -> bool:
    """Check if a transaction deploys a contract directly or through a module factory."""
    return tx.transaction_type in CREATE_TRANSACTION_TYPES or tx.function == MODULE_DEPLOY_SIGNATURE


def classify_transactions(
    transactions: Iterable[BroadcastTransaction], reader: ChainReader
) -> List[BroadcastTransaction]:
    """
    Filter creation transactions and checksum their addresses.

    Args:
        transactions: Broadcast transactions, in broadcast order
        reader: Chain reader used for checksumming

    Returns:
        Creation transactions in their original relative order. Addresses
        that cannot be checksummed become None.
    """
    return [
        replace(
            tx,
            contract_address=reader.to_checksum_address(tx.contract_address),
            sender=reader.to_checksum_address(tx.sender),
            to=reader.to_checksum_address(tx.to),
            additional_contracts=[
                AdditionalContract(
                    transaction_type=c.transaction_type,
                    address=reader.to_checksum_address(c.address),
                )
                for c in tx.additional_contracts
            ],
        )
        for tx in transactions
        if is_creation(tx)
    ]

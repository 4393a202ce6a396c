"""Markdown rendering of the latest deployments."""

from datetime import datetime, timezone

from .constants import CHAIN_CONFIG, CONTRACT_SOURCE_DIRS
from .exceptions import UnsupportedChainError
from .types import Ledger


def get_explorer_link(chain_id: int, value: str, slug: str = "address") -> str:
    """
    Block explorer URL for an address or transaction.

    Args:
        chain_id: Numeric chain id
        value: Address or transaction hash
        slug: "address" or "tx"

    Raises:
        UnsupportedChainError: If no explorer is configured for the chain
    """
    chain = CHAIN_CONFIG.get(int(chain_id))
    if chain is None:
        raise UnsupportedChainError(f"Unsupported chain: {chain_id}")
    return f"{chain['block_explorer_url']}/{slug}/{value}"


def get_explorer_link_md(chain_id: int, value: str, slug: str = "address") -> str:
    return f"[{value}]({get_explorer_link(chain_id, value, slug)})"


def get_explorer_link_anchor(chain_id: int, value: str, slug: str = "address") -> str:
    return f'<a href="{get_explorer_link(chain_id, value, slug)}" target="_blank">{value}</a>'


def get_contract_source_path(contract_name: str) -> str:
    """Source file of a contract relative to src/, without extension."""
    name = contract_name.lower()
    for keyword, directory in CONTRACT_SOURCE_DIRS:
        if keyword in name:
            return f"{directory}/{contract_name}"
    return contract_name


def get_contract_link_anchor(project_url: str, contract_name: str) -> str:
    path = get_contract_source_path(contract_name)
    return f'<a href="{project_url}/blob/main/src/{path}.sol" target="_blank">{contract_name}</a>'


def format_timestamp(timestamp: int) -> str:
    """Format a unix timestamp like "Tue, 15 Nov 1994 08:12:31 UTC"."""
    return datetime.fromtimestamp(timestamp, timezone.utc).strftime("%a, %d %b %Y %H:%M:%S UTC")


def render_markdown(ledger: Ledger, project_name: str, project_url: str) -> str:
    """
    Render the latest section of a ledger as a Markdown page.

    Args:
        ledger: Ledger to render
        project_name: Page title
        project_url: Repository URL used for contract source links

    Returns:
        Markdown document

    Raises:
        UnsupportedChainError: If the ledger's chain has no known explorer
    """
    chain_id = ledger.chain_id
    names = list(ledger.latest)

    output = f"# {project_name}\n\n"
    output += "\n### Table of Contents\n- [Summary](#summary)\n- [Contracts](#contracts)\n"
    output += "".join(f"\t- [{name}](#{name.lower()})\n" for name in names)

    output += (
        "\n## Summary\n\n<table>\n<tr>\n\t<th>Contract</th>\n\t<th>Address</th>\n"
        "\t<th>Version</th>\n</tr>\n"
    )
    for name, record in ledger.latest.items():
        output += (
            f"<tr>\n\t<td>{get_contract_link_anchor(project_url, name)}</td>\n"
            f"\t<td>{get_explorer_link_anchor(chain_id, record.address)}</td>\n"
            f"\t<td>{record.version or 'N/A'}</td>\n</tr>\n"
        )
    output += "</table>\n"

    output += "\n## Contracts\n\n"
    output += "\n\n---\n\n".join(
        f"### {name}\n\n"
        f"Address: {get_explorer_link_md(chain_id, record.address)}\n\n"
        f"Transaction Hash: {get_explorer_link_md(chain_id, record.hash, 'tx')}\n\n"
        f"{format_timestamp(record.timestamp)}"
        for name, record in ledger.latest.items()
    )
    output += "\n"

    return output

"""On-chain queries for forge-ledger.

Every query is best-effort: failures are logged at debug level and reported
as ``None`` so that a missing RPC endpoint never aborts a run.
"""

import logging
import subprocess
from typing import Any, List, Optional, Protocol

import requests
from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from .constants import ADMIN_SLOT, IMPLEMENTATION_SLOT

logger = logging.getLogger(__name__)


class ChainReader(Protocol):
    """Read-only access to chain state."""

    def to_checksum_address(self, address: Optional[str]) -> Optional[str]:
        ...

    def parse_bytes32_address(self, word: str) -> Optional[str]:
        ...

    def read_storage_address(self, address: str, slot: str) -> Optional[str]:
        ...

    def call_string(self, address: str, function: str) -> Optional[str]:
        ...


def _clean_output(output: str) -> str:
    return output.strip().replace('"', "")


class CastChainReader:
    """ChainReader backed by Foundry's `cast` command line tool."""

    def __init__(self, rpc_url: Optional[str] = None, executable: str = "cast"):
        self.rpc_url = rpc_url
        self.executable = executable

    def _run(self, args: List[str], rpc: bool = False) -> Optional[str]:
        command = [self.executable, *args]
        if rpc and self.rpc_url:
            command += ["--rpc-url", self.rpc_url]

        try:
            result = subprocess.run(command, check=True, capture_output=True, text=True)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.debug(f"cast {args[0]} failed: {e}")
            return None

        return _clean_output(result.stdout) or None

    def to_checksum_address(self, address: Optional[str]) -> Optional[str]:
        if not address:
            return None
        return self._run(["to-check-sum-address", address])

    def parse_bytes32_address(self, word: str) -> Optional[str]:
        if not word.startswith("0x"):
            word = "0x" + word
        return self._run(["parse-bytes32-address", word])

    def read_storage_address(self, address: str, slot: str) -> Optional[str]:
        word = self._run(["storage", address, slot], rpc=True)
        if word is None:
            return None
        return self.parse_bytes32_address(word)

    def call_string(self, address: str, function: str) -> Optional[str]:
        return self._run(["call", address, f"{function}(string)"], rpc=True)


class RpcChainReader:
    """ChainReader speaking JSON-RPC directly to an endpoint."""

    def __init__(self, rpc_url: str, timeout: int = 30):
        self.rpc_url = rpc_url
        self.timeout = timeout

    def _request(self, method: str, params: List[Any]) -> Any:
        """
        Make a JSON-RPC call.

        Raises:
            ValueError: If the RPC returns an error
            RuntimeError: If a network error occurs
        """
        try:
            response = requests.post(
                self.rpc_url,
                json={"jsonrpc": "2.0", "method": method, "params": params, "id": 1},
                timeout=self.timeout,
            )

            if response.status_code != 200:
                raise RuntimeError(f"RPC request failed with status {response.status_code}")

            result = response.json()

            if "error" in result:
                raise ValueError(f"RPC error: {result['error']}")

            return result["result"]

        except requests.RequestException as e:
            raise RuntimeError(f"Network error during RPC call: {e}") from e

    def to_checksum_address(self, address: Optional[str]) -> Optional[str]:
        if not address:
            return None
        try:
            return to_checksum_address(address)
        except (TypeError, ValueError) as e:
            logger.debug(f"Cannot checksum {address}: {e}")
            return None

    def parse_bytes32_address(self, word: str) -> Optional[str]:
        word = word[2:] if word.startswith("0x") else word
        if len(word) != 64:
            return None
        return self.to_checksum_address("0x" + word[-40:])

    def read_storage_address(self, address: str, slot: str) -> Optional[str]:
        try:
            word = self._request("eth_getStorageAt", [address, slot, "latest"])
        except (KeyError, RuntimeError, ValueError) as e:
            logger.debug(f"eth_getStorageAt {address} {slot} failed: {e}")
            return None
        if not isinstance(word, str):
            return None
        return self.parse_bytes32_address(word)

    def call_string(self, address: str, function: str) -> Optional[str]:
        data = "0x" + function_signature_to_4byte_selector(function).hex()
        try:
            result = self._request("eth_call", [{"to": address, "data": data}, "latest"])
            (value,) = abi_decode(["string"], bytes.fromhex(result[2:]))
        except (KeyError, TypeError, RuntimeError, ValueError, DecodingError) as e:
            logger.debug(f"eth_call {address} {function} failed: {e}")
            return None
        return value or None


def create_reader(kind: str, rpc_url: Optional[str]) -> ChainReader:
    """
    Build the ChainReader selected on the command line.

    Args:
        kind: "cast" or "rpc"
        rpc_url: RPC endpoint URL

    Raises:
        ValueError: If kind is unknown, or "rpc" is requested without an RPC URL
    """
    match kind:
        case "cast":
            return CastChainReader(rpc_url)
        case "rpc":
            if not rpc_url:
                raise ValueError("The rpc reader requires an RPC URL")
            return RpcChainReader(rpc_url)
        case _:
            raise ValueError(f"Unknown chain reader: {kind}")


def get_implementation(reader: ChainReader, proxy_address: str) -> Optional[str]:
    """Read the ERC-1967 implementation slot of a proxy."""
    return reader.read_storage_address(proxy_address, IMPLEMENTATION_SLOT)


def get_proxy_admin(reader: ChainReader, proxy_address: str) -> Optional[str]:
    """Read the ERC-1967 admin slot of a proxy."""
    return reader.read_storage_address(proxy_address, ADMIN_SLOT)


def get_name(reader: ChainReader, address: str) -> Optional[str]:
    return reader.call_string(address, "name()")


def get_version(reader: ChainReader, address: str) -> Optional[str]:
    return reader.call_string(address, "version()")


def get_account_id(reader: ChainReader, address: str) -> Optional[str]:
    return reader.call_string(address, "accountId()")


def get_account_name(reader: ChainReader, address: str) -> Optional[str]:
    """
    Human readable account name from accountId().

    "vendor.account.1.0.0" -> "Vendor Account"
    """
    account_id = get_account_id(reader, address)
    if account_id is None:
        return None
    return " ".join(word[:1].upper() + word[1:] for word in account_id.split(".")[:2])


def get_account_version(reader: ChainReader, address: str) -> Optional[str]:
    """
    Version part of accountId().

    "vendor.account.1.0.0" -> "1.0.0"
    """
    account_id = get_account_id(reader, address)
    if account_id is None:
        return None
    return ".".join(account_id.split(".")[2:]) or None

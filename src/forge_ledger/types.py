"""Data types and dataclasses for forge-ledger."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

# Dataclass attribute -> JSON key, in serialization order
_RECORD_KEYS = (
    ("address", "address"),
    ("deployer", "deployer"),
    ("factory", "factory"),
    ("hash", "hash"),
    ("implementation", "implementation"),
    ("proxy_admin", "proxyAdmin"),
    ("proxy_type", "proxyType"),
    ("salt", "salt"),
    ("version", "version"),
)


@dataclass
class Deployment:
    """Addresses and metadata of one deployed contract."""

    address: Optional[str]
    deployer: Optional[str] = None
    factory: Optional[str] = None
    hash: Optional[str] = None
    implementation: Optional[str] = None
    proxy_admin: Optional[str] = None
    proxy_type: Optional[str] = None
    salt: Optional[str] = None
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, dropping empty fields."""
        return {key: getattr(self, attr) for attr, key in _RECORD_KEYS if getattr(self, attr)}

    @classmethod
    def fields_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {attr: data.get(key) or None for attr, key in _RECORD_KEYS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Deployment":
        return cls(**cls.fields_from_dict(data))


@dataclass
class DeploymentRecord(Deployment):
    """Currently-live state of one named contract in the ledger's `latest` section."""

    timestamp: int = 0
    commit: str = ""

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["timestamp"] = self.timestamp
        result["commit"] = self.commit
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentRecord":
        return cls(
            **Deployment.fields_from_dict(data),
            timestamp=data["timestamp"],
            commit=data["commit"],
        )

    @classmethod
    def from_deployment(cls, deployment: Deployment, timestamp: int, commit: str) -> "DeploymentRecord":
        values = {f.name: getattr(deployment, f.name) for f in fields(Deployment)}
        return cls(**values, timestamp=timestamp, commit=commit)


@dataclass
class ContractSnapshot(Deployment):
    """A deployment as recorded in a history entry, with its decoded inputs."""

    input: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["input"] = self.input
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractSnapshot":
        return cls(**Deployment.fields_from_dict(data), input=data.get("input", {}))


@dataclass
class HistoryEntry:
    """Contracts recorded from one processed broadcast."""

    contracts: Dict[str, ContractSnapshot]
    timestamp: int
    commit: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contracts": {name: c.to_dict() for name, c in self.contracts.items()},
            "timestamp": self.timestamp,
            "commit": self.commit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            contracts={
                name: ContractSnapshot.from_dict(c) for name, c in data["contracts"].items()
            },
            timestamp=data["timestamp"],
            commit=data["commit"],
        )


@dataclass
class Ledger:
    """Per-chain deployment ledger."""

    chain_id: int
    latest: Dict[str, DeploymentRecord] = field(default_factory=dict)
    history: List[HistoryEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "latest": {name: r.to_dict() for name, r in self.latest.items()},
            "history": [h.to_dict() for h in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ledger":
        return cls(
            chain_id=int(data["chainId"]),
            latest={name: DeploymentRecord.from_dict(r) for name, r in data["latest"].items()},
            history=[HistoryEntry.from_dict(h) for h in data["history"]],
        )


@dataclass
class AdditionalContract:
    """Contract created as a side effect of a broadcast transaction."""

    transaction_type: Optional[str]
    address: Optional[str]


@dataclass
class BroadcastTransaction:
    """One transaction of a Foundry broadcast."""

    hash: Optional[str]
    transaction_type: Optional[str]
    contract_name: Optional[str] = None
    contract_address: Optional[str] = None
    function: Optional[str] = None
    # Either a list of decoded values or, for raw calldata, a hex string
    arguments: Optional[Union[List[Any], str]] = None
    sender: Optional[str] = None
    to: Optional[str] = None
    input: str = ""
    additional_contracts: List[AdditionalContract] = field(default_factory=list)


@dataclass
class Broadcast:
    """Recorded output of a deployment run."""

    commit: str
    timestamp: int
    transactions: List[BroadcastTransaction]
    chain: Optional[int] = None

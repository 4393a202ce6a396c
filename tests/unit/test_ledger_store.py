"""Unit tests for ledger persistence and history bookkeeping."""

import json
from pathlib import Path

import pytest

from forge_ledger.exceptions import CommitAlreadyProcessedError
from forge_ledger.ledger import (
    append_history,
    ensure_commit_unprocessed,
    has_commit,
    is_duplicate,
    load_ledger,
    save_ledger,
    sort_latest,
)
from forge_ledger.types import ContractSnapshot, DeploymentRecord, HistoryEntry, Ledger


def make_ledger() -> Ledger:
    return Ledger(
        chain_id=1,
        latest={
            "Vault": DeploymentRecord(
                address="0x3",
                deployer="0xd",
                hash="0xh3",
                implementation="0x2",
                proxy_admin="0x7",
                proxy_type="TransparentUpgradeableProxy",
                version="2.0.0",
                timestamp=100,
                commit="aaa",
            ),
            "registry": DeploymentRecord(
                address="0x1", deployer="0xd", hash="0xh1", timestamp=100, commit="aaa"
            ),
        },
        history=[
            HistoryEntry(
                contracts={
                    "Vault": ContractSnapshot(
                        address="0x3",
                        deployer="0xd",
                        hash="0xh3",
                        implementation="0x2",
                        input={"constructor": {}, "initializer": "0x8129fc1c"},
                    ),
                },
                timestamp=100,
                commit="aaa",
            )
        ],
    )


class TestLoadAndSave:
    """Test load_ledger and save_ledger."""

    def test_missing_file_returns_empty_ledger(self, tmp_path: Path):
        ledger = load_ledger(tmp_path / "1.json", 1)

        assert ledger == Ledger(chain_id=1)

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "deployments" / "json" / "1.json"
        ledger = make_ledger()

        save_ledger(ledger, path)

        assert load_ledger(path, 1) == ledger

    def test_file_round_trip_is_stable(self, tmp_path: Path):
        path = tmp_path / "1.json"
        save_ledger(make_ledger(), path)
        first = path.read_bytes()

        save_ledger(load_ledger(path, 1), path)

        assert path.read_bytes() == first

    def test_json_layout(self, tmp_path: Path):
        path = tmp_path / "1.json"

        save_ledger(make_ledger(), path)

        text = path.read_text()
        assert text.startswith('{\n    "chainId": 1,')
        data = json.loads(text)
        assert list(data) == ["chainId", "latest", "history"]
        assert list(data["latest"]["Vault"]) == [
            "address",
            "deployer",
            "hash",
            "implementation",
            "proxyAdmin",
            "proxyType",
            "version",
            "timestamp",
            "commit",
        ]
        assert data["history"][0]["contracts"]["Vault"]["input"]["initializer"] == "0x8129fc1c"

    def test_empty_fields_omitted(self, tmp_path: Path):
        path = tmp_path / "1.json"

        save_ledger(make_ledger(), path)

        registry = json.loads(path.read_text())["latest"]["registry"]
        assert "version" not in registry
        assert "salt" not in registry
        assert "implementation" not in registry

    def test_accepts_string_chain_id(self, tmp_path: Path):
        path = tmp_path / "1.json"
        path.write_text(json.dumps({"chainId": "1", "latest": {}, "history": []}))

        assert load_ledger(path, 1).chain_id == 1


class TestCommitChecks:
    """Test has_commit and ensure_commit_unprocessed."""

    def test_has_commit(self):
        ledger = make_ledger()

        assert has_commit(ledger, "aaa")
        assert not has_commit(ledger, "bbb")

    def test_processed_commit_rejected(self):
        with pytest.raises(CommitAlreadyProcessedError) as exc_info:
            ensure_commit_unprocessed(make_ledger(), "aaa")

        assert "aaa" in str(exc_info.value)

    def test_force_allows_processed_commit(self):
        ensure_commit_unprocessed(make_ledger(), "aaa", force=True)

    def test_new_commit_accepted(self):
        ensure_commit_unprocessed(make_ledger(), "bbb")


class TestIsDuplicate:
    """Test the is_duplicate function."""

    def test_same_name_address_and_hash(self):
        assert is_duplicate(make_ledger(), "Vault", "0x3", "0xh3")

    def test_different_hash(self):
        assert not is_duplicate(make_ledger(), "Vault", "0x3", "0xother")

    def test_different_address(self):
        assert not is_duplicate(make_ledger(), "Vault", "0x9", "0xh3")

    def test_unknown_contract(self):
        assert not is_duplicate(make_ledger(), "Registry", "0x3", "0xh3")


class TestHistory:
    """Test sort_latest and append_history."""

    def test_sort_latest_case_insensitive(self):
        ledger = make_ledger()

        sort_latest(ledger)

        assert list(ledger.latest) == ["registry", "Vault"]

    def test_append_history_without_contracts(self):
        ledger = make_ledger()

        assert append_history(ledger, {}, 200, "bbb") is False
        assert len(ledger.history) == 1
        assert list(ledger.latest) == ["Vault", "registry"]

    def test_append_history_sorts_newest_first(self):
        ledger = make_ledger()
        snapshot = ContractSnapshot(address="0x1", hash="0xh1", input={"constructor": {}})

        assert append_history(ledger, {"registry": snapshot}, 50, "old") is True
        assert append_history(ledger, {"registry": snapshot}, 300, "new") is True

        assert [h.commit for h in ledger.history] == ["new", "aaa", "old"]
        assert list(ledger.latest) == ["registry", "Vault"]

    def test_same_timestamp_newest_first(self):
        ledger = make_ledger()
        snapshot = ContractSnapshot(address="0x1", hash="0xh1")

        append_history(ledger, {"registry": snapshot}, 100, "bbb")

        assert [h.commit for h in ledger.history] == ["bbb", "aaa"]

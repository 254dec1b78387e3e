"""Tests for the config record dataclasses.

Covers: dict round trip of nested records, defaults for missing keys,
legacy null lists, address validation, repository helpers.
"""

import pytest

from dit_client.config.models import (
    ADDRESS_LENGTH,
    ActiveVote,
    ConfigRecord,
    KeyMaterial,
    RepositoryEntry,
)
from dit_client.exceptions import ValidationError


@pytest.fixture
def record():
    vote = ActiveVote(
        id=7, knw_vote_id=3, knowledge_label="python", choice=1, salt=123456,
        num_tokens=10, num_votes=2, num_knw=5, commit_end=1700000000,
        reveal_end=1700000600, resolved=False,
        demo_choices=[1, 0, 1], demo_salts=[11, 22, 33],
    )
    repo = RepositoryEntry(
        name="github.com/ditcraft/demo", provider="github",
        knowledge_labels=["python", "go"], active_votes=[vote],
    )
    return ConfigRecord(
        dit_coordinator="0x" + "1" * 40,
        knw_voting="0x" + "2" * 40,
        knw_token="0x" + "3" * 40,
        dit_token="0x" + "4" * 40,
        currency="xDai",
        demo_mode_active=False,
        ethereum_keys=KeyMaterial(address="0x" + "a" * 40, private_key="ab" * 40, kdf="scrypt"),
        repositories=[repo],
    )


class TestSerialization:

    def test_dict_roundtrip(self, record):
        assert ConfigRecord.from_dict(record.to_dict()) == record

    def test_json_keys(self, record):
        data = record.to_dict()
        assert set(data) == {
            "dit_coordinator", "knw_voting", "knw_token", "dit_token",
            "currency", "demo_mode_active", "ethereum_keys", "repositories",
        }
        assert set(data["ethereum_keys"]) == {"private_key", "address", "kdf"}
        vote = data["repositories"][0]["active_votes"][0]
        assert vote["knw_vote_id"] == 3
        assert vote["demo_salts"] == [11, 22, 33]

    def test_to_dict_copies_lists(self, record):
        data = record.to_dict()
        data["repositories"][0]["knowledge_labels"].append("rust")
        assert record.repositories[0].knowledge_labels == ["python", "go"]

    def test_missing_keys_use_defaults(self):
        rec = ConfigRecord.from_dict({})
        assert rec == ConfigRecord()
        assert rec.ethereum_keys.kdf == "sha256"
        assert rec.repositories == []

    def test_null_lists_read_as_empty(self):
        rec = ConfigRecord.from_dict({
            "repositories": [{
                "name": "r", "provider": "github",
                "knowledge_labels": None,
                "active_votes": [{"id": 1, "demo_choices": None, "demo_salts": None}],
            }],
        })
        repo = rec.repositories[0]
        assert repo.knowledge_labels == []
        assert repo.active_votes[0].demo_choices == []

    def test_unknown_keys_ignored(self):
        rec = ConfigRecord.from_dict({"currency": "xDit", "extra": {"nested": True}})
        assert rec.currency == "xDit"

    def test_bad_number_raises(self):
        with pytest.raises(TypeError):
            ActiveVote.from_dict({"id": "not-a-number"})

    @pytest.mark.parametrize("data", [
        {"resolved": "false"},
        {"salt": 1.9},
        {"choice": True},
        {"knowledge_label": 5},
        {"demo_choices": "101"},
        {"demo_salts": [1, "2"]},
        {"demo_choices": [True]},
    ])
    def test_vote_rejects_wrong_types(self, data):
        with pytest.raises(TypeError):
            ActiveVote.from_dict(data)

    def test_repository_rejects_string_labels(self):
        with pytest.raises(TypeError):
            RepositoryEntry.from_dict({"knowledge_labels": "python"})

    def test_record_rejects_non_object_keys(self):
        with pytest.raises(TypeError):
            ConfigRecord.from_dict({"ethereum_keys": "0xabc"})

    def test_kdf_null_uses_legacy_default(self):
        assert KeyMaterial.from_dict({"kdf": None}).kdf == "sha256"


class TestValidation:

    def test_valid_address(self, record):
        record.validate()
        assert record.ethereum_keys.is_valid()

    @pytest.mark.parametrize("address", ["", "0x", "0x" + "a" * 39, "0x" + "a" * 41])
    def test_invalid_address_length(self, record, address):
        record.ethereum_keys.address = address
        with pytest.raises(ValidationError):
            record.validate()

    def test_address_length_constant(self):
        assert ADDRESS_LENGTH == 42


class TestRepositories:

    def test_find_repository(self, record):
        assert record.find_repository("github.com/ditcraft/demo") is record.repositories[0]
        assert record.find_repository("missing") is None

    def test_add_repository(self, record):
        entry = record.add_repository(RepositoryEntry(name="other", provider="gitlab"))
        assert record.repositories[-1] is entry

    def test_add_duplicate_repository_rejected(self, record):
        with pytest.raises(ValidationError):
            record.add_repository(RepositoryEntry(name="github.com/ditcraft/demo"))

    def test_open_votes(self, record):
        repo = record.repositories[0]
        repo.add_vote(ActiveVote(id=8, resolved=True))
        assert [v.id for v in repo.open_votes()] == [7]

    def test_key_material_repr_fields(self):
        keys = KeyMaterial.from_dict({"address": "0xabc", "private_key": "00"})
        assert keys.to_dict() == {"private_key": "00", "address": "0xabc", "kdf": "sha256"}

# Config Store - Data Model
#
# The persisted root object and its nested records. JSON keys match the
# ~/.ditconfig layout written by earlier dit clients.

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import ValidationError

ADDRESS_LENGTH = 42  # "0x" + 40 hex characters


# Typed readers for from_dict(). A JSON null (or a missing key) yields the
# default; any other value of the wrong type raises TypeError.


def _check(data: Dict[str, Any], key: str, kinds: tuple, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is a subclass of int; never accept it as a number
    if not isinstance(value, kinds) or (bool not in kinds and isinstance(value, bool)):
        raise TypeError(f"{key}: expected {kinds[0].__name__}, got {type(value).__name__}")
    return value


def _str(data: Dict[str, Any], key: str, default: str = "") -> str:
    return _check(data, key, (str,), default)


def _int(data: Dict[str, Any], key: str) -> int:
    return _check(data, key, (int,), 0)


def _bool(data: Dict[str, Any], key: str) -> bool:
    return _check(data, key, (bool,), False)


def _object(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    return _check(data, key, (dict,), {})


def _list(data: Dict[str, Any], key: str, kind: type) -> list:
    # Older files wrote null for empty slices
    items = _check(data, key, (list,), [])
    for item in items:
        if not isinstance(item, kind) or (kind is not bool and isinstance(item, bool)):
            raise TypeError(f"{key}: expected list of {kind.__name__}, got {type(item).__name__}")
    return list(items)


@dataclass
class ActiveVote:
    """An in-flight commit/reveal vote on a knowledge label."""
    id: int = 0
    knw_vote_id: int = 0
    knowledge_label: str = ""
    choice: int = 0
    salt: int = 0
    num_tokens: int = 0
    num_votes: int = 0
    num_knw: int = 0
    commit_end: int = 0
    reveal_end: int = 0
    resolved: bool = False
    demo_choices: List[int] = field(default_factory=list)
    demo_salts: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "knw_vote_id": self.knw_vote_id,
            "knowledge_label": self.knowledge_label,
            "choice": self.choice,
            "salt": self.salt,
            "num_tokens": self.num_tokens,
            "num_votes": self.num_votes,
            "num_knw": self.num_knw,
            "commit_end": self.commit_end,
            "reveal_end": self.reveal_end,
            "resolved": self.resolved,
            "demo_choices": list(self.demo_choices),
            "demo_salts": list(self.demo_salts),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActiveVote":
        return cls(
            id=_int(data, "id"),
            knw_vote_id=_int(data, "knw_vote_id"),
            knowledge_label=_str(data, "knowledge_label"),
            choice=_int(data, "choice"),
            salt=_int(data, "salt"),
            num_tokens=_int(data, "num_tokens"),
            num_votes=_int(data, "num_votes"),
            num_knw=_int(data, "num_knw"),
            commit_end=_int(data, "commit_end"),
            reveal_end=_int(data, "reveal_end"),
            resolved=_bool(data, "resolved"),
            demo_choices=_list(data, "demo_choices", int),
            demo_salts=_list(data, "demo_salts", int),
        )


@dataclass
class RepositoryEntry:
    """A repository tracked by the client."""
    name: str = ""
    provider: str = ""
    knowledge_labels: List[str] = field(default_factory=list)
    active_votes: List[ActiveVote] = field(default_factory=list)

    def add_vote(self, vote: ActiveVote) -> ActiveVote:
        self.active_votes.append(vote)
        return vote

    def open_votes(self) -> List[ActiveVote]:
        """Votes that have not been resolved yet."""
        return [v for v in self.active_votes if not v.resolved]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "provider": self.provider,
            "knowledge_labels": list(self.knowledge_labels),
            "active_votes": [v.to_dict() for v in self.active_votes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RepositoryEntry":
        return cls(
            name=_str(data, "name"),
            provider=_str(data, "provider"),
            knowledge_labels=_list(data, "knowledge_labels", str),
            active_votes=[ActiveVote.from_dict(v) for v in _list(data, "active_votes", dict)],
        )


@dataclass
class KeyMaterial:
    """
    Account identity: the address and the *encrypted* private key.

    ``private_key`` holds the hex encoding of the cipher blob, never the
    plaintext key. ``kdf`` names the scheme the blob was written with;
    files from older clients have no such field and use "sha256".
    """
    address: str = ""
    private_key: str = ""
    kdf: str = "sha256"

    def is_valid(self) -> bool:
        return len(self.address) == ADDRESS_LENGTH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "private_key": self.private_key,
            "address": self.address,
            "kdf": self.kdf,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyMaterial":
        return cls(
            address=_str(data, "address"),
            private_key=_str(data, "private_key"),
            kdf=_str(data, "kdf", "sha256"),
        )


@dataclass
class ConfigRecord:
    """The whole persisted client configuration."""
    dit_coordinator: str = ""
    knw_voting: str = ""
    knw_token: str = ""
    dit_token: str = ""
    currency: str = ""
    demo_mode_active: bool = False
    ethereum_keys: KeyMaterial = field(default_factory=KeyMaterial)
    repositories: List[RepositoryEntry] = field(default_factory=list)

    def find_repository(self, name: str) -> Optional[RepositoryEntry]:
        for repo in self.repositories:
            if repo.name == name:
                return repo
        return None

    def add_repository(self, entry: RepositoryEntry) -> RepositoryEntry:
        """Append a repository; names must be unique."""
        if self.find_repository(entry.name) is not None:
            raise ValidationError(f"Repository already tracked: {entry.name}")
        self.repositories.append(entry)
        return entry

    def validate(self) -> None:
        """Raise ValidationError unless the address has the expected length."""
        if not self.ethereum_keys.is_valid():
            raise ValidationError(
                f"Invalid config file: address must be {ADDRESS_LENGTH} characters, "
                f"got {len(self.ethereum_keys.address)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dit_coordinator": self.dit_coordinator,
            "knw_voting": self.knw_voting,
            "knw_token": self.knw_token,
            "dit_token": self.dit_token,
            "currency": self.currency,
            "demo_mode_active": self.demo_mode_active,
            "ethereum_keys": self.ethereum_keys.to_dict(),
            "repositories": [r.to_dict() for r in self.repositories],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigRecord":
        return cls(
            dit_coordinator=_str(data, "dit_coordinator"),
            knw_voting=_str(data, "knw_voting"),
            knw_token=_str(data, "knw_token"),
            dit_token=_str(data, "dit_token"),
            currency=_str(data, "currency"),
            demo_mode_active=_bool(data, "demo_mode_active"),
            ethereum_keys=KeyMaterial.from_dict(_object(data, "ethereum_keys")),
            repositories=[RepositoryEntry.from_dict(r) for r in _list(data, "repositories", dict)],
        )

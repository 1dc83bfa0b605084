"""
Merkle tree for airdrop allocations.

Leaves commit to ``(address, amount)``. Parent nodes hash the sorted pair of
children, matching OpenZeppelin's ``MerkleProof.verify``, so a proof is just
the ordered list of sibling hashes from leaf to root. A node without a
sibling is promoted to the next level unchanged.

Two leaf encodings are supported:

- ``packed``:   keccak256(abi.encodePacked(address, uint256))
- ``standard``: keccak256(bytes.concat(keccak256(abi.encode(address, uint256))))
  (OpenZeppelin StandardMerkleTree)
"""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Mapping, Sequence

from eth_abi import encode
from eth_abi.packed import encode_packed
from eth_utils import is_address, keccak, to_checksum_address

from ..errors import ConfigurationError

__all__ = [
    "MerkleTree",
    "hash_leaf",
    "hash_pair",
    "verify_proof",
    "load_allocations",
]


def hash_leaf(address: str, amount: int, encoding: str = "packed") -> bytes:
    """Leaf hash for ``address`` claiming ``amount``."""
    address = to_checksum_address(address)
    if encoding == "packed":
        return keccak(encode_packed(["address", "uint256"], [address, amount]))
    if encoding == "standard":
        return keccak(keccak(encode(["address", "uint256"], [address, amount])))
    raise ValueError(f"Unknown leaf encoding: {encoding}")


def hash_pair(a: bytes, b: bytes) -> bytes:
    """Commutative parent hash: children are sorted before hashing."""
    return keccak(a + b) if a < b else keccak(b + a)


def verify_proof(proof: Sequence[bytes], root: bytes, leaf: bytes) -> bool:
    computed = leaf
    for sibling in proof:
        computed = hash_pair(computed, sibling)
    return computed == root


class MerkleTree:
    """Merkle tree over an ``{address: amount}`` allocation."""

    def __init__(self, allocations: Mapping[str, int], encoding: str = "packed"):
        if not allocations:
            raise ValueError("Cannot build a Merkle tree from an empty allocation")

        self.encoding = encoding
        self.allocations: dict[str, int] = {}
        for address, amount in allocations.items():
            if not is_address(address):
                raise ValueError(f"Invalid address in allocation: {address}")
            amount = int(amount)
            if amount < 0 or amount >= 2**256:
                raise ValueError(f"Amount out of uint256 range for {address}: {amount}")
            checksum = to_checksum_address(address)
            if checksum in self.allocations:
                raise ValueError(f"Duplicate address in allocation: {checksum}")
            self.allocations[checksum] = amount

        self.addresses = list(self.allocations)
        self.leaves = [hash_leaf(a, self.allocations[a], encoding) for a in self.addresses]
        self.layers: list[list[bytes]] = self._build_layers(self.leaves)

    @staticmethod
    def _build_layers(leaves: list[bytes]) -> list[list[bytes]]:
        layers = [leaves[:]]
        current = leaves
        while len(current) > 1:
            nxt = []
            for i in range(0, len(current), 2):
                if i + 1 < len(current):
                    nxt.append(hash_pair(current[i], current[i + 1]))
                else:
                    nxt.append(current[i])
            layers.append(nxt)
            current = nxt
        return layers

    @property
    def root(self) -> bytes:
        return self.layers[-1][0]

    @property
    def root_hex(self) -> str:
        return "0x" + self.root.hex()

    def leaf_for(self, address: str) -> bytes:
        address = to_checksum_address(address)
        if address not in self.allocations:
            raise KeyError(f"{address} is not in the allocation")
        return self.leaves[self.addresses.index(address)]

    def proof_for(self, address: str) -> list[bytes]:
        """Sibling hashes from the leaf of ``address`` up to the root."""
        self.leaf_for(address)
        index = self.addresses.index(to_checksum_address(address))
        proof: list[bytes] = []
        for layer in self.layers[:-1]:
            sibling = index ^ 1
            if sibling < len(layer):
                proof.append(layer[sibling])
            index //= 2
        return proof

    def amount_for(self, address: str) -> int:
        return self.allocations[to_checksum_address(address)]

    def verify(self, address: str, amount: int, proof: Sequence[bytes]) -> bool:
        return verify_proof(proof, self.root, hash_leaf(address, amount, self.encoding))

    def to_json(self) -> dict[str, Any]:
        """Serializable root + per-address proofs."""
        return {
            "merkle_root": self.root_hex,
            "leaf_encoding": self.encoding,
            "token_total": str(sum(self.allocations.values())),
            "claims": {
                address: {
                    "index": i,
                    "amount": str(self.allocations[address]),
                    "proof": ["0x" + p.hex() for p in self.proof_for(address)],
                }
                for i, address in enumerate(self.addresses)
            },
        }


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    seen: dict[str, Any] = {}
    for key, value in pairs:
        if key in seen:
            raise ConfigurationError(f"Duplicate key in allocation file: {key}")
        seen[key] = value
    return seen


def _add_allocation(allocations: dict[str, int], address: str, amount: Any, path: Path) -> None:
    address = str(address).strip()
    if not is_address(address):
        raise ConfigurationError(f"Invalid address in {path}: {address}")
    try:
        value = int(amount)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid amount for {address} in {path}: {amount!r}")
    checksum = to_checksum_address(address)
    if checksum in allocations:
        raise ConfigurationError(f"Duplicate address in {path}: {checksum}")
    allocations[checksum] = value


def load_allocations(path: Path) -> dict[str, int]:
    """
    Read an allocation file.

    Accepts a CSV with ``address,amount`` columns or a JSON object mapping
    address to amount (optionally nested under ``"claims"``). Addresses are
    returned checksummed; an address listed twice is an error.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Allocation file not found: {path}")

    allocations: dict[str, int] = {}
    if path.suffix.lower() == ".csv":
        with open(path, newline="") as f:
            reader = csv.DictReader(f)
            if not reader.fieldnames or not {"address", "amount"} <= set(reader.fieldnames):
                raise ConfigurationError(f"{path} needs 'address' and 'amount' columns, got {reader.fieldnames}")
            for row in reader:
                _add_allocation(allocations, row["address"], row["amount"], path)
        return allocations

    try:
        with open(path) as f:
            data = json.load(f, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Cannot parse allocation file {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must hold a JSON object of address -> amount")
    if "claims" in data:
        data = data["claims"]
    for address, value in data.items():
        _add_allocation(allocations, address, value.get("amount") if isinstance(value, dict) else value, path)
    return allocations

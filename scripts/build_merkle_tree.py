#!/usr/bin/env python3
"""
Build the Merkle root and per-address proofs for an airdrop allocation.

Usage:
    python scripts/build_merkle_tree.py allocations.csv
    python scripts/build_merkle_tree.py allocations.json --encoding standard --out merkle.json

The allocation file is either a CSV with ``address,amount`` columns or a JSON
object mapping address to amount (smallest token unit).
"""

import argparse
import json
import sys
from pathlib import Path

from timelock_harness.errors import ConfigurationError
from timelock_harness.helpers.merkle import MerkleTree, load_allocations


def main() -> int:
    parser = argparse.ArgumentParser(description="Build Merkle root + proofs for an allocation")
    parser.add_argument("allocations", type=Path, help="CSV or JSON allocation file")
    parser.add_argument("--encoding", choices=["packed", "standard"], default="packed", help="Leaf encoding")
    parser.add_argument("--out", type=Path, help="Write JSON here instead of stdout")
    args = parser.parse_args()

    try:
        tree = MerkleTree(load_allocations(args.allocations), encoding=args.encoding)
    except (ConfigurationError, ValueError) as e:
        print(e, file=sys.stderr)
        return 1
    payload = tree.to_json()

    if args.out:
        args.out.write_text(json.dumps(payload, indent=2) + "\n")
        print(f"Merkle root: {tree.root_hex}")
        print(f"Wrote {len(payload['claims'])} proofs to {args.out}")
    else:
        print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Hybrid hash combining a WOTS+-style key chain with a binary hash tree.

The digest is SHA-512 over the message followed by the root of a hash tree
whose leaves are the public key of a one-time-signature chain derived from a
random seed. Without an explicit seed every call produces a different digest.
This module is independent of the canonicalizing transform.
"""

import hashlib
import secrets
from typing import List, Optional

HASH_ALGORITHM = 2  # 2 = SHA-512
TREE_HEIGHT = 10

N = 32  # Seed length and number of key chains
W = 16  # Hash iterations per public key element


def _sha(data: bytes = b""):
    return hashlib.new(f"sha{HASH_ALGORITHM * 256}", data)


def hash_function(data: bytes) -> bytes:
    return _sha(data).digest()


def generate_secret_key(seed: bytes) -> List[bytes]:
    """
    Derive the secret key: element i is H(seed || i) for i in 0..N-1.

    Args:
        seed: Random initial value

    Returns:
        N digests
    """
    secret_key = []
    for i in range(N):
        digest = _sha(seed)
        digest.update(bytes([i]))
        secret_key.append(digest.digest())
    return secret_key


def generate_public_key(secret_key: List[bytes]) -> List[bytes]:
    """Hash the first N bytes of each secret key element W times."""
    public_key = []
    for element in secret_key:
        current = element[:N]
        for _ in range(W):
            current = hash_function(current)
        public_key.append(current)
    return public_key


def build_merkle_root(leaves: List[bytes]) -> bytes:
    """
    Reduce leaves to a single root over exactly TREE_HEIGHT levels.

    Pairs are hashed as H(left || right); an unpaired last node is carried up
    unchanged. Once a level has a single node it stays the root.

    Example:
        >>> build_merkle_root([b"a"]) == b"a"
        True
    """
    if not leaves:
        raise ValueError("Merkle tree needs at least one leaf")

    level = list(leaves)
    for _ in range(TREE_HEIGHT):
        next_level = []
        for i in range(0, len(level), 2):
            if i + 1 < len(level):
                next_level.append(hash_function(level[i] + level[i + 1]))
            else:
                next_level.append(level[i])
        level = next_level

    return level[0]


def hash_bytes(message: bytes, seed: Optional[bytes] = None) -> bytes:
    """
    Hash a message with the hybrid construction.

    Args:
        message: Data to hash
        seed: Initial value for the key chain; a fresh random N-byte seed
            when omitted

    Returns:
        64-byte SHA-512 digest
    """
    if seed is None:
        seed = secrets.token_bytes(N)

    secret_key = generate_secret_key(seed)
    public_key = generate_public_key(secret_key)
    root = build_merkle_root(public_key)

    digest = _sha(message)
    digest.update(root)
    return digest.digest()


def hash_to_string(digest: bytes) -> str:
    return digest.hex()


def hash_text(message: str, seed: Optional[bytes] = None) -> str:
    """Hash the UTF-8 encoding of ``message`` and return lowercase hex."""
    return hash_to_string(hash_bytes(message.encode("utf-8"), seed))

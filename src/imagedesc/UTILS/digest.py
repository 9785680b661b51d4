"""
Digest calculation and validation.
"""
import hashlib
import re
from typing import Union

# algorithm:hex, as used for diff IDs and image IDs
DIGEST_PATTERN = re.compile(r"^[a-z0-9]+(?:[.+_-][a-z0-9]+)*:[a-fA-F0-9]{32,}$")

# shake_* digests need an explicit length
SUPPORTED_ALGORITHMS = frozenset(
    name for name in hashlib.algorithms_guaranteed if not name.startswith("shake_")
)


def calculate_digest(data: Union[bytes, bytearray], algorithm: str = "sha256") -> str:
    """
    Calculates the content digest of a blob.

    For a descriptor's raw bytes this is the conventional image ID.

    Args:
        data: Data to hash
        algorithm: Hash algorithm (default: sha256)

    Returns:
        Digest string in format "algorithm:hex"
    """
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError("Data must be bytes or bytearray")

    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return f"{algorithm}:{hasher.hexdigest()}"


def validate_digest(digest: str) -> bool:
    """Checks that a digest is of the form ``algorithm:hex``."""
    if not isinstance(digest, str):
        return False
    return DIGEST_PATTERN.match(digest) is not None

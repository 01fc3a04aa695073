"""Content hashing utilities using BLAKE2b."""

import hashlib
from pathlib import Path


DIGEST_SIZE = 32


def hash_bytes(data: bytes) -> str:
    """
    Hash bytes using BLAKE2b.

    Args:
        data: Bytes to hash

    Returns:
        Hash string in format "blake2b:hexdigest"
    """
    h = hashlib.blake2b(data, digest_size=DIGEST_SIZE)
    return f"blake2b:{h.hexdigest()}"


def hash_file(path: str | Path, chunk_size: int = 65536) -> str:
    """
    Hash a file using BLAKE2b.

    Args:
        path: Path to file
        chunk_size: Read chunk size in bytes

    Returns:
        Hash string in format "blake2b:hexdigest"
    """
    h = hashlib.blake2b(digest_size=DIGEST_SIZE)
    path = Path(path)

    with path.open("rb") as f:
        while chunk := f.read(chunk_size):
            h.update(chunk)

    return f"blake2b:{h.hexdigest()}"

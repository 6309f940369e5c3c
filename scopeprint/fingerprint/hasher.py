"""
FingerprintHasher -- Canonical string to hex digest

Only cryptographic hashlib algorithms are accepted: two structurally
different fragments must not plausibly collide.
"""

import hashlib
from typing import Optional

from ..core.errors import ConfigError

SUPPORTED_ALGORITHMS = ("sha256", "sha384", "sha512", "sha3_256", "blake2b")
DEFAULT_ALGORITHM = "sha256"


class FingerprintHasher:
    """
    Hashes canonical token strings.

    Example:
        hasher = FingerprintHasher()
        hasher.hash("class_declaration identifier class_body")
        hasher.hash(canonical, context="utf-8")
    """

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM, encoding: str = "utf-8"):
        """
        Args:
            algorithm: One of SUPPORTED_ALGORITHMS
            encoding: Text encoding applied before hashing

        Raises:
            ConfigError: If the algorithm is not supported
        """
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigError(
                f"Unsupported hash algorithm '{algorithm}'. Valid: {', '.join(SUPPORTED_ALGORITHMS)}"
            )
        self.algorithm = algorithm
        self.encoding = encoding

    def hash(self, canonical: str, context: Optional[str] = None) -> str:
        """
        Digest a canonical string, optionally prefixed by a context line.

        Args:
            canonical: Output of CanonicalTokenStream.text()
            context: Discriminator such as the module name

        Returns:
            Lowercase hex digest
        """
        payload = canonical if context is None else f"{context}\n{canonical}"
        return hashlib.new(self.algorithm, payload.encode(self.encoding)).hexdigest()

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.algorithm).digest_size

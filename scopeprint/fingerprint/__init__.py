"""
Fingerprint -- Structural scoping and content-stable hashing

- selectors: ScopeKind variants and select_scope()
- categories: warning category -> ScopeKind routing
- canonical: kind-only token stream of a fragment
- hasher: cryptographic digest of the stream
- engine: batch pipeline with per-file failure isolation
"""

from .selectors import ScopeKind, ScopeFragment, select_scope
from .categories import CategoryMap, BUILTIN_CATEGORIES
from .canonical import CanonicalTokenStream, canonicalize
from .hasher import FingerprintHasher, SUPPORTED_ALGORITHMS
from .engine import FingerprintEngine, FingerprintReport, FileDiagnostic, ScopeInspection

__all__ = [
    'ScopeKind', 'ScopeFragment', 'select_scope',
    'CategoryMap', 'BUILTIN_CATEGORIES',
    'CanonicalTokenStream', 'canonicalize',
    'FingerprintHasher', 'SUPPORTED_ALGORITHMS',
    'FingerprintEngine', 'FingerprintReport', 'FileDiagnostic', 'ScopeInspection',
]

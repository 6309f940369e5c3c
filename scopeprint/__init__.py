"""
scopeprint -- Content-stable fingerprints for static-analysis warnings

Attaches to every warning a hash of the syntactic unit it is about
(method, class, field block, statement window, package or file), so a
warning keeps its identity across blank-line insertions, renames and
comment edits. Two scans are then compared to classify each warning as
NEW, OUTSTANDING or FIXED.

Usage:
    scopeprint fingerprint checkstyle-result.xml --parser checkstyle -o current.json
    scopeprint compare baseline.json current.json
    scopeprint scope src/Foo.java 42 --category MagicNumber
    scopeprint config
"""

__version__ = "0.1.0"

# Core layer (data)
from .core.errors import (
    ErrorKind, ScopeprintError, ParseError, MissingScopeError,
    InvalidAnchorError, MalformedFilterRegexError, ConfigError,
)
from .core.issues import Severity, Issue, Issues
from .core.filter import IssueFilter, IssueProperty
from .core.matcher import IssueMatcher, Classification, ClassificationResult, MatchReport

# Fingerprinting
from .fingerprint import (
    ScopeKind, ScopeFragment, select_scope, CategoryMap,
    CanonicalTokenStream, canonicalize, FingerprintHasher,
    FingerprintEngine, FingerprintReport, FileDiagnostic,
)

# Configuration
from .config import Config, ConfigManager, get_config

__all__ = [
    '__version__',
    'ErrorKind', 'ScopeprintError', 'ParseError', 'MissingScopeError',
    'InvalidAnchorError', 'MalformedFilterRegexError', 'ConfigError',
    'Severity', 'Issue', 'Issues',
    'IssueFilter', 'IssueProperty',
    'IssueMatcher', 'Classification', 'ClassificationResult', 'MatchReport',
    'ScopeKind', 'ScopeFragment', 'select_scope', 'CategoryMap',
    'CanonicalTokenStream', 'canonicalize', 'FingerprintHasher',
    'FingerprintEngine', 'FingerprintReport', 'FileDiagnostic',
    'Config', 'ConfigManager', 'get_config',
]

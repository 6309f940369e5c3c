"""
FingerprintEngine -- Attach fingerprints to a batch of issues

Pipeline per file:
    source text -> SyntaxTree -> (per issue) scope -> canonical stream -> digest

Files are independent and run as separate orchestrator tasks; all
issues of one file share the same read-only tree. Failures never drop
an issue:
- a file that cannot be read, parsed or given a grammar marks all its
  issues PARSE_ERROR and adds a FileDiagnostic
- an issue whose anchor or scope is unusable is marked INVALID_ANCHOR
  or MISSING_SCOPE

Usage:
    engine = FingerprintEngine.from_config(config, source_root=Path("."))
    report = engine.fingerprint(issues)
    for diagnostic in report.diagnostics:
        print(diagnostic.file_name, diagnostic.message)
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

import xxhash

from ..core.errors import ErrorKind, InvalidAnchorError, MissingScopeError, ParseError
from ..core.issues import Issue, Issues
from ..core.parsing.tree import SyntaxTree
from .canonical import CanonicalTokenStream, canonicalize
from .categories import CategoryMap
from .hasher import FingerprintHasher
from .selectors import ScopeFragment, ScopeKind, select_scope

if TYPE_CHECKING:
    from ..config import Config
    from ..core.parsing.provider import TreeSitterProvider
    from ..orchestrator import TaskOrchestrator

logger = logging.getLogger(__name__)

TREE_CACHE_SIZE = 64
CONTEXT_SEPARATOR = "|"


@dataclass(frozen=True)
class FileDiagnostic:
    """A file whose issues could not be fingerprinted at all."""
    file_name: str
    kind: ErrorKind
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file_name": self.file_name, "kind": self.kind.value, "message": self.message}


@dataclass
class FingerprintReport:
    """Fingerprinted issues (input order preserved) plus file diagnostics."""
    issues: Issues
    diagnostics: List[FileDiagnostic] = field(default_factory=list)

    @property
    def fingerprinted(self) -> int:
        return sum(1 for issue in self.issues if issue.matchable)

    @property
    def unmatchable(self) -> int:
        return len(self.issues) - self.fingerprinted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "issues": len(self.issues),
                "fingerprinted": self.fingerprinted,
                "unmatchable": self.unmatchable,
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "issues": self.issues.to_dicts(),
        }


@dataclass(frozen=True)
class ScopeInspection:
    """Everything computed for one anchor: scope, canonical stream, digest."""
    fragment: ScopeFragment
    stream: CanonicalTokenStream
    fingerprint: Optional[str]


FileGroup = Tuple[str, List[Tuple[int, Issue]]]
FileOutcome = Tuple[List[Tuple[int, Issue]], Optional[FileDiagnostic]]


class FingerprintEngine:
    """
    Computes fingerprints for issues, one task per file.

    Collaborators are injectable so tests can supply hand-built trees
    and run without threads.
    """

    def __init__(
        self,
        provider: Optional['TreeSitterProvider'] = None,
        categories: Optional[CategoryMap] = None,
        hasher: Optional[FingerprintHasher] = None,
        context_fields: Sequence[str] = (),
        source_root: Optional[Path] = None,
        orchestrator: Optional['TaskOrchestrator'] = None,
    ):
        """
        Args:
            provider: Syntax tree provider; defaults to TreeSitterProvider
            categories: Category to scope routing; defaults to built-ins
            hasher: Digest function; defaults to sha256
            context_fields: Issue attributes mixed into every digest
            source_root: Directory issue file names are resolved against
            orchestrator: Task runner; defaults to the global orchestrator
        """
        if provider is None:
            from ..core.parsing.provider import TreeSitterProvider
            provider = TreeSitterProvider()
        self.provider = provider
        self.categories = categories or CategoryMap()
        self.hasher = hasher or FingerprintHasher()
        self.context_fields = tuple(context_fields)
        self.source_root = Path(source_root) if source_root else None
        self._orchestrator = orchestrator

        self._trees: 'OrderedDict[str, SyntaxTree]' = OrderedDict()
        self._trees_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: 'Config',
        source_root: Optional[Path] = None,
        provider: Optional['TreeSitterProvider'] = None,
        orchestrator: Optional['TaskOrchestrator'] = None,
    ) -> 'FingerprintEngine':
        """Build an engine from the fingerprint and scopes config sections."""
        return cls(
            provider=provider,
            categories=CategoryMap.from_settings(config.scopes),
            hasher=FingerprintHasher(config.fingerprint.algorithm, config.fingerprint.encoding),
            context_fields=config.fingerprint.context_fields,
            source_root=source_root,
            orchestrator=orchestrator,
        )

    @property
    def orchestrator(self) -> 'TaskOrchestrator':
        if self._orchestrator is None:
            from ..orchestrator import get_orchestrator
            self._orchestrator = get_orchestrator()
        return self._orchestrator

    # =========================================================================
    # Batch
    # =========================================================================

    def fingerprint(self, issues: Issues, sources: Optional[Mapping[str, str]] = None) -> FingerprintReport:
        """
        Fingerprint every issue in a collection.

        Args:
            issues: Issues to fingerprint
            sources: Optional file name -> source text; files not listed
                are read from disk relative to source_root

        Returns:
            FingerprintReport whose issues are in the input order
        """
        groups: List[FileGroup] = [
            (file_name, [(i, issues[i]) for i in indices])
            for file_name, indices in issues.group_by_file().items()
        ]

        def run(group: FileGroup) -> FileOutcome:
            file_name = group[0]
            source = sources.get(file_name) if sources is not None else None
            return self._fingerprint_file(group, source)

        outcomes = self.orchestrator.map_parallel(run, groups)

        slots: List[Optional[Issue]] = [None] * len(issues)
        diagnostics: List[FileDiagnostic] = []
        for done, diagnostic in outcomes:
            for index, issue in done:
                slots[index] = issue
            if diagnostic is not None:
                diagnostics.append(diagnostic)

        report = FingerprintReport(Issues(slots), diagnostics)
        logger.info(
            "Fingerprinted %d of %d issues in %d files (%d file diagnostics)",
            report.fingerprinted, len(issues), len(groups), len(diagnostics),
        )
        return report

    def _fingerprint_file(self, group: FileGroup, source: Optional[str]) -> FileOutcome:
        file_name, members = group
        try:
            if source is None:
                source = self.read_source(file_name)
            tree = self.tree_for(file_name, source)
        except ParseError as e:
            return self._file_failed(members, file_name, e.message)
        except Exception as e:
            return self._file_failed(members, file_name, f"{type(e).__name__}: {e}")

        return [(i, self.fingerprint_issue(tree, issue)) for i, issue in members], None

    def _file_failed(self, members: Sequence[Tuple[int, Issue]], file_name: str, message: str) -> FileOutcome:
        logger.warning("Cannot fingerprint %s: %s", file_name, message)
        marked = [(i, issue.as_unmatchable(ErrorKind.PARSE_ERROR)) for i, issue in members]
        return marked, FileDiagnostic(file_name, ErrorKind.PARSE_ERROR, message)

    # =========================================================================
    # Single file / issue
    # =========================================================================

    def read_source(self, file_name: str) -> str:
        """
        Read a source file.

        Raises:
            ParseError: If the file cannot be read or decoded
        """
        if not file_name:
            raise ParseError("Issue has no file name")
        path = Path(file_name)
        if self.source_root is not None and not path.is_absolute():
            path = self.source_root / path
        try:
            return path.read_text(encoding=self.hasher.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {path}: {e}", file_name=file_name) from e

    def tree_for(self, file_name: str, source: str) -> SyntaxTree:
        """
        Parse a file, reusing the tree for identical content.

        Raises:
            ParseError: If the file cannot be parsed
        """
        key = xxhash.xxh64(f"{Path(file_name).suffix.lower()}\0{source}".encode("utf-8")).hexdigest()
        with self._trees_lock:
            tree = self._trees.get(key)
            if tree is not None:
                self._trees.move_to_end(key)
                return tree

        tree = self.provider.parse_file(Path(file_name), source)

        with self._trees_lock:
            self._trees[key] = tree
            while len(self._trees) > TREE_CACHE_SIZE:
                self._trees.popitem(last=False)
        return tree

    def fingerprint_issue(self, tree: SyntaxTree, issue: Issue) -> Issue:
        """Return the issue with a fingerprint, or marked unmatchable."""
        kind = self.categories.scope_for(issue)
        try:
            digest = self.fingerprint_at(tree, issue.line, kind, self.context_for(issue))
        except (InvalidAnchorError, MissingScopeError) as e:
            logger.debug("%s:%d: %s", issue.file_name, issue.line, e.message)
            return issue.as_unmatchable(e.kind)
        return issue.with_fingerprint(digest)

    def fingerprint_at(self, tree: SyntaxTree, line: int, kind: ScopeKind, context: Optional[str] = None) -> str:
        """
        Fingerprint of the scope around one line.

        Raises:
            InvalidAnchorError: If line is outside the file
            MissingScopeError: If no scope of any granularity exists
        """
        inspection = self.inspect(tree, line, kind, context)
        if inspection.fingerprint is None:
            raise MissingScopeError(f"No {kind.value} scope at line {line}")
        return inspection.fingerprint

    def inspect(self, tree: SyntaxTree, line: int, kind: ScopeKind, context: Optional[str] = None) -> ScopeInspection:
        """
        Select, canonicalize and hash the scope around one line.

        Raises:
            InvalidAnchorError: If line is outside the file
        """
        fragment = select_scope(tree, line, kind)
        stream = canonicalize(tree, fragment)
        digest = None if fragment.is_missing else self.hasher.hash(stream.text(), context)
        return ScopeInspection(fragment, stream, digest)

    def context_for(self, issue: Issue) -> Optional[str]:
        """Context discriminator built from the configured fields."""
        if not self.context_fields:
            return None
        values = [
            self.hasher.encoding if name == "encoding" else str(getattr(issue, name, ""))
            for name in self.context_fields
        ]
        return CONTEXT_SEPARATOR.join(values)

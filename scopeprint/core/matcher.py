"""
IssueMatcher -- Classify issues across two scans

Given a reference scan R and a current scan C:
- a current issue whose (file, category, fingerprint) matches an
  unconsumed reference issue is OUTSTANDING and consumes that issue
- any other current issue is NEW
- reference issues left unconsumed are FIXED

Candidates are consumed in reference order, so when several reference
issues share a fingerprint the first one wins. Issues without a
fingerprint never match: current ones are NEW, reference ones FIXED.

Matching is keyed by file name. An issue in a renamed file therefore
shows up as one NEW and one FIXED entry.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Tuple

from .issues import Issue, Issues

logger = logging.getLogger(__name__)


class Classification(Enum):
    """Outcome of matching one issue."""
    NEW = "new"
    OUTSTANDING = "outstanding"
    FIXED = "fixed"


@dataclass(frozen=True)
class ClassificationResult:
    """
    Classification of one issue.

    For OUTSTANDING results `issue` is the current issue and `paired`
    the reference issue it consumed. NEW and FIXED have no pair.
    """
    issue: Issue
    status: Classification
    paired: Optional[Issue] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.issue.to_dict()
        data["status"] = self.status.value
        if self.paired is not None:
            data["reference_line"] = self.paired.line
        return data


@dataclass
class MatchReport:
    """All classification results: current scan order, then FIXED."""
    results: List[ClassificationResult]

    def _with_status(self, status: Classification) -> List[ClassificationResult]:
        return [r for r in self.results if r.status == status]

    @property
    def new(self) -> List[ClassificationResult]:
        return self._with_status(Classification.NEW)

    @property
    def outstanding(self) -> List[ClassificationResult]:
        return self._with_status(Classification.OUTSTANDING)

    @property
    def fixed(self) -> List[ClassificationResult]:
        return self._with_status(Classification.FIXED)

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in Classification}
        for result in self.results:
            counts[result.status.value] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.counts(),
            "issues": [result.to_dict() for result in self.results],
        }


MatchKey = Tuple[str, str, str]


def _key(issue: Issue) -> MatchKey:
    return (issue.file_name, issue.category, issue.fingerprint)


class IssueMatcher:
    """
    Stateless matcher; one call to classify() per comparison.

    Example:
        report = IssueMatcher().classify(reference, current)
        for result in report.new:
            print(result.issue.file_name, result.issue.line)
    """

    def classify(self, reference: Issues, current: Issues) -> MatchReport:
        """
        Classify current issues against a reference scan.

        Args:
            reference: Issues from the previous scan
            current: Issues from the latest scan

        Returns:
            MatchReport with NEW and OUTSTANDING results in current
            order, followed by FIXED results in reference order
        """
        pools: Dict[MatchKey, Deque[int]] = {}
        for index, issue in enumerate(reference):
            if issue.matchable:
                pools.setdefault(_key(issue), deque()).append(index)

        consumed = [False] * len(reference)
        results: List[ClassificationResult] = []

        for issue in current:
            pool = pools.get(_key(issue)) if issue.matchable else None
            if pool:
                ref_index = pool.popleft()
                consumed[ref_index] = True
                results.append(ClassificationResult(
                    issue=issue,
                    status=Classification.OUTSTANDING,
                    paired=reference[ref_index],
                ))
            else:
                results.append(ClassificationResult(issue=issue, status=Classification.NEW))

        for index, issue in enumerate(reference):
            if not consumed[index]:
                results.append(ClassificationResult(issue=issue, status=Classification.FIXED))

        report = MatchReport(results)
        logger.info(
            "Classified %d current against %d reference issues: %s",
            len(current), len(reference), report.counts(),
        )
        return report

"""
Consistency checks between an image's build history and its layer chain.

Decoding never runs these checks; callers that need a self-consistent
descriptor ask for them explicitly.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from ..exceptions import InconsistentHistory
from ..MODELS.image import Image
from .digest import validate_digest

logger = logging.getLogger(__name__)


@dataclass
class ConsistencyReport:
    """Result of comparing an image's history with its diff IDs."""
    non_empty_history: int
    diff_ids: int
    invalid_diff_ids: List[str] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        return self.non_empty_history == self.diff_ids


def check_consistency(image: Image) -> ConsistencyReport:
    """
    Counts the history entries that produced a layer and the diff IDs of the
    root filesystem, and lists diff IDs that are not well-formed digests.
    """
    diff_ids = image.diff_ids
    report = ConsistencyReport(
        non_empty_history=len(image.layer_history),
        diff_ids=len(diff_ids),
        invalid_diff_ids=[d for d in diff_ids if not validate_digest(d)],
    )
    if not report.consistent:
        logger.debug(
            "History/layer mismatch: %d non-empty entries, %d diff IDs",
            report.non_empty_history, report.diff_ids,
        )
    return report


def ensure_consistent(image: Image) -> ConsistencyReport:
    """
    Like ``check_consistency`` but raises InconsistentHistory on a mismatch.
    """
    report = check_consistency(image)
    if not report.consistent:
        raise InconsistentHistory(report.non_empty_history, report.diff_ids)
    return report

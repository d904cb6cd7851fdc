# ============================================================================
# src/pdf_chat/classifiers/document_classifier.py
# ============================================================================
"""
Document Classifier

Decides whether extracted document text is a medical / blood-test report.

Heuristic:
1. Lower-case the text
2. Count the distinct report keywords that appear anywhere in it
   (substring match, each keyword counted at most once)
3. Medical iff the count reaches the threshold

The verdict selects the system prompt used for the whole conversation
about that document. Substring matching over-matches (e.g. "rbc" inside
an unrelated token); such false positives are accepted.
"""

from typing import Iterable, List, Optional
import logging

from ..constants import MEDICAL_KEYWORDS, MEDICAL_KEYWORD_THRESHOLD


class DocumentClassifier:
    """
    Keyword-threshold classifier for medical reports.

    Pure and total: any string (including empty) yields a boolean, and
    the same text always yields the same verdict.
    """

    def __init__(
        self,
        keywords: Iterable[str] = MEDICAL_KEYWORDS,
        threshold: int = MEDICAL_KEYWORD_THRESHOLD
    ):
        # dict.fromkeys de-duplicates while keeping declaration order
        self.keywords = tuple(dict.fromkeys(k.lower() for k in keywords))
        self.threshold = threshold
        self.logger = logging.getLogger(__name__)

    def get_name(self) -> str:
        return "DocumentClassifier"

    def matched_keywords(self, text: Optional[str]) -> List[str]:
        """Return the distinct keywords found in text, in keyword-list order."""
        if not text:
            return []
        lowered = text.lower()
        return [keyword for keyword in self.keywords if keyword in lowered]

    def classify(self, text: Optional[str]) -> bool:
        """
        Return True if text looks like a medical / blood-test report.

        Args:
            text: Raw extracted document text, possibly empty

        Returns:
            True iff at least `threshold` distinct keywords occur in text
        """
        matches = self.matched_keywords(text)
        is_medical = len(matches) >= self.threshold

        self.logger.debug(
            f"Classified document ({len(text or '')} chars): "
            f"{len(matches)} keyword(s) matched, medical={is_medical}"
        )
        return is_medical


_default_classifier = DocumentClassifier()


def classify(text: Optional[str]) -> bool:
    """Classify text with the default keyword list and threshold."""
    return _default_classifier.classify(text)

"""Category resolution for quick entry."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from quickledger.config import QuickEntrySettings, load_settings
from quickledger.domain.entities import CategoryRecord, MatchResult, MatchType
from quickledger.domain.errors import CategoryNotFoundError, DirectoryUnavailableError
from quickledger.utils.similarity import edit_similarity, normalize

if TYPE_CHECKING:
    from quickledger.database.base import CategoryDirectory

logger = logging.getLogger(__name__)


class CategoryResolver:
    """Resolve a free-text phrase against a user's category directory.

    Phases, first success wins:

    1. exact: trimmed, case-insensitive equality with any sub name, then with
       any synonym
    2. containment: a sub name or synonym that appears inside the phrase,
       scored ``len(candidate) / len(phrase)`` and capped per kind; a
       contained sub name scores at least ``contained_name_score``
    3. similarity: edit-distance similarity to a sub name, weighted down

    Phases 2 and 3 only accept scores at or above the threshold.
    """

    def __init__(
        self,
        directory: "CategoryDirectory",
        settings: Optional[QuickEntrySettings] = None,
    ):
        """Initialize category resolver.

        Args:
            directory: Source of per-user categories
            settings: Matching constants (defaults to load_settings())
        """
        self.directory = directory
        self.settings = settings or load_settings()

    def resolve(
        self, category_phrase: str, user_id: str, threshold: Optional[float] = None
    ) -> MatchResult:
        """Resolve a category phrase for a user.

        Args:
            category_phrase: Phrase typed by the user (e.g., "午餐吃太多")
            user_id: Owner of the directory
            threshold: Minimum fuzzy score (defaults to settings.fuzzy_threshold)

        Returns:
            Best MatchResult

        Raises:
            DirectoryUnavailableError: If the directory cannot be read
            CategoryNotFoundError: If no phase matched
            TypeError: If the directory returned something other than records
        """
        categories = self._load(user_id)
        phrase = normalize(category_phrase)
        if threshold is None:
            threshold = self.settings.fuzzy_threshold

        if phrase:
            match = (
                self.match_exact(phrase, categories)
                or self.match_contained(phrase, categories, threshold)
                or self.match_similar(phrase, categories, threshold)
            )
            if match is not None:
                logger.debug(
                    "Resolved %r to %s (%s, %.2f)",
                    category_phrase,
                    match.category.sub_name,
                    match.match_type.value,
                    match.score,
                )
                return match

        logger.warning("No category for %r (user %s)", category_phrase, user_id)
        raise CategoryNotFoundError(category_phrase)

    def _load(self, user_id: str) -> Sequence[CategoryRecord]:
        try:
            categories = self.directory.get_categories(user_id)
        except Exception as exc:
            logger.error("Category directory unavailable for user %s: %s", user_id, exc)
            raise DirectoryUnavailableError(
                f"科目表讀取失敗: {exc}", user_id=user_id
            ) from exc

        if not isinstance(categories, Sequence) or isinstance(categories, (str, bytes)):
            raise TypeError(f"Category directory returned {type(categories).__name__}")
        for record in categories:
            if not isinstance(record, CategoryRecord):
                raise TypeError(
                    f"Category directory returned {type(record).__name__}, expected CategoryRecord"
                )
        return categories

    def match_exact(
        self, phrase: str, categories: Sequence[CategoryRecord]
    ) -> Optional[MatchResult]:
        """Exact phase. ``phrase`` must already be normalized.

        Sub names are checked across the whole directory before any synonym.
        """
        for record in categories:
            if normalize(record.sub_name) == phrase:
                return MatchResult(category=record, score=1.0, match_type=MatchType.EXACT)
        for record in categories:
            for synonym in sorted(record.synonyms):
                if normalize(synonym) == phrase:
                    return MatchResult(
                        category=record,
                        score=self.settings.synonym_exact_score,
                        match_type=MatchType.SYNONYM_EXACT,
                    )
        return None

    def match_contained(
        self, phrase: str, categories: Sequence[CategoryRecord], threshold: float
    ) -> Optional[MatchResult]:
        """Containment phase: candidates that appear inside the phrase."""
        best: Optional[MatchResult] = None
        min_length = self.settings.min_candidate_length

        for record in categories:
            name = normalize(record.sub_name)
            if len(name) >= min_length and name in phrase:
                ratio = max(self.settings.contained_name_score, len(name) / len(phrase))
                score = min(self.settings.name_score_cap, ratio)
                if best is None or score > best.score:
                    best = MatchResult(record, score, MatchType.CONTAINS_SUB_NAME)

            for synonym in sorted(record.synonyms):
                synonym = normalize(synonym)
                if len(synonym) >= min_length and synonym in phrase:
                    score = min(self.settings.synonym_score_cap, len(synonym) / len(phrase))
                    if best is None or score > best.score:
                        best = MatchResult(record, score, MatchType.CONTAINS_SYNONYM)

        if best is not None and best.score >= threshold:
            return best
        return None

    def match_similar(
        self, phrase: str, categories: Sequence[CategoryRecord], threshold: float
    ) -> Optional[MatchResult]:
        """Similarity phase: edit distance against sub names."""
        best: Optional[MatchResult] = None
        for record in categories:
            similarity = edit_similarity(phrase, normalize(record.sub_name))
            if similarity <= self.settings.similarity_floor:
                continue
            score = min(similarity * self.settings.similarity_weight, 0.99)
            if best is None or score > best.score:
                best = MatchResult(record, score, MatchType.SIMILAR_NAME)

        if best is not None and best.score >= threshold:
            return best
        return None

"""Tests for category resolution."""

import pytest

from quickledger.config import QuickEntrySettings
from quickledger.database.base import CategoryDirectory
from quickledger.database.memory import InMemoryCategoryDirectory
from quickledger.domain.category import CategoryResolver
from quickledger.domain.entities import CategoryRecord, MatchType
from quickledger.domain.errors import (
    CategoryNotFoundError,
    DirectoryUnavailableError,
    ErrorKind,
)

USER = "alice"


class BrokenDirectory(CategoryDirectory):
    def get_categories(self, user_id):
        raise ConnectionError("directory offline")


class BadPayloadDirectory(CategoryDirectory):
    def get_categories(self, user_id):
        return [{"sub_name": "午餐"}]


@pytest.fixture
def resolver(directory, settings):
    return CategoryResolver(directory, settings)


class TestExactMatch:
    def test_sub_name(self, resolver):
        match = resolver.resolve("午餐", USER)
        assert match.category.sub_name == "午餐"
        assert match.score == 1.0
        assert match.match_type is MatchType.EXACT

    def test_trimmed_and_case_insensitive(self, resolver):
        match = resolver.resolve("  LUNCH ", USER)
        assert match.category.sub_name == "午餐"
        assert match.match_type is MatchType.SYNONYM_EXACT
        assert match.score == 0.98

    def test_exact_preferred_over_containment(self, settings):
        directory = InMemoryCategoryDirectory(
            {
                USER: [
                    CategoryRecord("101", "餐飲", "09", "午餐便當"),
                    CategoryRecord("101", "餐飲", "02", "午餐"),
                ]
            }
        )
        match = CategoryResolver(directory, settings).resolve("午餐", USER)
        assert match.category.sub_code == "02"
        assert match.score == 1.0

    def test_sub_name_preferred_over_earlier_synonym(self, settings):
        directory = InMemoryCategoryDirectory(
            {
                USER: [
                    CategoryRecord("101", "餐飲", "01", "便當", frozenset({"午餐"})),
                    CategoryRecord("101", "餐飲", "02", "午餐"),
                ]
            }
        )
        match = CategoryResolver(directory, settings).resolve("午餐", USER)
        assert match.category.sub_code == "02"
        assert match.match_type is MatchType.EXACT
        assert match.score == 1.0


class TestContainment:
    def test_noisy_phrase_hits_contained_name(self, resolver):
        match = resolver.resolve("午餐吃太多", USER)
        assert match.category.sub_name == "午餐"
        assert match.match_type is MatchType.CONTAINS_SUB_NAME
        assert match.score == pytest.approx(0.8)

    def test_contained_name_floor_respects_threshold(self, resolver):
        with pytest.raises(CategoryNotFoundError):
            resolver.resolve("午餐吃太多", USER, threshold=0.85)

    def test_contained_name_floor_is_configurable(self, directory):
        resolver = CategoryResolver(directory, QuickEntrySettings(contained_name_score=0.0))
        with pytest.raises(CategoryNotFoundError):
            resolver.resolve("午餐吃太多", USER)
        match = resolver.resolve("午餐吃太多", USER, threshold=0.3)
        assert match.score == pytest.approx(0.4)

    def test_contained_synonym(self, resolver):
        match = resolver.resolve("coffees", USER)
        assert match.category.sub_name == "咖啡"
        assert match.match_type is MatchType.CONTAINS_SYNONYM
        assert match.score == pytest.approx(6 / 7)

    def test_name_score_capped(self, settings):
        directory = InMemoryCategoryDirectory(
            {USER: [CategoryRecord("103", "居家", "02", "electricity")]}
        )
        match = CategoryResolver(directory, settings).resolve("electricitys", USER)
        assert match.match_type is MatchType.CONTAINS_SUB_NAME
        assert match.score == pytest.approx(settings.name_score_cap)

    def test_single_character_candidates_ignored(self, settings):
        directory = InMemoryCategoryDirectory(
            {USER: [CategoryRecord("101", "餐飲", "07", "茶", frozenset({"t"}))]}
        )
        with pytest.raises(CategoryNotFoundError):
            CategoryResolver(directory, settings).resolve("紅茶", USER, threshold=0.1)

    def test_tie_keeps_first_candidate(self, settings):
        directory = InMemoryCategoryDirectory(
            {
                USER: [
                    CategoryRecord("101", "餐飲", "02", "午餐"),
                    CategoryRecord("101", "餐飲", "03", "晚餐"),
                ]
            }
        )
        match = CategoryResolver(directory, settings).resolve("午餐晚餐", USER, threshold=0.5)
        assert match.category.sub_name == "午餐"


class TestSimilarity:
    def test_similar_name_with_lower_threshold(self, settings):
        directory = InMemoryCategoryDirectory({USER: [CategoryRecord("101", "餐飲", "01", "早餐店")]})
        match = CategoryResolver(directory, settings).resolve("早餐點", USER, threshold=0.45)
        assert match.match_type is MatchType.SIMILAR_NAME
        assert match.score == pytest.approx((2 / 3) * 0.75)

    def test_dissimilar_name_not_found(self, resolver):
        with pytest.raises(CategoryNotFoundError):
            resolver.resolve("健身房", USER, threshold=0.1)


class TestResolverErrors:
    def test_not_found_carries_phrase(self, resolver):
        with pytest.raises(CategoryNotFoundError) as exc_info:
            resolver.resolve("不存在的科目", USER)
        assert exc_info.value.phrase == "不存在的科目"
        assert exc_info.value.kind is ErrorKind.CATEGORY_NOT_FOUND
        assert "不存在的科目" in str(exc_info.value)

    def test_empty_directory(self, settings):
        resolver = CategoryResolver(InMemoryCategoryDirectory(), settings)
        with pytest.raises(CategoryNotFoundError):
            resolver.resolve("午餐", USER)

    def test_blank_phrase(self, resolver):
        with pytest.raises(CategoryNotFoundError):
            resolver.resolve("   ", USER)

    def test_directory_unavailable(self, settings):
        resolver = CategoryResolver(BrokenDirectory(), settings)
        with pytest.raises(DirectoryUnavailableError) as exc_info:
            resolver.resolve("午餐", USER)
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_bad_payload_is_type_error(self, settings):
        resolver = CategoryResolver(BadPayloadDirectory(), settings)
        with pytest.raises(TypeError):
            resolver.resolve("午餐", USER)


def test_resolve_is_idempotent(resolver):
    for phrase, threshold in [("午餐", None), ("coffees", None), ("午餐吃太多", 0.3)]:
        first = resolver.resolve(phrase, USER, threshold=threshold)
        second = resolver.resolve(phrase, USER, threshold=threshold)
        assert first == second


def test_threshold_from_settings(directory):
    resolver = CategoryResolver(directory, QuickEntrySettings(fuzzy_threshold=0.85))
    with pytest.raises(CategoryNotFoundError):
        resolver.resolve("午餐吃太多", USER)

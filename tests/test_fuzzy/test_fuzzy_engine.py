"""Tests for the fuzzy search engine."""

import pytest

from npc_nlu.fuzzy import FuzzySearchEngine, SearchOptions, fuzzy_search
from npc_nlu.fuzzy.vector import NgramVector
from npc_nlu.inventory.entities import general_store_items


@pytest.fixture
def products() -> FuzzySearchEngine:
    return FuzzySearchEngine(["Microsoft", "Minecraft", "Microwave"])


class TestSearch:
    """Tests for ranked search."""

    def test_misspelling_ranks_first(self, products):
        """'microsft' finds Microsoft with high confidence."""
        best = next(products.search("microsft"))

        assert best.text == "Microsoft"
        assert best.index == 0
        assert best.score > 0.7

    def test_results_sorted_by_score(self, products):
        """Results come back best first."""
        results = list(products.search("microsft"))

        assert [r.text for r in results] == ["Microsoft", "Microwave", "Minecraft"]
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_prefixes_rank_by_overlap(self):
        """Longer shared prefixes score higher."""
        engine = FuzzySearchEngine(["mic", "micros", "microsof", "microsoft"])
        results = list(engine.search("microsoft"))

        assert [r.text for r in results] == ["microsoft", "microsof", "micros", "mic"]
        assert results[0].score == pytest.approx(1.0)

    def test_case_insensitive(self, products):
        """Matching ignores case."""
        assert products.best("MICROSOFT").score == pytest.approx(1.0)

    def test_scores_in_unit_range(self, products):
        for result in products.search("mine craft"):
            assert 0.0 <= result.score <= 1.0

    def test_ties_keep_insertion_order(self):
        """Equal scores preserve the candidate order."""
        engine = FuzzySearchEngine(["Rope", "rope", "ROPE"])
        results = list(engine.search("rope"))

        assert [r.index for r in results] == [0, 1, 2]

    def test_minimum_similarity_filters(self):
        """Candidates below the threshold are dropped."""
        engine = FuzzySearchEngine(
            ["Microsoft", "Minecraft", "Microwave"],
            SearchOptions(minimum_similarity=0.5),
        )
        results = list(engine.search("microsft"))

        assert [r.text for r in results] == ["Microsoft"]

    def test_threaded_scoring_matches_sequential(self):
        """Scoring above the parallel threshold gives the same ranking."""
        items = ["Microsoft", "Minecraft", "Microwave"]
        sequential = list(FuzzySearchEngine(items).search("microsft"))
        threaded = list(
            FuzzySearchEngine(items, SearchOptions(parallel_threshold=1)).search(
                "microsft"
            )
        )

        assert threaded == sequential

    def test_repeated_search_is_stable(self, products):
        """Cached vectors give identical results."""
        assert list(products.search("micro")) == list(products.search("micro"))


class TestEmptyAndIndexQueries:
    """Tests for empty input and the index shortcut."""

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_empty_query_yields_nothing(self, products, query):
        assert list(products.search(query)) == []
        assert products.best(query) is None

    def test_empty_engine(self):
        assert list(FuzzySearchEngine([]).search("anything")) == []

    def test_index_query(self, products):
        """An in-range integer selects that item."""
        results = list(products.search("1"))

        assert len(results) == 1
        assert results[0].text == "Minecraft"
        assert results[0].score == 1.0
        assert results[0].index == 1

    def test_index_query_trims_whitespace(self, products):
        assert products.best(" 2 ").text == "Microwave"

    def test_out_of_range_index_falls_back_to_text(self, products):
        """An index past the end is matched as text."""
        assert list(products.search("7")) == []

    def test_superscript_digit_is_matched_as_text(self, products):
        """Digit-like characters that are not decimals never hit the index."""
        assert list(products.search("²")) == []
        assert products.best(" ³ ") is None

    def test_decimal_digits_from_other_scripts(self, products):
        """Any Unicode decimal digit selects by index."""
        assert products.best("٢").text == "Microwave"


class TestScoreProperties:
    """Tests for how scores behave across queries."""

    def test_every_stock_name_matches_itself_first(self):
        """An exact name or alias ranks first with a perfect score."""
        terms = [
            term for item in general_store_items() for term in (item.name, *item.aliases)
        ]
        engine = FuzzySearchEngine(terms)

        for term in terms:
            best = engine.best(term)
            assert best.text == term
            assert best.score >= 0.99

    @pytest.mark.parametrize(
        "word, edits",
        [
            (
                "microsoft",
                ["microsofz", "microqofz", "mixroqofz", "mixroqjfz", "vixroqjfz"],
            ),
            (
                "healing herbs",
                ["healing herbz", "healinq herbz", "hxalinq herbz", "hxalinq hxrbz"],
            ),
        ],
    )
    def test_scores_fall_as_edits_accumulate(self, word, edits):
        """Each further character edit lowers the score."""
        engine = FuzzySearchEngine([word, *edits], SearchOptions(minimum_similarity=0.0))

        by_index = {r.index: r.score for r in engine.search(word)}
        scores = [by_index[i] for i in range(len(edits) + 1)]

        assert scores[0] == pytest.approx(1.0)
        assert all(a > b for a, b in zip(scores, scores[1:]))


class TestFuzzySearchFunction:
    """Tests for the one-shot helper."""

    def test_limits_results(self):
        results = fuzzy_search(["Microsoft", "Minecraft", "Microwave"], "microsft", 2)

        assert [r.text for r in results] == ["Microsoft", "Microwave"]

    def test_accepts_options(self):
        results = fuzzy_search(
            ["Microsoft", "Minecraft"],
            "microsft",
            options=SearchOptions(minimum_similarity=0.9),
        )
        assert results == []


class TestNgramVector:
    """Tests for feature extraction."""

    def test_word_ngrams_for_multi_word_text(self):
        vector = NgramVector.from_text("Bread Loaf", SearchOptions())

        assert ("bread",) in vector.features
        assert ("bread", "loaf") in vector.features
        assert " b" in vector.features
        assert "f " in vector.features

    def test_no_word_ngrams_for_single_word(self):
        vector = NgramVector.from_text("rope", SearchOptions())
        assert not any(isinstance(f, tuple) for f in vector.features)

    def test_word_ngrams_disabled(self):
        vector = NgramVector.from_text(
            "bread loaf", SearchOptions(include_word_ngrams=False)
        )
        assert not any(isinstance(f, tuple) for f in vector.features)

    def test_identical_text_scores_one(self):
        options = SearchOptions()
        a = NgramVector.from_text("what do you sell", options)
        b = NgramVector.from_text("  What do you SELL ", options)

        assert a.similarity(b) == pytest.approx(1.0)

    def test_similarity_is_symmetric(self):
        options = SearchOptions()
        a = NgramVector.from_text("microsoft", options)
        b = NgramVector.from_text("minecraft", options)

        assert a.similarity(b) == pytest.approx(b.similarity(a))

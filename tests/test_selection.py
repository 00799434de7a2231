"""
Unit tests for relevance selection.
"""

import pytest
from focuslayout.archetypes import AppDescriptor, Archetype
from focuslayout.selection import CODING, GENERAL, RESEARCH, WRITING, RelevanceSelector

SCENARIO_APPS = ["Terminal", "Arc", "Xcode", "Finder", "Cursor"]


@pytest.fixture
def selector(classifier):
    return RelevanceSelector(classifier=classifier)


@pytest.mark.unit
class TestContextProfiles:
    """Test profile lookup and scoring."""

    @pytest.mark.parametrize(
        "context,profile",
        [
            ("coding", CODING),
            ("Debugging session", CODING),
            ("research", RESEARCH),
            ("reading papers", RESEARCH),
            ("writing", WRITING),
            ("", GENERAL),
            ("lunch", GENERAL),
        ],
    )
    def test_profile_for(self, selector, context, profile):
        assert selector.profile_for(context) is profile

    def test_coding_scores(self, selector):
        """Editors outrank terminals, which outrank browsers and utilities."""
        score = lambda name: selector.score(selector.classifier.describe(name), "coding")
        assert score("Cursor") == 10.0
        assert score("Terminal") == 9.0
        assert score("Arc") == 8.0
        assert score("Xcode") == 7.0
        assert score("Finder") == 2.0

    def test_archetype_score_fallback(self, selector):
        """Apps without a keyword score by archetype, then by default."""
        assert selector.score(AppDescriptor("Zed", Archetype.CODE_WORKSPACE), "coding") == 8.5
        assert selector.score(AppDescriptor("Zzyzx"), "coding") == CODING.default_score

    def test_keyword_scores_need_whole_words(self, selector):
        """'1Password' is not scored as the word processor it contains."""
        score = lambda name, context: selector.score(selector.classifier.describe(name), context)
        assert score("1Password", "writing") == WRITING.default_score
        assert score("Microsoft Word", "writing") == 10.0
        assert score("iTerm2", "coding") == 9.0

    def test_general_profile_is_neutral(self, selector):
        """Without a matching context every app scores the same."""
        scores = set(
            selector.score(selector.classifier.describe(n), "lunch") for n in SCENARIO_APPS
        )
        assert scores == {GENERAL.default_score}


@pytest.mark.unit
class TestRelevanceSelector:
    """Test ranking, redundancy exclusion and minimisation."""

    def test_coding_scenario(self, selector):
        """Cursor replaces Xcode; Finder is irrelevant for coding."""
        selection = selector.select(SCENARIO_APPS, "coding", 4)

        assert selection.names == ["Cursor", "Terminal", "Arc"]
        assert [a.name for a in selection.excluded] == ["Xcode"]
        assert [a.name for a in selection.irrelevant] == ["Finder"]
        assert [a.name for a in selection.minimized] == ["Finder", "Xcode"]
        assert selection.profile == "coding"

    def test_respects_max_apps(self, selector):
        """Never more than max_apps apps."""
        for max_apps in range(1, 6):
            selection = selector.select(SCENARIO_APPS, "lunch", max_apps)
            assert len(selection.apps) <= max_apps

    def test_cap_pushes_rest_to_minimized(self, selector):
        selection = selector.select(SCENARIO_APPS, "coding", 2)
        assert selection.names == ["Cursor", "Terminal"]
        assert "Arc" in [a.name for a in selection.minimized]

    def test_duplicate_readmitted_when_nothing_else_fits(self, selector):
        """A second editor is used when it is the only other window."""
        selection = selector.select(["Xcode", "Cursor"], "coding", 4)
        assert selection.names == ["Cursor", "Xcode"]
        assert selection.excluded == []

    def test_ties_keep_candidate_order(self, selector):
        """Stable ordering for equal scores."""
        selection = selector.select(["Zeta", "Alpha", "Mid"], "lunch", 4)
        assert selection.names == ["Zeta", "Alpha", "Mid"]

    def test_duplicates_collapsed(self, selector):
        """The same app listed twice is only considered once."""
        selection = selector.select(["Arc", "arc", "Terminal"], "research", 4)
        assert selection.names == ["Arc", "Terminal"]

    def test_only_irrelevant_candidates(self, selector):
        """Non-empty input always yields a non-empty selection."""
        selection = selector.select(["Spotify", "Finder"], "coding", 4)
        assert selection.names == ["Spotify"]
        assert [a.name for a in selection.irrelevant] == ["Finder"]
        assert [a.name for a in selection.minimized] == ["Finder"]

    def test_empty_input(self, selector):
        selection = selector.select([], "coding", 4)
        assert selection.apps == []
        assert selection.minimized == []

    def test_custom_floor(self, classifier):
        """A zero floor lets every app through."""
        selector = RelevanceSelector(classifier=classifier, relevance_floor=0.0)
        selection = selector.select(SCENARIO_APPS, "coding", 4)
        assert selection.names == ["Cursor", "Terminal", "Arc", "Finder"]

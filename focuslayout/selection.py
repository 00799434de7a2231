"""
Relevance Selection

Scores candidate apps for a context and picks the ones worth showing.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .archetypes import AppDescriptor, Archetype, ArchetypeClassifier, has_words, tokenize


@dataclass(frozen=True)
class ContextProfile:
    """Relevance table for one family of contexts."""

    name: str
    # Fragments of the context tag that select this profile ("cod" matches "coding")
    triggers: Tuple[str, ...] = ()
    # Ordered (app keyword, score) pairs; first match wins
    keyword_scores: Tuple[Tuple[str, float], ...] = ()
    archetype_scores: Mapping[Archetype, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    default_score: float = 5.0

    def score(self, app: AppDescriptor) -> float:
        tokens = tokenize(app.name)
        for keyword, value in self.keyword_scores:
            if has_words(tokenize(keyword), tokens):
                return value
        return self.archetype_scores.get(app.archetype, self.default_score)


def _scores(**kwargs: float) -> Mapping[Archetype, float]:
    return MappingProxyType({Archetype[k.upper()]: v for k, v in kwargs.items()})


_BROWSERS = ("arc", "safari", "chrome", "firefox", "brave", "edge")

CODING = ContextProfile(
    name="coding",
    triggers=("cod", "develop", "program", "debug"),
    keyword_scores=(
        ("cursor", 10.0),
        ("terminal", 9.0),
        ("iterm", 9.0),
        ("iterm2", 9.0),
        ("vscode", 8.5),
        ("visual studio code", 8.5),
    )
    + tuple((browser, 8.0) for browser in _BROWSERS)
    + (
        ("xcode", 7.0),
        ("finder", 2.0),
        ("spotify", 2.0),
    ),
    archetype_scores=_scores(
        code_workspace=8.5,
        text_stream=7.5,
        content_canvas=6.0,
        glanceable_monitor=2.0,
    ),
    default_score=1.0,
)

RESEARCH = ContextProfile(
    name="research",
    triggers=("research", "browse", "read", "study"),
    keyword_scores=tuple((browser, 10.0) for browser in _BROWSERS)
    + (
        ("notes", 8.0),
        ("notion", 8.0),
        ("obsidian", 8.0),
        ("preview", 6.0),
        ("pdf", 6.0),
    ),
    archetype_scores=_scores(
        content_canvas=9.0,
        text_stream=4.0,
        code_workspace=4.0,
        glanceable_monitor=3.0,
    ),
    default_score=3.0,
)

DESIGN = ContextProfile(
    name="design",
    triggers=("design", "draw", "mockup"),
    keyword_scores=(
        ("figma", 10.0),
        ("sketch", 10.0),
        ("photoshop", 10.0),
        ("illustrator", 10.0),
        ("arc", 6.0),
        ("safari", 6.0),
    ),
    archetype_scores=_scores(content_canvas=6.0, text_stream=3.0),
    default_score=2.0,
)

WRITING = ContextProfile(
    name="writing",
    triggers=("writ", "draft", "blog"),
    keyword_scores=(
        ("pages", 10.0),
        ("word", 10.0),
        ("notion", 10.0),
        ("obsidian", 10.0),
        ("notes", 9.0),
    )
    + tuple((browser, 7.0) for browser in _BROWSERS),
    archetype_scores=_scores(content_canvas=7.0, text_stream=4.0),
    default_score=3.0,
)

# Neutral profile: every app is equally relevant.
GENERAL = ContextProfile(name="general", default_score=5.0)

DEFAULT_PROFILES: Tuple[ContextProfile, ...] = (CODING, RESEARCH, DESIGN, WRITING)


@dataclass
class Selection:
    """Outcome of relevance selection."""

    apps: List[AppDescriptor] = field(default_factory=list)
    scores: Dict[str, float] = field(default_factory=dict)
    # Lower-scored duplicates of a single-occupant archetype that were left out
    excluded: List[AppDescriptor] = field(default_factory=list)
    # Candidates scoring below the relevance floor
    irrelevant: List[AppDescriptor] = field(default_factory=list)
    # Every candidate not selected, irrelevant ones first
    minimized: List[AppDescriptor] = field(default_factory=list)
    profile: str = GENERAL.name

    @property
    def names(self) -> List[str]:
        return [app.name for app in self.apps]


class RelevanceSelector:
    """
    Picks the most relevant apps for a context.

    Apps are ranked by score (stable, so ties keep the candidate order).
    Only one app of a single-occupant archetype is accepted; duplicates are
    only re-admitted when the layout would otherwise have fewer than
    min_windows windows.
    """

    def __init__(
        self,
        classifier: Optional[ArchetypeClassifier] = None,
        profiles: Sequence[ContextProfile] = DEFAULT_PROFILES,
        general: ContextProfile = GENERAL,
        relevance_floor: float = 3.0,
        single_occupant: FrozenSet[Archetype] = frozenset({Archetype.CODE_WORKSPACE}),
        min_windows: int = 2,
    ):
        self.classifier = classifier or ArchetypeClassifier()
        self.profiles = tuple(profiles)
        self.general = general
        self.relevance_floor = relevance_floor
        self.single_occupant = frozenset(single_occupant)
        self.min_windows = min_windows

    def profile_for(self, context: str) -> ContextProfile:
        """Find the profile whose trigger appears in the context tag."""
        normalized = (context or "").strip().lower()
        for profile in self.profiles:
            if any(trigger in normalized for trigger in profile.triggers):
                return profile
        return self.general

    def score(self, app: AppDescriptor, context: str) -> float:
        return self.profile_for(context).score(app)

    def select(self, apps: Sequence[str], context: str, max_apps: int) -> Selection:
        """Score, rank and filter candidate apps."""
        profile = self.profile_for(context)
        selection = Selection(profile=profile.name)

        candidates: List[AppDescriptor] = []
        seen = set()
        for name in apps:
            key = name.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            candidates.append(self.classifier.describe(name))

        for app in candidates:
            selection.scores[app.name] = profile.score(app)

        ranked = sorted(candidates, key=lambda a: -selection.scores[a.name])

        occupied = set()
        deferred: List[AppDescriptor] = []
        for app in ranked:
            if selection.scores[app.name] < self.relevance_floor:
                selection.irrelevant.append(app)
                continue
            if len(selection.apps) >= max_apps:
                continue
            if app.archetype in self.single_occupant:
                if app.archetype in occupied:
                    deferred.append(app)
                    continue
                occupied.add(app.archetype)
            selection.apps.append(app)

        # Duplicates come back only when nothing else can fill the layout
        wanted = min(self.min_windows, max_apps)
        while deferred and len(selection.apps) < wanted:
            selection.apps.append(deferred.pop(0))
        selection.apps.sort(key=ranked.index)
        selection.excluded = deferred

        if not selection.apps and ranked and max_apps > 0:
            selection.apps.append(ranked[0])
            if ranked[0] in selection.irrelevant:
                selection.irrelevant.remove(ranked[0])

        chosen = set(a.name for a in selection.apps)
        rest = [a for a in ranked if a.name not in chosen and a not in selection.irrelevant]
        selection.minimized = [
            a for a in selection.irrelevant if a.name not in chosen
        ] + rest
        return selection

"""
App Archetypes

Maps an application name to the usage pattern it is built for. The
archetype decides which role a window gets and how much room it needs.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple


class Archetype(Enum):
    """Usage pattern of an application."""

    TEXT_STREAM = "text_stream"  # Terminals, chat, logs: read vertically
    CONTENT_CANVAS = "content_canvas"  # Browsers, documents, design tools
    CODE_WORKSPACE = "code_workspace"  # Editors and IDEs
    GLANCEABLE_MONITOR = "glanceable_monitor"  # Music, file browsers, monitors
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class AppDescriptor:
    """An application together with its derived archetype."""

    name: str
    archetype: Archetype = Archetype.UNKNOWN

    def __str__(self) -> str:
        return self.name


def _keywords(archetype: Archetype, *names: str) -> Tuple[Tuple[str, Archetype], ...]:
    return tuple((name, archetype) for name in names)


# Ordered keyword table. Exact matches are tried first, then whole-word
# matches anywhere in the name, in this order.
DEFAULT_KEYWORDS: Tuple[Tuple[str, Archetype], ...] = (
    _keywords(
        Archetype.TEXT_STREAM,
        "terminal", "iterm", "iterm2", "console", "hyper", "warp", "alacritty",
        "kitty", "wezterm", "ghostty", "slack", "discord", "messages",
        "telegram", "whatsapp", "signal", "microsoft teams", "log viewer",
    )
    + _keywords(
        Archetype.CODE_WORKSPACE,
        "cursor", "xcode", "visual studio code", "vscode", "vs code",
        "sublime text", "sublime", "atom", "vim", "emacs", "intellij",
        "pycharm", "webstorm", "clion", "android studio", "zed", "nova",
        "sourcetree", "github desktop", "fork",
    )
    + _keywords(
        Archetype.CONTENT_CANVAS,
        "arc", "safari", "chrome", "firefox", "edge", "brave", "opera",
        "preview", "figma", "sketch", "photoshop", "illustrator", "notion",
        "obsidian", "logseq", "notes", "pages", "word", "keynote",
        "powerpoint", "numbers", "excel",
    )
    + _keywords(
        Archetype.GLANCEABLE_MONITOR,
        "finder", "spotify", "music", "apple music", "activity monitor",
        "system monitor", "htop", "top", "timer", "clock", "calendar",
        "system preferences", "system settings", "path finder",
    )
)

# Fragment fallbacks for names no keyword knows about.
DEFAULT_PATTERNS: Tuple[Tuple[str, Archetype], ...] = (
    _keywords(Archetype.TEXT_STREAM, "shell", "bash", "zsh", "chat", "messenger")
    + _keywords(Archetype.CONTENT_CANVAS, "browser", "web", "reader", "pdf")
    + _keywords(Archetype.CODE_WORKSPACE, "code", "editor", "ide", "studio")
    + _keywords(Archetype.CONTENT_CANVAS, "design", "photo", "draw")
    + _keywords(
        Archetype.GLANCEABLE_MONITOR, "player", "audio", "radio", "monitor", "stats"
    )
)

# Fragments this short only match a whole word ("top" must not match "desktop").
_WHOLE_WORD_MAX = 3
_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def tokenize(name: str) -> Tuple[str, ...]:
    """Lower-case words of a name ('Visual Studio-Code' -> visual, studio, code)."""
    return tuple(t for t in _TOKEN_SPLIT.split(name.strip().lower()) if t)


def has_words(phrase: Sequence[str], tokens: Sequence[str]) -> bool:
    """True if the words of phrase appear consecutively in tokens."""
    n = len(phrase)
    if n == 0:
        return False
    phrase = tuple(phrase)
    return any(tuple(tokens[i : i + n]) == phrase for i in range(len(tokens) - n + 1))


class ArchetypeClassifier:
    """
    Classifies application names into archetypes.

    Lookup tables are injected at construction and frozen; the classifier
    keeps no other state apart from a memo of previous answers.
    """

    def __init__(
        self,
        keywords: Sequence[Tuple[str, Archetype]] = DEFAULT_KEYWORDS,
        patterns: Sequence[Tuple[str, Archetype]] = DEFAULT_PATTERNS,
        cache_size: int = 256,
    ):
        self.keywords: Tuple[Tuple[str, Archetype], ...] = tuple(
            (k.lower(), a) for k, a in keywords
        )
        self.patterns: Tuple[Tuple[str, Archetype], ...] = tuple(
            (p.lower(), a) for p, a in patterns
        )
        # Keywords match whole words: "word" is not in "1password"
        self.keyword_words: Tuple[Tuple[Tuple[str, ...], Archetype], ...] = tuple(
            (tokenize(k), a) for k, a in self.keywords
        )
        exact = {}
        for keyword, archetype in self.keywords:
            exact.setdefault(keyword, archetype)
        self.exact: Mapping[str, Archetype] = MappingProxyType(exact)
        self.classify = lru_cache(maxsize=cache_size)(self._classify)

    @staticmethod
    def _matches(fragment: str, name: str, tokens: Sequence[str]) -> bool:
        if len(fragment) <= _WHOLE_WORD_MAX:
            return fragment in tokens
        return fragment in name

    def _classify(self, name: str) -> Archetype:
        """Classify an app name. First match wins; no match gives UNKNOWN."""
        normalized = name.strip().lower()
        if not normalized:
            return Archetype.UNKNOWN

        if normalized in self.exact:
            return self.exact[normalized]

        tokens = tokenize(normalized)
        for words, archetype in self.keyword_words:
            if has_words(words, tokens):
                return archetype

        for fragment, archetype in self.patterns:
            if self._matches(fragment, normalized, tokens):
                return archetype

        return Archetype.UNKNOWN

    def describe(self, name: str) -> AppDescriptor:
        """Build an AppDescriptor for an app name."""
        return AppDescriptor(name=name, archetype=self.classify(name))

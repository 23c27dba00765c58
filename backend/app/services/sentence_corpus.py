"""Static sentence corpus for the recording flow.

The corpus is loaded once from a JSON file and split into two disjoint,
order-preserving groups: anchor sentences (fixed phonetic coverage set,
always offered first) and the pool everything else is drawn from.
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from app.config import settings

logger = logging.getLogger(__name__)

ANCHOR_CATEGORY = "anchor"

CATEGORIES = frozenset({
    "anchor", "chat", "news", "question", "numbers", "hard_words", "commands",
    "emotions", "daily", "tech", "culture", "travel", "food", "sports",
    "weather", "health", "education", "business", "nature", "family",
})

EMOTIONS = frozenset({"neutral", "angry", "happy", "sad"})


class CorpusError(Exception):
    """Raised when the sentence corpus file is missing or malformed."""


@dataclass(frozen=True)
class Sentence:
    id: str
    text: str
    category: str
    word_count: int
    emotion: Optional[str] = None
    context: Optional[str] = None

    @property
    def is_anchor(self) -> bool:
        return self.category == ANCHOR_CATEGORY


class SentenceCorpus:
    """Read-only view over a list of sentences, pre-split into anchors and pool."""

    def __init__(self, sentences):
        sentences = tuple(sentences)
        by_id: dict[str, Sentence] = {}
        for s in sentences:
            if s.id in by_id:
                raise CorpusError(f"Duplicate sentence id: {s.id}")
            by_id[s.id] = s
        self._by_id = by_id
        self.sentences = sentences
        self.anchors = tuple(s for s in sentences if s.is_anchor)
        self.pool = tuple(s for s in sentences if not s.is_anchor)

    def __len__(self) -> int:
        return len(self.sentences)

    def __iter__(self):
        return iter(self.sentences)

    def __contains__(self, sentence_id) -> bool:
        return sentence_id in self._by_id

    def get(self, sentence_id: str) -> Optional[Sentence]:
        return self._by_id.get(sentence_id)


def _parse_entry(raw: dict, position: int) -> Sentence:
    try:
        sentence_id = str(raw["id"])
        text = raw["text"]
        category = raw["category"]
        word_count = int(raw.get("wordCount", raw.get("word_count")))
    except (KeyError, TypeError, ValueError) as e:
        raise CorpusError(f"Malformed corpus entry at index {position}: {e}") from e

    if category not in CATEGORIES:
        raise CorpusError(f"Unknown category {category!r} for sentence {sentence_id}")
    if word_count <= 0:
        raise CorpusError(f"Sentence {sentence_id} has non-positive wordCount {word_count}")
    emotion = raw.get("emotion")
    if emotion is not None and emotion not in EMOTIONS:
        raise CorpusError(f"Unknown emotion {emotion!r} for sentence {sentence_id}")

    return Sentence(
        id=sentence_id,
        text=text,
        category=category,
        word_count=word_count,
        emotion=emotion,
        context=raw.get("context"),
    )


def load_corpus(path: Path) -> SentenceCorpus:
    """Load and validate a JSON sentence corpus."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusError(f"Cannot read sentence corpus {path}: {e}") from e

    if not isinstance(data, list):
        raise CorpusError(f"Sentence corpus {path} must be a JSON array")

    corpus = SentenceCorpus(_parse_entry(raw, i) for i, raw in enumerate(data))
    logger.info(
        f"Loaded sentence corpus {path.name}: {len(corpus.anchors)} anchors, "
        f"{len(corpus.pool)} pool sentences"
    )
    return corpus


@lru_cache(maxsize=1)
def get_corpus() -> SentenceCorpus:
    return load_corpus(Path(settings.sentence_corpus_path))

"""Cursor over a recording session.

Walks the user through one batch from build_session_phrases at a time.
The session endpoint uses it to build the opening batch; recording
clients that keep the cursor locally drive it with mark_recorded and
skip, merging server-confirmed ids as they arrive.
Recording or skipping the last sentence replaces the batch wholesale
with a freshly built one; it is never patched in place.
"""

import math
import random
from typing import Iterable, Optional

from app.config import settings
from app.services.sentence_corpus import Sentence, SentenceCorpus
from app.services.session_selector import build_session_phrases


class RecordingTooShortError(Exception):
    """Raised when a recording is shorter than its sentence allows."""

    def __init__(self, sentence_id: str, duration: float, min_seconds: int):
        self.sentence_id = sentence_id
        self.duration = duration
        self.min_seconds = min_seconds
        super().__init__(
            f"Recording of {sentence_id} too fast: {duration}s, minimum {min_seconds}s"
        )


def min_recording_seconds(word_count: int) -> float:
    return word_count * settings.min_seconds_per_word


def check_duration(sentence: Sentence, duration: float) -> None:
    minimum = min_recording_seconds(sentence.word_count)
    if duration < minimum:
        raise RecordingTooShortError(sentence.id, duration, math.ceil(minimum))


class RecordingSession:
    def __init__(
        self,
        corpus: SentenceCorpus,
        recorded_ids: Iterable[str] = (),
        rng: Optional[random.Random] = None,
        session_size: Optional[int] = None,
    ):
        self.corpus = corpus
        self.recorded_ids: set[str] = set(recorded_ids)
        self.rng = rng
        self.session_size = session_size or settings.session_size
        self.phrases: list[Sentence] = []
        self.index = 0
        self.sessions_built = 0
        self.reset()

    @property
    def current(self) -> Optional[Sentence]:
        if self.index >= len(self.phrases):
            return None
        return self.phrases[self.index]

    @property
    def remaining(self) -> int:
        return max(len(self.phrases) - self.index, 0)

    @property
    def anchors_pending(self) -> int:
        return sum(1 for s in self.corpus.anchors if s.id not in self.recorded_ids)

    @property
    def fresh_pool_remaining(self) -> int:
        return sum(1 for s in self.corpus.pool if s.id not in self.recorded_ids)

    def reset(self) -> list[Sentence]:
        """Discard the current batch and build a new one from the recorded set."""
        self.phrases = build_session_phrases(
            self.corpus, self.recorded_ids, rng=self.rng, session_size=self.session_size,
        )
        self.index = 0
        self.sessions_built += 1
        return self.phrases

    def merge_recorded(self, sentence_ids: Iterable[str]) -> None:
        """Fold server-confirmed ids into the recorded set. Takes effect on the next rebuild."""
        self.recorded_ids.update(sentence_ids)

    def mark_recorded(self, sentence_id: str) -> Optional[Sentence]:
        self.recorded_ids.add(sentence_id)
        return self._advance()

    def skip(self) -> Optional[Sentence]:
        return self._advance()

    def _advance(self) -> Optional[Sentence]:
        if self.index + 1 >= len(self.phrases):
            self.reset()
        else:
            self.index += 1
        return self.current

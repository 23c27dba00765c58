"""Recording session assembly and milestone ladder.

A session is an ordered batch of sentences to read aloud: every anchor
sentence the user has not recorded yet (corpus order), then pool
sentences chosen at random to fill the batch up to the session size.
Fresh pool material is always preferred; once it runs out the batch is
padded with repeats from the full pool instead of coming up short.

Milestones form a ladder on the lifetime recording count:
0 -> 5 -> 20 -> 70 -> 120 -> ... (every 50 after 20).
"""

import math
import random
from typing import Iterable, Optional, Sequence, TypeVar

from app.services.sentence_corpus import Sentence, SentenceCorpus

T = TypeVar("T")

SESSION_SIZE = 20

FIRST_MILESTONE = 5
SECOND_MILESTONE = 20
MILESTONE_STEP = 50


def shuffle(items: Iterable[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a uniformly shuffled copy of items (Fisher-Yates).

    rng only needs a random() method returning floats in [0, 1).
    """
    source = rng if rng is not None else random
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = math.floor(source.random() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def _draw_repeats(pool: Sequence[Sentence], count: int, rng) -> list[Sentence]:
    """count sentences from back-to-back shuffles of pool; repeats allowed."""
    out: list[Sentence] = []
    while pool and len(out) < count:
        out += shuffle(pool, rng)
    return out[:count]


def build_session_phrases(
    corpus: SentenceCorpus,
    recorded_ids: Iterable[str],
    rng: Optional[random.Random] = None,
    session_size: int = SESSION_SIZE,
) -> list[Sentence]:
    """Build the next recording session for a user.

    recorded_ids is the user's lifetime set of recorded sentence ids; it
    is only read. When more anchors are pending than session_size the
    session holds all of them and no pool sentences.
    """
    recorded = recorded_ids if isinstance(recorded_ids, (set, frozenset)) else set(recorded_ids)

    unrecorded_anchors = [s for s in corpus.anchors if s.id not in recorded]
    unrecorded_pool = [s for s in corpus.pool if s.id not in recorded]
    needed = max(session_size - len(unrecorded_anchors), 0)

    if needed == 0:
        picks: list[Sentence] = []
    elif len(unrecorded_pool) >= needed:
        picks = shuffle(unrecorded_pool, rng)[:needed]
    elif unrecorded_pool:
        picks = shuffle(unrecorded_pool, rng)
        picks += _draw_repeats(corpus.pool, needed - len(picks), rng)
    else:
        picks = _draw_repeats(corpus.pool, needed, rng)

    return unrecorded_anchors + picks


def get_next_milestone(total_recorded: int) -> int:
    if total_recorded < FIRST_MILESTONE:
        return FIRST_MILESTONE
    if total_recorded < SECOND_MILESTONE:
        return SECOND_MILESTONE
    past = total_recorded - SECOND_MILESTONE
    return SECOND_MILESTONE + MILESTONE_STEP * math.ceil((past + 1) / MILESTONE_STEP)


def get_prev_milestone(total_recorded: int) -> int:
    if total_recorded < FIRST_MILESTONE:
        return 0
    if total_recorded < SECOND_MILESTONE:
        return FIRST_MILESTONE
    past = total_recorded - SECOND_MILESTONE
    return SECOND_MILESTONE + MILESTONE_STEP * (past // MILESTONE_STEP)


def is_milestone(total_recorded: int) -> bool:
    """True when total_recorded sits exactly on a (non-zero) ladder breakpoint."""
    return total_recorded > 0 and get_prev_milestone(total_recorded) == total_recorded


def milestone_progress(total_recorded: int) -> float:
    """Percentage of the way from the previous milestone to the next, in [0, 100]."""
    prev = get_prev_milestone(total_recorded)
    nxt = get_next_milestone(total_recorded)
    pct = (total_recorded - prev) / (nxt - prev) * 100
    return min(max(pct, 0.0), 100.0)

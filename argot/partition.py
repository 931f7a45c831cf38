"""
Token classification and claiming.

partition() makes a single left-to-right pass over the raw arguments and sorts
every token index into one of two places:

- supplied: for each short or long key seen, the indices of the tokens that
  named it, in input order. A run of shorts ("-vvv", "-abc") contributes its
  index once per character, which is what makes counters work.
- available: the indices of everything else (values and positionals), kept
  in ascending order.

Classification is purely syntactic: declarations are resolved against the
partition afterwards, so declaration order never depends on input order.
Once an index is claimed it is gone for good.
"""
import logging
from bisect import bisect_right

from .faults import MissingValueError

logger = logging.getLogger(__name__)


def is_short(token):
    return len(token) >= 2 and token[0] == "-" and token[1] != "-"


def is_long(token):
    return len(token) >= 3 and token.startswith("--")


def _raise(fault):
    raise fault


class PartitionState:
    """
    Classified input of one parse.

    tokens: the raw arguments (program name excluded)
    supplied: key -> ordered token indices that named the key
    available: ascending indices still claimable as values or positionals
    """
    __slots__ = ("tokens", "supplied", "available")

    def __init__(self, tokens):
        self.tokens = tuple(tokens)
        self.supplied = {}
        self.available = []

    def supply(self, key, index):
        self.supplied.setdefault(key, []).append(index)

    def claim_key(self, *keys):
        """
        Pop the index list of the first key that was supplied.

        Returns (key, indices), or None when none of the keys was seen.
        """
        for key in keys:
            if key and self.supplied.get(key):
                return key, self.supplied.pop(key)
        return None

    def claim_after(self, index):
        """
        Pop the value slot of the option at index: the smallest available index after it.

        Option tokens in between are skipped, since they are never available.
        Returns None when nothing after index is left.
        """
        position = bisect_right(self.available, index)
        if position == len(self.available):
            return None
        return self.available.pop(position)

    def claim_first(self):
        """
        Pop the earliest available index, or None when nothing is left.
        """
        if not self.available:
            return None
        return self.available.pop(0)

    def claim_rest(self):
        """
        Pop every available index, in ascending order.
        """
        rest, self.available = self.available, []
        return rest

    def __repr__(self):
        return f"PartitionState(supplied={self.supplied!r}, available={self.available!r})"


def partition(tokens, terminator="--", /, *, trigger=_raise):
    """
    Classify tokens into a PartitionState.

    - empty tokens are skipped;
    - the terminator is skipped and makes every later token available;
    - "-abc" supplies a, b and c with the token's index;
    - "--key" supplies key; it must not be the last token (MissingValueError);
    - anything else is available.

    trigger receives faults; by default they are raised.
    """
    state = PartitionState(tokens)
    terminated = False
    last = len(state.tokens) - 1

    for index, token in enumerate(state.tokens):
        if not token:
            continue

        if token == terminator:
            terminated = True
            continue

        if terminated:
            state.available.append(index)
            continue

        if is_short(token):
            for key in token[1:]:
                state.supply(key, index)
            continue

        if is_long(token):
            key = token[2:]
            if index == last:
                trigger(MissingValueError(f"no argument given to --{key}", option=key, index=index))
                continue
            state.supply(key, index)
            continue

        state.available.append(index)

    logger.debug("partitioned %d tokens: %r", len(state.tokens), state)
    return state


__all__ = (
    "PartitionState",
    "partition",
    "is_short",
    "is_long",
)

from __future__ import annotations
import random
from collections import Counter
from typing import Dict, List, Mapping, Sequence

from .config import HAND_SIZE

LETTER_POWER: Dict[str, int] = {
    'a': 1, 'b': 3, 'c': 3, 'd': 2, 'e': 1, 'f': 4, 'g': 2,
    'h': 4, 'i': 1, 'j': 8, 'k': 5, 'l': 1, 'm': 3, 'n': 1,
    'o': 1, 'p': 3, 'q': 10, 'r': 1, 's': 1, 't': 1, 'u': 1,
    'v': 4, 'w': 4, 'x': 8, 'y': 4, 'z': 10,
}


def random_letter(rng: random.Random, table: Mapping[str, int] = LETTER_POWER) -> str:
    return rng.choice(list(table))


def generate_hand(rng: random.Random, table: Mapping[str, int] = LETTER_POWER,
                  size: int = HAND_SIZE) -> List[str]:
    """Draw each slot uniformly, with replacement, from the table's letters."""
    if size <= 0:
        raise ValueError(f"Hand size must be positive, got {size}")
    return [random_letter(rng, table) for _ in range(size)]


def replace_used(hand: Sequence[str], used_word: str, rng: random.Random,
                 table: Mapping[str, int] = LETTER_POWER) -> List[str]:
    """Redraw every hand letter that occurs anywhere in used_word.

    Matching is by letter value, so a hand holding two 'e's redraws both even
    when the word used only one.
    """
    used = set(used_word.lower())
    return [random_letter(rng, table) if letter in used else letter for letter in hand]


def replace_consumed(hand: Sequence[str], used_word: str, rng: random.Random,
                     table: Mapping[str, int] = LETTER_POWER) -> List[str]:
    """Redraw one hand position per letter of used_word, leaving unused duplicates alone."""
    needed = Counter(used_word.lower())
    new_hand = []
    for letter in hand:
        if needed[letter] > 0:
            needed[letter] -= 1
            new_hand.append(random_letter(rng, table))
        else:
            new_hand.append(letter)
    return new_hand


REPLACEMENT_STRATEGIES = {
    'value': replace_used,
    'position': replace_consumed,
}

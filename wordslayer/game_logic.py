"""Word engine and round resolution.

Everything here is a pure function of its arguments: hands, words, the
dictionary, the power table and an injected random.Random. Callers own the
BattleState and hands and decide what to do with each RoundOutcome.
"""
from __future__ import annotations
import logging
import random
from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence, Set

from .dictionary import Dictionary
from .letters import LETTER_POWER

log = logging.getLogger(__name__)

PLAYER = "Player"
BOT = "Bot"
DRAW = "Draw"

OutcomeKind = Enum("OutcomeKind", ["RESOLVED", "REJECTED", "NO_PLAYABLE_WORD"])

RoundPhase = Enum("RoundPhase", [
    "AWAITING_PLAYER_INPUT", "VALIDATING", "REJECTED", "BOT_SELECTING", "RESOLVING", "RESOLVED",
])

# Rejection reasons
NOT_A_WORD = "not_a_word"
MISSING_LETTERS = "missing_letters"


@dataclass(frozen=True)
class BattleState:
    player_hp: int
    bot_hp: int
    initial_hp: int

    @classmethod
    def new(cls, initial_hp: int) -> 'BattleState':
        return cls(player_hp=initial_hp, bot_hp=initial_hp, initial_hp=initial_hp)

    def _clamp(self, hp: int) -> int:
        return max(0, min(self.initial_hp, hp))

    def apply_damage(self, side: str, amount: int) -> 'BattleState':
        if side == PLAYER:
            return replace(self, player_hp=self._clamp(self.player_hp - amount))
        if side == BOT:
            return replace(self, bot_hp=self._clamp(self.bot_hp - amount))
        return self

    @property
    def is_over(self) -> bool:
        return self.player_hp <= 0 or self.bot_hp <= 0

    @property
    def victor(self) -> Optional[str]:
        if self.bot_hp <= 0 and self.player_hp > 0:
            return PLAYER
        if self.player_hp <= 0 and self.bot_hp > 0:
            return BOT
        return None


@dataclass(frozen=True)
class RoundOutcome:
    kind: OutcomeKind
    player_word: str
    state: BattleState
    bot_word: Optional[str] = None
    player_damage: int = 0
    bot_damage: int = 0
    winner: Optional[str] = None
    hp_delta: int = 0
    reason: Optional[str] = None

    @property
    def loser(self) -> Optional[str]:
        if self.winner == PLAYER:
            return BOT
        if self.winner == BOT:
            return PLAYER
        return None


def is_valid_word(word: str, dictionary: Dictionary) -> bool:
    if not word:
        return False
    return dictionary.contains(word.lower())


def calculate_power(word: str, table: Mapping[str, int] = LETTER_POWER) -> int:
    return sum(table.get(letter, 0) for letter in word.lower())


def can_form(word: str, hand: Sequence[str]) -> bool:
    """True when word uses each hand letter no more often than the hand holds it."""
    available = Counter(letter.lower() for letter in hand)
    needed = Counter(word.lower())
    return all(needed[letter] <= available[letter] for letter in needed)


def enumerate_valid_words(hand: Sequence[str], dictionary: Dictionary) -> Set[str]:
    """Find every dictionary word spelled by an ordering of a subset of the hand.

    Walks all orderings of hand positions depth first and collects each prefix
    of two or more letters that is a word. A branch stops once its prefix
    cannot begin any longer word.
    """
    found: Set[str] = set()

    def backtrack(prefix: str, remaining: List[str]) -> None:
        if len(prefix) > 1 and prefix in dictionary:
            found.add(prefix)
        if prefix and not dictionary.has_prefix(prefix):
            return
        tried = set()
        for i, letter in enumerate(remaining):
            # Equal letters in different positions lead to identical subtrees
            if letter in tried:
                continue
            tried.add(letter)
            backtrack(prefix + letter, remaining[:i] + remaining[i + 1:])

    backtrack("", [letter.lower() for letter in hand])
    log.debug("hand %s yields %d words", "".join(hand), len(found))
    return found


def choose_bot_word(bot_hand: Sequence[str], dictionary: Dictionary,
                    rng: random.Random) -> Optional[str]:
    words = sorted(enumerate_valid_words(bot_hand, dictionary))
    if not words:
        return None
    return rng.choice(words)


def resolve_round(player_word: str, bot_hand: Sequence[str], state: BattleState,
                  dictionary: Dictionary, rng: random.Random,
                  table: Mapping[str, int] = LETTER_POWER,
                  player_hand: Optional[Sequence[str]] = None,
                  on_phase: Optional[Callable[[RoundPhase], None]] = None) -> RoundOutcome:
    """Play one exchange: validate the player's word, pick the bot's, and damage the loser.

    Ties are draws and deal no damage. When the bot has nothing to play the
    outcome is NO_PLAYABLE_WORD and nobody is hurt. on_phase, when given, is
    called as the round enters each RoundPhase.
    """
    enter = on_phase or (lambda phase: None)
    word = (player_word or "").strip().lower()

    enter(RoundPhase.VALIDATING)

    if not is_valid_word(word, dictionary):
        log.info("rejected '%s': not a word", word)
        enter(RoundPhase.REJECTED)
        return RoundOutcome(OutcomeKind.REJECTED, word, state, reason=NOT_A_WORD)
    if player_hand is not None and not can_form(word, player_hand):
        log.info("rejected '%s': not in hand %s", word, "".join(player_hand))
        enter(RoundPhase.REJECTED)
        return RoundOutcome(OutcomeKind.REJECTED, word, state, reason=MISSING_LETTERS)

    player_damage = calculate_power(word, table)
    enter(RoundPhase.BOT_SELECTING)
    bot_word = choose_bot_word(bot_hand, dictionary, rng)
    if bot_word is None:
        log.info("bot hand %s has no playable word", "".join(bot_hand))
        return RoundOutcome(OutcomeKind.NO_PLAYABLE_WORD, word, state,
                            player_damage=player_damage)

    enter(RoundPhase.RESOLVING)
    bot_damage = calculate_power(bot_word, table)
    diff = abs(player_damage - bot_damage)
    if player_damage > bot_damage:
        winner = PLAYER
    elif bot_damage > player_damage:
        winner = BOT
    else:
        winner = DRAW

    outcome = RoundOutcome(
        kind=OutcomeKind.RESOLVED,
        player_word=word,
        state=state,
        bot_word=bot_word,
        player_damage=player_damage,
        bot_damage=bot_damage,
        winner=winner,
        hp_delta=diff if winner != DRAW else 0,
    )
    if outcome.loser:
        outcome = replace(outcome, state=state.apply_damage(outcome.loser, diff))
    log.info("'%s' (%d) vs '%s' (%d): %s", word, player_damage, bot_word, bot_damage, winner)
    enter(RoundPhase.RESOLVED)
    return outcome

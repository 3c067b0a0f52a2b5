import itertools
import random
from collections import Counter

import pytest

from wordslayer.dictionary import DEFAULT_WORDS, Dictionary
from wordslayer.game_logic import (
    BOT, DRAW, MISSING_LETTERS, NOT_A_WORD, PLAYER, BattleState, OutcomeKind, RoundPhase,
    calculate_power, can_form, choose_bot_word, enumerate_valid_words, is_valid_word, resolve_round,
)
from wordslayer.letters import LETTER_POWER


def brute_force_words(hand, dictionary):
    found = set()
    for size in range(2, len(hand) + 1):
        for perm in itertools.permutations(hand, size):
            word = "".join(perm)
            if word in dictionary:
                found.add(word)
    return found


# Word engine

def test_power_of_empty_word():
    assert calculate_power("") == 0


def test_power_sums_letter_weights():
    assert calculate_power("cat") == LETTER_POWER['c'] + LETTER_POWER['a'] + LETTER_POWER['t']
    assert calculate_power("quiz") == 22
    assert calculate_power("QUIZ") == 22


def test_power_ignores_unknown_characters():
    assert calculate_power("c-a't!") == 5


@pytest.mark.parametrize("word", ["cat", "dog", "do", "cow", "", "xyz"])
def test_validity_is_case_insensitive(dictionary, word):
    assert is_valid_word(word, dictionary) == is_valid_word(word.upper(), dictionary)


def test_empty_word_is_invalid(dictionary):
    assert not is_valid_word("", dictionary)


def test_can_form():
    assert can_form("good", list("godoxyz"))
    assert not can_form("good", list("godxyzw"))
    assert can_form("CAT", list("catdogx"))


def test_enumerate_scenario_hand():
    d = Dictionary.load(["cat", "dog", "do", "act", "tad", "good", "cc"])
    assert enumerate_valid_words(list("catdogx"), d) == {"cat", "dog", "do", "act", "tad"}


def test_enumerate_uses_duplicate_letters():
    d = Dictionary.load(["good", "god", "go"])
    assert enumerate_valid_words(list("ogodxxx"), d) == {"good", "god", "go"}


def test_enumerate_empty_when_nothing_playable(dictionary):
    assert enumerate_valid_words(list("xxxxxxx"), dictionary) == set()


@pytest.mark.parametrize("seed", range(5))
def test_enumerate_matches_brute_force(seed):
    d = Dictionary.load(DEFAULT_WORDS)
    hand = random.Random(seed).sample("aeioustrndlcmpgbh", 7)
    assert enumerate_valid_words(hand, d) == brute_force_words(hand, d)


@pytest.mark.parametrize("seed", range(5))
def test_enumerated_words_are_in_hand_and_dictionary(seed):
    d = Dictionary.load(DEFAULT_WORDS)
    hand = [random.Random(seed).choice("aeiostrdnlgo") for _ in range(7)]
    for word in enumerate_valid_words(hand, d):
        assert word in d
        assert not Counter(word) - Counter(hand)


def test_choose_bot_word(dictionary, first_rng):
    assert choose_bot_word(list("dogxxxx"), dictionary, first_rng) == "do"
    assert choose_bot_word(list("xxxxxxx"), dictionary, first_rng) is None


# Round resolution

def test_scenario_player_beats_bot(dictionary, first_rng):
    state = BattleState.new(50)
    outcome = resolve_round("cat", list("dogxxxx"), state, dictionary, first_rng)
    assert outcome.kind is OutcomeKind.RESOLVED
    assert outcome.bot_word == "do"
    assert outcome.player_damage == 5
    assert outcome.bot_damage == 3
    assert outcome.winner == PLAYER
    assert outcome.hp_delta == 2
    assert outcome.state == BattleState(player_hp=50, bot_hp=48, initial_hp=50)
    # input state is left alone
    assert state.bot_hp == 50


def test_scenario_bot_picks_a_playable_word(dictionary, rng):
    outcome = resolve_round("cat", list("dogxxxx"), BattleState.new(50), dictionary, rng)
    assert outcome.bot_word in {"dog", "do"}
    if outcome.bot_word == "do":
        assert outcome.winner == PLAYER
        assert outcome.state.bot_hp == 48
    else:
        assert outcome.winner == DRAW


def test_bot_wins(first_rng):
    d = Dictionary.load(["at", "zap"])
    outcome = resolve_round("at", list("zapxxxx"), BattleState.new(50), d, first_rng)
    assert outcome.bot_word == "zap"
    assert outcome.winner == BOT
    assert outcome.loser == PLAYER
    assert outcome.state.player_hp == 50 - (14 - 2)
    assert outcome.state.bot_hp == 50


def test_tie_is_a_draw_without_damage(first_rng):
    d = Dictionary.load(["cat", "dog"])
    state = BattleState.new(50)
    outcome = resolve_round("cat", list("dogxxxx"), state, d, first_rng)
    assert outcome.player_damage == outcome.bot_damage == 5
    assert outcome.winner == DRAW
    assert outcome.loser is None
    assert outcome.hp_delta == 0
    assert outcome.state == state


def test_hp_clamps_at_zero(first_rng):
    d = Dictionary.load(["quiz", "do"])
    state = BattleState(player_hp=50, bot_hp=5, initial_hp=50)
    outcome = resolve_round("quiz", list("doxxxxx"), state, d, first_rng)
    assert outcome.hp_delta == 19
    assert outcome.state.bot_hp == 0
    assert outcome.state.is_over
    assert outcome.state.victor == PLAYER


def test_rejected_word(dictionary, rng):
    state = BattleState.new(50)
    outcome = resolve_round("cow", list("dogxxxx"), state, dictionary, rng)
    assert outcome.kind is OutcomeKind.REJECTED
    assert outcome.reason == NOT_A_WORD
    assert outcome.bot_word is None
    assert outcome.state == state


def test_rejected_when_letters_missing(dictionary, rng):
    outcome = resolve_round("dog", list("dogxxxx"), BattleState.new(50), dictionary, rng,
                            player_hand=list("catxxxx"))
    assert outcome.kind is OutcomeKind.REJECTED
    assert outcome.reason == MISSING_LETTERS


def test_no_playable_word(dictionary, rng):
    state = BattleState.new(50)
    outcome = resolve_round("cat", list("xxxxxxx"), state, dictionary, rng)
    assert outcome.kind is OutcomeKind.NO_PLAYABLE_WORD
    assert outcome.bot_word is None
    assert outcome.winner is None
    assert outcome.state == state


def test_resolution_is_deterministic_for_a_seed():
    d = Dictionary.load(DEFAULT_WORDS)
    hand = list("staredo")
    first = resolve_round("rat", hand, BattleState.new(50), d, random.Random(99))
    second = resolve_round("rat", hand, BattleState.new(50), d, random.Random(99))
    assert first == second


def test_battle_state_clamps_to_range():
    state = BattleState.new(10)
    assert state.apply_damage(PLAYER, 25).player_hp == 0
    assert state.apply_damage(BOT, -5).bot_hp == 10
    assert state.apply_damage(DRAW, 5) == state
    assert not state.is_over
    assert state.victor is None


def test_resolve_round_reports_phases(dictionary, first_rng):
    phases = []
    resolve_round("cat", list("dogxxxx"), BattleState.new(50), dictionary, first_rng,
                  on_phase=phases.append)
    assert phases == [RoundPhase.VALIDATING, RoundPhase.BOT_SELECTING,
                      RoundPhase.RESOLVING, RoundPhase.RESOLVED]


def test_resolve_round_reports_rejection_phase(dictionary, rng):
    phases = []
    resolve_round("cow", list("dogxxxx"), BattleState.new(50), dictionary, rng, on_phase=phases.append)
    assert phases == [RoundPhase.VALIDATING, RoundPhase.REJECTED]

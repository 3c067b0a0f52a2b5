import random
from unittest.mock import AsyncMock

import pytest

from wordslayer.dictionary import Dictionary
from wordslayer.managers.battle import BattleManager
from tests.fixtures.randoms import FirstChoiceRandom

SCENARIO_WORDS = ["cat", "dog", "do"]


@pytest.fixture
def dictionary():
    return Dictionary.load(SCENARIO_WORDS)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def first_rng():
    return FirstChoiceRandom()


@pytest.fixture
def sio():
    return AsyncMock()


@pytest.fixture
def manager(sio, dictionary):
    return BattleManager(sio, dictionary, initial_hp=50, bot_delay=0, replacement='value')

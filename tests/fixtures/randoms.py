"""Deterministic random sources for tests."""
import random


class FirstChoiceRandom(random.Random):
    """Random source that always picks the first candidate."""
    def choice(self, seq):
        return seq[0]

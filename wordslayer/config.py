"""Runtime settings for the Word Slayer server, overridable from the environment."""
from __future__ import annotations
import os

# Word and hand limits are fixed: enumeration cost grows factorially with hand size
HAND_SIZE = 7
MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 7

DICTIONARY_PATH = os.environ.get("WORDSLAYER_DICTIONARY", "")
INITIAL_HP = int(os.environ.get("WORDSLAYER_INITIAL_HP", "50"))
BOT_DELAY_S = float(os.environ.get("WORDSLAYER_BOT_DELAY", "1.0"))

# 'value' redraws every hand letter found in the played word, 'position' only the consumed ones
REPLACEMENT = os.environ.get("WORDSLAYER_REPLACEMENT", "value")

LOG_LEVEL = os.environ.get("WORDSLAYER_LOG_LEVEL", "INFO")

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import FrozenSet, Iterable, List

from .config import MAX_WORD_LENGTH, MIN_WORD_LENGTH

log = logging.getLogger(__name__)

# Built-in word list for development/demo.
# In production, point WORDSLAYER_DICTIONARY at a full word list (words.json or one word per line).
DEFAULT_WORDS = [
    # Two letters
    'aa', 'ab', 'ad', 'ae', 'ag', 'ah', 'ai', 'al', 'am', 'an', 'ar', 'as', 'at', 'aw', 'ax', 'ay',
    'ba', 'be', 'bi', 'bo', 'by', 'do', 'ed', 'ef', 'eh', 'el', 'em', 'en', 'er', 'es', 'ex',
    'fa', 'go', 'ha', 'he', 'hi', 'hm', 'ho', 'id', 'if', 'in', 'is', 'it', 'jo', 'ka', 'ki',
    'la', 'li', 'lo', 'ma', 'me', 'mi', 'mo', 'mu', 'my', 'na', 'ne', 'no', 'nu', 'od', 'oe',
    'of', 'oh', 'oi', 'om', 'on', 'op', 'or', 'os', 'ow', 'ox', 'oy', 'pa', 'pe', 'pi', 'qi',
    're', 'sh', 'si', 'so', 'ta', 'ti', 'to', 'uh', 'um', 'un', 'up', 'us', 'ut', 'we', 'wo',
    'xi', 'xu', 'ya', 'ye', 'yo', 'za',
    # Three letters
    'ace', 'act', 'add', 'age', 'ago', 'aid', 'aim', 'air', 'ale', 'all', 'and', 'ant', 'any',
    'ape', 'arc', 'are', 'ark', 'arm', 'art', 'ash', 'ask', 'ate', 'axe', 'bad', 'bag', 'ban',
    'bat', 'bed', 'bee', 'bet', 'bid', 'big', 'bin', 'bit', 'box', 'boy', 'bud', 'bug', 'bus',
    'but', 'buy', 'cab', 'can', 'cap', 'car', 'cat', 'cow', 'cry', 'cub', 'cup', 'cut', 'dab',
    'dad', 'day', 'den', 'dew', 'did', 'die', 'dig', 'dim', 'dip', 'dog', 'dot', 'dry', 'due',
    'dug', 'ear', 'eat', 'egg', 'ego', 'elf', 'end', 'era', 'eve', 'eye', 'fan', 'far', 'fat',
    'fax', 'fed', 'fee', 'few', 'fig', 'fin', 'fit', 'fix', 'fly', 'fog', 'for', 'fox', 'fry',
    'fun', 'fur', 'gap', 'gas', 'gel', 'gem', 'get', 'gin', 'god', 'got', 'gum', 'gun', 'gut',
    'guy', 'gym', 'had', 'ham', 'has', 'hat', 'hay', 'hen', 'her', 'hex', 'hid', 'him', 'hip',
    'his', 'hit', 'hog', 'hop', 'hot', 'how', 'hub', 'hug', 'hut', 'ice', 'icy', 'ill', 'ink',
    'inn', 'ion', 'ivy', 'jab', 'jam', 'jar', 'jaw', 'jet', 'jig', 'job', 'jog', 'joy', 'jug',
    'keg', 'key', 'kid', 'kin', 'kit', 'lab', 'lad', 'lap', 'law', 'lay', 'led', 'leg', 'let',
    'lid', 'lie', 'lip', 'lit', 'log', 'lot', 'low', 'mad', 'man', 'map', 'mat', 'max', 'may',
    'men', 'met', 'mix', 'mob', 'mop', 'mud', 'mug', 'nap', 'net', 'new', 'nil', 'nod', 'nor',
    'not', 'now', 'nut', 'oak', 'oar', 'odd', 'off', 'oil', 'old', 'one', 'opt', 'orb', 'ore',
    'our', 'out', 'owl', 'own', 'pad', 'pal', 'pan', 'paw', 'pay', 'pea', 'pen', 'pet', 'pie',
    'pig', 'pin', 'pit', 'pod', 'pop', 'pot', 'pub', 'pun', 'pup', 'put', 'quo', 'rag', 'ram',
    'ran', 'rap', 'rat', 'raw', 'ray', 'red', 'rib', 'rid', 'rig', 'rim', 'rip', 'rob', 'rod',
    'rot', 'row', 'rub', 'rug', 'run', 'sad', 'sat', 'saw', 'say', 'sea', 'see', 'set', 'sew',
    'she', 'shy', 'sin', 'sip', 'sir', 'sit', 'six', 'ski', 'sky', 'sly', 'sob', 'son', 'sow',
    'soy', 'spa', 'spy', 'sum', 'sun', 'tab', 'tag', 'tan', 'tap', 'tar', 'tax', 'tea', 'ten',
    'the', 'tie', 'tin', 'tip', 'toe', 'ton', 'too', 'top', 'toy', 'try', 'tub', 'tug', 'two',
    'use', 'van', 'vat', 'vet', 'via', 'vow', 'wag', 'war', 'was', 'wax', 'way', 'web', 'wed',
    'wet', 'who', 'why', 'wig', 'win', 'wit', 'won', 'wow', 'yak', 'yam', 'yap', 'yes', 'yet',
    'you', 'zap', 'zed', 'zen', 'zip', 'zoo',
    # Four letters and up
    'able', 'acid', 'arms', 'aunt', 'axes', 'back', 'bake', 'band', 'bark', 'bear', 'beat',
    'bird', 'blue', 'boat', 'bold', 'bone', 'book', 'cake', 'calm', 'card', 'care', 'cart',
    'cats', 'coat', 'code', 'cold', 'cone', 'cord', 'core', 'dare', 'dark', 'date', 'deal',
    'dear', 'dogs', 'door', 'dose', 'dove', 'draw', 'drop', 'dust', 'east', 'easy', 'edge',
    'fire', 'fish', 'fizz', 'fuzz', 'game', 'gate', 'gold', 'hate', 'heat', 'hero', 'jazz',
    'jinx', 'kind', 'king', 'lake', 'late', 'lion', 'love', 'make', 'mate', 'maze', 'meat',
    'near', 'nest', 'note', 'onyx', 'oxen', 'page', 'pale', 'play', 'quiz', 'race', 'rate',
    'read', 'road', 'rose', 'sand', 'seat', 'slay', 'star', 'tale', 'team', 'tear', 'tide',
    'tile', 'time', 'tone', 'wave', 'word', 'zero', 'zone',
    'actor', 'alert', 'alone', 'angel', 'baker', 'beast', 'brave', 'crane', 'dream', 'earth',
    'grace', 'heart', 'hello', 'house', 'irate', 'later', 'least', 'magic', 'mouse', 'night',
    'ocean', 'point', 'quest', 'raise', 'react', 'sword', 'table', 'trace', 'water', 'world',
    'battle', 'border', 'castle', 'dragon', 'garden', 'hunter', 'knight', 'letter', 'master',
    'planet', 'silent', 'stream', 'winter', 'wizard',
    'slayer', 'captain', 'fortune', 'monster', 'warrior',
]


class DictionaryError(ValueError):
    pass


class Dictionary:
    def __init__(self, words: FrozenSet[str]):
        self._words = words
        self._prefixes = frozenset(w[:i] for w in words for i in range(1, len(w)))

    @classmethod
    def load(cls, words: Iterable[str]) -> 'Dictionary':
        """Build a dictionary from raw words, keeping only entries of playable length.

        Raises DictionaryError when nothing usable is left, since the game
        cannot start without a word list.
        """
        if words is None:
            raise DictionaryError("No word list provided")
        kept = frozenset(
            w for w in (str(word).strip().lower() for word in words)
            if MIN_WORD_LENGTH <= len(w) <= MAX_WORD_LENGTH
        )
        if not kept:
            raise DictionaryError(
                f"Word list has no entries of length {MIN_WORD_LENGTH}-{MAX_WORD_LENGTH}")
        log.info("Loaded %s words", f"{len(kept):,}")
        return cls(kept)

    def contains(self, word: str) -> bool:
        if not word:
            return False
        return word.lower() in self._words

    def has_prefix(self, prefix: str) -> bool:
        return prefix.lower() in self._prefixes

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        return len(self._words)


def load_words(path: str) -> List[str]:
    """Read a word list from a JSON array file or a plain text file with one word per line."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        if p.suffix.lower() == ".json":
            data = json.load(f)
            if not isinstance(data, list):
                raise DictionaryError(f"{path} must contain a JSON array of words")
            return [str(w) for w in data]
        return [line.strip() for line in f if line.strip()]


def build_dictionary(path: str = "") -> Dictionary:
    if path:
        log.info("Reading word list from %s", path)
        return Dictionary.load(load_words(path))
    log.warning("No dictionary file configured -- using built-in word list.")
    return Dictionary.load(DEFAULT_WORDS)

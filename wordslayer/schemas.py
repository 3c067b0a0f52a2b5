from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional

Side = Literal['Player', 'Bot', 'Draw']
OutcomeKindName = Literal['resolved', 'rejected', 'no_playable_word']
BattleStatus = Literal['active', 'finished']

class CreateBattle(BaseModel):
    seed: Optional[int] = None

class SubmitWord(BaseModel):
    word: str = Field(..., min_length=1, max_length=32)

class WordCheck(BaseModel):
    word: str
    valid: bool
    power: int = 0

class WordPower(BaseModel):
    word: str
    power: int

class LetterTable(BaseModel):
    letters: Dict[str, int]

class RoundResult(BaseModel):
    kind: OutcomeKindName
    playerWord: str
    botWord: Optional[str] = None
    playerDamage: int = 0
    botDamage: int = 0
    winner: Optional[Side] = None
    hpDelta: int = 0
    reason: Optional[str] = None

class BattleView(BaseModel):
    id: str
    playerHp: int
    botHp: int
    initialHp: int
    playerLetters: List[str]
    status: BattleStatus = 'active'
    victor: Optional[Side] = None
    log: List[str] = []

class PlayResult(BaseModel):
    outcome: RoundResult
    battle: BattleView

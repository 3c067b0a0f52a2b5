from __future__ import annotations
import asyncio
import logging
import random
import uuid
from typing import Dict, List, Optional

from .. import config
from ..dictionary import Dictionary
from ..game_logic import (
    BattleState, OutcomeKind, RoundOutcome, RoundPhase, NOT_A_WORD, resolve_round,
)
from ..letters import REPLACEMENT_STRATEGIES, generate_hand
from ..schemas import BattleView, RoundResult

log = logging.getLogger(__name__)

MAX_LOG_ENTRIES = 50


class BattleNotFound(LookupError):
    pass


class BattleFinished(RuntimeError):
    pass


class BattleBusy(RuntimeError):
    pass


def to_result(outcome: RoundOutcome) -> RoundResult:
    return RoundResult(
        kind=outcome.kind.name.lower(),  # type: ignore
        playerWord=outcome.player_word,
        botWord=outcome.bot_word,
        playerDamage=outcome.player_damage,
        botDamage=outcome.bot_damage,
        winner=outcome.winner,  # type: ignore
        hpDelta=outcome.hp_delta,
        reason=outcome.reason,
    )


class Battle:
    def __init__(self, battle_id: str, sio, dictionary: Dictionary, rng: random.Random,
                 initial_hp: int = config.INITIAL_HP, bot_delay: float = config.BOT_DELAY_S,
                 replacement: str = config.REPLACEMENT):
        if replacement not in REPLACEMENT_STRATEGIES:
            raise ValueError(f"Unknown replacement strategy '{replacement}'")
        self.id = battle_id
        self.sio = sio
        self.dictionary = dictionary
        self.rng = rng
        self.bot_delay = bot_delay
        self.initial_hp = initial_hp
        self._replace = REPLACEMENT_STRATEGIES[replacement]
        self._bot_task: Optional[asyncio.Task] = None
        self.reset()

    def reset(self):
        self.state = BattleState.new(self.initial_hp)
        self.player_letters: List[str] = generate_hand(self.rng)
        self.bot_letters: List[str] = generate_hand(self.rng)
        self.log: List[str] = []
        self.phase = RoundPhase.AWAITING_PLAYER_INPUT
        self.round_phases: List[RoundPhase] = []
        if self._bot_task and not self._bot_task.done():
            self._bot_task.cancel()

    @property
    def status(self) -> str:
        return 'finished' if self.state.is_over else 'active'

    @property
    def revealing(self) -> bool:
        return self._bot_task is not None and not self._bot_task.done()

    def to_view(self) -> BattleView:
        return BattleView(
            id=self.id,
            playerHp=self.state.player_hp,
            botHp=self.state.bot_hp,
            initialHp=self.state.initial_hp,
            playerLetters=list(self.player_letters),
            status=self.status,  # type: ignore
            victor=self.state.victor,  # type: ignore
            log=list(self.log),
        )

    def _add_log(self, line: str):
        # newest first, like the battle log panel
        self.log.insert(0, line)
        del self.log[MAX_LOG_ENTRIES:]

    def _enter(self, phase: RoundPhase):
        self.phase = phase
        self.round_phases.append(phase)

    def play(self, word: str, hold: bool = False) -> RoundOutcome:
        """Resolve a round immediately and apply it to this battle's HP and hands.

        The battle is back in AWAITING_PLAYER_INPUT when this returns, unless
        hold is set and the round resolved: then it stays RESOLVED until the
        bot's move has been revealed.
        """
        if self.state.is_over:
            raise BattleFinished(f"Battle {self.id} is finished")
        if self.revealing:
            raise BattleBusy(f"Battle {self.id} is revealing the bot's move")
        self.round_phases = []
        outcome = resolve_round(word, self.bot_letters, self.state, self.dictionary, self.rng,
                                player_hand=self.player_letters, on_phase=self._enter)

        if outcome.kind is OutcomeKind.REJECTED:
            if outcome.reason == NOT_A_WORD:
                self._add_log(f"'{outcome.player_word.upper()}' is not a valid word!")
            else:
                self._add_log(f"'{outcome.player_word.upper()}' can't be made from your letters!")
        elif outcome.kind is OutcomeKind.NO_PLAYABLE_WORD:
            # Bot redraws and the player plays again with the same hand
            self.bot_letters = generate_hand(self.rng)
            self._add_log("Bot has no playable word and draws new letters")
        else:
            self._add_log(f"Player used '{outcome.player_word.upper()}' (-{outcome.player_damage} HP)")
            self._add_log(f"Bot used '{outcome.bot_word.upper()}' (-{outcome.bot_damage} HP)")
            if outcome.loser:
                self._add_log(f"{outcome.winner} wins! {outcome.loser} was damaged by {outcome.hp_delta} HP")
            else:
                self._add_log("Draw! No damage dealt")
            self.state = outcome.state
            self.player_letters = self._replace(self.player_letters, outcome.player_word, self.rng)
            self.bot_letters = self._replace(self.bot_letters, outcome.bot_word, self.rng)
            if hold:
                return outcome

        self._enter(RoundPhase.AWAITING_PLAYER_INPUT)
        return outcome

    async def start(self):
        await self.sio.emit('battle:state', self.to_view().model_dump(), room=self.id)

    async def submit(self, word: str) -> Optional[RoundOutcome]:
        if self.revealing:
            log.debug("battle %s: ignoring '%s' while the bot move is pending", self.id, word)
            return None
        try:
            outcome = self.play(word, hold=True)
        except BattleFinished:
            await self.sio.emit('battle:over', {'victor': self.state.victor}, room=self.id)
            return None

        if outcome.kind is OutcomeKind.REJECTED:
            await self.sio.emit('battle:rejected', to_result(outcome).model_dump(), room=self.id)
            await self.sio.emit('battle:state', self.to_view().model_dump(), room=self.id)
            return outcome

        await self.sio.emit('battle:player-move', {
            'word': outcome.player_word,
            'damage': outcome.player_damage,
        }, room=self.id)
        self._bot_task = asyncio.create_task(self._reveal_after(self.bot_delay, outcome))
        return outcome

    async def _reveal_after(self, delay: float, outcome: RoundOutcome):
        await asyncio.sleep(delay)
        if outcome.bot_word is not None:
            await self.sio.emit('battle:bot-move', {
                'word': outcome.bot_word,
                'damage': outcome.bot_damage,
            }, room=self.id)
        await self.sio.emit('battle:round', to_result(outcome).model_dump(), room=self.id)
        await self.sio.emit('battle:state', self.to_view().model_dump(), room=self.id)
        if self.state.is_over:
            await self.sio.emit('battle:over', {'victor': self.state.victor}, room=self.id)
        self._enter(RoundPhase.AWAITING_PLAYER_INPUT)


class BattleManager:
    def __init__(self, sio, dictionary: Dictionary, initial_hp: int = config.INITIAL_HP,
                 bot_delay: float = config.BOT_DELAY_S, replacement: str = config.REPLACEMENT):
        self.sio = sio
        self.dictionary = dictionary
        self.initial_hp = initial_hp
        self.bot_delay = bot_delay
        self.replacement = replacement
        self.battles: Dict[str, Battle] = {}

    def create(self, battle_id: Optional[str] = None, seed: Optional[int] = None) -> Battle:
        battle_id = battle_id or uuid.uuid4().hex
        battle = Battle(battle_id, self.sio, self.dictionary, random.Random(seed),
                        initial_hp=self.initial_hp, bot_delay=self.bot_delay,
                        replacement=self.replacement)
        self.battles[battle_id] = battle
        log.info("battle %s created (seed=%s)", battle_id, seed)
        return battle

    def get(self, battle_id: str) -> Battle:
        battle = self.battles.get(battle_id)
        if battle is None:
            raise BattleNotFound(battle_id)
        return battle

    def get_or_create(self, battle_id: str, seed: Optional[int] = None) -> Battle:
        if battle_id not in self.battles:
            return self.create(battle_id, seed)
        return self.battles[battle_id]

    def restart(self, battle_id: str) -> Battle:
        battle = self.get(battle_id)
        battle.reset()
        return battle

    def remove(self, battle_id: str):
        battle = self.battles.pop(battle_id, None)
        if battle and battle.revealing:
            battle._bot_task.cancel()

    async def start_battle(self, battle_id: str, seed: Optional[int] = None):
        battle = self.get_or_create(battle_id, seed)
        await battle.start()

    async def submit(self, battle_id: str, word: str) -> Optional[RoundOutcome]:
        battle = self.battles.get(battle_id)
        if battle is None:
            return None
        return await battle.submit(word)

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from ..game_logic import calculate_power, is_valid_word
from ..letters import LETTER_POWER
from ..managers.battle import BattleBusy, BattleFinished, BattleManager, BattleNotFound, to_result
from ..schemas import BattleView, CreateBattle, LetterTable, PlayResult, SubmitWord, WordCheck, WordPower

router = APIRouter()


def get_battles(request: Request) -> BattleManager:
    return request.app.state.battles


@router.get('/letters', response_model=LetterTable)
async def letters():
    return LetterTable(letters=LETTER_POWER)


@router.get('/words/validate', response_model=WordCheck)
async def validate_word(word: str, battles: BattleManager = Depends(get_battles)):
    valid = is_valid_word(word, battles.dictionary)
    return WordCheck(word=word.upper(), valid=valid, power=calculate_power(word) if valid else 0)


@router.get('/words/power', response_model=WordPower)
async def word_power(word: str):
    # live score shown while the player picks letters
    return WordPower(word=word.upper(), power=calculate_power(word))


@router.post('/battles', response_model=BattleView, status_code=201)
async def create_battle(body: Optional[CreateBattle] = None, battles: BattleManager = Depends(get_battles)):
    seed = body.seed if body else None
    return battles.create(seed=seed).to_view()


@router.get('/battles/{battle_id}', response_model=BattleView)
async def get_battle(battle_id: str, battles: BattleManager = Depends(get_battles)):
    try:
        return battles.get(battle_id).to_view()
    except BattleNotFound:
        raise HTTPException(status_code=404, detail='Battle not found')


@router.post('/battles/{battle_id}/words', response_model=PlayResult)
async def play_word(battle_id: str, body: SubmitWord, battles: BattleManager = Depends(get_battles)):
    try:
        battle = battles.get(battle_id)
        outcome = battle.play(body.word)
    except BattleNotFound:
        raise HTTPException(status_code=404, detail='Battle not found')
    except BattleFinished:
        raise HTTPException(status_code=409, detail='Battle is finished')
    except BattleBusy:
        raise HTTPException(status_code=409, detail="Bot's move is still being revealed")
    return PlayResult(outcome=to_result(outcome), battle=battle.to_view())


@router.post('/battles/{battle_id}/restart', response_model=BattleView)
async def restart_battle(battle_id: str, battles: BattleManager = Depends(get_battles)):
    try:
        return battles.restart(battle_id).to_view()
    except BattleNotFound:
        raise HTTPException(status_code=404, detail='Battle not found')


@router.delete('/battles/{battle_id}', status_code=204)
async def delete_battle(battle_id: str, battles: BattleManager = Depends(get_battles)):
    try:
        battles.get(battle_id)
    except BattleNotFound:
        raise HTTPException(status_code=404, detail='Battle not found')
    battles.remove(battle_id)

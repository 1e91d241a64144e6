from typing import Dict

from fastapi import APIRouter, Request

from ..managers.game import GameManager
from ..schemas import AnswerData, CreateGameData, GameView, LookupResult, PlayerData

router = APIRouter()


def _games(request: Request) -> GameManager:
    return request.app.state.games


@router.put('/game/{game_id}')
async def create_game(game_id: str, data: CreateGameData, request: Request):
    await _games(request).create_game(game_id, data.player, data.settings)
    return {'ok': True}


@router.post('/game/{game_id}')
async def join_game(game_id: str, data: PlayerData, request: Request):
    await _games(request).join_game(game_id, data.player)
    return {'ok': True}


@router.get('/game/{game_id}', response_model=GameView, response_model_by_alias=True)
async def game_state(game_id: str, request: Request):
    return await _games(request).get_game(game_id)


@router.post('/game/{game_id}/answer')
async def answer(game_id: str, data: AnswerData, request: Request):
    await _games(request).submit_answer(game_id, data.player, data.answer)
    return {'ok': True}


@router.delete('/game/{game_id}/exit')
async def exit_game(game_id: str, data: PlayerData, request: Request):
    await _games(request).leave_game(game_id, data.player)
    return {'ok': True}


@router.delete('/game/{game_id}')
async def delete_game(game_id: str, request: Request):
    await _games(request).delete_game(game_id)
    return {'ok': True}


@router.get('/game/{game_id}/score')
async def score(game_id: str, request: Request) -> Dict[str, int]:
    return await _games(request).get_score(game_id)


@router.get('/dict/lookup', response_model=LookupResult, response_model_by_alias=True)
async def lookup_word(word: str, request: Request):
    entry = _games(request).dictionary.lookup(word)
    if entry is None:
        return LookupResult(word=word.upper(), valid=False)
    return LookupResult(word=entry.word, valid=True, score=entry.score, definition=entry.definition)

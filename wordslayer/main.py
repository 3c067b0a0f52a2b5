from __future__ import annotations
import logging

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .dictionary import build_dictionary
from .managers.battle import BattleManager
from .routers.battle import router as battle_router

logging.basicConfig(level=config.LOG_LEVEL)
log = logging.getLogger(__name__)

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins='*')
app = FastAPI(title="Word Slayer Server", version="0.1.0")

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

# A missing or empty word list stops the server here, before any battle starts
dictionary = build_dictionary(config.DICTIONARY_PATH)
battles = BattleManager(sio, dictionary)
app.state.battles = battles
app.include_router(battle_router)

# Socket.IO Events
@sio.event
async def connect(sid, environ, auth=None):
    await sio.emit('pong', to=sid)

@sio.event
async def disconnect(sid):
    sess = await sio.get_session(sid) or {}
    battle_id = sess.get('battle_id')
    if battle_id:
        # one browser tab per battle; nobody else can resume it
        battles.remove(battle_id)
        log.info("battle %s closed on disconnect", battle_id)

@sio.on('ping')
async def on_ping(sid):
    await sio.emit('pong', to=sid)

@sio.on('battle:start')
async def battle_start(sid, payload=None):
    # Each socket gets its own battle room; an optional seed makes the letters reproducible
    seed = payload.get('seed') if isinstance(payload, dict) else None
    battle_id = sid
    await sio.enter_room(sid, battle_id)
    sess = await sio.get_session(sid) or {}
    await sio.save_session(sid, { **sess, 'battle_id': battle_id })
    await battles.start_battle(battle_id, seed)

@sio.on('battle:submit')
async def battle_submit(sid, payload):
    sess = await sio.get_session(sid)
    battle_id = sess.get('battle_id') if sess else None
    if not battle_id:
        return
    word = payload.get('word') if isinstance(payload, dict) else payload
    if not isinstance(word, str) or not word.strip():
        return
    await battles.submit(battle_id, word)

@sio.on('battle:restart')
async def battle_restart(sid):
    sess = await sio.get_session(sid)
    battle_id = sess.get('battle_id') if sess else None
    if not battle_id or battle_id not in battles.battles:
        return
    battle = battles.restart(battle_id)
    await battle.start()

# Export ASGI app for uvicorn
application = asgi_app

# For local running: uvicorn wordslayer.main:application --reload --host 0.0.0.0 --port 8000

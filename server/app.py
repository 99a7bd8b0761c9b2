"""FastAPI server for finyap application."""

import logging
import os
import uuid

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.config import LANGUAGE, SCENARIOS_DIR, DEFAULT_SENTENCES_PER_SCENARIO
from core.errors import ConfigurationError
from core.interfaces import Storage
from core.loader import load_scenarios, assign_ids
from core.session import GameSession, sort_stats, filter_stats
from core.utils import build_vocabulary

from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage


# Pydantic models for API
class StartSessionRequest(BaseModel):
    scenarios: list[str]
    per_scenario: int = DEFAULT_SENTENCES_PER_SCENARIO


class GuessRequest(BaseModel):
    word: str


class ScenarioResponse(BaseModel):
    name: str
    total_plays: int
    correct_plays: int
    sentence_count: int
    accuracy: float


class SessionResponse(BaseModel):
    session_id: str
    state: str
    recovery: bool
    pass_number: int
    scenario: Optional[str] = None
    position: Optional[int] = None
    total: Optional[int] = None
    remaining: Optional[int] = None
    english: Optional[str] = None
    word_index: Optional[int] = None
    words: list = []
    success: Optional[bool] = None
    finnish: Optional[str] = None
    prompt: Optional[str] = None
    diff: Optional[dict] = None
    last_guess_correct: Optional[bool] = None


# Global state (in production, use proper DI)
storage: Storage = None
sentences: list = []
game_sessions: dict[str, GameSession] = {}


app = FastAPI(title="Finyap API", description=f"{LANGUAGE} sentence reconstruction drills")


def init_state(new_storage: Storage | None, loaded_sentences: list) -> None:
    """Install storage and content. Sentences get their ids from storage when present."""
    global storage, sentences
    storage = new_storage
    if storage is not None:
        loaded_sentences = storage.sync_sentences(loaded_sentences)
    else:
        loaded_sentences = assign_ids(loaded_sentences)
    sentences = loaded_sentences
    game_sessions.clear()


@app.on_event("startup")
async def startup():
    """Initialize storage and load scenarios on startup."""
    if storage is not None:
        return

    # Use PostgreSQL by default, set FINYAP_STORAGE=file to use file storage
    storage_type = os.environ.get('FINYAP_STORAGE', 'postgres')
    if storage_type == 'file':
        backend = FileStorage()
        logger.info("Using file storage")
    else:
        backend = PostgresStorage()
        logger.info("Using PostgreSQL storage")

    scenarios_dir = os.environ.get('FINYAP_SCENARIOS_DIR', SCENARIOS_DIR)
    loaded = load_scenarios(scenarios_dir)
    if not loaded:
        logger.warning(f"No sentences found in '{scenarios_dir}'")
    init_state(backend, loaded)
    logger.info(f"Loaded {len(sentences)} sentences from '{scenarios_dir}'")


def get_session(session_id: str) -> GameSession:
    session = game_sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session


def session_response(session_id: str, session: GameSession, attempt=None) -> SessionResponse:
    view = session.view()
    view['pass_number'] = view.pop('pass')
    if attempt is not None:
        view['last_guess_correct'] = attempt.is_correct
    return SessionResponse(session_id=session_id, **view)


@app.get("/")
async def root():
    """Health check."""
    return {"service": "finyap", "language": LANGUAGE, "sentences": len(sentences)}


@app.get("/api/scenarios", response_model=list[ScenarioResponse])
async def list_scenarios(filter: str = ""):
    """Scenario statistics, most played first."""
    try:
        stats = storage.get_scenario_stats()
    except Exception as e:
        logger.error(f"Failed to load scenario stats: {e}")
        raise HTTPException(status_code=503, detail="Scenario statistics unavailable")
    return [s.to_dict() for s in filter_stats(sort_stats(stats), filter)]


@app.get("/api/vocabulary")
async def get_vocabulary(scenario: Optional[str] = None):
    """Distinct normalized words, for one scenario or all of them."""
    in_scope = [s for s in sentences if scenario is None or s.scenario == scenario]
    return {"words": build_vocabulary(in_scope)}


@app.post("/api/sessions", response_model=SessionResponse)
async def start_session(request: StartSessionRequest):
    """Compose a session from the selected scenarios and start playing."""
    try:
        session = GameSession.start(request.scenarios, request.per_scenario, sentences,
                                    recorder=storage)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    session_id = str(uuid.uuid4())[:8]
    game_sessions[session_id] = session
    logger.info(f"Session {session_id} started with {len(session.queue)} sentences")
    return session_response(session_id, session)


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def get_session_state(session_id: str):
    return session_response(session_id, get_session(session_id))


@app.post("/api/sessions/{session_id}/guess", response_model=SessionResponse)
async def submit_guess(session_id: str, request: GuessRequest):
    """Submit a guess for the current word."""
    session = get_session(session_id)
    attempt = session.submit_guess(request.word)
    return session_response(session_id, session, attempt)


@app.get("/api/sessions/{session_id}/feedback")
async def get_feedback(session_id: str, typed: str = ""):
    """Per-character feedback for partially typed input against the current word."""
    session = get_session(session_id)
    return {"feedback": [list(f) for f in session.feedback(typed)]}


@app.post("/api/sessions/{session_id}/ack", response_model=SessionResponse)
async def acknowledge(session_id: str):
    """Move on from a finished sentence."""
    session = get_session(session_id)
    session.acknowledge()
    response = session_response(session_id, session)
    if session.is_finished:
        del game_sessions[session_id]
    return response


@app.post("/api/sessions/{session_id}/cancel", response_model=SessionResponse)
async def cancel(session_id: str):
    """Abandon a session without recording the sentence in progress."""
    session = get_session(session_id)
    session.cancel()
    del game_sessions[session_id]
    return session_response(session_id, session)


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app

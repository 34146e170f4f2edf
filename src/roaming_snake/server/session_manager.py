"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections import deque
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from roaming_snake.engine import SimulationEngine, TickResult
from roaming_snake.particles import ParticleSystem
from roaming_snake.server.models import SessionStatus, SessionSummary
from roaming_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100
_MAX_PENDING_DIRECTIONS = 3


@dataclass
class GameSession:
    """One player's engine plus the driver state wrapped around it."""

    session_id: str
    engine: SimulationEngine
    tick_rate_ms: int
    score_multiplier: int = 10
    status: SessionStatus = SessionStatus.WAITING
    high_score: int = 0
    pending: deque[Direction] = field(default_factory=deque)
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    particles: ParticleSystem = field(init=False, repr=False)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.particles = ParticleSystem(
            self.engine.grid_size, rng=self.engine.rng,
        )

    @property
    def score(self) -> int:
        return self.engine.score

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            tick_rate_ms=self.tick_rate_ms,
            score=self.score,
            high_score=self.high_score,
        )

    def payload(self, best_score: int = 0) -> dict:
        """Full, serializable view of the session for clients.

        *best_score* is the cross-session best kept by the manager.
        """
        best_score = max(best_score, self.high_score)
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "tick_rate_ms": self.tick_rate_ms,
            "tile_count": self.engine.tile_count,
            "grid_size": self.engine.grid_size,
            "display_score": self.score * self.score_multiplier,
            "high_score": self.high_score,
            "display_high_score": self.high_score * self.score_multiplier,
            "best_score": best_score,
            "display_best_score": best_score * self.score_multiplier,
            "state": self.engine.get_game_state().to_dict(),
            "particles": self.particles.to_list(),
        }


class SessionManager:
    """Central registry managing all play sessions."""

    def __init__(
        self, max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self._sessions: dict[str, GameSession] = {}
        self._max_finished_sessions = max_finished_sessions
        self.best_score = 0

    def create_session(
        self,
        grid_size: int = 20,
        canvas_width: int = 400,
        food_move_interval: int = 3,
        tick_rate_ms: int = 100,
        score_multiplier: int = 10,
        seed: int | None = None,
    ) -> GameSession:
        """Create a session with a fresh, not yet started engine."""
        engine = SimulationEngine(
            grid_size=grid_size,
            canvas_width=canvas_width,
            food_move_interval=food_move_interval,
            seed=seed,
        )
        session_id = uuid.uuid4().hex[:12]
        session = GameSession(
            session_id=session_id,
            engine=engine,
            tick_rate_ms=tick_rate_ms,
            score_multiplier=score_multiplier,
        )
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (%d×%d tiles).",
            session_id, engine.tile_count, engine.tile_count,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of non-finished sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.FINISHED
        ]

    def payload(self, session: GameSession) -> dict:
        """Session payload carrying the best score across all sessions."""
        return session.payload(self.best_score)

    def _require(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def start_session(self, session_id: str) -> GameSession:
        """Start or resume play.

        A session whose engine is not running gets a fresh board first; a
        paused one simply resumes.
        """
        session = self._require(session_id)
        engine = session.engine
        if not engine.running:
            engine.reset()
            session.pending.clear()
            session.particles.clear()
        engine.start_game()
        self._activate(session)
        logger.info("Session %s started.", session_id)
        return session

    def pause_session(self, session_id: str) -> GameSession:
        """Toggle pause on a running session."""
        session = self._require(session_id)
        if not session.engine.running:
            raise ValueError("Session is not running.")
        session.engine.pause_game()
        return session

    def restart_session(self, session_id: str) -> GameSession:
        """Throw away the current board and start a new game."""
        session = self._require(session_id)
        session.engine.reset()
        session.pending.clear()
        session.particles.clear()
        session.engine.start_game()
        self._activate(session)
        logger.info("Session %s restarted.", session_id)
        return session

    def queue_direction(self, session_id: str, direction: Direction) -> bool:
        """Queue a turn to be applied on an upcoming tick.

        Intents are dropped while the game is not running or paused, or
        when the queue is full. Returns True if the intent was queued.
        """
        session = self._require(session_id)
        engine = session.engine
        if not engine.running or engine.paused:
            return False
        if len(session.pending) >= _MAX_PENDING_DIRECTIONS:
            return False
        session.pending.append(direction)
        return True

    def _activate(self, session: GameSession) -> None:
        session.status = SessionStatus.ACTIVE
        session.finished_at = None
        if session._task is None or session._task.done():
            session._task = asyncio.create_task(self._tick_loop(session))

    @staticmethod
    def _apply_pending(session: GameSession) -> None:
        """Feed queued turns to the engine until one is accepted."""
        while session.pending:
            direction = session.pending.popleft()
            if session.engine.set_direction(*direction.value):
                return

    def _step(self, session: GameSession) -> TickResult:
        """Advance one tick: apply a queued turn, update, animate sparks.

        Eating bursts particles from the cell the head just entered.
        """
        engine = session.engine
        if not engine.paused:
            self._apply_pending(session)
        score_before = engine.score
        result = engine.update()
        if result.continues or result.game_over:
            if engine.score > score_before:
                session.particles.burst(engine.snake.head)
            session.particles.update()
        if result.game_over:
            self._mark_session_finished(session)
        return result

    async def _tick_loop(self, session: GameSession) -> None:
        """Step the engine on a fixed interval, broadcasting each move."""
        tick_interval = session.tick_rate_ms / 1000.0
        try:
            while session.status == SessionStatus.ACTIVE:
                await asyncio.sleep(tick_interval)
                async with session.lock:
                    if session.status != SessionStatus.ACTIVE:
                        break
                    result = self._step(session)
                    payload = (
                        self.payload(session)
                        if result.continues or result.game_over else None
                    )
                if payload is not None:
                    await self._broadcast(session, payload)
        except asyncio.CancelledError:
            logger.info(
                "Tick loop cancelled for session %s.", session.session_id,
            )
        except Exception:
            logger.exception(
                "Tick loop error in session %s.", session.session_id,
            )
            self._mark_session_finished(session)
        finally:
            if session.status == SessionStatus.FINISHED:
                self._prune_finished_sessions()

    def _mark_session_finished(self, session: GameSession) -> None:
        """Transition a session to finished and record its high score."""
        if session.status == SessionStatus.FINISHED:
            return
        session.status = SessionStatus.FINISHED
        session.finished_at = time.monotonic()
        session.high_score = max(session.high_score, session.score)
        if session.score > self.best_score:
            self.best_score = session.score
            logger.info(
                "New best score %d in session %s.",
                self.best_score, session.session_id,
            )

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def _broadcast(self, session: GameSession, payload: dict) -> None:
        """Send the session payload to every connected socket."""
        text = json.dumps(payload, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a copy; disconnect handlers may mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(text)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")

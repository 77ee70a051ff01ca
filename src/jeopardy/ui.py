"""FastAPI-powered web UI for playing Jeopardy in the browser."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, model_validator

from . import client as client_module
from .board import (
    BoardView,
    final_ranking_lines,
    leaderboard_lines,
    render_board,
    winner_heading,
)
from .client import TriviaClient
from .controller import (
    Action,
    AdjustScore,
    BackToMain,
    ClickCell,
    CompleteGame,
    InvalidAction,
    Panel,
    RestartGame,
    ScreenController,
    Standings,
    StartGame,
)
from .game import TEAMS, Direction, Team

logger = logging.getLogger(__name__)

LOADING_DELAY: float = 5.0


@dataclass
class SessionView:
    """Keeps the latest output of every render hook so it can be sent as JSON."""

    panel: Panel = Panel.START
    board: BoardView = field(default_factory=lambda: render_board([]))
    cells: Dict[Tuple[int, int], str] = field(default_factory=dict)
    scores: Dict[Team, int] = field(default_factory=lambda: {t: 0 for t in TEAMS})
    ranking: List[Team] = field(default_factory=list)
    leaderboard: List[str] = field(default_factory=list)
    winning_team: Optional[str] = None
    final_rankings: List[str] = field(default_factory=list)

    def render_board(self, board: BoardView) -> None:
        self.board = board
        self.cells = {}

    def render_cell(self, category_index: int, clue_index: int, text: str) -> None:
        self.cells[(category_index, clue_index)] = text

    def render_score(self, team: Team, value: int) -> None:
        self.scores[team] = value

    def render_leaderboard(self, standings: Standings) -> None:
        self.ranking = [team for team, _ in standings]
        self.leaderboard = leaderboard_lines(self.ranking, dict(standings))
        self.winning_team = winner_heading(self.ranking)

    def render_final_rankings(self, standings: Standings) -> None:
        self.final_rankings = final_ranking_lines(
            [team for team, _ in standings], dict(standings)
        )

    def show_panel(self, panel: Panel) -> None:
        self.panel = panel


@dataclass
class GameSession:
    """Container for one browser's game: its controller and what it last rendered."""

    controller: ScreenController
    view: SessionView


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Jeopardy", description="Team trivia board played in the browser")


class ActionRequest(BaseModel):
    """Request payload for a single player action."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["start", "restart", "reveal", "score", "complete", "back"]
    category_index: Optional[int] = Field(default=None, alias="categoryIndex", ge=0)
    clue_index: Optional[int] = Field(default=None, alias="clueIndex", ge=0)
    team: Optional[int] = None
    direction: Optional[Direction] = None

    @model_validator(mode="after")
    def ensure_payload(self) -> "ActionRequest":
        if self.kind == "reveal" and (
            self.category_index is None or self.clue_index is None
        ):
            raise ValueError("reveal requires categoryIndex and clueIndex")
        if self.kind == "score" and (self.team is None or self.direction is None):
            raise ValueError("score requires team and direction")
        return self

    def to_action(self) -> Action:
        if self.kind == "reveal":
            return ClickCell(self.category_index, self.clue_index)
        if self.kind == "score":
            return AdjustScore(self.team, self.direction)
        return {
            "start": StartGame,
            "restart": RestartGame,
            "complete": CompleteGame,
            "back": BackToMain,
        }[self.kind]()


def _create_client() -> TriviaClient:
    return TriviaClient(base_url=client_module.API_URL)


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session on the start screen and register it."""

    view = SessionView()
    controller = ScreenController(
        view, _create_client(), loading_delay=LOADING_DELAY
    )
    controller.open()
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = GameSession(controller=controller, view=view)
    logger.debug("Created session %s", session_id)
    return session_id, SESSIONS[session_id]


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


async def _finish_loading(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return
    await session.controller.finish_loading()


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    view = session.view
    rows: List[Dict[str, object]] = []
    for row in view.board.rows:
        rows.append(
            {
                "value": row.value,
                "cells": [
                    {
                        "categoryIndex": cell.category_index,
                        "clueIndex": cell.clue_index,
                        "text": view.cells.get(
                            (cell.category_index, cell.clue_index), cell.text
                        ),
                        "available": cell.available,
                    }
                    for cell in row.cells
                ],
            }
        )

    return {
        "id": game_id,
        "panel": view.panel.value,
        "board": {"header": list(view.board.header), "rows": rows},
        "scores": {str(team): value for team, value in view.scores.items()},
        "ranking": list(view.ranking),
        "leaderboard": list(view.leaderboard),
        "winningTeam": view.winning_team,
        "finalRankings": list(view.final_rankings),
        "lastError": session.controller.last_error,
    }


@app.post("/api/game")
async def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
async def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/action")
async def apply_action(
    game_id: str, request: ActionRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    try:
        loading = session.controller.dispatch(request.to_action())
    except InvalidAction as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if loading:
        background_tasks.add_task(_finish_loading, game_id)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
async def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Jeopardy</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
        font-weight: 400;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #1d2c8f, #0f1a5c 55%, #070d33);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.94);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(4, 10, 40, 0.35);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(1100px, 100%);
      }
      h1 {
        margin: 0 0 0.5rem;
        font-size: clamp(1.8rem, 2.4vw + 1.2rem, 2.6rem);
        text-align: center;
        letter-spacing: 0.06em;
        color: #0c1a33;
      }
      .hidden {
        display: none !important;
      }
      .panel {
        margin-bottom: 1.75rem;
        text-align: center;
      }
      button {
        font-size: 1rem;
        padding: 0.55rem 0.95rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        cursor: pointer;
        transition: transform 0.1s ease, box-shadow 0.1s ease;
        font-family: inherit;
      }
      button:hover {
        transform: translateY(-1px);
        box-shadow: 0 8px 18px rgba(0, 64, 128, 0.12);
      }
      .message {
        color: #b3261e;
        min-height: 1.5rem;
      }
      table#jeopardy {
        width: 100%;
        border-collapse: separate;
        border-spacing: 6px;
        margin-bottom: 1.25rem;
      }
      #jeopardy th,
      #jeopardy td {
        background: #1d2c8f;
        color: #fff;
        padding: 0.75rem;
        border-radius: 8px;
        text-align: center;
        vertical-align: middle;
      }
      #jeopardy td.value {
        color: #ffd54a;
        font-weight: 700;
      }
      #jeopardy td.clue-cell {
        cursor: pointer;
        min-height: 4rem;
      }
      #jeopardy td.clue-cell.empty {
        cursor: default;
        background: #4a5280;
      }
      .scoreboard {
        display: flex;
        gap: 1rem;
        justify-content: center;
        flex-wrap: wrap;
      }
      .team {
        border: 1px solid rgba(60, 70, 120, 0.25);
        border-radius: 12px;
        padding: 0.75rem 1rem;
        min-width: 160px;
      }
      .team .score {
        font-size: 1.5rem;
        font-weight: 700;
        margin: 0.25rem 0 0.5rem;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Jeopardy</h1>
      <p id=\"message\" class=\"message panel\"></p>

      <section id=\"start-screen\" class=\"panel\">
        <p>Three teams, six categories, five clues each.</p>
        <button id=\"start-game-btn\">Start Game</button>
      </section>

      <section id=\"loading-screen\" class=\"panel hidden\">
        <p>Loading categories…</p>
      </section>

      <section id=\"game-board-screen\" class=\"panel hidden\">
        <table id=\"jeopardy\">
          <thead></thead>
          <tbody></tbody>
        </table>
        <button id=\"restart-game-btn\">Restart Game</button>
        <button id=\"complete-game-btn\">Complete Game</button>
      </section>

      <section id=\"scoreboard-area\" class=\"panel hidden\">
        <div class=\"scoreboard\" id=\"scoreboard\"></div>
        <h2 id=\"winning-team-heading\"></h2>
        <ol id=\"rankings\"></ol>
      </section>

      <section id=\"rankings-div\" class=\"panel hidden\">
        <h2>Final Rankings</h2>
        <ol id=\"final-rankings\"></ol>
        <button id=\"back-to-main-btn\">Back to Main</button>
      </section>
    </main>
    <script>
      const panels = {
        start: document.getElementById('start-screen'),
        loading: document.getElementById('loading-screen'),
        board: document.getElementById('game-board-screen'),
        'final-rankings': document.getElementById('rankings-div'),
      };
      const scoreboardArea = document.getElementById('scoreboard-area');
      const scoreboardEl = document.getElementById('scoreboard');
      const rankingsEl = document.getElementById('rankings');
      const winningHeadingEl = document.getElementById('winning-team-heading');
      const finalRankingsEl = document.getElementById('final-rankings');
      const boardHead = document.querySelector('#jeopardy thead');
      const boardBody = document.querySelector('#jeopardy tbody');
      const messageEl = document.getElementById('message');

      let gameId = null;
      let gameState = null;
      let pollHandle = null;
      let isRequestPending = false;

      function stopPolling() {
        if (pollHandle !== null) {
          clearTimeout(pollHandle);
          pollHandle = null;
        }
      }

      function ensurePolling() {
        if (pollHandle !== null) return;
        pollHandle = window.setTimeout(pollState, 500);
      }

      async function createGame() {
        const response = await fetch('/api/game', { method: 'POST' });
        if (!response.ok) {
          throw new Error('Unable to create game');
        }
        setState(await response.json());
      }

      async function pollState() {
        pollHandle = null;
        if (!gameId) return;
        try {
          const response = await fetch(`/api/game/${gameId}`);
          if (response.ok) {
            setState(await response.json());
          }
        } catch (error) {
          console.error('Polling failed', error);
        } finally {
          if (gameState?.panel === 'loading') {
            ensurePolling();
          }
        }
      }

      async function sendAction(payload) {
        if (!gameId || isRequestPending) return;
        isRequestPending = true;
        try {
          const response = await fetch(`/api/game/${gameId}/action`, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify(payload),
          });
          if (!response.ok) {
            const detail = await response.json().catch(() => ({}));
            console.error('Action rejected', detail);
            return;
          }
          setState(await response.json());
        } catch (error) {
          console.error('Action failed', error);
        } finally {
          isRequestPending = false;
        }
      }

      function setState(data) {
        gameId = data.id;
        gameState = data;
        showPanel(data.panel);
        renderBoard();
        renderScores();
        messageEl.textContent = data.lastError || '';
        if (data.panel === 'loading') {
          ensurePolling();
        } else {
          stopPolling();
        }
      }

      function showPanel(name) {
        Object.entries(panels).forEach(([key, section]) => {
          section.classList.toggle('hidden', key !== name);
        });
        scoreboardArea.classList.toggle('hidden', name !== 'board' && name !== 'loading');
      }

      function renderBoard() {
        boardHead.replaceChildren();
        boardBody.replaceChildren();
        const headerRow = document.createElement('tr');
        gameState.board.header.forEach((title) => {
          const th = document.createElement('th');
          th.textContent = title;
          headerRow.appendChild(th);
        });
        boardHead.appendChild(headerRow);

        gameState.board.rows.forEach((row) => {
          const tr = document.createElement('tr');
          const valueCell = document.createElement('td');
          valueCell.textContent = row.value;
          valueCell.classList.add('value');
          tr.appendChild(valueCell);
          row.cells.forEach((cell) => {
            const td = document.createElement('td');
            td.textContent = cell.text;
            td.classList.add('clue-cell');
            if (!cell.available) {
              td.classList.add('empty');
            } else {
              td.addEventListener('click', () =>
                sendAction({
                  kind: 'reveal',
                  categoryIndex: cell.categoryIndex,
                  clueIndex: cell.clueIndex,
                })
              );
            }
            tr.appendChild(td);
          });
          boardBody.appendChild(tr);
        });
      }

      function renderScores() {
        scoreboardEl.replaceChildren();
        Object.entries(gameState.scores).forEach(([team, score]) => {
          const card = document.createElement('div');
          card.classList.add('team');
          card.id = `team-${team}`;
          const label = document.createElement('div');
          label.textContent = `Team ${team}`;
          const value = document.createElement('div');
          value.classList.add('score');
          value.textContent = score;
          const add = document.createElement('button');
          add.textContent = '+100';
          add.addEventListener('click', () =>
            sendAction({ kind: 'score', team: Number(team), direction: 'increase' })
          );
          const subtract = document.createElement('button');
          subtract.textContent = '-100';
          subtract.addEventListener('click', () =>
            sendAction({ kind: 'score', team: Number(team), direction: 'decrease' })
          );
          card.append(label, value, add, subtract);
          scoreboardEl.appendChild(card);
        });

        rankingsEl.replaceChildren(
          ...gameState.leaderboard.map((line) => {
            const li = document.createElement('li');
            li.textContent = line;
            return li;
          })
        );
        winningHeadingEl.textContent = gameState.winningTeam || '';
        finalRankingsEl.replaceChildren(
          ...gameState.finalRankings.map((line) => {
            const li = document.createElement('li');
            li.textContent = line;
            return li;
          })
        );
      }

      document.getElementById('start-game-btn').addEventListener('click', () =>
        sendAction({ kind: 'start' })
      );
      document.getElementById('restart-game-btn').addEventListener('click', () =>
        sendAction({ kind: 'restart' })
      );
      document.getElementById('complete-game-btn').addEventListener('click', () =>
        sendAction({ kind: 'complete' })
      );
      document.getElementById('back-to-main-btn').addEventListener('click', () =>
        sendAction({ kind: 'back' })
      );

      createGame().catch((error) => {
        messageEl.textContent = error.message || 'Network error. Please reload.';
      });
    </script>
  </body>
</html>
"""

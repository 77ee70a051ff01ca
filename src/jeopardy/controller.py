"""Screen controller: sequences the game lifecycle and routes player actions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple, Union

from .board import BoardView, render_board
from .client import NetworkError, TriviaClient
from .game import Direction, GameState, Team

logger = logging.getLogger(__name__)

Standings = List[Tuple[Team, int]]


class Panel(str, Enum):
    START = "start"
    LOADING = "loading"
    BOARD = "board"
    FINAL_RANKINGS = "final-rankings"


class InvalidAction(ValueError):
    """Raised when an action does not apply to the panel currently shown."""


# ---------- Actions ----------


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class RestartGame:
    pass


@dataclass(frozen=True)
class ClickCell:
    category_index: int
    clue_index: int


@dataclass(frozen=True)
class AdjustScore:
    team: Team
    direction: Direction


@dataclass(frozen=True)
class CompleteGame:
    pass


@dataclass(frozen=True)
class BackToMain:
    pass


Action = Union[StartGame, RestartGame, ClickCell, AdjustScore, CompleteGame, BackToMain]


class View(Protocol):
    """One-way render hooks implemented by the presentation layer."""

    def render_board(self, board: BoardView) -> None: ...

    def render_cell(self, category_index: int, clue_index: int, text: str) -> None: ...

    def render_score(self, team: Team, value: int) -> None: ...

    def render_leaderboard(self, standings: Standings) -> None: ...

    def render_final_rankings(self, standings: Standings) -> None: ...

    def show_panel(self, panel: Panel) -> None: ...


# ---------- Controller ----------


class ScreenController:
    """Owns the game state and moves between the start, loading, board and
    final-rankings panels. Exactly one panel is shown at a time.

    Starting or restarting a game is split in two: ``dispatch`` switches to the
    loading panel right away, and ``finish_loading`` waits ``loading_delay``
    seconds, fetches a fresh board and shows it. ``play`` runs both.
    """

    def __init__(
        self,
        view: View,
        client: TriviaClient,
        state: Optional[GameState] = None,
        loading_delay: float = 5.0,
    ) -> None:
        self.view = view
        self.client = client
        self.state = state if state is not None else GameState()
        self.loading_delay = loading_delay
        self.panel = Panel.START
        self.last_error: Optional[str] = None

    # ---- public API ----

    def open(self) -> None:
        """Render the initial page: zeroed scores and the start panel."""
        self._render_scores()
        self._show(Panel.START)

    def dispatch(self, action: Action) -> bool:
        """Apply an action. Returns True when a load was started and
        ``finish_loading`` still has to run."""
        if isinstance(action, (StartGame, RestartGame)):
            expected = Panel.START if isinstance(action, StartGame) else Panel.BOARD
            self._require(expected, action)
            self.begin_loading()
            return True
        if isinstance(action, ClickCell):
            self._require(Panel.BOARD, action)
            self._reveal(action.category_index, action.clue_index)
        elif isinstance(action, AdjustScore):
            self._require((Panel.LOADING, Panel.BOARD), action)
            self._adjust(action.team, action.direction)
        elif isinstance(action, CompleteGame):
            self._require(Panel.BOARD, action)
            self.view.render_final_rankings(self.standings())
            self._show(Panel.FINAL_RANKINGS)
        elif isinstance(action, BackToMain):
            self._require(Panel.FINAL_RANKINGS, action)
            self._show(Panel.START)
        else:
            raise InvalidAction(f"Unsupported action {action!r}")
        return False

    async def play(self, action: Action) -> None:
        if self.dispatch(action):
            await self.finish_loading()

    def begin_loading(self) -> None:
        self.last_error = None
        self.view.render_board(render_board([]))
        self._show(Panel.LOADING)

    async def finish_loading(self) -> bool:
        """Fetch and show a fresh board. On a network failure the setup is
        abandoned and the start panel comes back; returns whether it succeeded.
        Other errors also restore the start panel before propagating."""
        if self.panel is not Panel.LOADING:
            raise InvalidAction("No game is loading")
        await asyncio.sleep(self.loading_delay)

        self.state.reset_game()
        self._render_scores()
        logger.info("Setting up a new game")
        try:
            categories = await self.client.fetch_categories()
        except NetworkError as exc:
            logger.warning("Game setup aborted: %s", exc)
            self._abort_loading()
            return False
        except Exception:
            logger.exception("Game setup failed unexpectedly")
            self._abort_loading()
            raise

        self.state.set_categories(categories)
        self.view.render_board(render_board(self.state.categories))
        self._show(Panel.BOARD)
        logger.info("Game ready with %d categories", len(categories))
        return True

    def standings(self) -> Standings:
        return [(team, self.state.scores[team]) for team in self.state.ranking()]

    # ---- helpers ----

    def _abort_loading(self) -> None:
        self.state.reset_game()
        self.last_error = "Unable to load categories. Please try again."
        self._show(Panel.START)

    def _require(self, panels, action: Action) -> None:
        allowed = panels if isinstance(panels, tuple) else (panels,)
        if self.panel not in allowed:
            raise InvalidAction(
                f"{type(action).__name__} is not available on the {self.panel.value} screen"
            )

    def _reveal(self, category_index: int, clue_index: int) -> None:
        try:
            self.state.reveal_next(category_index, clue_index)
        except IndexError as exc:
            raise InvalidAction(str(exc)) from exc
        text = self.state.clue_text(category_index, clue_index)
        self.view.render_cell(category_index, clue_index, text)

    def _adjust(self, team: Team, direction: Direction) -> None:
        try:
            value = self.state.apply_direction(team, direction)
        except KeyError as exc:
            raise InvalidAction(f"Unknown team {team}") from exc
        self.view.render_score(team, value)
        self.view.render_leaderboard(self.standings())

    def _render_scores(self) -> None:
        for team, value in self.state.scores.items():
            self.view.render_score(team, value)
        self.view.render_leaderboard(self.standings())

    def _show(self, panel: Panel) -> None:
        logger.debug("Showing %s panel", panel.value)
        self.panel = panel
        self.view.show_panel(panel)

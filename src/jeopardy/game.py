"""Core state for a Jeopardy board: categories, clue reveal state and team scores."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

CATEGORY_TOTAL = 6
CLUES_PER_CATEGORY = 5
CATEGORY_POOL_SIZE = 100
SCORE_STEP = 100

Team = int

TEAMS: Tuple[Team, ...] = (1, 2, 3)


class RevealState(str, Enum):
    HIDDEN = "hidden"
    QUESTION = "question"
    ANSWER = "answer"


class Direction(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


# ---------- Clues & categories ----------


@dataclass
class Clue:
    question: str
    answer: str
    state: RevealState = RevealState.HIDDEN

    def reveal(self) -> RevealState:
        """Advance one step; an answered clue stays answered."""
        if self.state is RevealState.HIDDEN:
            self.state = RevealState.QUESTION
        elif self.state is RevealState.QUESTION:
            self.state = RevealState.ANSWER
        return self.state

    def text(self) -> str:
        if self.state is RevealState.QUESTION:
            return self.question
        if self.state is RevealState.ANSWER:
            return self.answer
        return "?"


@dataclass
class Category:
    title: str
    clues: List[Clue] = field(default_factory=list)


# ---------- Game ----------


def _zero_scores() -> Dict[Team, int]:
    return {team: 0 for team in TEAMS}


@dataclass
class GameState:
    categories: List[Category] = field(default_factory=list)
    scores: Dict[Team, int] = field(default_factory=_zero_scores)

    # ---- lifecycle ----

    def reset_game(self) -> None:
        self.categories = []
        self.scores = _zero_scores()

    def set_categories(self, categories: List[Category]) -> None:
        self.categories = list(categories)

    # ---- clues ----

    def clue(self, category_index: int, clue_index: int) -> Clue:
        """Look up a clue, raising IndexError for an address outside the board."""
        if not 0 <= category_index < len(self.categories):
            raise IndexError(f"No category at index {category_index}")
        clues = self.categories[category_index].clues
        if not 0 <= clue_index < len(clues):
            raise IndexError(
                f"No clue at index {clue_index} in category {category_index}"
            )
        return clues[clue_index]

    def reveal_next(self, category_index: int, clue_index: int) -> RevealState:
        return self.clue(category_index, clue_index).reveal()

    def clue_text(self, category_index: int, clue_index: int) -> str:
        return self.clue(category_index, clue_index).text()

    # ---- scores ----

    def adjust_score(self, team: Team, delta: int) -> int:
        """Add ``delta`` to a team's score, flooring the result at zero."""
        if team not in self.scores:
            raise KeyError(f"Unknown team {team}")
        self.scores[team] = max(0, self.scores[team] + delta)
        return self.scores[team]

    def apply_direction(self, team: Team, direction: Direction) -> int:
        delta = SCORE_STEP if direction is Direction.INCREASE else -SCORE_STEP
        return self.adjust_score(team, delta)

    def ranking(self) -> List[Team]:
        # sorted() is stable, so tied teams keep ascending id order
        return sorted(sorted(self.scores), key=lambda team: -self.scores[team])

    def winning_team(self) -> Optional[Team]:
        ranked = self.ranking()
        return ranked[0] if ranked else None

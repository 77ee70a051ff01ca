"""Pure projections of game state into what the page displays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .game import CLUES_PER_CATEGORY, SCORE_STEP, Category, Team


@dataclass(frozen=True)
class CellView:
    category_index: int
    clue_index: int
    text: str
    available: bool = True


@dataclass(frozen=True)
class RowView:
    value: int
    cells: List[CellView]


@dataclass(frozen=True)
class BoardView:
    header: List[str]
    rows: List[RowView]

    def cell(self, category_index: int, clue_index: int) -> CellView:
        return self.rows[clue_index].cells[category_index]


def render_board(
    categories: Sequence[Category], clues_per_category: int = CLUES_PER_CATEGORY
) -> BoardView:
    """Build the full grid: a "Value" column, then one column per category.

    Row ``i`` is worth ``(i + 1) * 100``. Cells whose category ran short of
    clues are blank and unavailable.
    """
    header = ["Value"] + [category.title for category in categories]
    rows: List[RowView] = []
    for clue_index in range(clues_per_category):
        cells = []
        for category_index, category in enumerate(categories):
            if clue_index < len(category.clues):
                text = category.clues[clue_index].text()
                cells.append(CellView(category_index, clue_index, text))
            else:
                cells.append(CellView(category_index, clue_index, "", False))
        rows.append(RowView(value=(clue_index + 1) * SCORE_STEP, cells=cells))
    return BoardView(header=header, rows=rows)


def team_label(team: Team) -> str:
    return f"Team {team}"


def leaderboard_lines(ranked: Sequence[Team], scores: Dict[Team, int]) -> List[str]:
    return [f"{team_label(team)}: {scores[team]}" for team in ranked]


def final_ranking_lines(ranked: Sequence[Team], scores: Dict[Team, int]) -> List[str]:
    return [f"{team_label(team)}: {scores[team]} points" for team in ranked]


def winner_heading(ranked: Sequence[Team]) -> Optional[str]:
    if not ranked:
        return None
    return f"Winning Team: {team_label(ranked[0])}"

"""Tests for the board and leaderboard projections."""

from jeopardy.board import (
    final_ranking_lines,
    leaderboard_lines,
    render_board,
    winner_heading,
)
from jeopardy.game import Category, Clue


def _categories():
    return [
        Category(f"Cat {c}", [Clue(f"Q{c}{n}", f"A{c}{n}") for n in range(5)])
        for c in range(6)
    ]


def test_board_has_value_column_and_titles():
    board = render_board(_categories())
    assert board.header == ["Value"] + [f"Cat {c}" for c in range(6)]
    assert [row.value for row in board.rows] == [100, 200, 300, 400, 500]
    assert all(len(row.cells) == 6 for row in board.rows)


def test_cells_are_addressed_and_hidden():
    board = render_board(_categories())
    cell = board.cell(category_index=4, clue_index=2)
    assert (cell.category_index, cell.clue_index) == (4, 2)
    assert all(c.text == "?" for row in board.rows for c in row.cells)


def test_rebuilt_board_shows_revealed_text():
    categories = _categories()
    categories[1].clues[3].reveal()
    categories[2].clues[0].reveal()
    categories[2].clues[0].reveal()

    board = render_board(categories)
    assert board.cell(1, 3).text == "Q13"
    assert board.cell(2, 0).text == "A20"


def test_short_category_leaves_unavailable_cells():
    board = render_board([Category("Tiny", [Clue("q", "a")])])
    assert board.cell(0, 0).available
    assert not board.cell(0, 1).available
    assert board.cell(0, 4).text == ""


def test_empty_board_keeps_value_rows():
    board = render_board([])
    assert board.header == ["Value"]
    assert len(board.rows) == 5


def test_ranking_labels():
    scores = {1: 100, 2: 300, 3: 0}
    ranked = [2, 1, 3]
    assert leaderboard_lines(ranked, scores) == ["Team 2: 300", "Team 1: 100", "Team 3: 0"]
    assert final_ranking_lines(ranked, scores)[0] == "Team 2: 300 points"
    assert winner_heading(ranked) == "Winning Team: Team 2"
    assert winner_heading([]) is None

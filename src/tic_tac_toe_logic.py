import logging
from typing import NamedTuple, Optional

import numpy as np

BOARD_SIZE = 3
NUM_CELLS = BOARD_SIZE * BOARD_SIZE
EMPTY = 0
PLAYER_X = 1
PLAYER_O = 2

# Game statuses
IN_PROGRESS = "in_progress"
WON = "won"
DRAWN = "drawn"

# Rows, columns, then the two diagonals (row-major cell indices)
WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class IllegalMove(ValueError):
    """Raised when a move targets an occupied cell, a cell off the board, or a finished game."""


class Outcome(NamedTuple):
    status: str
    winner: Optional[int] = None

    @property
    def is_terminal(self):
        return self.status != IN_PROGRESS


def _freeze(board):
    board.setflags(write=False)
    return board


def create_initial_state():
    """Creates an empty Tic Tac Toe board."""
    return _freeze(np.zeros(NUM_CELLS, dtype=int))


def board_from_cells(cells):
    """
    Builds a read-only board from a sequence of 9 marks (EMPTY, PLAYER_X or PLAYER_O).
    Accepts flat sequences as well as 3x3 nested ones.
    Raises ValueError if the shape or a mark is wrong.
    """
    board = np.array(cells, dtype=int).flatten()
    if board.shape != (NUM_CELLS,):
        raise ValueError(f"A board needs exactly {NUM_CELLS} cells, got {board.size}.")
    if not np.isin(board, (EMPTY, PLAYER_X, PLAYER_O)).all():
        raise ValueError(f"Unknown mark in board cells: {board.tolist()}")
    return _freeze(board)


def empty_cells(board):
    """Returns the indices of empty cells in ascending order."""
    return [int(i) for i in np.flatnonzero(board == EMPTY)]


def check_win_condition(board, player):
    """Checks if the given player has won."""
    for line in WINNING_LINES:
        if np.all(board[list(line)] == player):
            return True
    return False


def check_draw_condition(board):
    """Checks if the board is full."""
    # Assumes win condition is checked first
    return bool(np.all(board != EMPTY))


def winning_line(board):
    """Returns the first fully claimed line, or None. Works on any 9-cell sequence."""
    for line in WINNING_LINES:
        a, b, c = (board[i] for i in line)
        if a != EMPTY and a == b == c:
            return line
    return None


def evaluate(board):
    """
    Works out where the game stands on this board.
    A win is looked for before a draw, as the winning move may also fill the board.
    """
    for player in (PLAYER_X, PLAYER_O):
        if check_win_condition(board, player):
            return Outcome(WON, player)
    if check_draw_condition(board):
        return Outcome(DRAWN)
    return Outcome(IN_PROGRESS)


def apply_action(board, index, player):
    """
    Applies a move to the board.
    Returns a new board state.
    Raises IllegalMove if the move is not allowed.
    """
    if player not in (PLAYER_X, PLAYER_O):
        raise ValueError(f"Unknown player {player!r}.")
    if not 0 <= index < NUM_CELLS:
        raise IllegalMove(f"Cell {index} is off the board.")
    if evaluate(board).is_terminal:
        raise IllegalMove("The game is already over.")
    if board[index] != EMPTY:
        raise IllegalMove(f"Cell {index} is not empty.")
    new_board = board.copy()
    new_board[index] = player
    return _freeze(new_board)


def apply_move(board, index, player):
    """Like apply_action, but returns None instead of raising when the move is rejected."""
    try:
        return apply_action(board, index, player)
    except IllegalMove as e:
        logging.debug(f"Rejected move by {player_symbol(player)} at {index}: {e}")
        return None


def get_next_player(current_player):
    """Switches the player."""
    return PLAYER_O if current_player == PLAYER_X else PLAYER_X


def player_symbol(player):
    return {PLAYER_X: 'X', PLAYER_O: 'O'}.get(player, ' ')


def board_to_string(board):
    """Helper to print the board nicely."""
    rows = []
    for r in range(BOARD_SIZE):
        cells = board[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]
        rows.append(" | ".join(player_symbol(cell) for cell in cells))
    return "\n" + "\n---|---|---\n".join(rows) + "\n"

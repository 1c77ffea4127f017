"""
Computer opponent for Tic Tac Toe.

Three difficulty tiers share one entry point, select_move():
- easy:   any empty cell, picked at random
- medium: win now if possible, otherwise block the opponent's win, otherwise random
- hard:   full minimax search, never loses

Random picks come from a generator passed in by the caller (anything with a
numpy Generator style choice() method), so games can be replayed in tests.
"""
import logging

import numpy as np

from tic_tac_toe_logic import (
    EMPTY, IN_PROGRESS, WON, apply_action, empty_cells, evaluate, get_next_player,
    player_symbol, winning_line
)

EASY = "easy"
MEDIUM = "medium"
HARD = "hard"
DIFFICULTIES = (EASY, MEDIUM, HARD)

WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0


def random_move(board, rng):
    """Picks a uniformly random empty cell."""
    return int(rng.choice(empty_cells(board)))


def find_winning_move(board, player):
    """Returns the first empty cell (ascending) that wins the game for player, or None."""
    for index in empty_cells(board):
        outcome = evaluate(apply_action(board, index, player))
        if outcome.status == WON and outcome.winner == player:
            return index
    return None


def minimax(board, mover, computer):
    """
    Exhaustive minimax search.

    Args:
        board: Position to search from. It is not modified.
        mover: Player whose turn it is on this board.
        computer: Player the scores are taken for (maximizing side).

    Returns:
        (index, score): best move for mover and its score. index is None on a
        finished board. Among equal scores the lowest cell index wins.
    """
    # Searched as a list of plain ints; marks are placed and lifted in place
    return _search(np.asarray(board).tolist(), mover, computer)


def _search(cells, mover, computer):
    line = winning_line(cells)
    if line is not None:
        return None, WIN_SCORE if cells[line[0]] == computer else LOSS_SCORE
    if EMPTY not in cells:
        return None, DRAW_SCORE

    maximizing = mover == computer
    best_index, best_score = None, None
    for index, cell in enumerate(cells):
        if cell != EMPTY:
            continue
        cells[index] = mover
        _, score = _search(cells, get_next_player(mover), computer)
        cells[index] = EMPTY
        if best_score is None or (score > best_score if maximizing else score < best_score):
            best_index, best_score = index, score
    return best_index, best_score


def select_move(board, player, difficulty, rng=None):
    """
    Chooses the computer's next cell.

    Must only be called on a board that is still in progress with player to move.
    """
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty {difficulty!r}, expected one of {DIFFICULTIES}.")
    assert evaluate(board).status == IN_PROGRESS, "select_move called on a finished board"
    if rng is None:
        rng = np.random.default_rng()

    if difficulty == EASY:
        move = random_move(board, rng)
    elif difficulty == MEDIUM:
        move = find_winning_move(board, player)
        if move is None:
            move = find_winning_move(board, get_next_player(player))
        if move is None:
            move = random_move(board, rng)
    else:
        move, score = minimax(board, player, player)
        logging.debug(f"Minimax picked {move} for {player_symbol(player)} (score {score})")

    logging.info(f"Computer ({player_symbol(player)}, {difficulty}) chooses cell {move}")
    return move

import logging

from tic_tac_toe_logic import (
    DRAWN, PLAYER_O, PLAYER_X, WON, IllegalMove, apply_action,
    board_to_string, create_initial_state, evaluate, get_next_player,
    player_symbol
)
from tic_tac_toe_opponent import DIFFICULTIES, EASY, select_move

PVP = "pvp"  # Player vs Player
PVC = "pvc"  # Player vs Computer
MODES = (PVP, PVC)


class GameSession:
    """
    One local game: the board, whose turn it is, and the mode/difficulty picked by the user.

    The computer's reply is an explicit step: after an accepted human move in
    PVC mode, play() asks the opponent for a move and applies it straight away.
    """

    def __init__(self, mode=PVC, difficulty=EASY, computer_player=PLAYER_O, rng=None):
        self._check_mode(mode)
        self._check_difficulty(difficulty)
        if computer_player not in (PLAYER_X, PLAYER_O):
            raise ValueError(f"Unknown player {computer_player!r}.")
        self.mode = mode
        self.difficulty = difficulty
        self.computer_player = computer_player
        self.rng = rng
        self.reset()

    @staticmethod
    def _check_mode(mode):
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}.")

    @staticmethod
    def _check_difficulty(difficulty):
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty {difficulty!r}, expected one of {DIFFICULTIES}.")

    def reset(self):
        """Starts a new board with X to move. Mode and difficulty are kept."""
        self.board = create_initial_state()
        self.current_player = PLAYER_X
        self.outcome = evaluate(self.board)
        logging.info(f"New game ({self.mode}, {self.difficulty})")
        # The computer may be the first mover
        self.computer_move()

    @property
    def is_over(self):
        return self.outcome.is_terminal

    def is_computer_turn(self):
        return self.mode == PVC and self.current_player == self.computer_player

    def _apply(self, index):
        try:
            self.board = apply_action(self.board, index, self.current_player)
        except IllegalMove as e:
            logging.debug(f"Ignoring move at {index}: {e}")
            return False

        logging.info(f"Player {player_symbol(self.current_player)} moved to {index}")
        logging.debug(board_to_string(self.board))
        self.outcome = evaluate(self.board)
        if self.outcome.status == WON:
            logging.info(f"Player {player_symbol(self.outcome.winner)} wins!")
        elif self.outcome.status == DRAWN:
            logging.info("Draw!")
        else:
            self.current_player = get_next_player(self.current_player)
        return True

    def play(self, index):
        """
        Plays a human move for whoever owns the turn.

        Returns False (and leaves everything unchanged) if the move is rejected
        or it is the computer's turn. In PVC mode the computer answers before
        this returns.
        """
        if not self.is_over and self.is_computer_turn():
            logging.warning(f"Ignoring move at {index}: waiting for the computer")
            return False
        if not self._apply(index):
            return False
        self.computer_move()
        return True

    def computer_move(self):
        """Lets the computer move if it owns the turn. Returns the chosen cell, or None."""
        if self.is_over or not self.is_computer_turn():
            return None
        index = select_move(self.board, self.current_player, self.difficulty, self.rng)
        self._apply(index)
        return index

    def set_mode(self, mode):
        self._check_mode(mode)
        self.mode = mode
        self.computer_move()

    def set_difficulty(self, difficulty):
        self._check_difficulty(difficulty)
        self.difficulty = difficulty
        self.computer_move()

    def status_message(self):
        """Banner text for the current state."""
        if self.outcome.status == WON:
            return f"Player {player_symbol(self.outcome.winner)} wins!"
        if self.outcome.status == DRAWN:
            return "It's a Draw!"
        return f"Player {player_symbol(self.current_player)}'s turn"

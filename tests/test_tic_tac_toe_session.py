import copy
import unittest
import numpy as np
from tic_tac_toe_logic import (
    empty_cells, Outcome, EMPTY, PLAYER_X, PLAYER_O, IN_PROGRESS, WON, DRAWN
)
from tic_tac_toe_opponent import EASY, MEDIUM, HARD
from tic_tac_toe_session import GameSession, PVP, PVC

X, O, _ = PLAYER_X, PLAYER_O, EMPTY


class FixedChoices:
    def __init__(self, positions):
        self.positions = list(positions)

    def choice(self, options):
        return options[self.positions.pop(0)]


class TestPlayerVsPlayer(unittest.TestCase):

    def setUp(self):
        self.session = GameSession(mode=PVP)

    def test_initial_state(self):
        self.assertTrue(np.all(self.session.board == EMPTY))
        self.assertEqual(self.session.current_player, PLAYER_X)
        self.assertEqual(self.session.outcome, Outcome(IN_PROGRESS))
        self.assertFalse(self.session.is_over)
        self.assertEqual(self.session.status_message(), "Player X's turn")

    def test_turns_alternate(self):
        self.assertTrue(self.session.play(4))
        self.assertEqual(self.session.current_player, PLAYER_O)
        self.assertEqual(self.session.status_message(), "Player O's turn")
        self.assertTrue(self.session.play(0))
        self.assertEqual(self.session.current_player, PLAYER_X)
        self.assertEqual(self.session.board.tolist(), [O, _, _, _, X, _, _, _, _])

    def test_rejected_move_keeps_turn(self):
        self.session.play(0)
        board = self.session.board
        self.assertFalse(self.session.play(0))
        self.assertIs(self.session.board, board)
        self.assertEqual(self.session.current_player, PLAYER_O)

    def test_first_player_wins(self):
        for index in [0, 4, 1, 7, 2]:
            self.assertTrue(self.session.play(index))
        self.assertEqual(self.session.outcome, Outcome(WON, PLAYER_X))
        self.assertTrue(self.session.is_over)
        self.assertEqual(self.session.status_message(), "Player X wins!")
        # No more moves once the game is over
        board = self.session.board
        self.assertFalse(self.session.play(5))
        self.assertIs(self.session.board, board)

    def test_draw(self):
        for index in [0, 1, 2, 4, 3, 5, 7, 6, 8]:
            self.assertTrue(self.session.play(index))
        self.assertEqual(self.session.outcome, Outcome(DRAWN))
        self.assertEqual(self.session.status_message(), "It's a Draw!")
        self.assertEqual(empty_cells(self.session.board), [])

    def test_computer_never_moves(self):
        self.session.play(0)
        self.assertIsNone(self.session.computer_move())
        self.assertEqual(empty_cells(self.session.board), list(range(1, 9)))


class TestPlayerVsComputer(unittest.TestCase):

    def test_computer_replies_to_human_move(self):
        session = GameSession(mode=PVC, difficulty=EASY, rng=FixedChoices([0]))
        self.assertTrue(session.play(0))
        self.assertEqual(session.board.tolist(), [X, O, _, _, _, _, _, _, _])
        self.assertEqual(session.current_player, PLAYER_X)

    def test_rejected_move_gets_no_reply(self):
        session = GameSession(mode=PVC, difficulty=EASY, rng=FixedChoices([0]))
        session.play(0)
        board = session.board
        self.assertFalse(session.play(1))
        self.assertIs(session.board, board)
        self.assertEqual(session.current_player, PLAYER_X)

    def test_medium_blocks(self):
        session = GameSession(mode=PVC, difficulty=MEDIUM, rng=FixedChoices([7]))
        session.play(0)
        self.assertEqual(session.board[8], PLAYER_O)
        session.play(1)
        self.assertEqual(session.board[2], PLAYER_O)

    def test_computer_wins(self):
        session = GameSession(mode=PVC, difficulty=HARD)
        for index in [1, 2, 5]:
            self.assertTrue(session.play(index))
        # O answers 0 and 3, then completes the left column while X plays elsewhere
        self.assertEqual(session.board.tolist(), [O, X, X, O, _, X, O, _, _])
        self.assertEqual(session.outcome, Outcome(WON, PLAYER_O))
        self.assertEqual(session.status_message(), "Player O wins!")
        self.assertFalse(session.play(4))

    def test_computer_can_open(self):
        session = GameSession(mode=PVC, difficulty=EASY, computer_player=PLAYER_X,
                              rng=FixedChoices([4, 0]))
        self.assertEqual(session.board.tolist(), [_, _, _, _, X, _, _, _, _])
        self.assertEqual(session.current_player, PLAYER_O)
        self.assertTrue(session.play(0))
        self.assertEqual(session.board.tolist(), [O, X, _, _, X, _, _, _, _])
        self.assertEqual(session.current_player, PLAYER_O)

    def test_computer_opens_on_hard(self):
        session = GameSession(mode=PVC, difficulty=HARD, computer_player=PLAYER_X)
        self.assertEqual(session.board.tolist(), [X, _, _, _, _, _, _, _, _])
        self.assertEqual(session.current_player, PLAYER_O)

    def test_reset_keeps_settings(self):
        session = GameSession(mode=PVC, difficulty=MEDIUM, rng=FixedChoices([0, 0]))
        session.play(4)
        session.reset()
        self.assertTrue(np.all(session.board == EMPTY))
        self.assertEqual(session.current_player, PLAYER_X)
        self.assertEqual(session.outcome, Outcome(IN_PROGRESS))
        self.assertEqual((session.mode, session.difficulty), (PVC, MEDIUM))

    def test_switching_to_computer_mode_on_its_turn(self):
        session = GameSession(mode=PVP, rng=FixedChoices([0]))
        session.play(4)
        self.assertEqual(session.current_player, PLAYER_O)
        session.set_mode(PVC)
        self.assertEqual(session.board[0], PLAYER_O)
        self.assertEqual(session.current_player, PLAYER_X)

    def test_set_difficulty(self):
        session = GameSession(mode=PVC, difficulty=EASY)
        session.set_difficulty(HARD)
        self.assertEqual(session.difficulty, HARD)
        self.assertTrue(np.all(session.board == EMPTY))

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            GameSession(mode="online")
        with self.assertRaises(ValueError):
            GameSession(difficulty="expert")
        with self.assertRaises(ValueError):
            GameSession(computer_player=EMPTY)
        session = GameSession()
        with self.assertRaises(ValueError):
            session.set_mode("online")
        with self.assertRaises(ValueError):
            session.set_difficulty("expert")


class TestHardNeverLoses(unittest.TestCase):

    def check_all_replies(self, session):
        for index in empty_cells(session.board):
            branch = copy.copy(session)
            self.assertTrue(branch.play(index))
            if branch.is_over:
                self.assertNotEqual(branch.outcome, Outcome(WON, PLAYER_X), branch.board.tolist())
            else:
                self.check_all_replies(branch)

    def test_every_human_line_of_play(self):
        # Corner, edge and centre openings cover the others by symmetry
        for opening in (0, 1, 4):
            with self.subTest(opening=opening):
                session = GameSession(mode=PVC, difficulty=HARD)
                session.play(opening)
                self.check_all_replies(session)


if __name__ == '__main__':
    unittest.main()

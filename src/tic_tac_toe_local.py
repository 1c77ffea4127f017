import argparse
import logging
import sys

import numpy as np
import pygame

from tic_tac_toe_logic import BOARD_SIZE, PLAYER_O, PLAYER_X, winning_line
from tic_tac_toe_opponent import DIFFICULTIES, EASY, HARD, MEDIUM
from tic_tac_toe_session import MODES, PVC, PVP, GameSession

# --- Configuration ---
DEFAULT_MODE = PVC
DEFAULT_DIFFICULTY = EASY

# Pygame constants
WIDTH, HEIGHT = 300, 380  # Extra height for the status banner
LINE_WIDTH = 10
BOARD_ROWS, BOARD_COLS = BOARD_SIZE, BOARD_SIZE
SQUARE_SIZE = WIDTH // BOARD_COLS
CIRCLE_RADIUS = SQUARE_SIZE // 3
CIRCLE_WIDTH = 15
CROSS_WIDTH = 25
WIN_LINE_WIDTH = 8

# Colors
BG_COLOR = (200, 200, 200)
LINE_COLOR = (50, 50, 50)
CIRCLE_COLOR = (239, 231, 200)
CROSS_COLOR = (66, 66, 66)
TEXT_COLOR = (10, 10, 10)
HINT_COLOR = (90, 90, 90)
WIN_LINE_COLOR = (200, 60, 60)

DIFFICULTY_KEYS = {pygame.K_1: EASY, pygame.K_2: MEDIUM, pygame.K_3: HARD}
MODE_NAMES = {PVP: "Player vs Player", PVC: "Player vs Computer"}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Local Tic Tac Toe")
    parser.add_argument("--mode", choices=MODES, default=DEFAULT_MODE,
                        help="pvp: two humans share the mouse, pvc: play X against the computer")
    parser.add_argument("--difficulty", choices=DIFFICULTIES, default=DEFAULT_DIFFICULTY,
                        help="computer strength in pvc mode")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the computer's random picks (easy/medium)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def cell_center(index):
    row, col = divmod(index, BOARD_COLS)
    return (int(col * SQUARE_SIZE + SQUARE_SIZE // 2), int(row * SQUARE_SIZE + SQUARE_SIZE // 2))


def draw_lines(screen):
    """Draws the grid lines."""
    # Horizontal
    pygame.draw.line(screen, LINE_COLOR, (0, SQUARE_SIZE), (WIDTH, SQUARE_SIZE), LINE_WIDTH)
    pygame.draw.line(screen, LINE_COLOR, (0, 2 * SQUARE_SIZE), (WIDTH, 2 * SQUARE_SIZE), LINE_WIDTH)
    # Vertical
    pygame.draw.line(screen, LINE_COLOR, (SQUARE_SIZE, 0), (SQUARE_SIZE, WIDTH), LINE_WIDTH)
    pygame.draw.line(screen, LINE_COLOR, (2 * SQUARE_SIZE, 0), (2 * SQUARE_SIZE, WIDTH), LINE_WIDTH)


def draw_figures(screen, board):
    """Draws X's and O's based on the board state."""
    for index, cell in enumerate(board):
        center_x, center_y = cell_center(index)
        if cell == PLAYER_O:
            pygame.draw.circle(screen, CIRCLE_COLOR, (center_x, center_y), CIRCLE_RADIUS, CIRCLE_WIDTH)
        elif cell == PLAYER_X:
            offset = SQUARE_SIZE // 4
            pygame.draw.line(screen, CROSS_COLOR, (center_x - offset, center_y - offset), (center_x + offset, center_y + offset), CROSS_WIDTH)
            pygame.draw.line(screen, CROSS_COLOR, (center_x + offset, center_y - offset), (center_x - offset, center_y + offset), CROSS_WIDTH)


def draw_winning_line(screen, board):
    line = winning_line(board)
    if line is None:
        return
    pygame.draw.line(screen, WIN_LINE_COLOR, cell_center(line[0]), cell_center(line[-1]), WIN_LINE_WIDTH)


def display_status(screen, fonts, session):
    """Displays game status and the current settings at the bottom."""
    font, small_font = fonts
    pygame.draw.rect(screen, BG_COLOR, (0, WIDTH, WIDTH, HEIGHT - WIDTH))  # Clear bottom area

    message = session.status_message()
    if session.is_over:
        message += " (R to replay)"
    text = font.render(message, True, TEXT_COLOR)
    screen.blit(text, text.get_rect(center=(WIDTH // 2, WIDTH + 22)))

    settings = MODE_NAMES[session.mode]
    if session.mode == PVC:
        settings += f" - {session.difficulty}"
    hint = small_font.render(f"{settings}   [M] mode [1-3] level", True, HINT_COLOR)
    screen.blit(hint, hint.get_rect(center=(WIDTH // 2, WIDTH + 58)))


def handle_key(session, key):
    if key == pygame.K_r:
        session.reset()
    elif key == pygame.K_m:
        session.set_mode(PVP if session.mode == PVC else PVC)
        logging.info(f"Mode: {MODE_NAMES[session.mode]}")
    elif key in DIFFICULTY_KEYS:
        session.set_difficulty(DIFFICULTY_KEYS[key])
        logging.info(f"Difficulty: {session.difficulty}")


def handle_click(session, pos):
    mouse_x, mouse_y = pos
    clicked_row = int(mouse_y // SQUARE_SIZE)
    clicked_col = int(mouse_x // SQUARE_SIZE)

    # Ensure click is within the board grid area
    if clicked_row >= BOARD_ROWS:
        return
    if not session.play(clicked_row * BOARD_COLS + clicked_col):
        logging.debug("Invalid move attempted.")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    session = GameSession(mode=args.mode, difficulty=args.difficulty,
                          rng=np.random.default_rng(args.seed))

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Local Tic Tac Toe")
    fonts = (pygame.font.Font(None, 32), pygame.font.Font(None, 20))

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                handle_key(session, event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and not session.is_over:
                handle_click(session, event.pos)

        # Drawing
        screen.fill(BG_COLOR)
        draw_lines(screen)
        draw_figures(screen, session.board)
        draw_winning_line(screen, session.board)
        display_status(screen, fonts, session)

        pygame.display.update()

    pygame.quit()
    logging.info("Bye.")


if __name__ == "__main__":
    sys.exit(main())

import curses
import logging

import hydra
import numpy as np
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from slide2048.engine import Direction, Session, apply_move, initialize, value_grid
from slide2048.storage import BestScoreStore

log = logging.getLogger(__name__)

KEY_TO_DIRECTION = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
}


def draw_board(stdscr, session: Session, banner: str = ""):
    stdscr.clear()
    board = value_grid(session.tiles)
    rows, cols = board.shape

    # Terminal size
    h, w = stdscr.getmaxyx()

    # Choose cell width based on largest value for better fit
    cell_w = max(4, len(str(max(2, session.max_tile))) + 2)

    board_width = 1 + cols * (cell_w + 1)
    total_height = rows * 2 + 4  # rows, borders, score, instructions, banner

    # If too small, prompt user to resize
    if board_width > w or total_height > h:
        msg1 = "Window too small for board"
        msg2 = f"Need at least {board_width}x{total_height}, have {w}x{h}"
        if h > 0:
            stdscr.addstr(0, 0, msg1[: max(0, w)])
        if h > 1:
            stdscr.addstr(1, 0, msg2[: max(0, w)])
        stdscr.refresh()
        return

    # Center the board
    top = max(0, (h - total_height) // 2)
    left = max(0, (w - board_width) // 2)

    horiz = "+" + ("-" * cell_w + "+") * cols
    for r in range(rows):
        stdscr.addstr(top + r * 2, left, horiz)
        line = "|".join(
            f"{int(v):^{cell_w}}" if v > 0 else " " * cell_w for v in board[r]
        )
        stdscr.addstr(top + r * 2 + 1, left, "|" + line + "|")

    stdscr.addstr(top + rows * 2, left, horiz)
    stdscr.addstr(top + rows * 2 + 1, left, f"Score: {session.score}  Best: {session.best_score}")
    stdscr.addstr(top + rows * 2 + 2, left, "Arrows to move, 'r' to restart, 'q' to quit")
    if banner:
        stdscr.addstr(top + rows * 2 + 3, left, banner[: max(0, w - left)])
    stdscr.refresh()


def play_loop(stdscr, store: BestScoreStore, seed: int | None = None):
    curses.curs_set(0)
    stdscr.nodelay(False)
    stdscr.keypad(True)

    rng = np.random.default_rng(seed)
    session = initialize(rng=rng, best_score=store.load())
    banner = ""
    draw_board(stdscr, session, banner)

    while True:
        ch = stdscr.getch()
        # Redraw on resize to adapt layout
        if ch == curses.KEY_RESIZE:
            draw_board(stdscr, session, banner)
            continue
        if ch in (ord("q"), ord("Q")):
            break
        if ch in (ord("r"), ord("R")):
            session = initialize(rng=rng, best_score=session.best_score)
            banner = ""
            draw_board(stdscr, session, banner)
            continue
        if ch not in KEY_TO_DIRECTION:
            continue

        result = apply_move(session, KEY_TO_DIRECTION[ch], rng=rng)
        session = result.session
        if result.moved:
            store.update(session)
            banner = ""
        if result.reached_win_threshold:
            banner = "You win! Keep playing or press 'r' for a new game."
        if session.game_over:
            banner = "No more moves. Game over. Press 'r' to restart."
        draw_board(stdscr, session, banner)

    store.update(session)


@hydra.main(config_path="./conf", config_name="play", version_base=None)
def main(cfg: DictConfig):
    store = BestScoreStore(to_absolute_path(str(cfg.best_score_path)))
    seed = cfg.get("seed")
    curses.wrapper(play_loop, store=store, seed=seed)
    log.info("Best score: %d", store.load())


if __name__ == "__main__":
    main()

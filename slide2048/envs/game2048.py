import numpy as np
import gymnasium as gym
from gymnasium import spaces

from slide2048.engine import (
    BOARD_SIZE,
    Direction,
    Session,
    apply_move,
    initialize,
    legal_directions,
    value_grid,
)

ACTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class Game2048Env(gym.Env):
    """
    Gymnasium front-end over the board engine.

    - Actions: 0=up, 1=down, 2=left, 3=right
    - Observation: (4, 4) int32 grid of tile values
    - Reward: sum of merged tile values produced by the move
    - Terminated: when no further moves are possible
    - Truncated: never; reaching 2048 is reported in info and play continues
    """

    metadata = {"render_modes": ["human"]}

    def __init__(self, best_score: int = 0, render_mode: str | None = None):
        super().__init__()
        self.size = BOARD_SIZE
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(len(ACTIONS))
        # Conservative upper bound for tile values
        self.observation_space = spaces.Box(low=0, high=2 ** 17, shape=(self.size, self.size), dtype=np.int32)

        self.session: Session | None = None
        self._best_score = int(best_score)

    @property
    def best_score(self) -> int:
        if self.session is None:
            return self._best_score
        return self.session.best_score

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        super().reset(seed=seed)
        self.session = initialize(rng=self.np_random, best_score=self.best_score)
        info = {
            "score": self.session.score,
            "best_score": self.session.best_score,
            "tiles": self.session.tile_dicts(),
        }
        return self._observation(), info

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise gym.error.InvalidAction(f"Invalid action: {action}")
        assert self.session is not None

        valid_before = self._valid_actions()
        previous = self.session
        result = apply_move(previous, ACTIONS[int(action)], rng=self.np_random)
        self.session = result.session
        reward = self.session.score - previous.score

        info = {
            "score": self.session.score,
            "best_score": self.session.best_score,
            "moved": result.moved,
            "won": self.session.game_won,
            "reached_win_threshold": result.reached_win_threshold,
            "max_tile": self.session.max_tile,
            "valid_actions": valid_before,
            "valid_actions_next": self._valid_actions(),
            "tiles": self.session.tile_dicts(),
        }
        return self._observation(), float(reward), bool(self.session.game_over), False, info

    def render(self):
        if self.render_mode == "human" or self.render_mode is None:
            assert self.session is not None
            board = self._observation()
            print("+" + "------+" * self.size)
            for r in range(self.size):
                row = "|".join(f"{int(v):^6}" if v > 0 else "      " for v in board[r])
                print("|" + row + "|")
                print("+" + "------+" * self.size)
            print(f"Score: {self.session.score}  Best: {self.session.best_score}\n")

    # --- Internal helpers ---
    def _observation(self) -> np.ndarray:
        assert self.session is not None
        return value_grid(self.session.tiles, self.size)

    def _valid_actions(self) -> np.ndarray:
        """Return boolean mask of actions that would change the board."""
        assert self.session is not None
        mask = np.zeros(len(ACTIONS), dtype=bool)
        if self.session.game_over:
            return mask
        legal = set(legal_directions(self.session.tiles, self.size))
        for a, direction in enumerate(ACTIONS):
            mask[a] = direction in legal
        return mask

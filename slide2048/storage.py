"""Best-score persistence for hosts.

The engine only ever sees the integer; where it lives is decided here. A
missing or unreadable file counts as a best score of 0.
"""

import json
import logging
import os
import tempfile

from slide2048.engine import Session

log = logging.getLogger(__name__)

BEST_SCORE_KEY = "2048-best-score"


class BestScoreStore:
    def __init__(self, path: str):
        self.path = str(path)

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = int(data.get(BEST_SCORE_KEY, 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            log.warning("Could not read best score from %s: %s", self.path, e)
            return 0
        return max(0, value)

    def save(self, score: int) -> int:
        """Store `score` if it beats the stored value; returns the stored best."""
        best = self.load()
        score = int(score)
        if score <= best:
            return best
        # the target file is only ever replaced whole
        tmp = None
        try:
            parent = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(parent, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=parent, prefix=".best-score-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({BEST_SCORE_KEY: score}, f)
            os.replace(tmp, self.path)
        except OSError as e:
            log.warning("Could not write best score to %s: %s", self.path, e)
            return best
        finally:
            if tmp is not None and os.path.exists(tmp):
                os.remove(tmp)
        return score

    def update(self, session: Session) -> int:
        return self.save(session.best_score)

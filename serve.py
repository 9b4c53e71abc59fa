import logging

import hydra
import numpy as np
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from slide2048.server import create_app
from slide2048.storage import BestScoreStore

log = logging.getLogger(__name__)


@hydra.main(config_path="./conf", config_name="server", version_base=None)
def main(cfg: DictConfig):
    seed = cfg.get("seed")
    store = BestScoreStore(to_absolute_path(str(cfg.best_score_path)))
    app = create_app(rng=np.random.default_rng(seed), store=store)
    log.info("Server starting on http://%s:%d", cfg.host, int(cfg.port))
    app.run(host=str(cfg.host), port=int(cfg.port), debug=False)


if __name__ == "__main__":
    main()

import logging
import logging.config
from pathlib import Path

REPO_DIR = Path(__file__).resolve().parent.parent


def _configure_logging() -> None:
    log_conf_path = REPO_DIR / "logging.conf"
    log_dir = REPO_DIR / "logs"

    if log_conf_path.exists():
        log_dir.mkdir(parents=True, exist_ok=True)
        logging.config.fileConfig(
            log_conf_path,
            disable_existing_loggers=False,
            defaults={"logdirpath": log_dir.as_posix()},
        )
    else:
        logging.basicConfig(level=logging.INFO)


_configure_logging()

# Default app logger
logger = logging.getLogger("shot2table")

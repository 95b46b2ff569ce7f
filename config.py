"""
Settings loaded from the environment and an optional .env file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_PATH = os.path.join("data", "daily_reports.csv")


def _load_env_from_project(project_dir: str | Path) -> None:
    for d in [Path(project_dir), Path(__file__).resolve().parent, Path.cwd()]:
        env_file = d / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            return


@dataclass(frozen=True)
class Settings:
    data_path: str = DEFAULT_DATA_PATH
    currency_symbol: str = "¥"
    store_name_prefix: str = ""
    log_level: str = "INFO"


def get_settings(project_dir: str | Path = BASE_DIR) -> Settings:
    _load_env_from_project(project_dir)
    data_path = os.getenv("ANALYTICS_DATA_PATH", "").strip() or DEFAULT_DATA_PATH
    if not os.path.isabs(data_path):
        data_path = os.path.join(str(project_dir), data_path)
    return Settings(
        data_path=data_path,
        currency_symbol=os.getenv("ANALYTICS_CURRENCY_SYMBOL", "¥"),
        store_name_prefix=os.getenv("ANALYTICS_STORE_NAME_PREFIX", ""),
        log_level=os.getenv("ANALYTICS_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

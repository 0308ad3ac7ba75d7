"""
Configuration for the GradRadar progress MCP server.

Settings come from environment variables (a ``.env`` file at the repository
root is loaded first) with defaults suitable for local use:

- GRADRADAR_ROOT: repository root override (default: directory of this file)
- GRADRADAR_LOG_LEVEL: log level name (default: INFO)
- GRADRADAR_LOG_FILE: optional log file; relative paths resolve from the root
- GRADRADAR_SERVER_NAME: MCP server name
- GRADRADAR_STAGE_CATALOG: stage catalog YAML (default: data/stage_catalog.yaml)
- GRADRADAR_NATIONAL_MEDIAN_INCOME: salary milestone threshold (default: 74580)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

DEFAULT_SERVER_NAME = "gradradar-progress-mcp-server"
DEFAULT_STAGE_CATALOG = "data/stage_catalog.yaml"
# US median household income used by the dashboard
DEFAULT_NATIONAL_MEDIAN_INCOME = 74580.0

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_float(env_var: str, default: float) -> float:
    """Parse a float from an environment variable, falling back on bad input."""
    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring non-numeric {env_var}={value!r}; using default {default}"
        )
        return default


class Config:
    """
    Server settings resolved once from the environment.

    Relative paths are anchored at the repository root, never the process
    working directory, so the server behaves the same however it is launched.
    """

    def __init__(self):
        root_env = os.getenv("GRADRADAR_ROOT")
        self._repo_root = (
            Path(root_env).expanduser().resolve() if root_env else Path(__file__).resolve().parent
        )

        self.log_level = os.getenv("GRADRADAR_LOG_LEVEL", "INFO").upper()
        log_env = os.getenv("GRADRADAR_LOG_FILE")
        self.log_file: Optional[Path] = self._under_root(log_env) if log_env else None

        self.server_name = os.getenv("GRADRADAR_SERVER_NAME", DEFAULT_SERVER_NAME)

        # Engine inputs the tools supply on every call
        self.stage_catalog_path = self._under_root(
            os.getenv("GRADRADAR_STAGE_CATALOG") or DEFAULT_STAGE_CATALOG
        )
        self.national_median_income = _parse_float(
            "GRADRADAR_NATIONAL_MEDIAN_INCOME", DEFAULT_NATIONAL_MEDIAN_INCOME
        )

    def _under_root(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self._repo_root / candidate

    @property
    def repo_root(self) -> Path:
        return self._repo_root

    def setup_logging(self):
        """
        Configure the root logger: stderr always, plus the log file if set.

        Unknown level names fall back to INFO. Existing root handlers are
        replaced so repeated calls do not duplicate output.
        """
        level = getattr(logging, self.log_level, logging.INFO)
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(self.log_file))

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

        logger = logging.getLogger(__name__)
        if self.log_file:
            logger.info(f"Logging to file: {self.log_file}")
        logger.info(f"Log level set to: {self.log_level}")
        logger.info(f"Stage catalog: {self.stage_catalog_path}")

    def validate(self) -> list[str]:
        """
        Check settings the server can start without but tools may need.

        Returns:
            Warning messages (empty if all valid)
        """
        warnings = []

        if not self.stage_catalog_path.exists():
            warnings.append(
                f"Stage catalog not found: {self.stage_catalog_path}. "
                "The server will start but tools will fail unless callers pass catalog_path."
            )

        if self.national_median_income <= 0:
            warnings.append(
                f"National median income must be positive, got {self.national_median_income}. "
                "Every employed record with consented income will count as above median."
            )

        if self.log_file:
            log_dir = self.log_file.parent
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                warnings.append(f"Cannot create log directory {log_dir}: {e}")
            else:
                if not os.access(log_dir, os.W_OK):
                    warnings.append(f"Log directory not writable: {log_dir}")

        return warnings


config = Config()


def get_config() -> Config:
    """Return the process-wide configuration."""
    return config

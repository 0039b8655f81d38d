import logging
import os
from pathlib import Path

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.

    Raises RuntimeError if a required environment variable is missing.
    """
    missing = [name for name in rules.ops.required_env if name not in os.environ]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Configuration validated; data directory %s", data_dir)

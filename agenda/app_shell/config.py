import logging
import os
import sys
from pathlib import Path

from agenda.rules.models import Rules

logger = logging.getLogger(__name__)


def missing_env(rules: Rules) -> list[str]:
    return [name for name in rules.ops.required_env if not os.environ.get(name)]


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when a required environment variable is unset.
    """
    missing = missing_env(rules)
    if missing:
        logger.critical(f"Missing required environment variables: {', '.join(missing)}")
        sys.exit(1)

    data_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Configuration validated (data dir: {data_dir})")

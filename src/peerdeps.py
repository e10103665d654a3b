"""install-peerdeps: install a package along with its peer dependencies."""

import logging
import os

from args import parse_args
from cli_install import run_install
from common.logging_utils import configure_logging
from constants import Constants, _load_yaml_config, apply_config

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    apply_config(_load_yaml_config(getattr(args, "CONFIG", None)))
    run_install(args)


if __name__ == "__main__":
    main()

import logging
from starscope.cli.conf import ConfLogging


def configure_logging(conf: ConfLogging, verbose: bool = False) -> None:
    """Point the root logger at stderr using the format and level in `conf`.

    `verbose` forces the DEBUG level regardless of the configured one.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else conf.level.upper())
    formatter = logging.Formatter(fmt=conf.format, datefmt=conf.datefmt)
    if root_logger.handlers:
        root_logger.handlers[0].setFormatter(formatter)
        return
    handler: logging.Handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

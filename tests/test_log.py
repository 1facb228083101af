import logging

from rich.logging import RichHandler

from quicknote.log import configure_logging


def test_configure_logging_is_idempotent():
    logger = configure_logging("info")
    configure_logging("DEBUG")
    assert logger is logging.getLogger("quicknote")
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
    assert logger.level == logging.DEBUG

def test_unknown_level_falls_back_to_warning():
    logger = configure_logging("chatty")
    assert logger.level == logging.WARNING

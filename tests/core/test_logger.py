import logging

import pytest

from roachcli.core.utils import logger as logger_module


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "roachcli.log"
    logger = logger_module.setup_logging(level="DEBUG", log_file=str(log_file))
    try:
        logger.debug("binding flags")
        for handler in logger.handlers:
            handler.flush()
        assert "binding flags" in log_file.read_text()
        assert logger.level == logging.DEBUG
    finally:
        logger_module.setup_logging()


def test_setup_logging_replaces_handlers():
    logger_module.setup_logging()
    logger = logger_module.setup_logging()
    assert len(logger.handlers) == 1


def test_log_helpers_format_module_and_context(suppress_logging):
    logger_module.log_warning("binder", "skipped", context="pass=certs")
    suppress_logging.warning.assert_called_once_with(
        "[BINDER] skipped | Context: pass=certs"
    )
    logger_module.log_info("cli", "ready")
    suppress_logging.info.assert_called_once_with("[CLI] ready")


@pytest.mark.parametrize("level", ["LOUD", "BASIC_FORMAT", "shutdown"])
def test_setup_logging_rejects_unknown_levels(level):
    with pytest.raises(ValueError, match="Unknown log level"):
        logger_module.setup_logging(level=level)

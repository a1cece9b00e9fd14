import logging
import sys

import pytest

from aws_ec2_ssh.logging import NOISY_LOGGERS, LevelPrefixFormatter, configure_logging


def make_record(level: int, msg: str = "something happened") -> logging.LogRecord:
    return logging.LogRecord(
        name="aws_ec2_ssh.test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestLevelPrefixFormatter:
    @pytest.mark.parametrize(
        "level,expected",
        [
            (logging.WARNING, "Warning: something happened"),
            (logging.ERROR, "Error: something happened"),
            (logging.CRITICAL, "Error: something happened"),
            (logging.INFO, "something happened"),
            (logging.DEBUG, "[debug] aws_ec2_ssh.test: something happened"),
        ],
    )
    def test_prefixes(self, level: int, expected: str) -> None:
        formatter = LevelPrefixFormatter("%(message)s")

        assert formatter.format(make_record(level)) == expected


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    noisy_levels = {
        name: logging.getLogger(name).level for name in NOISY_LOGGERS
    }

    yield root

    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)


class TestConfigureLogging:
    def test_default_level_is_warning(self, restore_root_logger: logging.Logger) -> None:
        configure_logging()

        assert restore_root_logger.level == logging.WARNING

    def test_debug_level(self, restore_root_logger: logging.Logger) -> None:
        configure_logging(debug=True)

        assert restore_root_logger.level == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_logs_go_to_stderr_with_prefix(self, restore_root_logger: logging.Logger) -> None:
        configure_logging()

        [handler] = restore_root_logger.handlers
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, LevelPrefixFormatter)

"""Logging formatters for stderr output."""

import logging


class LevelPrefixFormatter(logging.Formatter):
    """Logging formatter that prefixes warnings and errors with their severity."""

    PREFIXES = {
        logging.WARNING: "Warning",
        logging.ERROR: "Error",
        logging.CRITICAL: "Error",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a severity prefix if the level warrants one.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message
        """
        msg = super().format(record)
        prefix = self.PREFIXES.get(record.levelno)

        if prefix:
            return f"{prefix}: {msg}"
        elif record.levelno == logging.DEBUG:
            return f"[debug] {record.name}: {msg}"

        return msg

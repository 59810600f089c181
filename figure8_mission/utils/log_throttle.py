import logging


class LogThrottle:
    """Emit a log record at most once per `period_s` of caller-supplied time."""

    def __init__(self, logger: logging.Logger, period_s: float):
        self._logger = logger
        self._period = period_s
        self._last = None

    def info(self, now: float, msg: str, *args) -> bool:
        if self._last is not None and now - self._last < self._period:
            return False
        self._last = now
        self._logger.info(msg, *args)
        return True

from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

_PROCESS_START_NS = time.perf_counter_ns()


def micros_since_start() -> int:
    return (time.perf_counter_ns() - _PROCESS_START_NS) // 1000


class Tracer:
    """
    Debug trace sink. Emits DEBUG records on the `docstore.trace` logger,
    each prefixed with microseconds since the process started. Does nothing
    when disabled.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def __call__(self, msg: str, *args: Any) -> None:
        if not self.enabled:
            return
        logger.debug("[%12d us] " + msg, micros_since_start(), *args)

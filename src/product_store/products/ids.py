from __future__ import annotations

import time
from typing import Callable

IdFactory = Callable[[], str]


def new_id() -> str:
    """
    Return the current clock reading in nanoseconds as a decimal string.

    Ids are only unique across clock ticks: two calls landing on the same
    tick return the same value. Callers that need strict uniqueness should
    set ids themselves or inject another factory into the store.
    """
    return str(time.time_ns())

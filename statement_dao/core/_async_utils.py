"""Internal async helpers shared by async modules."""

from __future__ import annotations

import inspect
from typing import Any


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return plain values unchanged.

    Lets async adapters drive sync DB-API connections (e.g. `sqlite3`) too.
    """
    if inspect.isawaitable(value):
        return await value
    return value

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from product_store.exceptions import ValidationError

from .models import Product
from .store import FileProductStore

logger = logging.getLogger(__name__)

START_OF_LIST = "0"


@dataclass
class Page:
    items: Sequence[Product] = field(default_factory=list)
    next_cursor: Optional[str] = None
    limit: int = 0


class CursorPaginator:
    """Forward-only, stateless pagination over the store's sorted listing.

    The cursor for the next page is the id of the last item on the current
    one. A cursor that matches nothing restarts from the beginning rather
    than failing.
    """

    def __init__(self, store: FileProductStore, *, start_sentinel: str = START_OF_LIST):
        self.store = store
        self.start_sentinel = start_sentinel

    def paginate(self, cursor: Optional[str] = None, limit: int = 10) -> Page:
        if limit < 0:
            raise ValidationError("invalid limit")
        if limit == 0:
            return Page(items=[], limit=0)

        paths = self.store.list_all_paths()
        offset = self._offset_after(paths, cursor)
        window = paths[offset : offset + limit]
        items = [self.store.read_path(p) for p in window]

        logger.debug(
            "Paginated %d of %d product(s) (cursor=%r, offset=%d, limit=%d)",
            len(items), len(paths), cursor, offset, limit,
        )
        return Page(
            items=items,
            limit=limit,
            next_cursor=items[-1].id if items else None,
        )

    def _offset_after(self, paths: list[Path], cursor: Optional[str]) -> int:
        if not cursor or cursor == self.start_sentinel:
            return 0
        for i, path in enumerate(paths):
            if self.store.matches(path, cursor):
                return i + 1
        logger.debug("Cursor %r matched no record; restarting from the first page", cursor)
        return 0

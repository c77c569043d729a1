from __future__ import annotations

import logging
import os
from contextlib import suppress
from enum import StrEnum
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import ValidationError as PydanticValidationError

from product_store.exceptions import NotFoundError, StorageIOError, ValidationError

from .ids import IdFactory, new_id
from .models import Product
from .validation import validate_product

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".json"


class IdMatch(StrEnum):
    """How a caller-supplied id is matched against listed record files."""

    SUBSTRING = "substring"  # id appears anywhere in the root-relative path
    EXACT = "exact"  # id equals the file stem


def _raise(exc: OSError) -> None:
    raise exc


class FileProductStore:
    """Persist products as ``<root>/<id><extension>`` JSON files.

    - One file per product; the file stem is the product id.
    - Listing walks the root recursively and sorts by full path string.
    - No locking: concurrent writers to the same id race, last write wins.
    - Writes go to a hidden temporary sibling and are moved into place, so
      readers never observe a half-written record.
    """

    def __init__(
        self,
        root: str | Path,
        *,
        extension: str = DEFAULT_EXTENSION,
        id_factory: IdFactory = new_id,
        indent: int = 4,
        id_match: IdMatch | str = IdMatch.SUBSTRING,
    ):
        if not extension.startswith("."):
            extension = f".{extension}"
        self.root = Path(root)
        self.extension = extension
        self.id_factory = id_factory
        self.indent = indent
        self.id_match = IdMatch(id_match)

    # ------------------------------------------------------------------ paths

    def path_for(self, product_id: str) -> Path:
        if (
            not product_id
            or product_id in (".", "..")
            or "/" in product_id
            or "\\" in product_id
            or (os.altsep and os.altsep in product_id)
        ):
            raise ValidationError(f"invalid id: {product_id!r}")
        return self.root / f"{product_id}{self.extension}"

    def matches(self, path: Path, token: str) -> bool:
        """Return True when ``token`` identifies the record stored at ``path``."""
        if self.id_match is IdMatch.EXACT:
            return path.name[: -len(self.extension)] == token
        try:
            rel = path.relative_to(self.root)
        except ValueError:
            rel = path
        return token in rel.as_posix()

    # ------------------------------------------------------------- operations

    def put(self, products: Iterable[Product]) -> list[Product]:
        """
        Validate, populate ids and write each product in order.

        Stops at the first invalid product or failed write; products written
        before it stay on disk. Returns populated copies, inputs are untouched.
        """
        written: list[Product] = []
        for product in products:
            validate_product(product)
            populated = product.with_ids(self.id_factory)
            path = self.path_for(populated.id)
            self._write(path, populated.model_dump_json(indent=self.indent))
            logger.debug("Wrote product %s to %s", populated.id, path)
            written.append(populated.model_copy(deep=True))
        logger.info("Stored %d product(s) under %s", len(written), self.root)
        return written

    def get(self, ids: Sequence[str]) -> list[Product]:
        """Read products in the requested order; any missing id fails the call."""
        if not ids:
            return []
        found: list[Product] = []
        for product_id in ids:
            path = self.path_for(product_id)
            try:
                raw = path.read_bytes()
            except FileNotFoundError:
                raise NotFoundError(
                    f"unable to read file: {product_id}{self.extension}",
                    product_id=product_id,
                ) from None
            except OSError as exc:
                raise StorageIOError(
                    f"unable to read file: {product_id}{self.extension}", path=str(path)
                ) from exc
            found.append(self._decode(raw, path))
        return found

    def read_path(self, path: str | Path) -> Product:
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StorageIOError(f"unable to read file: {path}", path=str(path)) from exc
        return self._decode(raw, path)

    def delete(self, ids: Sequence[str]) -> list[Path]:
        """
        Remove every listed record file matched by any of ``ids``.

        Empty ids are ignored; they would otherwise match every file in
        substring mode. Returns the removed paths.
        """
        tokens = [i for i in ids if i]
        if not tokens:
            return []
        removed: list[Path] = []
        for path in self.list_all_paths():
            if any(self.matches(path, token) for token in tokens):
                self._remove(path)
                removed.append(path)
        logger.info("Deleted %d product file(s) for %d id(s)", len(removed), len(tokens))
        return removed

    def clear(self) -> int:
        """Remove every record file under the root; returns how many were removed."""
        count = 0
        for path in self.list_all_paths():
            self._remove(path)
            count += 1
        logger.info("Cleared %d product file(s) from %s", count, self.root)
        return count

    def list_all_paths(self) -> list[Path]:
        """All record files under the root, sorted by full path string."""
        if not self.root.exists():
            return []
        paths: list[Path] = []
        try:
            for dirpath, _dirnames, filenames in os.walk(self.root, onerror=_raise):
                for filename in filenames:
                    if filename.endswith(self.extension):
                        paths.append(Path(dirpath) / filename)
        except OSError as exc:
            raise StorageIOError(f"unable to list {self.root}: {exc}", path=str(self.root)) from exc
        paths.sort(key=str)
        return paths

    # ---------------------------------------------------------------- helpers

    def _write(self, path: Path, payload: str) -> None:
        tmp = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            with suppress(OSError):
                tmp.unlink()
            raise StorageIOError(f"unable to write file: {path.name}: {exc}", path=str(path)) from exc

    def _remove(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as exc:
            raise StorageIOError(f"unable to remove file: {path.name}: {exc}", path=str(path)) from exc
        logger.debug("Removed %s", path)

    def _decode(self, raw: bytes, path: Path) -> Product:
        try:
            return Product.model_validate_json(raw)
        except (PydanticValidationError, UnicodeDecodeError) as exc:
            raise StorageIOError(f"unable to decode file: {path.name}", path=str(path)) from exc

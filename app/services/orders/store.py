import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from app.models import OrderRecord
from app.services.errors import DuplicateOrderError, StorageError

logger = logging.getLogger(__name__)


class OrderStore:
    """
    File-backed order log.

    The whole list is read and rewritten on every mutation, which is fine for a
    single merchant's order history. Mutations go through ``append`` and
    ``update`` so the read-modify-write happens under one lock per store.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> List[OrderRecord]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            # first run
            return []
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}", detail=str(e)) from e

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("expected a JSON list of orders")
            return [OrderRecord.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            raise StorageError(f"Corrupt order file {self.path}", detail=str(e)) from e

    def save(self, records: List[OrderRecord]) -> None:
        payload = json.dumps([r.to_json() for r in records], indent=2, ensure_ascii=False)
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, prefix=f".{self.path.name}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write {self.path}", detail=str(e)) from e

    def get(self, order_id: str) -> Optional[OrderRecord]:
        for record in self.load():
            if record.order_id == order_id:
                return record
        return None

    def append(self, record: OrderRecord) -> None:
        with self._lock:
            records = self.load()
            if any(r.order_id == record.order_id for r in records):
                raise DuplicateOrderError(f"Order {record.order_id} already stored")
            records.append(record)
            self.save(records)
        logger.info(f"Stored order {record.order_id} ({len(records)} total)")

    def update(self, order_id: str, fn: Callable[[OrderRecord], OrderRecord]) -> Optional[OrderRecord]:
        """apply ``fn`` to the first record with ``order_id`` and persist; None if absent."""
        with self._lock:
            records = self.load()
            for i, record in enumerate(records):
                if record.order_id == order_id:
                    updated = fn(record)
                    if updated != record:
                        records[i] = updated
                        self.save(records)
                    return updated
        return None

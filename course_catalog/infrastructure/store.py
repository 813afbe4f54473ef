import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from fastapi import Request

from ..domain.errors import CorruptStoreError
from .metrics import store_operations_total

# имя коллекции -> тип пустой коллекции
COLLECTIONS: dict[str, type] = {
    "users": list,
    "courses": list,
    "schedules": dict,
}


class JsonStore:
    """Хранилище коллекций в JSON-файлах внутри data_dir.

    Запись перезаписывает файл целиком, без атомарного rename. Блокировки
    действуют только внутри процесса: read-modify-write одной коллекции
    выполняется под `lock(collection)`.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self._locks = {name: threading.RLock() for name in COLLECTIONS}

    def path(self, collection: str) -> Path:
        self._check(collection)
        return self.data_dir / f"{collection}.json"

    @contextmanager
    def lock(self, collection: str) -> Iterator[None]:
        self._check(collection)
        with self._locks[collection]:
            yield

    def read(self, collection: str) -> Any:
        kind = COLLECTIONS[self._check(collection)]
        path = self.path(collection)
        with self.lock(collection):
            if not path.exists():
                # первый запуск: создаём пустую коллекцию
                self.write(collection, kind())
                return kind()
            raw = path.read_text(encoding="utf-8")
            store_operations_total.labels(collection=collection, operation="read").inc()
        if not raw.strip():
            return kind()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(collection, f"malformed JSON ({e.msg} at line {e.lineno})") from e
        if not isinstance(data, kind):
            raise CorruptStoreError(collection, f"expected a JSON {'array' if kind is list else 'object'}")
        return data

    def write(self, collection: str, data: Any) -> None:
        path = self.path(collection)
        with self.lock(collection):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            store_operations_total.labels(collection=collection, operation="write").inc()

    def ensure_collections(self) -> None:
        for name in COLLECTIONS:
            self.read(name)

    @staticmethod
    def _check(collection: str) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection!r}")
        return collection


def get_store(request: Request) -> JsonStore:
    return request.app.state.store

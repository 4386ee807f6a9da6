"""In-process store."""

from slugsmith.stores.base import Row, RowStore


class MemoryStore(RowStore):
    """Keeps every model's rows in memory. Thread-safe, not persistent."""

    def __init__(self) -> None:
        super().__init__()
        self._tables: dict[str, list[Row]] = {}

    def _read_rows(self, model: str) -> list[Row]:
        return [dict(row) for row in self._tables.get(model, [])]

    def _write_rows(self, model: str, rows: list[Row]) -> None:
        self._tables[model] = [dict(row) for row in rows]

    def clear(self, model: str | None = None) -> None:
        """Drop one model's rows, or everything."""
        with self._lock:
            if model is None:
                self._tables.clear()
            else:
                self._tables.pop(model, None)

"""JSON file store: one file per model."""

import json
from datetime import datetime
from pathlib import Path

from slugsmith.errors import StoreUnavailableError
from slugsmith.stores.base import Row, RowStore
from slugsmith.utils.logging import get_logger

logger = get_logger(__name__)


class JsonFileStore(RowStore):
    """Persists each model's rows to ``<store_dir>/<model>.json``."""

    def __init__(self, store_dir: Path | str = "data") -> None:
        """
        Initialize the store.

        Args:
            store_dir: Directory holding the model files

        Raises:
            StoreUnavailableError: Directory cannot be created
        """
        super().__init__()
        self.store_dir = Path(store_dir)
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailableError(
                f"Cannot create store directory {self.store_dir}", path=str(self.store_dir)
            ) from e
        logger.info("JSON store initialized", store_dir=str(self.store_dir))

    def _get_table_path(self, model: str) -> Path:
        return self.store_dir / f"{model}.json"

    def _read_rows(self, model: str) -> list[Row]:
        path = self._get_table_path(model)

        if not path.exists():
            return []

        try:
            content = json.loads(path.read_text(encoding="utf-8"))
            return list(content["data"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            logger.error("Failed to read store file", model=model, path=str(path), error=str(e))
            raise StoreUnavailableError(
                f"Cannot read rows of {model} from {path}", model=model, path=str(path)
            ) from e

    def _write_rows(self, model: str, rows: list[Row]) -> None:
        path = self._get_table_path(model)
        content = {
            "data": rows,
            "saved_at": datetime.now().isoformat(),
        }

        try:
            path.write_text(json.dumps(content, indent=2), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.error("Failed to write store file", model=model, path=str(path), error=str(e))
            raise StoreUnavailableError(
                f"Cannot write rows of {model} to {path}", model=model, path=str(path)
            ) from e

    def list_models(self) -> list[str]:
        """Models with a file in the store directory."""
        return sorted(p.stem for p in self.store_dir.glob("*.json"))

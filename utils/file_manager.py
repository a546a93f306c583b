import json
import re
from pathlib import Path
from typing import Dict, Optional, Protocol


class StoragePort(Protocol):
    """Key/value persistence used by the brand store"""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class FileManager:
    """
    Local key/value storage backed by a single JSON file, plus the data
    directories the CLI writes exports into.

    Values are stored as strings, the same way browser local storage holds
    them, so the brand collection is a JSON document nested as a string.
    """

    def __init__(self, storage_path: str = "data/local_storage.json",
                 export_dir: str = "data/exports"):
        self.storage_path = Path(storage_path)
        self.export_dir = Path(export_dir)

    def _read_all(self) -> Dict[str, str]:
        if not self.storage_path.exists():
            return {}
        with open(self.storage_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file is not a key/value object: {self.storage_path}")
        return data

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for `key`, or None if it was never set"""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, rewriting the file atomically"""
        try:
            data = self._read_all()
        except (ValueError, json.JSONDecodeError):
            data = {}
        data[key] = value

        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.storage_path.with_suffix(self.storage_path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.storage_path)

    def export_path(self, brand_name: str) -> Path:
        """Default CSV export location for a brand's post history"""
        self.export_dir.mkdir(parents=True, exist_ok=True)
        safe_name = re.sub(r'[\\/:*?"<>|]+', "_", brand_name).strip() or "brand"
        return self.export_dir / f"{safe_name}_content_history.csv"

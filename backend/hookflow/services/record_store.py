# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Record Store - JSON file persistence for integer-keyed records.

Storage structure:
    {base_dir}/
    ├── 1.json
    ├── 2.json
    └── 3.json

One file per record keeps every record inspectable with `cat` and `jq`.
Writes are serialized per file with asyncio locks; id allocation is
serialized with a store-wide lock.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os


class RecordStore:
    """Async key-value store of JSON documents keyed by integer id."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

        self._locks: Dict[str, asyncio.Lock] = {}
        self._id_lock = asyncio.Lock()

    def _get_lock(self, file_path: Path) -> asyncio.Lock:
        """Get or create lock for a specific file"""
        key = str(file_path)
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _path(self, record_id: int) -> Path:
        return self.base_dir / f"{record_id}.json"

    def _ids(self) -> List[int]:
        ids = []
        for record_file in self.base_dir.glob("*.json"):
            if record_file.stem.isdigit():
                ids.append(int(record_file.stem))
        return sorted(ids)

    async def _write(self, record_id: int, data: Dict[str, Any]) -> None:
        path = self._path(record_id)
        async with self._get_lock(path):
            async with aiofiles.open(path, "w") as f:
                await f.write(json.dumps(data, indent=2, default=str))

    async def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Allocate the next id and persist the record.

        Args:
            data: Record fields without an id

        Returns:
            Stored record including its id
        """
        async with self._id_lock:
            ids = self._ids()
            record_id = ids[-1] + 1 if ids else 1
            record = {**data, "id": record_id}
            await self._write(record_id, record)
        return record

    async def get(self, record_id: int) -> Optional[Dict[str, Any]]:
        path = self._path(record_id)
        if not path.exists():
            return None
        async with self._get_lock(path):
            if not path.exists():
                return None
            async with aiofiles.open(path, "r") as f:
                return json.loads(await f.read())

    async def put(self, record_id: int, data: Dict[str, Any]) -> None:
        """Overwrite an existing record"""
        await self._write(record_id, {**data, "id": record_id})

    async def delete(self, record_id: int) -> bool:
        path = self._path(record_id)
        async with self._get_lock(path):
            if not path.exists():
                return False
            await aiofiles.os.remove(path)
        self._locks.pop(str(path), None)
        return True

    async def all(self, newest_first: bool = False) -> List[Dict[str, Any]]:
        """Load every record, ordered by id"""
        records = []
        ids = self._ids()
        if newest_first:
            ids.reverse()
        for record_id in ids:
            record = await self.get(record_id)
            if record is not None:
                records.append(record)
        return records

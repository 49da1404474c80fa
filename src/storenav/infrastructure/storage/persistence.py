"""Utilities for persisting data to JSON files."""

import json
import logging
import os
import shutil
import tempfile
from typing import Any, Dict

import aiofiles

from ...core.exceptions import StorageError
from ...core.serialization import StoreNavJSONEncoder

logger = logging.getLogger(__name__)


def load_json(file_path: str) -> Dict[str, Any]:
    """
    Load data from a JSON file. A missing or blank file loads as {}.

    Raises:
        StorageError: If the file cannot be read or parsed
    """
    try:
        if os.path.exists(file_path):
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
            if content.strip():
                return json.loads(content)
        return {}
    except Exception as e:
        logger.error(f"Failed to load from {file_path}: {str(e)}")
        raise StorageError(f"Failed to load from {file_path}: {str(e)}")


def save_json_atomic(file_path: str, data: Dict[str, Any]) -> None:
    """
    Save data to a JSON file atomically.

    The data is written to a temporary file in the same directory which then
    replaces the target, so readers never observe a half-written file.

    Raises:
        StorageError: If saving fails
    """
    directory = os.path.dirname(file_path) or "."
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, cls=StoreNavJSONEncoder)
        os.replace(tmp_path, file_path)
        tmp_path = None
    except Exception as e:
        logger.error(f"Failed to save to {file_path}: {str(e)}")
        raise StorageError(f"Failed to save to {file_path}: {str(e)}")
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)


async def load_json_file(file_path: str) -> Dict[str, Any]:
    """
    Load data from a JSON file without blocking the event loop.

    Raises:
        StorageError: If loading fails
    """
    try:
        if os.path.exists(file_path):
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                content = await f.read()
                if content.strip():
                    return json.loads(content)
        return {}
    except Exception as e:
        logger.error(f"Failed to load from {file_path}: {str(e)}")
        raise StorageError(f"Failed to load from {file_path}: {str(e)}")


async def save_json_file(file_path: str, data: Dict[str, Any]) -> None:
    """
    Save data to a JSON file without blocking the event loop.

    Raises:
        StorageError: If saving fails
    """
    try:
        content = json.dumps(data, indent=2, cls=StoreNavJSONEncoder)
        tmp_path = f"{file_path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(content)
        os.replace(tmp_path, file_path)
    except Exception as e:
        logger.error(f"Failed to save to {file_path}: {str(e)}")
        raise StorageError(f"Failed to save to {file_path}: {str(e)}")


def backup_file(source_path: str, backup_path: str) -> None:
    """
    Copy a file to its backup location if it exists.

    Raises:
        StorageError: If backup fails
    """
    try:
        if os.path.exists(source_path):
            shutil.copy2(source_path, backup_path)
    except Exception as e:
        logger.error(f"Failed to backup {source_path}: {str(e)}")
        raise StorageError(f"Failed to backup {source_path}: {str(e)}")

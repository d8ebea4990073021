"""
Disk storage for uploaded document files.

Files are written to a single upload directory under a generated,
unique name: ``<millis>-<random>-<sanitised original name>``.  The
generated name is the key recorded in a document's ``filename``
field; nothing else about the document is stored on disk.
"""

import logging
import secrets
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

from werkzeug.utils import secure_filename


logger = logging.getLogger(__name__)


class FileStorage:
    """Save, locate and delete uploaded files inside ``root``."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def _generate_name(self, original_name: Optional[str]) -> str:
        safe = secure_filename(original_name or "") or "upload"
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-{safe}"

    def save(self, stream: BinaryIO, original_name: Optional[str]) -> str:
        """Copy ``stream`` to a new file and return its storage key."""
        self.root.mkdir(parents=True, exist_ok=True)
        name = self._generate_name(original_name)
        target = self.root / name
        with target.open("wb") as fh:
            shutil.copyfileobj(stream, fh)
        logger.info("Stored upload %s (%d bytes)", name, target.stat().st_size)
        return name

    def path_for(self, name: str) -> Path:
        # Storage keys are generated by ``save`` and never contain a
        # directory part; anything else is treated as unknown.
        if Path(name).name != name:
            raise ValueError(f"Invalid storage key: {name!r}")
        return self.root / name

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except ValueError:
            return False

    def delete(self, name: str) -> None:
        """Remove a stored file; a missing file is not an error."""
        self.path_for(name).unlink(missing_ok=True)

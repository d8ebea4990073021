"""
In-memory data store with JSON file persistence.

``DataStore`` owns every record the API works with: handbook sections,
document metadata, guest apartment bookings and users.  Each
collection is a dict keyed by an integer id handed out by a monotonic
counter, so ids are never reused after a deletion.

When the store is given a ``data_dir`` it mirrors two collections to
disk:

* ``bookings.json`` holds the full list of bookings and is rewritten
  after every booking mutation.
* ``sections.json`` holds the sections together with the next section
  id, and is rewritten after every section mutation.

Writes go to a temporary file in the same directory which is then
renamed over the target, so a crash mid-write leaves the previous copy
intact.  A file that cannot be read at startup is renamed to
``<name>.corrupt-<timestamp>`` before the store starts without it, so
the next save does not destroy it.  Without a ``data_dir`` the store
lives purely in memory, which is what the tests use.

The store is not synchronised.  Request handlers run on a single event
loop and only interleave at ``await`` points; no service awaits
between its checks and its writes.
"""

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from ..schemas.booking import Booking
from ..schemas.document import Document
from ..schemas.section import Section
from ..schemas.user import User
from .errors import InternalError


logger = logging.getLogger(__name__)

BOOKINGS_FILE = "bookings.json"
SECTIONS_FILE = "sections.json"

FOOTER_SLUG = "footer"

DEFAULT_SECTIONS: List[Dict[str, str]] = [
    {
        "title": "Aktivitetsrum",
        "slug": "aktivitetsrum",
        "content": "Information om föreningens aktivitetsrum och hur man bokar det.",
        "icon": "fa-running",
    },
    {
        "title": "Elbil",
        "slug": "elbil",
        "content": "Information om laddstationer för elbilar i föreningen.",
        "icon": "fa-car-side",
    },
    {
        "title": "Ellagården",
        "slug": "ellagarden",
        "content": "Allmän information om bostadsrättsföreningen Ellagården.",
        "icon": "fa-home",
    },
    {
        "title": "Stämma",
        "slug": "stamma",
        "content": "Information om föreningens årsstämma och extra stämmor.",
        "icon": "fa-users",
    },
    {
        "title": "Grillregler",
        "slug": "grillregler",
        "content": "Regler för grillning på balkonger och i gemensamma utrymmen.",
        "icon": "fa-fire",
    },
    {
        "title": "Gästlägenhet",
        "slug": "gastlagenhet",
        "content": (
            "Vår förening har en gästlägenhet som medlemmar kan boka för sina gäster. "
            "Lägenheten ligger på bottenplan i hus 3 och har plats för upp till 4 personer."
        ),
        "icon": "fa-bed",
    },
    {
        "title": "Färgkoder",
        "slug": "fargkoder",
        "content": "Färgkoder för målning av dörrar, fönster och andra detaljer i föreningen.",
        "icon": "fa-paint-brush",
    },
    {
        "title": "Sophantering",
        "slug": "sophantering",
        "content": "Information om sophantering, återvinning och miljörum.",
        "icon": "fa-trash-alt",
    },
    {
        "title": "Styrelse",
        "slug": "styrelse",
        "content": "Information om föreningens styrelse och kontaktuppgifter.",
        "icon": "fa-users-cog",
    },
    {
        "title": "Sidfot",
        "slug": FOOTER_SLUG,
        "content": json.dumps(
            {
                "address": "Ellagårdsvägen 123, 123 45 Stockholm",
                "email": "styrelsen@ellagarden.se",
                "phone": "08-123 45 67",
                "copyright": "© 2025 BRF Ellagården. Alla rättigheter förbehållna.",
            },
            ensure_ascii=False,
        ),
        "icon": "fa-shoe-prints",
    },
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def write_json_atomic(path: Path, payload: Any) -> None:
    """Serialise ``payload`` to ``path`` via a temp file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class DataStore:
    """Container for all records, with optional persistence to ``data_dir``."""

    def __init__(self, data_dir: Optional[Union[str, Path]] = None, seed_sections: bool = True) -> None:
        self.data_dir: Optional[Path] = Path(data_dir) if data_dir is not None else None
        self.sections: Dict[int, Section] = {}
        self.documents: Dict[int, Document] = {}
        self.bookings: Dict[int, Booking] = {}
        self.users: Dict[int, User] = {}
        self._next_ids: Dict[str, int] = {
            "sections": 1,
            "documents": 1,
            "bookings": 1,
            "users": 1,
        }
        self._seed_sections = seed_sections
        self.load()

    # ------------------------------------------------------------------
    # Ids
    # ------------------------------------------------------------------

    def next_id(self, collection: str) -> int:
        """Hand out the next id for ``collection`` and advance its counter."""
        value = self._next_ids[collection]
        self._next_ids[collection] = value + 1
        return value

    def _bump_counter(self, collection: str, ids: List[int]) -> None:
        if ids:
            self._next_ids[collection] = max(self._next_ids[collection], max(ids) + 1)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Populate the store from ``data_dir``, seeding sections if needed."""
        loaded_sections = self._load_sections()
        self._load_bookings()
        if not loaded_sections and self._seed_sections:
            self._seed_default_sections()

    def _read_json(self, filename: str) -> Any:
        if self.data_dir is None:
            return None
        path = self.data_dir / filename
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError):
            logger.exception("Could not read %s; starting without it", path)
            self._set_aside(path)
            return None

    def _set_aside(self, path: Path) -> None:
        target = path.with_name(f"{path.name}.corrupt-{utcnow():%Y%m%d%H%M%S}")
        try:
            os.replace(path, target)
        except OSError as exc:
            logger.exception("Could not move %s aside", path)
            raise InternalError(f"Could not read {path.name}") from exc
        logger.warning("Moved unreadable %s to %s", path.name, target.name)

    def _load_sections(self) -> bool:
        data = self._read_json(SECTIONS_FILE)
        if data is None:
            return False
        # Older files hold a bare list of sections.
        if isinstance(data, list):
            records, next_id = data, None
        else:
            records, next_id = data.get("sections", []), data.get("nextId")
        for record in records:
            section = Section.model_validate(record)
            self.sections[section.id] = section
        self._bump_counter("sections", list(self.sections))
        if next_id:
            self._next_ids["sections"] = max(self._next_ids["sections"], int(next_id))
        logger.info("Loaded %d sections from %s", len(self.sections), self.data_dir / SECTIONS_FILE)
        return bool(self.sections) or next_id is not None

    def _load_bookings(self) -> None:
        data = self._read_json(BOOKINGS_FILE)
        if not data:
            return
        for record in data:
            booking = Booking.model_validate(record)
            self.bookings[booking.id] = booking
        self._bump_counter("bookings", list(self.bookings))
        logger.info("Loaded %d bookings from %s", len(self.bookings), self.data_dir / BOOKINGS_FILE)

    def _seed_default_sections(self) -> None:
        now = utcnow()
        for entry in DEFAULT_SECTIONS:
            section_id = self.next_id("sections")
            self.sections[section_id] = Section(id=section_id, updated_at=now, **entry)
        logger.info("Initialised %d default sections", len(self.sections))
        self.save_sections()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def _write(self, filename: str, payload: Any) -> None:
        if self.data_dir is None:
            return
        path = self.data_dir / filename
        try:
            write_json_atomic(path, payload)
        except OSError as exc:
            logger.exception("Failed to write %s", path)
            raise InternalError(f"Could not save {filename}") from exc

    def save_bookings(self) -> None:
        """Write the full booking list to ``bookings.json``."""
        payload = [booking.model_dump(mode="json", by_alias=True) for booking in self.bookings.values()]
        self._write(BOOKINGS_FILE, payload)
        logger.debug("Saved %d bookings", len(payload))

    def save_sections(self) -> None:
        payload = {
            "nextId": self._next_ids["sections"],
            "sections": [section.model_dump(mode="json", by_alias=True) for section in self.sections.values()],
        }
        self._write(SECTIONS_FILE, payload)
        logger.debug("Saved %d sections", len(self.sections))

    @contextmanager
    def rollback_on_error(self, collection: str) -> Iterator[Dict[int, Any]]:
        """Restore ``collection`` to its current contents if the block raises.

        Services wrap each mutation and its save in this block, so a
        failed write leaves memory matching what is on disk.
        """
        records: Dict[int, Any] = getattr(self, collection)
        snapshot = dict(records)
        try:
            yield records
        except Exception:
            records.clear()
            records.update(snapshot)
            raise

    def close(self) -> None:
        """Flush persisted collections; called on application shutdown."""
        if self.data_dir is None:
            return
        self.save_sections()
        self.save_bookings()

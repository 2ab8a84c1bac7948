import logging
import os
import tempfile
import threading
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import ClassVar, Iterable, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .config import settings
from .errors import InvalidFieldValue, StorageUnavailable

logger = logging.getLogger(__name__)

DELIMITER = ":"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

SEED_ROOMS = (
    "101:Single:100.00:Available:WiFi,TV,AC\n"
    "102:Double:150.00:Available:WiFi,TV,AC,Meal Service\n"
    "103:Suite:300.00:Available:WiFi,TV,AC,Meal Service,Jacuzzi\n"
    "104:Single:120.00:Available:WiFi,TV,AC,Balcony\n"
    "105:Double:180.00:Available:WiFi,TV,AC,Meal Service,Balcony\n"
)


def format_value(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal | float):
        return f"{value:.2f}"
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list | tuple):
        return ",".join(format_value(v) for v in value)
    return str(value)


class Record(BaseModel):
    """One line of a colon-delimited record file.

    Field declaration order is the column order on disk. At most one field
    (``greedy_field``) may itself contain the delimiter; the columns before
    and after it are anchored from both ends of the line.
    """
    model_config = ConfigDict(validate_assignment=True)

    filename: ClassVar[str]
    greedy_field: ClassVar[str | None] = None

    @classmethod
    def columns(cls) -> list[str]:
        return list(cls.model_fields)

    def to_line(self) -> str:
        parts = []
        for name in self.columns():
            text = format_value(getattr(self, name))
            if "\n" in text or (DELIMITER in text and name != self.greedy_field):
                raise InvalidFieldValue(f"{name} may not contain ':' or line breaks.")
            parts.append(text)
        return DELIMITER.join(parts)

    @classmethod
    def from_line(cls, line: str):
        names = cls.columns()
        parts = line.rstrip("\r\n").split(DELIMITER)
        if cls.greedy_field and len(parts) > len(names):
            i = names.index(cls.greedy_field)
            tail = len(parts) - (len(names) - i - 1)
            parts = parts[:i] + [DELIMITER.join(parts[i:tail])] + parts[tail:]
        if len(parts) != len(names):
            raise ValueError(f"expected {len(names)} fields, found {len(parts)}")
        return cls.model_validate(dict(zip(names, parts)))


R = TypeVar("R", bound=Record)


class RecordStore:
    """Flat-file tables, one record per line, rewritten whole on update.

    Reads and read-modify-write cycles are serialized by a re-entrant lock so
    callers in a threaded host see whole files. Callers that need several
    steps to be atomic hold ``store.lock`` themselves.
    """

    def __init__(self, data_dir: str | os.PathLike):
        self.data_dir = Path(data_dir)
        self.lock = threading.RLock()

    def path_for(self, model: type[Record]) -> Path:
        return self.data_dir / model.filename

    def bootstrap(self, admin_password: str | None = None):
        """Create the data directory and any missing record file, seeding rooms and the admin secret."""
        admin_password = admin_password or settings.ADMIN_DEFAULT_PASSWORD
        with self.lock:
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageUnavailable(f"Cannot create data directory {self.data_dir}: {exc}") from exc
            defaults = {
                "rooms.txt": SEED_ROOMS,
                "bookings.txt": "",
                "users.txt": "",
                "user_profiles.txt": "",
                "admin_pass.txt": f"{admin_password}\n",
            }
            for name, content in defaults.items():
                path = self.data_dir / name
                if not path.exists():
                    self._write_text(path, content)
                    logger.info("Created %s", path)

    def load_all(self, model: type[R]) -> list[R]:
        """Return every parseable record in file order; a missing file is an empty table."""
        path = self.path_for(model)
        with self.lock:
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    lines = fh.readlines()
            except FileNotFoundError:
                return []
            except OSError as exc:
                raise StorageUnavailable(f"Cannot read {path}: {exc}") from exc
        records = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                records.append(model.from_line(line))
            except (ValueError, ValidationError) as exc:
                logger.warning("Skipping malformed line %s:%d (%s)", path.name, lineno, exc)
        return records

    def append(self, model: type[R], record: R) -> R:
        line = record.to_line() + "\n"
        path = self.path_for(model)
        with self.lock:
            try:
                with open(path, "a", encoding="utf-8") as fh:
                    fh.write(line)
            except OSError as exc:
                raise StorageUnavailable(f"Cannot write {path}: {exc}") from exc
        return record

    def rewrite_all(self, model: type[R], records: Iterable[R]):
        """Replace the whole table: write a temporary file beside it, then rename over it."""
        content = "".join(r.to_line() + "\n" for r in records)
        with self.lock:
            self._write_text(self.path_for(model), content)

    def _write_text(self, path: Path, content: str):
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageUnavailable(f"Cannot write {path}: {exc}") from exc


_default_store: RecordStore | None = None


def get_store() -> RecordStore:
    global _default_store
    if _default_store is None:
        _default_store = RecordStore(settings.DATA_DIR)
    return _default_store

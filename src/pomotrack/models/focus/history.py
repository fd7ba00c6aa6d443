"""Focus session history with JSON file storage."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from itertools import islice
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pomotrack.models.session import SessionRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[SessionRecord])


def serialize_history(records: Iterable[SessionRecord]) -> str:
    """Serialize session records to a JSON array."""
    return _records_adapter.dump_json(list(records), indent=2).decode("utf-8")


def deserialize_history(text: str | bytes) -> list[SessionRecord]:
    """
    Parse a JSON array of session records.

    Raises:
        ValueError: If the text is not valid JSON or a record is malformed
    """
    try:
        return _records_adapter.validate_json(text)
    except ValidationError as e:
        raise ValueError(f"Invalid session history: {e}") from e


class SessionHistoryStore:
    """Append-only log of completed sessions.

    The whole log is rewritten on every append. A missing or unreadable file
    loads as an empty history.
    """

    def __init__(self, history_file: Path | None = None):
        """Initialize history store."""
        if history_file is None:
            from platformdirs import user_data_dir

            history_file = Path(user_data_dir("pomotrack")) / "session_history.json"

        self.history_file = history_file
        self.history_file.parent.mkdir(parents=True, exist_ok=True)
        self._records: list[SessionRecord] = self._load()

    def _load(self) -> list[SessionRecord]:
        if not self.history_file.exists():
            return []

        try:
            return deserialize_history(self.history_file.read_bytes())
        except (OSError, ValueError) as e:
            logger.warning(
                "session history at %s is unreadable, starting empty: %s",
                self.history_file,
                e,
            )
            return []

    def _save(self) -> None:
        self.history_file.write_text(serialize_history(self._records), encoding="utf-8")
        self.history_file.chmod(0o600)

    def append(self, record: SessionRecord) -> None:
        """Add a completed session to the end of the log."""
        self._records.append(record)
        self._save()

    def most_recent(self, n: int) -> Iterator[SessionRecord]:
        """Iterate over the last ``n`` sessions, most recent first."""
        if n <= 0:
            return iter(())
        return islice(reversed(self._records), n)

    def all(self) -> list[SessionRecord]:
        """All sessions in order of completion."""
        return list(self._records)

    def import_records(self, records: Iterable[SessionRecord]) -> int:
        """
        Merge previously exported sessions into the log.

        Records whose id is already present are skipped. The log stays ordered
        by end time.

        Returns:
            Number of sessions added
        """
        known = {r.id for r in self._records}
        added = []
        for record in records:
            if record.id in known:
                continue
            known.add(record.id)
            added.append(record)

        if added:
            self._records = sorted(
                self._records + added, key=lambda r: r.end_time.timestamp()
            )
            self._save()
        return len(added)

    def __len__(self) -> int:
        return len(self._records)

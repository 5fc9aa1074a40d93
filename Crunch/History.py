# History.py
"""
Answer history.

Holds the entries of the running session plus the entries of earlier sessions,
read from history-<session uuid>.json files in the data directory. It is also
what '@n' references resolve against:

- resolve_by_index(n): id of the n-th entry counting back from the newest (n >= 1)
- resolve_expression(id): the reduced value of that entry
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from . import error as E
from . import Tokens as T

logger = logging.getLogger(__name__)

HISTORY_VERSION = 1
HISTORY_FILE_GLOB = "history-*.json"


@dataclass(frozen=True)
class HistoryEntry:
    entry_id: uuid.UUID
    expression: T.Token
    rendition: str

    @classmethod
    def new(cls, expression, decimal_places):
        return cls(uuid.uuid4(), expression, expression.to_string(decimal_places))

    def to_string(self):
        return self.rendition

    def without_equality(self):
        """The entry's value: the reduced side of an 'input = result' entry."""
        if isinstance(self.expression, T.Equality):
            return self.expression.right
        return self.expression

    def render_input(self, decimal_places):
        """The entry's input side, as it was typed."""
        if isinstance(self.expression, T.Equality):
            return self.expression.left.to_string(decimal_places)
        return self.expression.to_string(decimal_places)

    def to_dict(self):
        return {
            "entry_id": str(self.entry_id),
            "expression": self.expression.to_dict(),
            "rendition": self.rendition,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(uuid.UUID(data["entry_id"]), T.token_from_dict(data["expression"]), data["rendition"])


class HistoryManager:

    def __init__(self, data_dir=None, decimal_places=12):
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.session_uuid = uuid.uuid4()
        self.session_start = int(time.time())
        self.decimal_places = decimal_places
        self.entries = []
        self.previous_entries = []
        self.file_path = None

        if self.data_dir is not None:
            self.file_path = self.data_dir / f"history-{self.session_uuid}.json"
            self.previous_entries = self.load_previous_entries()

    def load_previous_entries(self):
        """Read every history file in the data directory, oldest session first."""
        if not self.data_dir.exists():
            return []

        sessions = [self.history_from_file(path) for path in self.data_dir.glob(HISTORY_FILE_GLOB)]
        sessions.sort(key=lambda data: data["session_start"])

        previous_entries = []
        for data in sessions:
            previous_entries.extend(data["entries"])

        logger.info("Loaded %s entries from %s earlier sessions", len(previous_entries), len(sessions))
        return previous_entries

    @staticmethod
    def history_from_file(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise E.HistoryError(f"History file could not be read: {Path(path).name} ({e})")

        if not isinstance(data, dict) or "entries" not in data:
            raise E.HistoryError(f"History file could not be read: {Path(path).name} (missing entries)")
        if not isinstance(data.get("session_start"), (int, float)):
            raise E.HistoryError(f"History file could not be read: {Path(path).name} (missing session start)")

        try:
            data["entries"] = [HistoryEntry.from_dict(entry) for entry in data["entries"]]
        except (KeyError, ValueError, TypeError) as e:
            raise E.HistoryError(f"History file could not be read: {Path(path).name} (bad entry: {e!r})")
        return data

    def get_entries(self):
        return self.previous_entries + self.entries

    def add_entry(self, entry):
        self.entries.append(entry)

    def update_file(self):
        """Write this session's entries to its own history file."""
        if self.file_path is None:
            return None

        self.data_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "version": HISTORY_VERSION,
            "session_uuid": str(self.session_uuid),
            "session_start": self.session_start,
            "decimal_places": self.decimal_places,
            "entries": [entry.to_dict() for entry in self.entries],
        }
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)

        logger.info("Wrote %s history entries to %s", len(self.entries), self.file_path)
        return self.file_path

    # --- Answer resolution ---

    def resolve_by_index(self, index):
        entries = self.get_entries()
        if index < 1 or index > len(entries):
            return None
        return entries[-index].entry_id

    def resolve_expression(self, answer_id):
        for entry in self.get_entries():
            if entry.entry_id == answer_id:
                return entry.without_equality()
        return None

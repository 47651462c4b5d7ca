# src/lalparser/lal/document.py
"""Whole-document decoding and encoding of LAL files."""

import logging
import os
from collections.abc import MutableSequence
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO, Union

from lalparser.common.errors import LALError
from lalparser.common.models import Comment, Entry, Record
from .grammar import compile_line, parse

logger = logging.getLogger(__name__)

Source = Union[str, Path, TextIO]


def decode_document(lines: Iterable[str]) -> List[Record]:
    """
    Decodes a sequence of raw lines.

    Blank and malformed lines are skipped; the remaining records keep their
    relative order.

    :param lines: Any iterable of lines (file object, list, str.splitlines()).
    :return: The decoded records.
    :raises LALError: if lines is None.
    """
    if lines is None:
        raise LALError("Source may not be None")

    records = []
    skipped = 0
    for line_num, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue

        record = parse(line)
        if record is None:
            # Never log the line itself, it may hold a password
            logger.debug(f"Line {line_num}: Skipping line not in LAL format")
            skipped += 1
            continue
        records.append(record)

    logger.info(f"Decoded LAL document: {len(records)} records ({skipped} malformed lines skipped)")
    return records


def encode_document(records: Iterable[Record]) -> str:
    """
    Encodes records to LAL text, one newline-terminated line per record.

    :raises LALError: if any record cannot be compiled; no text is returned.
    """
    lines = [compile_line(record) for record in records]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


class LALDocument(MutableSequence):
    """
    An ordered, mutable sequence of LAL records with load/dump helpers.

    Loading replaces the current contents. Paths are opened and closed here;
    streams belong to the caller and are left open.
    """

    def __init__(self, records: Optional[Iterable[Record]] = None):
        self._records: List[Record] = list(records) if records is not None else []

    # --- Sequence protocol ---

    def __getitem__(self, index):
        return self._records[index]

    def __setitem__(self, index, record):
        self._records[index] = record

    def __delitem__(self, index):
        del self._records[index]

    def __len__(self):
        return len(self._records)

    def insert(self, index, record):
        self._records.insert(index, record)

    def __repr__(self):
        return f"LALDocument({self._records!r})"

    # --- Views ---

    @property
    def entries(self) -> List[Entry]:
        return [r for r in self._records if isinstance(r, Entry)]

    @property
    def comments(self) -> List[Comment]:
        return [r for r in self._records if isinstance(r, Comment)]

    @property
    def invalid_entries(self) -> List[Entry]:
        return [e for e in self.entries if e.invalid]

    # --- Loading ---

    def loads(self, text: str) -> None:
        """Replaces the contents with the records decoded from a (multi-line) string."""
        if text is None:
            raise LALError("String may not be None")
        self._records = decode_document(text.splitlines())

    def load(self, source: Source) -> None:
        """
        Replaces the contents with the records decoded from a file path or text stream.

        :raises LALError: if source is None.
        :raises FileNotFoundError: if a path does not exist.
        """
        if source is None:
            raise LALError("Source may not be None")

        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"LAL file not found: {path}")
            with open(path, "r", encoding="utf-8") as f:
                records = decode_document(f)
            logger.info(f"Loaded {len(records)} records from {path}")
        else:
            records = decode_document(source)

        self._records = records

    # --- Writing ---

    def dumps(self) -> str:
        return encode_document(self._records)

    def dump(self, target: Source) -> None:
        """
        Writes the document to a file path or text stream.

        The whole document is compiled before anything is written, so an
        unencodable record leaves the target untouched.
        """
        if target is None:
            raise LALError("Target may not be None")

        text = self.dumps()

        if isinstance(target, (str, Path)):
            path = Path(target)
            # Owner read/write only, the file holds passwords
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
            # O_CREAT only applies the mode to new files
            os.chmod(path, 0o600)
            logger.info(f"Wrote {len(self._records)} records to {path}")
        else:
            target.write(text)
            target.flush()


def load(source: Source) -> LALDocument:
    """Shortcut for creating a document and loading it from a path or stream."""
    document = LALDocument()
    document.load(source)
    return document


def loads(text: str) -> LALDocument:
    document = LALDocument()
    document.loads(text)
    return document


def document_tables(records: Iterable[Record]) -> Dict[str, List[Dict[str, Any]]]:
    """Groups records into exporter tables: {"logins": [...], "comments": [...]}."""
    tables: Dict[str, List[Dict[str, Any]]] = {"logins": [], "comments": []}
    for record in records:
        table = "comments" if isinstance(record, Comment) else "logins"
        tables[table].append(record.to_dict())
    return {name: rows for name, rows in tables.items() if rows}

# src/lalparser/lal/grammar.py

import re
from typing import Optional, Tuple

from lalparser.common.errors import CompileError, ParseError
from lalparser.common.models import Comment, Entry, Record

# --- Format constants ---

COMMENT_MARKER = "//"
INVALID_MARKER = "."

# Login names: word characters plus '@', '.', '-'
LOGIN_CHARS = r"[\w@.\-]+"
# Passwords, display names, emails, old passwords.
# The class deliberately overlaps the ()/{}/[] group delimiters; fields are
# split by backtracking against the closing literal, not by exclusion.
FIELD_CHARS = r"[\w@!#$%^&*/(){}\[<>,.?|\-\]]+"

LOGIN_PATTERN = re.compile(
    r"(?P<comment>//.*)"
    r"|(?:"
    + r"(?P<login>" + LOGIN_CHARS + r"):"
    + r"(?P<password>" + FIELD_CHARS + r")"
    + r"(?: \((?P<display_name>" + FIELD_CHARS + r")\))?"
    + r"(?: \{(?P<email>" + FIELD_CHARS + r")\})?"
    + r"(?: \[(?P<old_password>" + FIELD_CHARS + r")\])?"
    + r")",
    re.ASCII,
)


def strip_invalid_marker(line: str) -> Tuple[str, bool]:
    """
    Removes a single leading invalidity marker.

    :param line: A raw LAL line.
    :return: The remainder of the line and whether the marker was present.
    """
    if line.startswith(INVALID_MARKER):
        return line[len(INVALID_MARKER):], True
    return line, False


def parse(line: str) -> Optional[Record]:
    """
    Parses one LAL line.

    :param line: The line to parse, surrounding whitespace allowed.
    :return: A Comment, an Entry, or None if the line is not in the LAL format.
    :raises ParseError: if the line is None or empty.
    """
    if not line:
        raise ParseError("Line may not be empty")

    line, invalid = strip_invalid_marker(line.strip())
    match = LOGIN_PATTERN.fullmatch(line.strip())
    if match is None:
        return None

    if match.group("comment"):
        return Comment(match.group("comment"))

    return Entry(
        match.group("login"),
        match.group("password"),
        match.group("display_name"),
        match.group("email"),
        match.group("old_password"),
        invalid,
    )


def compile_line(record: Record) -> str:
    """
    Compiles a record back to its LAL line.

    :param record: The record to compile.
    :return: The line, without a trailing newline.
    :raises CompileError: if the record is None, an empty comment, or an entry
        without both a login and a password.
    """
    if record is None:
        raise CompileError("Record may not be None")

    if isinstance(record, Comment):
        if not record.is_comment:
            raise CompileError("Comment may not be empty")
        return record.text

    if not record.login or not record.password:
        raise CompileError("Login must contain at least a password and a username")

    parts = [INVALID_MARKER if record.invalid else "", record.login, ":", record.password]
    # Fixed order; a missing field drops its whole group
    if record.display_name:
        parts.append(f" ({record.display_name})")
    if record.email:
        parts.append(f" {{{record.email}}}")
    if record.old_password:
        parts.append(f" [{record.old_password}]")
    return "".join(parts)


decode = parse
encode = compile_line

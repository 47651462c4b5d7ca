# src/lalparser/common/models.py
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Tuple, Union


@dataclass(eq=False)
class Comment:
    """A verbatim comment line, marker included (e.g. "// work accounts")."""

    text: str = ""

    @property
    def is_comment(self) -> bool:
        return bool(self.text)

    def strict_equals(self, other) -> bool:
        # Comments only carry their text, so strict and loose agree
        return self == other

    def to_dict(self) -> Dict[str, Any]:
        return {"comment": self.text}

    def __eq__(self, other):
        if not isinstance(other, Comment):
            return False
        return self.text == other.text

    def __hash__(self):
        return hash(self.text)


@dataclass(eq=False)
class Entry:
    # Identity fields: these drive == and hash()
    login: Optional[str] = None
    password: Optional[str] = None
    # Metadata: only compared by strict_equals
    display_name: Optional[str] = None
    email: Optional[str] = None
    old_password: Optional[str] = None
    invalid: bool = False

    @property
    def is_comment(self) -> bool:
        return False

    def get_identity_key(self) -> Tuple[Optional[str], Optional[str], bool]:
        """
        Key used for loose equality and hashing.

        :return: Tuple of (login, password, invalid)
        """
        return (self.login, self.password, self.invalid)

    def strict_equals(self, other) -> bool:
        """
        Compare every field, metadata included.

        Two entries that are loosely equal may still differ here when one of
        them carries a display name, email or old password the other lacks.
        """
        if not isinstance(other, Entry):
            return False
        return (
            self.get_identity_key() == other.get_identity_key()
            and self.display_name == other.display_name
            and self.email == other.email
            and self.old_password == other.old_password
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return False
        return self.get_identity_key() == other.get_identity_key()

    def __hash__(self):
        return hash(self.get_identity_key())


Record = Union[Comment, Entry]


def loose_equals(a: Optional[Record], b: Optional[Record]) -> bool:
    """Equality over the identity fields only (login, password, invalid) or the comment text."""
    if a is None or b is None:
        return False
    return a == b


def strict_equals(a: Optional[Record], b: Optional[Record]) -> bool:
    """Equality over every field. Comments still compare by text alone."""
    if a is None or b is None:
        return False
    return a.strict_equals(b)

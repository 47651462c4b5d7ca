# src/tests/test_models.py
import pytest
from lalparser.common.models import Comment, Entry, loose_equals, strict_equals


def test_entry_positional_defaults():
    """Trailing constructor values default to absent / not invalid"""
    entry = Entry("user", "pass")

    assert entry.login == "user"
    assert entry.password == "pass"
    assert entry.display_name is None
    assert entry.email is None
    assert entry.old_password is None
    assert entry.invalid is False
    assert entry.is_comment is False


def test_entry_accepts_all_six_values():
    entry = Entry("user", "pass", "display", "email", "oldpass", True)

    assert (entry.display_name, entry.email, entry.old_password, entry.invalid) == (
        "display", "email", "oldpass", True
    )


def test_empty_entry_can_be_built_incrementally():
    """Construction never validates; fields can be filled in later"""
    entry = Entry()
    entry.login = "user"
    entry.password = "pass"
    entry.invalid = True

    assert entry == Entry("user", "pass", invalid=True)


def test_comment_mode():
    assert Comment("// note").is_comment is True
    assert Comment("").is_comment is False


def test_loose_equality_ignores_metadata():
    """display_name, email and old_password do not take part in =="""
    a = Entry("user", "pass", "display", "a@example.com", "old")
    b = Entry("user", "pass")

    assert a == b
    assert loose_equals(a, b)
    assert not strict_equals(a, b)
    assert not a.strict_equals(b)


def test_loose_equality_respects_invalid_flag():
    assert Entry("user", "pass") != Entry("user", "pass", invalid=True)


def test_strict_equality_compares_every_field():
    a = Entry("user", "pass", "display", "email", "oldpass", True)
    b = Entry("user", "pass", "display", "email", "oldpass", True)

    assert strict_equals(a, b)
    b.email = "other"
    assert not strict_equals(a, b)
    assert loose_equals(a, b)


def test_comments_compare_by_text_under_both_semantics():
    assert Comment("// a") == Comment("// a")
    assert strict_equals(Comment("// a"), Comment("// a"))
    assert not loose_equals(Comment("// a"), Comment("// b"))


def test_comment_never_equals_entry():
    comment = Comment("// user:pass")
    entry = Entry("user", "pass")

    assert comment != entry
    assert not strict_equals(comment, entry)
    assert not strict_equals(entry, comment)


@pytest.mark.parametrize("other", [None, "user:pass", 42])
def test_equality_against_non_records(other):
    entry = Entry("user", "pass")

    assert entry != other
    assert not entry.strict_equals(other)
    assert not loose_equals(entry, None)
    assert not strict_equals(None, entry)


def test_hash_is_consistent_with_loose_equality():
    """Entries differing only in metadata collapse in a set"""
    records = {
        Entry("user", "pass", "one"),
        Entry("user", "pass", "two"),
        Entry("user", "pass", invalid=True),
        Comment("// note"),
        Comment("// note"),
    }

    assert len(records) == 3
    assert hash(Entry("user", "pass", "x")) == hash(Entry("user", "pass", email="y"))


def test_to_dict():
    assert Comment("// note").to_dict() == {"comment": "// note"}
    assert Entry("user", "pass", email="e").to_dict() == {
        "login": "user",
        "password": "pass",
        "display_name": None,
        "email": "e",
        "old_password": None,
        "invalid": False,
    }


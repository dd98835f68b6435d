from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"
FOREIGN_KEY_VIOLATION_SQLSTATE = "23503"


def _sqlstate(exc: IntegrityError):
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True when the IntegrityError was raised by a unique index."""
    sqlstate = _sqlstate(exc)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    # SQLite: "UNIQUE constraint failed: likes.user_id, likes.post_id"
    return "unique" in str(getattr(exc, "orig", None) or exc).lower()


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """Return True when the IntegrityError points at a missing parent row."""
    sqlstate = _sqlstate(exc)
    if sqlstate:
        return sqlstate == FOREIGN_KEY_VIOLATION_SQLSTATE
    # SQLite: "FOREIGN KEY constraint failed"
    return "foreign key" in str(getattr(exc, "orig", None) or exc).lower()

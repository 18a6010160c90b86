"""
Dialect-specific INSERT constructs supporting ON CONFLICT and RETURNING
"""
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_name(db: Session) -> str:
    return db.get_bind().dialect.name


def conflict_insert(db: Session, model):
    """INSERT for `model` that supports on_conflict_do_nothing / on_conflict_do_update"""
    name = dialect_name(db)
    try:
        return _INSERTS[name](model)
    except KeyError:
        raise NotImplementedError(f"ON CONFLICT inserts are not supported on {name}") from None

"""
Result wrapper and error-handling decorators for repository methods

Read methods return a StoreResult so callers can tell an empty answer from a
failed query. Write methods roll back and raise.
"""
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..exceptions import ConstraintViolation, StoreFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class StoreResult(Generic[T]):
    """Value of a read plus the failure that replaced it, if any"""
    value: T
    error: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising the recorded StoreFailure instead if the read failed"""
        if self.error is not None:
            raise self.error
        return self.value


def _operation_name(repo: Any, func: Callable) -> str:
    return f"{type(repo).__name__}.{func.__name__}"


def read_operation(default: Any = None):
    """
    Decorator for repository reads

    Usage:
        @read_operation(default=list)
        def get_by_user(self, user_id): ...

    `default` is the value reported on failure; callables are invoked so
    mutable defaults are not shared.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> StoreResult:
            try:
                return StoreResult(func(self, *args, **kwargs))
            except SQLAlchemyError as e:
                operation = _operation_name(self, func)
                logger.error(f"Read {operation} failed: {type(e).__name__}: {e}", exc_info=True)
                self.db.rollback()
                empty = default() if callable(default) else default
                return StoreResult(empty, StoreFailure(operation, e))
        return wrapper
    return decorator


def write_operation(func: Callable):
    """
    Decorator for repository writes

    IntegrityError becomes ConstraintViolation, any other database error
    becomes StoreFailure. The session is rolled back in both cases.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except ConstraintViolation:
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            operation = _operation_name(self, func)
            logger.warning(f"Write {operation} violated a constraint: {e.orig}")
            raise ConstraintViolation(f"{operation}: rejected by a database constraint", str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            operation = _operation_name(self, func)
            logger.error(f"Write {operation} failed: {type(e).__name__}: {e}", exc_info=True)
            raise StoreFailure(operation, e) from e
    return wrapper

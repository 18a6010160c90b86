"""
Shared plumbing for repositories
"""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session


class Repository:
    """A repository owns the access patterns for one entity family"""

    model = None

    def __init__(self, db: Session):
        self.db = db

    def _get(self, obj_id: Any):
        return self.db.get(self.model, obj_id)

    def _insert(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def _apply(self, obj_id: Any, changes: Dict[str, Any]) -> Optional[Any]:
        """Write `changes` onto an existing row; None if the row does not exist"""
        obj = self.db.get(self.model, obj_id)
        if obj is None:
            return None
        for field, value in changes.items():
            setattr(obj, field, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

import logging
from typing import TypeVar, Generic, Type, Optional, List

from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, Session, select

from AutoParts.exceptions import StorageConflictError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=SQLModel)


def commit_or_conflict(session: Session, operation: str) -> None:
    """
    Commit the session, translating constraint violations into StorageConflictError.

    The database constraints are the last line of defence behind the services'
    read-then-write checks; a violation here means another writer got in first.
    """
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.error(f"[REPO] Constraint violation during {operation}: {e.orig}")
        raise StorageConflictError(f"Database rejected {operation}: {e.orig}", constraint=str(e.orig)) from e


class BaseRepository(Generic[T]):
    def __init__(self, model_class: Type[T]):
        self.model_class = model_class

    def get_by_id(self, session: Session, id: int) -> Optional[T]:
        return session.get(self.model_class, id)

    def exists(self, session: Session, id: int) -> bool:
        return self.get_by_id(session, id) is not None

    def get_all(self, session: Session) -> List[T]:
        return list(session.exec(select(self.model_class)).all())

    def create(self, session: Session, model: T) -> T:
        session.add(model)
        commit_or_conflict(session, f"insert into {self.model_class.__tablename__}")
        session.refresh(model)
        return model

    def update(self, session: Session, model: T) -> T:
        session.add(model)
        commit_or_conflict(session, f"update of {self.model_class.__tablename__}")
        session.refresh(model)
        return model

    def delete(self, session: Session, id: int) -> bool:
        model = self.get_by_id(session, id)
        if model:
            session.delete(model)
            commit_or_conflict(session, f"delete from {self.model_class.__tablename__}")
            return True
        return False

import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Union

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseError, ValidationError
from app.core.validation import (
    Interest,
    NO_INTEREST_MESSAGE,
    join_interests,
    normalize_email,
)
from app.models.subscriber import Subscriber


_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubscriberStore:
    """Waitlist rows keyed by normalized email.

    Uniqueness is owned by the database: upsert() issues a single
    INSERT ... ON CONFLICT (email) DO UPDATE, so two concurrent signups for
    the same address end up as one row whichever commits first.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def _insert_for_dialect(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise DatabaseError(f"Upsert is not supported on the '{dialect}' dialect") from None

    def upsert(
        self,
        email: str,
        interests: Iterable[Union[Interest, str]],
        zip: Optional[str],
        source: str,
    ) -> Subscriber:
        email = normalize_email(email)
        interests = list(interests)
        if not interests:
            raise ValidationError(NO_INTEREST_MESSAGE, error_code="no_interest")

        insert = self._insert_for_dialect()
        now = self.clock()
        stmt = insert(Subscriber).values(
            id=uuid.uuid4(),
            email=email,
            interests=join_interests(interests),
            zip=zip,
            source=source,
            created_at=now,
        )
        # id and source are left out of the SET clause: first signup wins for those
        stmt = stmt.on_conflict_do_update(
            index_elements=["email"],
            set_={
                "interests": stmt.excluded.interests,
                "zip": stmt.excluded.zip,
                "created_at": stmt.excluded.created_at,
            },
        )

        try:
            self.db.execute(stmt)
            self.db.commit()
            return self.db.query(Subscriber).filter(Subscriber.email == email).one()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(str(e) or "Database operation failed", details="upsert") from e

    def list_all(self) -> List[Subscriber]:
        """Every subscriber, most recent signup first."""
        try:
            return (
                self.db.query(Subscriber)
                .order_by(Subscriber.created_at.desc(), Subscriber.email)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(str(e) or "Database operation failed", details="list_all") from e

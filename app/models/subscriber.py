import uuid
from sqlalchemy import Column, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.types import GUID
from app.core.validation import split_interests

class Subscriber(Base):
    __tablename__ = "subscribers"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    email = Column(String(320), nullable=False)  # indexed by uq_subscribers_email
    interests = Column(String(64), nullable=False)  # "oil, salt"
    zip = Column(String(16), nullable=True)
    source = Column(String(50), nullable=False, default="landing")
    # Bumped on every re-submission, so this is "last signed up" rather than first seen
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

    __table_args__ = (
        UniqueConstraint('email', name='uq_subscribers_email'),
    )

    @property
    def interest_tags(self):
        return split_interests(self.interests)

    def __repr__(self):
        return f"<Subscriber {self.email} [{self.interests}]>"

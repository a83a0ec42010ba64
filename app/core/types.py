import uuid

from sqlalchemy import String, TypeDecorator
from sqlalchemy.dialects import postgresql


class GUID(TypeDecorator):
    """
    UUID column that works on both backends we deploy to.

    PostgreSQL gets its native UUID type; SQLite stores the canonical
    36-character string form. Values always come back as uuid.UUID.
    """
    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        if dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)

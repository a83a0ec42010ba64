# Import all models here for Alembic
from app.models.subscriber import Subscriber

__all__ = [
    "Subscriber",
]

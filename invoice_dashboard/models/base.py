import uuid
from datetime import date, datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass

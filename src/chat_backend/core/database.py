from sqlalchemy import String, Text, DateTime, JSON, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from datetime import datetime, timezone
from typing import List


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    socket_id: Mapped[str] = mapped_column(String(255))

class Message(Base):
    __tablename__ = "messages"

    __table_args__ = (
        Index('ix_messages_sender_receiver', 'sender_id', 'receiver_id'),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    sender_id: Mapped[str] = mapped_column(String(255))
    receiver_id: Mapped[str] = mapped_column(String(255))
    text: Mapped[str] = mapped_column(Text)
    images: Mapped[List[str]] = mapped_column(JSON, default=list)
    seen: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

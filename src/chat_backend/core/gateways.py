from sqlalchemy import select, insert, update, or_, and_
from sqlalchemy.exc import IntegrityError
import logging

from .database import User, Message
from .interfaces import UserInterface, MessageInterface
from .dto import UserDTO, MessageDTO
from .db_manager import DatabaseManager


def _user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        user_id=user.user_id,
        socket_id=user.socket_id
    )

def _message_dto(msg: Message) -> MessageDTO:
    return MessageDTO(
        id=msg.id,
        sender_id=msg.sender_id,
        receiver_id=msg.receiver_id,
        text=msg.text,
        images=list(msg.images or []),
        seen=msg.seen,
        created_at=msg.created_at
    )


class UserGateway(UserInterface):
    __slots__ = ("_db_manager", "_logger")

    def __init__(self, db_manager: DatabaseManager, logger: logging.Logger | None = None):
        self._db_manager = db_manager
        self._logger = logger or logging.getLogger(__name__)

    async def get_user_by_user_id(self, user_id: str) -> UserDTO | None:
        try:
            async with self._db_manager.session() as session:
                stmt = select(User).where(User.user_id == user_id)
                result = await session.execute(stmt)
                user = result.scalars().first()
                if user:
                    return _user_dto(user)
                else:
                    return None
        except Exception as e:
            self._logger.error("Error getting user by user id in database: %s", e)
            raise

    async def upsert_socket_id(self, user_id: str, socket_id: str) -> UserDTO:
        try:
            async with self._db_manager.session() as session:
                stmt = select(User).where(User.user_id == user_id)
                result = await session.execute(stmt)
                user = result.scalars().first()

                if user is None:
                    user = User(user_id=user_id, socket_id=socket_id)
                    session.add(user)
                else:
                    user.socket_id = socket_id

                await session.flush()
                return _user_dto(user)

        except IntegrityError:
            # Lost the insert race against another registration of the same user_id
            self._logger.info("User %s registered concurrently, updating socket id", user_id)
        except Exception as e:
            self._logger.error("Error registering user in database: %s", e)
            raise

        try:
            async with self._db_manager.session() as session:
                stmt = update(User).where(
                    User.user_id == user_id
                ).values(socket_id=socket_id).returning(User)
                result = await session.execute(stmt)
                return _user_dto(result.scalars().one())

        except Exception as e:
            self._logger.error("Error updating socket id in database: %s", e)
            raise

    async def get_users(self) -> list[UserDTO]:
        try:
            async with self._db_manager.session() as session:
                stmt = select(User).order_by(User.id)
                result = await session.execute(stmt)
                return [_user_dto(user) for user in result.scalars().all()]

        except Exception as e:
            self._logger.error("Error getting users in database: %s", e)
            raise


class MessageGateway(MessageInterface):
    __slots__ = ("_db_manager", "_logger")

    def __init__(self, db_manager: DatabaseManager, logger: logging.Logger | None = None):
        self._db_manager = db_manager
        self._logger = logger or logging.getLogger(__name__)

    async def create_message(
            self,
            sender_id: str,
            receiver_id: str,
            text: str,
            images: list[str] | None = None
    ) -> MessageDTO:
        try:
            async with self._db_manager.session() as session:
                stmt = insert(Message).values(
                    sender_id=sender_id,
                    receiver_id=receiver_id,
                    text=text,
                    images=list(images or [])
                ).returning(Message)
                result = await session.execute(stmt)
                msg = result.scalars().first()

                return _message_dto(msg)

        except Exception as e:
            self._logger.error("Error creating message in database: %s", e)
            raise

    async def get_message_by_id(self, message_id: int) -> MessageDTO | None:
        try:
            async with self._db_manager.session() as session:
                stmt = select(Message).where(Message.id == message_id)
                result = await session.execute(stmt)
                msg = result.scalars().first()

                if msg:
                    return _message_dto(msg)
                return None

        except Exception as e:
            self._logger.error("Error getting message by ID in database: %s", e)
            raise

    async def mark_as_seen(self, message_id: int) -> bool:
        try:
            async with self._db_manager.session() as session:
                stmt = update(Message).where(
                    Message.id == message_id,
                    Message.seen == False
                ).values(seen=True)
                result = await session.execute(stmt)

                return result.rowcount > 0

        except Exception as e:
            self._logger.error("Error marking message seen in database: %s", e)
            raise

    async def get_conversation_history(self, user1_id: str, user2_id: str) -> list[MessageDTO]:
        try:
            async with self._db_manager.session() as session:
                stmt = select(Message).where(
                    or_(
                        and_(
                            Message.sender_id == user1_id,
                            Message.receiver_id == user2_id
                        ),
                        and_(
                            Message.sender_id == user2_id,
                            Message.receiver_id == user1_id
                        )
                    )
                ).order_by(Message.created_at, Message.id)
                result = await session.execute(stmt)

                return [_message_dto(m) for m in result.scalars().all()]

        except Exception as e:
            self._logger.error("Error getting conversation history in database: %s", e)
            raise

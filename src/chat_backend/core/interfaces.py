from abc import ABC, abstractmethod

from .dto import *

class UserInterface(ABC):
    @abstractmethod
    async def get_user_by_user_id(
            self,
            user_id: str
    ) -> UserDTO | None:
        """
        Get user by User.user_id
        :param user_id:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def upsert_socket_id(
            self,
            user_id: str,
            socket_id: str
    ) -> UserDTO:
        """
        Creates the user if absent, otherwise overwrites its socket id.
        :param user_id:
        :param socket_id:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_users(self) -> list[UserDTO]:
        """
        Gets every user, in insertion order.
        :return:
        """
        raise NotImplementedError()


class MessageInterface(ABC):
    @abstractmethod
    async def create_message(
            self,
            sender_id: str,
            receiver_id: str,
            text: str,
            images: list[str] | None = None
    ) -> MessageDTO:
        """
        Creates a new message in the database.
        :param sender_id:
        :param receiver_id:
        :param text:
        :param images:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_message_by_id(
            self,
            message_id: int
    ) -> MessageDTO | None:
        """
        Gets a message by ID.
        :param message_id:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def mark_as_seen(
            self,
            message_id: int
    ) -> bool:
        """
        Marks a message as seen.
        :param message_id:
        :return: True if the flag changed
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_conversation_history(
            self,
            user1_id: str,
            user2_id: str
    ) -> list[MessageDTO]:
        """
        Gets the conversation history between two users, oldest first.
        :param user1_id:
        :param user2_id:
        :return:
        """
        raise NotImplementedError()

from .user_api import UserAPI
from .message_api import MessageAPI

__all__ = ["UserAPI", "MessageAPI"]

from .chat import MessageService
from .presence import PresenceService
from .events import ChatEvents

__all__ = ["MessageService", "PresenceService", "ChatEvents"]

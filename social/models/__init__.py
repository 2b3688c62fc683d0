from .user import User
from .follow import Follow
from .block import Block
from .notification import Notification
from .rate_window import RateWindowEntry

__all__ = [
    "User",
    "Follow",
    "Block",
    "Notification",
    "RateWindowEntry",
]

from .auth import User
from .chat import Message
from .requests import SupportRequest, REQUEST_STATUSES, REQUEST_PRIORITIES

__all__ = [
    'User',
    'Message',
    'SupportRequest', 'REQUEST_STATUSES', 'REQUEST_PRIORITIES',
]

"""Chat use cases."""

from .get_chat import GetChatRequest, GetChatResponse, GetChatUseCase
from .send_message import SendMessageRequest, SendMessageResponse, SendMessageUseCase

__all__ = [
    "GetChatRequest",
    "GetChatResponse",
    "GetChatUseCase",
    "SendMessageRequest",
    "SendMessageResponse",
    "SendMessageUseCase",
]

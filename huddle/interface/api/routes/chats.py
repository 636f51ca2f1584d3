"""Chat routes."""

import asyncio
import contextlib
import json

import logfire
from dishka import AsyncContainer
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import (
    APIRouter,
    Cookie,
    Header,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from pydantic import BaseModel

from huddle.application.usecase.chat import (
    GetChatRequest,
    GetChatResponse,
    GetChatUseCase,
    SendMessageRequest,
    SendMessageResponse,
    SendMessageUseCase,
)
from huddle.application.usecase.common import MessageSummary
from huddle.domain.error import DomainError
from huddle.domain.model import Message
from huddle.domain.repository import SubscriptionGroup
from huddle.domain.service import ChatService, IdentityProvider
from huddle.domain.value import ChatId, UserId
from huddle.interface.api.auth import resolve_identity

router = APIRouter(prefix="/chats", tags=["chats"], route_class=DishkaRoute)


class SendMessageAPIRequest(BaseModel):
    """API request for posting a message.

    Length is checked after trimming by the chat service.
    """

    message: str


@router.get("/{chat_id}", response_model=GetChatResponse)
async def get_chat(
    chat_id: str,
    get_chat_use_case: FromDishka[GetChatUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetChatResponse:
    """Messages and participants of a chat. Host and accepted members only."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await get_chat_use_case.execute(
        GetChatRequest(chat_id=chat_id, user_id=identity.id)
    )


@router.post(
    "/{chat_id}/messages",
    response_model=SendMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    chat_id: str,
    request: SendMessageAPIRequest,
    send_message_use_case: FromDishka[SendMessageUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SendMessageResponse:
    """Post a message. Host and accepted members only."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await send_message_use_case.execute(
        SendMessageRequest(
            chat_id=chat_id,
            user_id=identity.id,
            display_name=identity.display_name,
            message=request.message,
        )
    )


def _snapshot(messages: list[Message]) -> dict:
    return {
        "type": "messages",
        "messages": [
            MessageSummary.from_message(m).model_dump(mode="json") for m in messages
        ],
    }


@router.websocket("/{chat_id}/stream")
async def stream_chat(
    websocket: WebSocket,
    chat_id: str,
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Live chat.

    The server pushes the full ordered message list on connect and after
    every change. Clients post by sending ``{"message": "..."}``; rejected
    posts and frames that are not JSON are answered with
    ``{"type": "error", ...}``. The connection is
    closed with 1008 if the caller may not access the chat.
    """
    container: AsyncContainer = websocket.app.state.dishka_container

    async with container() as request_container:
        identity_provider = await request_container.get(IdentityProvider)
        chat_service = await request_container.get(ChatService)

        token = auth_token or websocket.query_params.get("token")
        try:
            identity = identity_provider.current_identity(token)
        except DomainError as e:
            logfire.warn("Chat stream rejected", chat_id=chat_id, error=str(e))
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

        await websocket.accept()
        updates: asyncio.Queue[list[Message]] = asyncio.Queue()

        async def on_change(messages: list[Message]) -> None:
            await updates.put(messages)

        try:
            subscription = await chat_service.watch_messages(
                ChatId(chat_id), UserId(identity.id), on_change
            )
        except DomainError as e:
            logfire.warn(
                "Chat stream rejected",
                chat_id=chat_id,
                user_id=identity.id,
                error=str(e),
            )
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

        async def push() -> None:
            try:
                while True:
                    messages = await updates.get()
                    await websocket.send_json(_snapshot(messages))
            except WebSocketDisconnect:
                return

        async def receive() -> None:
            try:
                while True:
                    text = await websocket.receive_text()
                    try:
                        data = json.loads(text)
                    except ValueError:
                        await websocket.send_json(
                            {
                                "type": "error",
                                "error": "ValidationError",
                                "detail": "Frames must be JSON objects",
                            }
                        )
                        continue
                    if not isinstance(data, dict):
                        data = {}
                    try:
                        await chat_service.send_message(
                            ChatId(chat_id),
                            UserId(identity.id),
                            str(data.get("message", "")),
                            display_name=identity.display_name,
                        )
                    except DomainError as e:
                        await websocket.send_json(
                            {
                                "type": "error",
                                "error": type(e).__name__,
                                "detail": str(e),
                            }
                        )
            except WebSocketDisconnect:
                logfire.info(
                    "Chat stream closed", chat_id=chat_id, user_id=identity.id
                )

        async with SubscriptionGroup([subscription]):
            tasks = [asyncio.create_task(push()), asyncio.create_task(receive())]
            try:
                # Either side stopping ends the stream
                done, _ = await asyncio.wait(
                    tasks, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done:
                    task.result()
            finally:
                pending = [task for task in tasks if not task.done()]
                for task in pending:
                    task.cancel()
                for task in pending:
                    with contextlib.suppress(asyncio.CancelledError):
                        await task

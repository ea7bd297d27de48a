"""WebSocket stream of deck changes with command handling."""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from api.routes.deck import card_to_response, deck_state_response
from api.schemas import DrawRequest, ResetRequest
from core.deck import DeckEngine, DeckEvent
from core.errors import DeckError

logger = logging.getLogger(__name__)

router = APIRouter()


def _event_to_message(event: DeckEvent, engine: DeckEngine) -> dict[str, Any]:
    """Convert a deck event to a WebSocket message."""
    return {
        "type": event.event_type.name.lower(),
        "cards": [card_to_response(c).model_dump() for c in event.cards],
        "drawn_points": engine.drawn_points,
    }


def _state_message(engine: DeckEngine) -> dict[str, Any]:
    return {"type": "state_update", "state": deck_state_response(engine).model_dump()}


def _history_message(engine: DeckEngine) -> dict[str, Any]:
    return {"type": "history", "can_undo": engine.can_undo(), "can_redo": engine.can_redo()}


def _handle_command(engine: DeckEngine, message: dict[str, Any]) -> dict[str, Any]:
    """
    Apply one client command to the engine.

    Returns:
        The reply to send once the resulting events have been sent
    """
    msg_type = message.get("type")

    if msg_type == "get_state":
        return _state_message(engine)
    if msg_type == "reset":
        engine.reset(ResetRequest.model_validate(message).jokers)
    elif msg_type == "shuffle":
        engine.shuffle()
    elif msg_type == "draw":
        engine.draw(DrawRequest.model_validate(message).count)
    elif msg_type == "sort":
        engine.sort_drawn()
    elif msg_type == "undo":
        engine.undo()
    elif msg_type == "redo":
        engine.redo()
    else:
        return {"type": "error", "message": f"Unknown message type: {msg_type}"}
    return _history_message(engine)


@router.websocket("/deck")
async def deck_websocket(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for real-time deck updates.

    Messages from client:
    - {"type": "reset", "jokers": 0|1|2}
    - {"type": "shuffle"} / {"type": "sort"} / {"type": "undo"} / {"type": "redo"}
    - {"type": "draw", "count": 3}
    - {"type": "get_state"}

    Messages to client:
    - {"type": "state_update", "state": {...}}
    - {"type": "deck_changed" | "drawn_changed" | "history_cleared", "cards": [...], ...}
    - {"type": "history", "can_undo": ..., "can_redo": ...} after each command
    - {"type": "error", "message": "..."}
    """
    engine: DeckEngine = websocket.app.state.engine
    queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    def on_event(event: DeckEvent) -> None:
        # Build the message now so it matches the state the event describes
        queue.put_nowait(_event_to_message(event, engine))

    await websocket.accept()
    engine.subscribe(on_event)
    await websocket.send_json(_state_message(engine))

    async def forward_events() -> None:
        """Send queued events and replies to the client."""
        while True:
            message = await queue.get()
            await websocket.send_json(message)

    event_task = asyncio.create_task(forward_events())

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except json.JSONDecodeError:
                queue.put_nowait({"type": "error", "message": "Invalid JSON"})
                continue
            if not isinstance(message, dict):
                queue.put_nowait({"type": "error", "message": "Expected a JSON object"})
                continue
            try:
                reply = _handle_command(engine, message)
            except (ValidationError, DeckError, ValueError) as exc:
                reply = {"type": "error", "message": str(exc)}
            # Queued behind the events the command produced
            queue.put_nowait(reply)
    except WebSocketDisconnect:
        logger.debug("Deck stream client disconnected")
    except Exception:
        logger.exception("Deck stream failed")
    finally:
        engine.unsubscribe(on_event)
        event_task.cancel()
        try:
            await event_task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.debug("Deck stream forwarder stopped", exc_info=True)

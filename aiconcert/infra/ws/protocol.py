"""JSON message framing for the AI-Concert command websocket."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

from aiconcert.errors import ProtocolError


class FrameType(str, Enum):
    COMMAND = "command"
    STDOUT = "stdout"
    STDERR = "stderr"
    SYSTEM = "system"
    ERROR = "error"


OUTPUT_TYPES = frozenset({FrameType.STDOUT.value, FrameType.STDERR.value})
TERMINAL_TYPES = frozenset({FrameType.SYSTEM.value, FrameType.ERROR.value})


@dataclass(frozen=True)
class CommandFrame:
    """Outbound request to run a command on the remote server."""

    id: str
    command: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": FrameType.COMMAND.value,
            "content": {"command": self.command},
        }


@dataclass(frozen=True)
class InboundFrame:
    """Server frame referencing a pending command.

    `type` stays a plain string: the server may send tags this client
    does not know about, and those are ignored rather than rejected.
    """

    id: str
    type: str
    content: str = ""

    @property
    def is_output(self) -> bool:
        return self.type in OUTPUT_TYPES

    @property
    def is_terminal(self) -> bool:
        return self.type in TERMINAL_TYPES

    @property
    def is_error(self) -> bool:
        return self.type == FrameType.ERROR.value


def encode(frame: CommandFrame) -> str:
    """Encode an outbound frame as a JSON text message."""
    return json.dumps(frame.to_dict())


def decode(raw: str | bytes) -> InboundFrame:
    """Decode a text (or binary) websocket message into an InboundFrame."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProtocolError(f"Malformed frame: {e}") from e

    if not isinstance(data, dict):
        raise ProtocolError(f"Expected JSON object, got {type(data).__name__}")

    frame_id = data.get("id")
    if frame_id is None or frame_id == "":
        raise ProtocolError("Frame has no id")

    frame_type = data.get("type")
    if not isinstance(frame_type, str) or not frame_type:
        raise ProtocolError(f"Frame {frame_id} has no type")

    content = data.get("content", "")
    if content is None:
        content = ""
    elif not isinstance(content, str):
        content = json.dumps(content)

    return InboundFrame(id=str(frame_id), type=frame_type, content=content)

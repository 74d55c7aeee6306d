"""Tests for websocket frame encoding/decoding."""

import json

import pytest

from aiconcert.errors import ProtocolError
from aiconcert.infra.ws.protocol import CommandFrame, FrameType, InboundFrame, decode, encode


class TestEncode:
    def test_command_frame_shape(self):
        raw = encode(CommandFrame(id="abc-1", command="ls -la"))
        assert json.loads(raw) == {
            "id": "abc-1",
            "type": "command",
            "content": {"command": "ls -la"},
        }


class TestDecode:
    def test_output_frame(self):
        frame = decode('{"id": "a", "type": "stdout", "content": "total 0"}')
        assert frame == InboundFrame(id="a", type="stdout", content="total 0")
        assert frame.is_output
        assert not frame.is_terminal

    def test_bytes_accepted(self):
        frame = decode(b'{"id": "a", "type": "system", "content": "done"}')
        assert frame.is_terminal
        assert not frame.is_error

    def test_error_frame_is_terminal(self):
        frame = decode(json.dumps({"id": "a", "type": FrameType.ERROR.value, "content": "boom"}))
        assert frame.is_terminal
        assert frame.is_error

    def test_missing_content_defaults_empty(self):
        assert decode('{"id": "a", "type": "system"}').content == ""
        assert decode('{"id": "a", "type": "system", "content": null}').content == ""

    def test_non_string_content_serialized_as_json(self):
        assert decode('{"id": "a", "type": "stdout", "content": 42}').content == "42"
        frame = decode('{"id": "a", "type": "system", "content": {"exit_code": 0, "ok": true}}')
        assert json.loads(frame.content) == {"exit_code": 0, "ok": True}

    def test_numeric_id_coerced(self):
        assert decode('{"id": 17, "type": "stdout", "content": "x"}').id == "17"

    def test_unknown_type_kept(self):
        frame = decode('{"id": "a", "type": "progress", "content": "50%"}')
        assert frame.type == "progress"
        assert not frame.is_output
        assert not frame.is_terminal

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[1, 2, 3]",
            '{"type": "stdout", "content": "x"}',
            '{"id": "", "type": "stdout"}',
            '{"id": "a", "content": "x"}',
            '{"id": "a", "type": 5}',
        ],
    )
    def test_malformed_raises(self, raw):
        with pytest.raises(ProtocolError):
            decode(raw)

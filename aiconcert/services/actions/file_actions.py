"""File action handlers: read, write, list, delete."""

from __future__ import annotations

import logging

import httpx

from aiconcert.errors import InvalidArgumentError
from aiconcert.services.actions._args import require
from aiconcert.services.actions.context import ActionContext

logger = logging.getLogger(__name__)

FILE_OPERATIONS = ("read", "write", "list", "delete")


def _format_listing(path: str | None, files: list[dict]) -> str:
    lines = [
        f"{f.get('name', '')}{'/' if f.get('isDirectory') else ''} ({f.get('size') or 'N/A'})"
        for f in files
    ]
    return f"Files in {path or 'current directory'}:\n\n" + "\n".join(lines)


async def handle_file(ctx: ActionContext, arguments: dict) -> str:
    operation = require(arguments, "operation")
    path = arguments.get("path")
    content = arguments.get("content")

    # list defaults to the server's working directory
    if not path and operation != "list":
        raise InvalidArgumentError("Missing required field: path")
    if operation not in FILE_OPERATIONS:
        raise InvalidArgumentError(
            f"Invalid operation: {operation}. Valid operations are: {', '.join(FILE_OPERATIONS)}"
        )
    if operation == "write" and not content:
        raise InvalidArgumentError("Missing required field: content")

    payload: dict = {"path": path}
    if operation == "write":
        payload["content"] = content

    try:
        data = await ctx.api.post(f"/api/files/{operation}", json=payload)
    except httpx.HTTPError as e:
        logger.error("File operation %s failed: %s", operation, e)
        return f"Error with file operation: {e}"

    data = data if isinstance(data, dict) else {}
    if operation == "read" and data.get("content"):
        return f"File content for {path}:\n\n```\n{data['content']}\n```"
    if operation == "list" and data.get("files"):
        return _format_listing(path, data["files"])
    return f"File operation '{operation}' completed successfully."

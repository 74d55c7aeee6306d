"""Project management handler over the v2 projects API."""

from __future__ import annotations

import logging

import httpx

from aiconcert.errors import InvalidArgumentError
from aiconcert.services.actions._args import params_of, require
from aiconcert.services.actions.context import ActionContext

logger = logging.getLogger(__name__)

PROJECTS_ENDPOINT = "/api/v2/projects"

# operation -> (HTTP method, needs id)
PROJECT_OPERATIONS: dict[str, tuple[str, bool]] = {
    "list": ("GET", False),
    "get": ("GET", True),
    "create": ("POST", False),
    "update": ("PUT", True),
    "delete": ("DELETE", True),
}


def _format_projects(projects: list) -> str:
    lines = [
        f"- {p.get('name')} (ID: {p.get('id')}): {p.get('description') or 'No description'}"
        for p in projects
        if isinstance(p, dict)
    ]
    return "Projects:\n\n" + "\n".join(lines)


async def handle_project(ctx: ActionContext, arguments: dict) -> str:
    operation = require(arguments, "operation")
    params = params_of(arguments)

    if operation not in PROJECT_OPERATIONS:
        raise InvalidArgumentError(f"Unknown project operation: {operation}")
    method, needs_id = PROJECT_OPERATIONS[operation]

    endpoint = PROJECTS_ENDPOINT
    if needs_id:
        if not params.get("id"):
            raise InvalidArgumentError("Missing required parameter: id")
        endpoint = f"{endpoint}/{params['id']}"

    try:
        if method == "GET":
            data = await ctx.api.request(method, endpoint, params=params or None)
        else:
            data = await ctx.api.request(method, endpoint, json=params)
    except httpx.HTTPError as e:
        logger.error("Project operation %s failed: %s", operation, e)
        return f"Error with project operation: {e}"

    if method == "GET" and isinstance(data, list):
        return _format_projects(data)
    return f"Project operation '{operation}' completed successfully."

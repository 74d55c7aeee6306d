"""Long-running job handlers: code analysis and synthetic test runs.

Both start a background job on the server and return its id right away.
The server API has no job status endpoint, so `operation: "status"` is
answered locally.
"""

from __future__ import annotations

import logging

import httpx

from aiconcert.errors import InvalidArgumentError
from aiconcert.services.actions._args import params_of, require
from aiconcert.services.actions.context import ActionContext

logger = logging.getLogger(__name__)

STATUS_UNSUPPORTED = (
    "Job status polling is not supported by the AI-Concert server API. "
    "Check the server for the result of job {job_id}."
)


def _status_unsupported(params: dict) -> str:
    return STATUS_UNSUPPORTED.format(job_id=params.get("job_id") or "<unknown>")


async def handle_analyze(ctx: ActionContext, arguments: dict) -> str:
    params = params_of(arguments)

    if arguments.get("operation") == "status":
        return _status_unsupported(params)

    path = require(arguments, "path")
    try:
        data = await ctx.api.post("/api/analysis/start", json={"path": path, **params})
    except httpx.HTTPError as e:
        logger.error("Analysis error: %s", e)
        return f"Error analyzing code: {e}"

    job_id = data.get("job_id") if isinstance(data, dict) else None
    if not job_id:
        return "Failed to start analysis. Invalid response from server."

    return (
        f"Analysis started for {path}. Job ID: {job_id}\n\n"
        "The analysis is running in the background on the server."
    )


async def handle_test(ctx: ActionContext, arguments: dict) -> str:
    params = params_of(arguments)

    if arguments.get("operation") == "status":
        return _status_unsupported(params)

    if not params.get("repo_url") and not params.get("code_path"):
        raise InvalidArgumentError(
            "Missing required parameters. Either repo_url or code_path must be provided."
        )

    endpoint = "/api/testing/repository" if params.get("repo_url") else "/api/testing/local"
    try:
        data = await ctx.api.post(endpoint, json=params)
    except httpx.HTTPError as e:
        logger.error("Test execution error: %s", e)
        return f"Error running test: {e}"

    job_id = data.get("job_id") if isinstance(data, dict) else None
    if not job_id:
        return "Failed to start test. Invalid response from server."

    return (
        f"Test execution started. Job ID: {job_id}\n\n"
        "The test is running in the background on the server."
    )

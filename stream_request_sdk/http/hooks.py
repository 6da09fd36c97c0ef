"""
Default httpx event hooks.

These play the role of request/response interceptors: they log outgoing
requests and failing responses and never alter them. Response hooks must
not read the body, otherwise streaming responses become unusable.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


async def log_request(request: httpx.Request) -> None:
    logger.debug(f"Request: {request.method} {request.url}")


async def log_response(response: httpx.Response) -> None:
    request = response.request
    if response.is_error:
        logger.error(
            f"Response error: {request.method} {request.url} -> {response.status_code}",
            extra={"status_code": response.status_code}
        )
    else:
        logger.debug(f"Response: {request.method} {request.url} -> {response.status_code}")


def install_default_hooks(client: httpx.AsyncClient) -> httpx.AsyncClient:
    """Append the logging hooks to the client's existing event hooks."""
    hooks = client.event_hooks
    if log_request not in hooks["request"]:
        hooks["request"].append(log_request)
    if log_response not in hooks["response"]:
        hooks["response"].append(log_response)
    client.event_hooks = hooks
    return client

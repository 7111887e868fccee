from __future__ import annotations

import logging

from fastmcp.server.middleware import Middleware, MiddlewareContext

from ...shared.to_jsonable import to_jsonable

logger = logging.getLogger(__name__)


class WiretapLoggingMiddleware(Middleware):
    """Logs every MCP message and its result.

    Method names go out at INFO; full payloads (which include submitted
    source code) only at DEBUG.
    """

    async def on_message(self, ctx: MiddlewareContext, call_next):
        # 'message' is reserved by logging, hence 'mcp_message'
        logger.info("mcp_request", extra={"type": "request", "method": ctx.method})
        logger.debug("mcp_request_payload", extra={
            "type": "request",
            "method": ctx.method,
            "mcp_message": to_jsonable(ctx.message),
        })
        result = await call_next(ctx)
        logger.debug("mcp_response_payload", extra={
            "type": "response",
            "method": ctx.method,
            "mcp_result": to_jsonable(result),
        })
        return result

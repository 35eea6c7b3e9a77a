"""FactorTutor JSON-lines server entry point.

Usage: python -m factortutor.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from factortutor.config.settings import Settings, configure_logging

from .handler import ServerHandler
from .protocol import Notification, Request, Response

logger = logging.getLogger("factortutor.server")


async def main() -> None:
    loop = asyncio.get_event_loop()
    settings = Settings.load()
    configure_logging(settings.get_log_level())

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(settings=settings, write_notification=write_notification)

    logger.info("ready (%s catalog %s)", handler.catalog.source, handler.catalog.course.id)

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        try:
            req = Request.from_line(line_str)
        except (ValueError, KeyError, TypeError) as e:
            write_line(Response.invalid(e).to_json_line())
            continue

        try:
            result = await handler.dispatch({"method": req.method, "params": req.params})
            resp = Response(id=req.id, result=result)
        except Exception as e:
            logger.error("error handling %s: %s", req.method, e)
            resp = Response(id=req.id, error=str(e))

        write_line(resp.to_json_line())


if __name__ == "__main__":
    asyncio.run(main())

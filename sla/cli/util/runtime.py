"""Run command/query handlers in-process for one CLI invocation."""

import asyncio
import logging
from typing import Any

import logfire

from sla.application.di import create_container
from sla.config import Config, configure_logging

logger = logging.getLogger(__name__)

_configured = False


def bootstrap(config: Config) -> None:
    """Configure logging and logfire once per process."""
    global _configured
    if _configured:
        return
    configure_logging(config.logging)
    logfire.configure(send_to_logfire="if-token-present", console=False)
    _configured = True


async def _run(handler_type: type[Any], cmd: Any, config: Config, researcher: str | None) -> Any:
    container = create_container(config, researcher)
    try:
        async with container() as uow:
            handler = await uow.get(handler_type)
            return await handler.run(cmd)
    finally:
        await container.close()


def run_handler(
    handler_type: type[Any],
    cmd: Any,
    *,
    researcher: str | None = None,
    config: Config | None = None,
) -> Any:
    """Resolve ``handler_type`` from a fresh container and run ``cmd`` through it."""
    config = config or Config()  # type: ignore[call-arg]
    bootstrap(config)
    logger.debug("Running %s", type(cmd).__name__)
    return asyncio.run(_run(handler_type, cmd, config, researcher))

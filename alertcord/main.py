"""alertcord - relay Alertmanager notifications to Discord webhooks."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import typer
import uvicorn
from fastapi import FastAPI, Request, Response, status

from alertcord.assembler import MessageAssembler
from alertcord.config import ConfigError, RelayConfig, Settings
from alertcord.dispatcher import Dispatcher
from alertcord.sources.alertmanager import (
    MISCONFIGURED_MESSAGE,
    MISCONFIGURED_TEXT,
    AlertmanagerSource,
    PayloadError,
    is_raw_prometheus_alert,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

MAX_LOGGED_BODY_BYTES = 1024


def create_app(config: RelayConfig, client: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the relay application around an already validated configuration."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        destinations = len(config.destinations)
        logger.info(f"alertcord started with {destinations} destination(s)")
        yield
        logger.info("alertcord stopped")

    app = FastAPI(
        title="alertcord",
        description="Relay Alertmanager webhook notifications to Discord",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.source = AlertmanagerSource()
    app.state.assembler = MessageAssembler(config)
    app.state.dispatcher = Dispatcher(config, client=client)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.post("/")
    async def alertmanager_webhook(request: Request) -> Response:
        """Receive an Alertmanager webhook notification."""
        return await _handle_webhook(request)

    @app.post("/{path:path}")
    async def alertmanager_webhook_any_path(path: str, request: Request) -> Response:
        return await _handle_webhook(request)

    return app


async def _handle_webhook(request: Request) -> Response:
    state = request.app.state
    host = request.client.host if request.client else "-"
    logger.info(f"{host} - [{request.method}] {request.url.path}")

    body = await request.body()
    if state.config.verbose:
        logger.info(f"request payload: {body.decode('utf-8', errors='replace')}")

    try:
        notification = state.source.parse(body)
    except PayloadError as e:
        if is_raw_prometheus_alert(body):
            await _warn_misconfigured(state.dispatcher)
        else:
            logged = body[: MAX_LOGGED_BODY_BYTES - 1].decode("utf-8", errors="replace")
            suffix = "..." if len(body) > MAX_LOGGED_BODY_BYTES else ""
            logger.error(f"Failed to unpack inbound alert request ({e}) - {logged}{suffix}")
        return Response(status_code=status.HTTP_200_OK)

    logger.info(
        f"Parsed alertmanager webhook: status={notification.status}, "
        f"alerts={len(notification.alerts)}"
    )

    sent = await state.assembler.relay(notification, state.dispatcher)
    if not sent:
        logger.info("No meaningful alerts to send, nothing dispatched")

    return Response(status_code=status.HTTP_200_OK)


async def _warn_misconfigured(dispatcher: Dispatcher) -> None:
    logger.warning("/!\\ -- You have misconfigured this program -- /!\\")
    logger.warning("--- --                                      -- ---")
    logger.warning(MISCONFIGURED_TEXT)
    await dispatcher.send_raw(MISCONFIGURED_MESSAGE)


def flags_to_settings(flags: dict[str, str | None]) -> dict[str, str]:
    """Key the given flags by their environment name so they take precedence over env."""
    return {
        Settings.model_fields[name].validation_alias: value
        for name, value in flags.items()
        if value is not None
    }


cli = typer.Typer(help="Relay Alertmanager webhook notifications to Discord.")


@cli.command()
def serve(
    webhook_url: Optional[str] = typer.Option(
        None, "--webhook-url", help="Discord WebHook URL. [env: DISCORD_WEBHOOK]"
    ),
    additional_webhook_urls: Optional[str] = typer.Option(
        None,
        "--additional-webhook-urls",
        help="Comma separated additional Discord WebHook URLs. [env: ADDITIONAL_DISCORD_WEBHOOKS]",
    ),
    listen_address: Optional[str] = typer.Option(
        None, "--listen-address", help="Address:Port to listen on. [env: LISTEN_ADDRESS]"
    ),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        help="Overrides the predefined username of the webhook. [env: DISCORD_USERNAME]",
    ),
    avatar_url: Optional[str] = typer.Option(
        None,
        "--avatar-url",
        help="Overrides the predefined avatar of the webhook. [env: DISCORD_AVATAR_URL]",
    ),
    verbose: Optional[str] = typer.Option(
        None, "--verbose", help="Verbose mode, 'ON' or 'true'. [env: VERBOSE]"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level. [env: LOG_LEVEL]"
    ),
) -> None:
    """Validate the configuration and start the HTTP listener."""
    flags = {
        "webhook_url": webhook_url,
        "additional_webhook_urls": additional_webhook_urls,
        "listen_address": listen_address,
        "username": username,
        "avatar_url": avatar_url,
        "verbose": verbose,
        "log_level": log_level,
    }
    settings = Settings(**flags_to_settings(flags))

    level = "DEBUG" if settings.is_verbose else settings.log_level.upper()
    logging.getLogger().setLevel(level)

    try:
        config = settings.to_relay_config()
        host, port = settings.bind
    except ConfigError as e:
        logger.critical(str(e))
        raise typer.Exit(code=1)

    logger.info(f"Listening on: {host}:{port}")
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level=level.lower(),
    )


def run() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    run()

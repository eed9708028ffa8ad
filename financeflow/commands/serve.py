"""Serve command: run the HTTP API."""

import logging

import uvicorn
from rich.console import Console

from financeflow.api import create_app
from financeflow.commands.admin import require_store
from financeflow.config import load_settings

console = Console()
logger = logging.getLogger(__name__)


def serve_command(host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn until interrupted."""
    settings = load_settings()

    store = require_store(settings)
    app = create_app(store)

    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Using %s store", settings.backend)
    console.print(f"[cyan]Serving FinanceFlow API on http://{bind_host}:{bind_port}[/cyan]")

    uvicorn.run(app, host=bind_host, port=bind_port, log_level=settings.log_level.lower())

"""CLI widget command function."""

import typer
from loguru import logger

from parental_gate.cli.common import done, resolve_config, step
from parental_gate.config import build_pool
from parental_gate.errors import ChallengePoolError
from parental_gate.utils.misc import validate_port
from parental_gate.widget.services import create_service
from parental_gate.widget.widget import DEFAULT_BANNER, build_widget


def widget(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8080, "--port", help="Port to serve on."),
    share: bool = typer.Option(False, "--share", help="Create a public Gradio link."),
    banner: str = typer.Option(DEFAULT_BANNER, "--banner", help="Markdown banner."),
) -> None:
    """Launch the Gradio parental gate demo."""
    if not validate_port(port):
        raise typer.BadParameter("port must be between 1 and 65535")

    config = resolve_config(ctx)
    try:
        pool = build_pool(config)
    except ChallengePoolError as e:
        typer.secho(f"Failed to load challenges: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    step("Starting gate service...")
    service = create_service(pool=pool, cooldown=config.cooldown_seconds)
    done()

    app = None
    try:
        app = build_widget(service, banner=banner)
        logger.info(f"Launching Gradio widget ({host}:{port})...")
        app.launch(server_name=host, server_port=port, share=share, quiet=True)
    except KeyboardInterrupt:
        logger.info("Received interrupt. Shutting down...")
        raise typer.Exit(code=130)
    finally:
        if app is not None:
            try:
                app.close()
            except Exception:
                logger.opt(exception=True).debug("Suppressing exception during app.close()")
        service.close()

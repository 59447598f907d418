from __future__ import annotations

import typer

from ministore import catalog
from ministore.auth import NonceService
from ministore.config import Settings
from ministore.form_config import FormConfigurationManager
from ministore.storage import init_storage
from ministore.utils import dumps_json

cli = typer.Typer(add_completion=False)


def run_server(host: str | None, port: int | None) -> None:
    import uvicorn

    from ministore.app import create_app

    settings = Settings()
    resolved_host = host or settings.host
    resolved_port = port if port is not None else settings.port
    uvicorn.run(
        create_app(settings),
        host=resolved_host,
        port=resolved_port,
        log_level=settings.log_level,
    )


@cli.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Address to bind"),
    port: int | None = typer.Option(None, help="Port to bind"),
) -> None:
    ctx.obj = {"host": host, "port": port}
    if ctx.invoked_subcommand is None:
        run_server(host, port)


@cli.command()
def run(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Address to bind"),
    port: int | None = typer.Option(None, help="Port to bind"),
) -> None:
    base = ctx.obj or {}
    resolved_host = host or base.get("host")
    resolved_port = port if port is not None else base.get("port")
    run_server(resolved_host, resolved_port)


@cli.command("catalog")
def show_catalog() -> None:
    """Print the fields available to the checkout form."""
    for field in catalog.list_all():
        placeholder = field.placeholder or "-"
        typer.echo(f"{field.id:<10} {field.input_kind.value:<9} {field.label} ({placeholder})")


@cli.command()
def show() -> None:
    """Print the saved checkout form configuration as JSON."""
    settings = Settings()
    storage = init_storage(settings)
    manager = FormConfigurationManager(
        storage.options, NonceService(settings.secret_key, settings.nonce_lifetime)
    )
    typer.echo(dumps_json([field.as_dict() for field in manager.load_saved()]))


if __name__ == "__main__":
    cli()

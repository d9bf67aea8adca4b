"""Operator command line for photo deliveries."""

import asyncio
from pathlib import Path

import typer

from photo_delivery.app_logging import configure_logging
from photo_delivery.config import DeliverySettings
from photo_delivery.containers import build_delivery_container, build_delivery_log
from photo_delivery.domain.delivery import DeliveryResult, DeliveryStatus
from photo_delivery.domain.errors import NotFoundError
from photo_delivery.domain.models import DeliveryRequest
from photo_delivery.services.assets import discover_assets
from photo_delivery.services.roster import find_photographer, load_roster

app = typer.Typer(
    name="photo-delivery",
    help="Deliver event photo sets to models.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command(name="deliver", help="Upload a model's photos and email the link.")
def deliver_cmd(
    model_id: str = typer.Argument(..., help="Model id, also the local folder name."),
    photographer_id: str = typer.Option(
        ..., "--photographer", "-p", help="Photographer id from the roster file."
    ),
    force_resubmit: bool = typer.Option(
        False, help="Deliver again even if the model already has a folder."
    ),
) -> None:
    """Run one delivery through the pipeline."""
    settings = DeliverySettings()
    configure_logging(settings.log_level)
    try:
        photographer = find_photographer(
            load_roster(settings.photographers_file), photographer_id
        )
        assets = discover_assets(settings.images_root, model_id)
    except (OSError, NotFoundError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"Delivering model {model_id} ({len(assets)} files) "
        f"for {photographer.name} ({photographer.handle})"
    )
    request = DeliveryRequest(
        model_id=model_id,
        asset_paths=assets,
        photographer=photographer.context(),
    )
    result = asyncio.run(_run(settings, request, force_resubmit))
    typer.echo(format_result(result))
    if result.status is not DeliveryStatus.SUCCESS:
        raise typer.Exit(code=1)


@app.command(name="photographers", help="List the photographer roster.")
def photographers_cmd(
    roster: Path = typer.Option(None, help="Roster file, defaults to settings."),
) -> None:
    """Print the roster as id | name | handle."""
    path = roster or DeliverySettings().photographers_file
    for photographer in load_roster(path):
        typer.echo(f"{photographer.id} | {photographer.name} | {photographer.handle}")


@app.command(name="log", help="Show recent delivery log entries.")
def log_cmd(limit: int = typer.Option(20, help="Number of entries to show.")) -> None:
    """Print the most recent delivery log entries."""
    settings = DeliverySettings()
    delivery_log = build_delivery_log(
        settings.delivery_log_backend,
        settings.delivery_log_path,
        settings.supabase_url,
        settings.supabase_service_key,
    )
    for entry in delivery_log.entries()[-limit:]:
        typer.echo(
            f"{entry.timestamp.isoformat()} {entry.model_id} {entry.status.value} "
            f"{entry.recipient.email} {entry.message}"
        )


async def _run(
    settings: DeliverySettings, request: DeliveryRequest, force_resubmit: bool
) -> DeliveryResult:
    container = build_delivery_container(settings)
    try:
        return await container.orchestrator.deliver(
            request, force_resubmit=force_resubmit
        )
    finally:
        await container.close_resources()


def format_result(result: DeliveryResult) -> str:
    """Render a delivery result for the operator."""
    if result.status is DeliveryStatus.SUCCESS:
        lines = [f"Delivered model {result.model_id} to {result.recipient.email}"]
        if result.folder is not None:
            lines.append(f"Link: {result.folder.short_link}")
            if not result.folder.is_public:
                lines.append("Warning: folder could not be made public")
    elif result.failed_stage is not None:
        lines = [
            f"Delivery of model {result.model_id} failed while "
            f"{result.failed_stage.value}: {result.message}"
        ]
    else:
        lines = [f"Delivery of model {result.model_id} failed: {result.message}"]
    lines.extend(f"Warning: {error}" for error in result.record_errors)
    return "\n".join(lines)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

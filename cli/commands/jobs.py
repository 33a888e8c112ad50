"""Jobs Commands - Create and preview notification jobs"""

from typing import Any

import typer
from rich.console import Console

from dispatcher.v1.jobs.dispatch import build_message
from dispatcher.v1.jobs.schemas import NotificationJob

from ..client.base import DispatcherAPIError
from ..client.endpoints import DispatcherClient
from ..utils.config_manager import config
from ..utils.formatting import (
    create_dispatch_panel,
    create_message_table,
    print_error,
    print_info,
    print_warning,
)

console = Console()
app = typer.Typer(name="jobs", help="Notification job commands")


def parse_data(entries: list[str] | None) -> dict[str, str]:
    """Turn repeated KEY=VALUE options into the job's data mapping"""
    data: dict[str, str] = {}
    for entry in entries or []:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got: {entry}", param_hint="--data")
        data[key] = value
    return data


def _job_fields(
    token: str | None, title: str | None, body: str | None, data: list[str] | None
) -> dict[str, Any]:
    fields: dict[str, Any] = {"data": parse_data(data)}
    # Absent fields stay absent in the document
    for name, value in (("token", token), ("title", title), ("body", body)):
        if value is not None:
            fields[name] = value
    return fields


@app.command("send")
def send_job(
    token: str | None = typer.Option(None, "--token", "-t", help="Device registration token"),
    title: str | None = typer.Option(None, "--title", help="Notification title"),
    body: str | None = typer.Option(None, "--body", "-b", help="Notification body"),
    data: list[str] | None = typer.Option(None, "--data", "-d", help="Payload entry KEY=VALUE (repeatable)"),
    collection: str | None = typer.Option(None, "--collection", "-c", help="Job collection"),
    document_id: str | None = typer.Option(None, "--id", help="Document key"),
):
    """📨 Create a notification job through the API and show the dispatch result"""
    base_url = config.get("api.base_url")
    collection = collection or config.get("jobs.collection", "notification_jobs")
    fields = _job_fields(token, title, body, data)

    try:
        with DispatcherClient(base_url) as client:
            print_info(f"Sending job to collection '{collection}'")
            result = client.document_created(collection, fields, document_id=document_id)
    except DispatcherAPIError as e:
        print_error(f"Failed to send job: {e}")
        raise typer.Exit(1) from None

    console.print(create_dispatch_panel(result))

    if result.get("outcome") == "failed":
        raise typer.Exit(1)


@app.command("preview")
def preview_job(
    token: str | None = typer.Option(None, "--token", "-t", help="Device registration token"),
    title: str | None = typer.Option(None, "--title", help="Notification title"),
    body: str | None = typer.Option(None, "--body", "-b", help="Notification body"),
    data: list[str] | None = typer.Option(None, "--data", "-d", help="Payload entry KEY=VALUE (repeatable)"),
):
    """👀 Show the push message a job would produce, without sending it"""
    job = NotificationJob.model_validate(_job_fields(token, title, body, data))

    if not job.token:
        print_warning("No token: this job would be skipped")
        return

    console.print(create_message_table(build_message(job).model_dump()))

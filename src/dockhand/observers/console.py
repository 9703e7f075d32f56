# src/dockhand/observers/console.py
import typer

from .events import BaseEvent, StepFailed, StepStarted, StepSucceeded


class ConsoleObserver:
    def notify(self, event: BaseEvent) -> None:
        if isinstance(event, StepStarted):
            typer.echo(f"[{event.host}] {event.step} ...")
        elif isinstance(event, StepSucceeded):
            typer.echo(f"[{event.host}] {event.step} ok ({event.duration_ms} ms)")
        elif isinstance(event, StepFailed):
            typer.secho(f"[{event.host}] {event.step} FAILED: {event.error}", fg=typer.colors.RED, err=True)
        else:
            d = event.dict()
            typer.echo(
                f"[{d['ts']}] {event.__class__.__name__} host={d['host']} "
                + " ".join(f"{k}={v}" for k, v in d.items() if k not in ("ts", "run_id", "host"))
            )

# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from dockhand.config.loader import load_config
from dockhand.config.models import ProvisionConfig
from dockhand.errors import ProvisionError
from dockhand.logging.log import init_logging
from dockhand.observers.console import ConsoleObserver
from dockhand.observers.dispatcher import EventBus
from dockhand.observers.jsonfile import JsonFileObserver
from dockhand.observers.logger import LoggerObserver
from dockhand.provision.backends import CertificateUploader, NoAuth, SkipSwarm
from dockhand.provision.models import OsReleaseInfo
from dockhand.provision.orchestrator import STEP_ORDER, Orchestrator
from dockhand.provision.os_release import YUM_REPO_PATH, render_repo_file, resolve_repo_coordinate
from dockhand.provision.registry import detect_provisioner, lookup
from dockhand.utils.ssh_runner import SSHDriver, open_ssh


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Provision container engine hosts over SSH")


def _config(config: Optional[str]) -> ProvisionConfig:
    try:
        return load_config(config)
    except ProvisionError as e:
        raise typer.BadParameter(str(e))


def _provisioner_kwargs(cfg: ProvisionConfig) -> dict:
    kwargs = {"repo_table": cfg.repo_table()}
    if cfg.packages is not None:
        kwargs["packages"] = cfg.packages
    return kwargs


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.command()
def provision(
    config: Optional[str] = typer.Argument(None, help="Provisioning YAML (default: $DOCKHAND_CONFIG)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the step plan without connecting"),
    debug: bool = typer.Option(False, "--debug"),
):
    """Bootstrap one host into a TLS-secured container engine host."""
    cfg = _config(config)

    if dry_run:
        typer.echo(f"[{cfg.host.machine_name}] would run:")
        for i, step in enumerate(STEP_ORDER, 1):
            typer.echo(f"  {i}. {step}")
        return

    run_log = init_logging(cfg.host.machine_name, verbose=debug)
    bus = EventBus(
        observers=[
            ConsoleObserver(),
            LoggerObserver(run_log.logger),
            JsonFileObserver(run_log.events_path),
        ]
    )

    driver = SSHDriver(cfg.host, driver_name=cfg.driver_name)
    runner = None
    try:
        runner = open_ssh(cfg.host)
        provisioner = detect_provisioner(driver, runner, **_provisioner_kwargs(cfg))
        orchestrator = Orchestrator(
            provisioner,
            CertificateUploader() if cfg.upload_certs else NoAuth(),
            SkipSwarm(),
            bus=bus,
            docker_port=cfg.docker_port,
            readiness_timeout=cfg.readiness.timeout,
            readiness_interval=cfg.readiness.interval,
            run_id=run_log.run_id,
        )
        orchestrator.provision(cfg.swarm, cfg.auth, cfg.engine)
    except ProvisionError as e:
        typer.secho(f"provisioning failed: {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"full log: {run_log.path}", err=True)
        raise typer.Exit(code=1)
    finally:
        if runner is not None:
            runner.close()

    typer.secho(f"[{cfg.host.machine_name}] ready", fg=typer.colors.GREEN)


@app.command()
def render(
    config: Optional[str] = typer.Argument(None, help="Provisioning YAML (default: $DOCKHAND_CONFIG)"),
    os_id: str = typer.Option("centos", "--os-id", help="os-release ID of the target"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write files into this directory"),
):
    """Render the repository file and engine unit without touching a host."""
    cfg = _config(config)
    info = OsReleaseInfo(id=os_id)

    class _OfflineChannel:
        def execute(self, command: str, *, pty: bool = False) -> str:
            raise ProvisionError("render does not connect to the host")

    try:
        entry = lookup(info)
        provisioner = entry.factory(
            SSHDriver(cfg.host, driver_name=cfg.driver_name),
            _OfflineChannel(),
            **_provisioner_kwargs(cfg),
        )
        engine = cfg.engine
        if not engine.storage_driver:
            engine = engine.model_copy(update={"storage_driver": provisioner.default_storage_driver})
        auth = provisioner.remote_auth_options(cfg.auth)
        repo_text = render_repo_file(resolve_repo_coordinate(info, cfg.repo_table()))
        options = provisioner.generate_docker_options(engine, auth, cfg.docker_port)
    except ProvisionError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output:
        output.mkdir(parents=True, exist_ok=True)
        (output / "docker.repo").write_text(repo_text)
        (output / "docker.service").write_text(options.content)
        typer.echo(f"wrote {output / 'docker.repo'} and {output / 'docker.service'}")
        return

    typer.echo(f"# {YUM_REPO_PATH}\n{repo_text}")
    typer.echo(f"# {options.path}\n{options.content}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

from pathlib import Path
import textwrap

from typer.testing import CliRunner

from dockhand.cli.app import app
from dockhand.errors import CommandExecutionError

runner = CliRunner()


def _config(tmp_path: Path) -> Path:
    f = tmp_path / "host.yaml"
    f.write_text(textwrap.dedent("""
        host:
          machine_name: engine-1
          address: 10.0.0.11
        driver_name: proxmox
        engine:
          labels: [env=dev]
    """))
    return f


def test_provision_dry_run_lists_steps(tmp_path):
    result = runner.invoke(app, ["provision", str(_config(tmp_path)), "--dry-run"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "1. hostname-set" in lines[1]
    assert "9. swarm-configured" in lines[-1]


def test_render_prints_both_files(tmp_path):
    result = runner.invoke(app, ["render", str(_config(tmp_path)), "--os-id", "fedora"])
    assert result.exit_code == 0
    assert "baseurl=https://yum.dockerproject.org/repo/main/fedora/22" in result.output
    assert "--storage-driver devicemapper" in result.output
    assert "--label env=dev --label provider=proxmox" in result.output
    assert "--tlscacert /etc/docker/ca.pem" in result.output


def test_render_to_directory(tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(app, ["render", str(_config(tmp_path)), "-o", str(out)])
    assert result.exit_code == 0
    assert (out / "docker.repo").read_text().startswith("[docker]\n")
    assert (out / "docker.service").read_text().startswith("[Service]\n")


def test_render_unknown_os(tmp_path):
    result = runner.invoke(app, ["render", str(_config(tmp_path)), "--os-id", "ubuntu"])
    assert result.exit_code == 1


def test_bad_config_path(tmp_path):
    result = runner.invoke(app, ["provision", str(tmp_path / "missing.yaml"), "--dry-run"])
    assert result.exit_code != 0


def test_provision_connect_failure_reports_log(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))

    def refuse(host):
        raise CommandExecutionError(f"ssh root@{host.address}:22", stderr="Connection refused")

    monkeypatch.setattr("dockhand.cli.app.open_ssh", refuse)

    result = runner.invoke(app, ["provision", str(_config(tmp_path))])

    assert result.exit_code == 1
    assert "Connection refused" in result.output
    assert "full log:" in result.output
    assert list((tmp_path / ".dockhand" / "logs" / "engine-1").glob("*.log"))

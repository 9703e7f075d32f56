import subprocess

import pytest

from dockhand.errors import ProvisionError
from dockhand.provision.hostname import (
    hostname_commands,
    loopback_entry_command,
    set_hostname_command,
    validate_hostname,
)


def _apply(command):
    subprocess.run(command.render(), shell=True, check=True)


def _loopback_lines(path):
    return [ln for ln in path.read_text().splitlines() if ln.startswith("127.0.1.1")]


@pytest.fixture
def hosts(tmp_path):
    p = tmp_path / "hosts"
    p.write_text("127.0.0.1 localhost\n::1 localhost ip6-localhost\n")
    return p


def test_appends_entry_when_missing(hosts):
    _apply(loopback_entry_command("node-1", str(hosts)))
    assert _loopback_lines(hosts) == ["127.0.1.1 node-1"]
    assert "127.0.0.1 localhost" in hosts.read_text()


def test_rerun_is_idempotent(hosts):
    for _ in range(3):
        _apply(loopback_entry_command("node-1", str(hosts)))
    assert _loopback_lines(hosts) == ["127.0.1.1 node-1"]


def test_replaces_stale_entry_in_place(hosts):
    hosts.write_text("127.0.0.1 localhost\n127.0.1.1 ubuntu-image\n10.0.0.5 other\n")

    _apply(loopback_entry_command("node-1", str(hosts)))
    _apply(loopback_entry_command("node-2", str(hosts)))

    lines = hosts.read_text().splitlines()
    assert lines == ["127.0.0.1 localhost", "127.0.1.1 node-2", "10.0.0.5 other"]


def test_append_keeps_last_line_without_newline(hosts):
    hosts.write_text("127.0.0.1 localhost\n::1 localhost")

    _apply(loopback_entry_command("node-1", str(hosts)))
    _apply(loopback_entry_command("node-1", str(hosts)))

    assert hosts.read_text().splitlines() == [
        "127.0.0.1 localhost",
        "::1 localhost",
        "127.0.1.1 node-1",
    ]


def test_append_to_empty_file(hosts):
    hosts.write_text("")
    _apply(loopback_entry_command("node-1", str(hosts)))
    assert hosts.read_text() == "127.0.1.1 node-1\n"


def test_duplicate_entries_collapse_to_one(hosts):
    hosts.write_text("127.0.1.1 a\n10.0.0.5 other\n127.0.1.1 b\n127.0.1.1\tc\n")

    _apply(loopback_entry_command("node-1", str(hosts)))

    assert hosts.read_text().splitlines() == ["127.0.1.1 node-1", "10.0.0.5 other"]


def test_set_hostname_command():
    command = set_hostname_command("node-1")
    assert command.render() == "sh -c 'hostname node-1 && echo node-1 | tee /etc/hostname'"


def test_hostname_commands_order():
    commands = hostname_commands("node-1")
    assert "hostname node-1" in commands[0].render()
    assert "127.0.1.1 node-1" in commands[1].render()


@pytest.mark.parametrize("name", ["", "bad name", "-lead", "trail-", "a;rm -rf /", "x" * 64, "a/b"])
def test_invalid_hostnames_rejected(name):
    with pytest.raises(ProvisionError):
        validate_hostname(name)


def test_fqdn_accepted():
    assert validate_hostname("node-1.example.com") == "node-1.example.com"

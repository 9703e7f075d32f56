from datetime import datetime, timezone

from dockhand.logging.log import init_logging, run_log_path


def test_run_log_path_is_per_host(tmp_path):
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    path = run_log_path("node-1.example.com", "abc", base_dir=tmp_path, now=now)
    assert path == tmp_path / "node-1.example.com" / "20260102-030405-abc.log"


def test_unsafe_host_names_are_flattened(tmp_path):
    path = run_log_path("../etc/x y", "abc", base_dir=tmp_path)
    assert path.parent == tmp_path / "_etc_x_y"
    assert run_log_path("..", "abc", base_dir=tmp_path).parent == tmp_path / "unknown"


def test_init_logging_uses_given_run_id(tmp_path):
    run = init_logging("node-1", run_id="run-1234abcd", base_dir=tmp_path)

    run.logger.debug("yum install -y curl")

    assert run.run_id == "run-1234abcd"
    assert run.path.parent == tmp_path / "node-1"
    assert run.events_path == run.path.with_suffix(".jsonl")
    text = run.path.read_text()
    assert "provisioning run run-1234abcd for node-1" in text
    assert "| run-1234 | yum install -y curl" in text


def test_reinit_replaces_handlers(tmp_path):
    init_logging("node-1", base_dir=tmp_path)
    run = init_logging("node-2", base_dir=tmp_path)
    assert len(run.logger.handlers) == 2
    assert len(run.run_id) == 36

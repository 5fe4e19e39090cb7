import os
import socket
from unittest import mock

import pytest

from deathrelay import logs
from deathrelay.cli import main, parse_targets
from deathrelay.osc import encode_message
from deathrelay.watcher import Target


def test_parse_targets_numbers_from_one():
    assert parse_targets(" Alice, ,Bob ,") == [Target(1, "Alice"), Target(2, "Bob")]


def test_parse_targets_empty():
    assert parse_targets("") == []


def test_format_command(capsys):
    assert main(["format", "Alice,Bob"]) == 0
    out = capsys.readouterr().out
    assert '<div class="value">Bob</div>' in out
    assert out.count('<li class="data-block">') == 2


def test_latest_command(tmp_path, capsys):
    log_file = tmp_path / "output_log_7.txt"
    log_file.write_text("x")
    os.utime(log_file, (1_000, 1_000))
    assert main(["latest", "--log-dir", str(tmp_path)]) == 0
    assert capsys.readouterr().out.strip() == str(log_file)


def test_latest_command_without_logs(tmp_path):
    assert main(["latest", "--log-dir", str(tmp_path)]) == 1


def test_reset_command_sends_packet():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as receiver:
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(5)
        port = receiver.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port), "reset"]) == 0
        data, _ = receiver.recvfrom(1024)
    assert data == encode_message("/avatar/parameters/ToN_DeathID_Reset", [True])


def test_open_command(tmp_path):
    with mock.patch.object(logs.subprocess, "run") as run:
        assert main(["open", str(tmp_path / "file.txt")]) == 0
    run.assert_called_once_with(["explorer", str(tmp_path)], check=False)


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        main([])
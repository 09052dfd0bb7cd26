import subprocess
from unittest.mock import patch

from adapters.shell_runner import run_shell_command


def test_returns_child_exit_code():
    completed = subprocess.CompletedProcess(args="exit 4", returncode=4)
    with patch("adapters.shell_runner.subprocess.run", return_value=completed) as run:
        assert run_shell_command("exit 4", env={"A": "1"}) == 4

    run.assert_called_once_with("exit 4", shell=True, env={"A": "1"}, check=False)


def test_signal_termination_maps_to_generic_failure():
    completed = subprocess.CompletedProcess(args="sleep 10", returncode=-15)
    with patch("adapters.shell_runner.subprocess.run", return_value=completed):
        assert run_shell_command("sleep 10", env={}) == 1


def test_shell_start_failure_maps_to_generic_failure():
    with patch("adapters.shell_runner.subprocess.run", side_effect=OSError("no shell")):
        assert run_shell_command("npx prisma generate", env={}) == 1

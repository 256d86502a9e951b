"""
Unit tests for process tree termination.
"""

from unittest.mock import MagicMock, patch

import psutil
import pytest

from wpbuild.engine import terminate_process_tree



def fake_process(pid):
    process = MagicMock()
    process.pid = pid
    return process


@pytest.mark.unit
class TestTerminateProcessTree:
    """Test cases for terminate_process_tree."""

    def test_invalid_pid(self):
        assert terminate_process_tree(0, "webpack") == []

    def test_already_gone(self):
        with patch("wpbuild.engine.process.psutil.Process", side_effect=psutil.NoSuchProcess(123)):
            assert terminate_process_tree(123, "webpack") == []

    def test_graceful_termination(self):
        parent = fake_process(10)
        child = fake_process(11)
        parent.children.return_value = [child]

        with patch("wpbuild.engine.process.psutil.Process", return_value=parent), \
                patch("wpbuild.engine.process.psutil.wait_procs", return_value=([parent, child], [])) as wait:
            assert terminate_process_tree(10, "webpack", graceful_timeout=1.0) == []

        parent.terminate.assert_called_once()
        child.terminate.assert_called_once()
        parent.kill.assert_not_called()
        wait.assert_called_once_with([parent, child], timeout=1.0)

    def test_escalates_to_kill(self):
        parent = fake_process(10)
        stubborn = fake_process(11)
        parent.children.return_value = [stubborn]

        with patch("wpbuild.engine.process.psutil.Process", return_value=parent), \
                patch(
                    "wpbuild.engine.process.psutil.wait_procs",
                    side_effect=[([parent], [stubborn]), ([], [stubborn])],
                ):
            survivors = terminate_process_tree(10, "webpack")

        stubborn.kill.assert_called_once()
        parent.kill.assert_not_called()
        assert survivors == [11]

    def test_child_vanishes_during_terminate(self):
        parent = fake_process(10)
        child = fake_process(11)
        child.terminate.side_effect = psutil.NoSuchProcess(11)
        parent.children.return_value = [child]

        with patch("wpbuild.engine.process.psutil.Process", return_value=parent), \
                patch("wpbuild.engine.process.psutil.wait_procs", return_value=([parent], [])):
            assert terminate_process_tree(10, "webpack") == []

        parent.terminate.assert_called_once()

import os
import unittest
from io import StringIO
from unittest.mock import MagicMock, patch

from llm_exec import runner
from llm_exec.errors import ExecutionError


class TestConfirm(unittest.TestCase):
    """Tests for the yes/no confirmation prompt."""

    def test_affirmative_answers(self):
        for answer in ("y", "Y", "yes", " YES ", "Yes\n"):
            with self.subTest(answer=answer):
                with patch("builtins.input", return_value=answer):
                    self.assertTrue(runner.confirm())

    def test_anything_else_declines(self):
        for answer in ("", "n", "no", "yep", "sure", "y y"):
            with self.subTest(answer=answer):
                with patch("builtins.input", return_value=answer):
                    self.assertFalse(runner.confirm())

    @patch("sys.stdout", new_callable=StringIO)
    @patch("builtins.input", side_effect=EOFError)
    def test_eof_declines(self, mock_input, mock_stdout):
        self.assertFalse(runner.confirm())

    @patch("sys.stdout", new_callable=StringIO)
    @patch("builtins.input", side_effect=KeyboardInterrupt)
    def test_interrupt_declines(self, mock_input, mock_stdout):
        self.assertFalse(runner.confirm())


class TestExecuteCommand(unittest.TestCase):
    """Tests for running the suggested command through the user's shell."""

    @patch.dict(os.environ, {"SHELL": "/usr/bin/zsh"})
    @patch("subprocess.run")
    def test_runs_through_interactive_shell(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)

        self.assertEqual(runner.execute_command("ls -la"), 0)
        mock_run.assert_called_once_with(["/usr/bin/zsh", "-i", "-c", "ls -la"])

    @patch.dict(os.environ, {}, clear=True)
    @patch("subprocess.run")
    def test_falls_back_to_sh(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)

        runner.execute_command("true")

        self.assertEqual(mock_run.call_args.args[0][0], "/bin/sh")

    @patch("subprocess.run")
    def test_propagates_exit_status(self, mock_run):
        mock_run.return_value = MagicMock(returncode=3)

        self.assertEqual(runner.execute_command("false"), 3)

    @patch("subprocess.run")
    def test_signal_maps_to_128_plus_signal(self, mock_run):
        mock_run.return_value = MagicMock(returncode=-2)

        self.assertEqual(runner.execute_command("sleep 100"), 130)

    @patch.dict(os.environ, {"SHELL": "/nonexistent/shell"})
    @patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory"))
    def test_missing_shell_raises_execution_error(self, mock_run):
        with self.assertRaises(ExecutionError) as cm:
            runner.execute_command("ls")

        self.assertIn("/nonexistent/shell", str(cm.exception))
        self.assertEqual(cm.exception.exit_code, 6)


@patch.dict(os.environ, {"COLUMNS": "80"}, clear=True)
class TestOutput(unittest.TestCase):
    """Output goes through rich; a cleared environment keeps it free of color codes."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_suggestion(self, mock_stdout):
        runner.print_suggestion("echo '[bold]not markup[/bold]'")

        output = mock_stdout.getvalue()
        self.assertIn("Suggested command:", output)
        self.assertIn("  echo '[bold]not markup[/bold]'", output)

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_dry_run(self, mock_stdout):
        runner.print_dry_run(
            {
                "model": "test-model",
                "max_tokens": 42,
                "messages": [{"role": "user", "content": "SYSTEM\n\nRequest: list files"}],
            }
        )

        output = mock_stdout.getvalue()
        self.assertIn("Model: test-model", output)
        self.assertIn("Max tokens: 42", output)
        self.assertIn("Request: list files", output)

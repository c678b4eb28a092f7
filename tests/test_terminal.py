"""Tests for the blessed terminal wrapper and the CLI entry point."""

import sys
from unittest.mock import MagicMock, patch

import blessed
import pytest

from hed import render
from hed.__main__ import main
from hed.settings import Settings
from hed.terminal import TerminalError, TerminalInterface


def test_compose_plain_terminal_output():
    terminal = TerminalInterface(blessed.Terminal(force_styling=None))
    out = terminal.compose([
        render.Text("hello"),
        render.EndLine(),
        render.Text("~"),
        render.EndLine(last=True),
        render.StatusLine("[-N] [No name]"),
        render.MessageLine("saved"),
    ])
    assert "hello\r\n~" in out
    assert "[-N] [No name]" in out
    assert out.endswith("saved")


def test_check_environment_requires_a_tty():
    terminal = TerminalInterface(blessed.Terminal(force_styling=None))
    with patch('hed.terminal.sys.stdin') as mock_stdin:
        mock_stdin.isatty.return_value = False
        with pytest.raises(TerminalError):
            terminal.check_environment()


def test_get_key_without_input_returns_none():
    terminal = TerminalInterface(blessed.Terminal(force_styling=None))
    assert terminal.get_key(timeout=0) is None


def test_version_flag(capsys):
    with patch.object(sys, 'argv', ['hed', '--version']):
        main()
    assert capsys.readouterr().out.startswith("hed ")


def test_terminal_error_exits_with_status_1(capsys):
    with patch.object(sys, 'argv', ['hed']):
        with patch('hed.settings.SettingsStore.load', return_value=Settings()):
            with patch('hed.editor.Editor.run', side_effect=TerminalError("stdin is not a terminal")):
                with pytest.raises(SystemExit) as excinfo:
                    main()
    assert excinfo.value.code == 1
    assert "stdin is not a terminal" in capsys.readouterr().err


def test_main_loads_file_argument():
    with patch.object(sys, 'argv', ['hed', 'notes.txt']):
        with patch('hed.settings.SettingsStore.load', return_value=Settings()):
            with patch('hed.editor.Editor.load_file') as mock_load:
                with patch('hed.editor.Editor.run') as mock_run:
                    main()
    mock_load.assert_called_once_with('notes.txt')
    mock_run.assert_called_once_with()


def test_draw_frame_replaces_undecodable_bytes(capsys):
    terminal = TerminalInterface(blessed.Terminal(force_styling=None))
    terminal.draw_frame([render.Text("caf\udce9")])
    assert capsys.readouterr().out == "caf?"

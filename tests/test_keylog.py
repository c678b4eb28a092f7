"""Tests for the keystroke log."""

from hed import keylog
from hed.keyboard import ESCAPE, KeyEvent, KeyType, alt, regular


def test_format_key():
    assert keylog.format_key(regular('a')) == 'a'
    assert keylog.format_key(ESCAPE) == '[esc]'
    assert keylog.format_key(alt('m')) == '[esc] m'
    assert keylog.format_key(KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw='\r')) == '[cr]'


def test_record_without_handler_writes_nothing(tmp_path):
    keylog.record(regular('a'))
    assert list(tmp_path.iterdir()) == []


def test_enable_record_disable(tmp_path):
    path = tmp_path / "logs" / "key.log"
    handler = keylog.enable(path)
    assert handler is not None
    try:
        keylog.record(regular('x'))
        keylog.record(ESCAPE)
    finally:
        keylog.disable(handler)

    assert path.read_text(encoding='utf-8').splitlines() == [
        "============= new stream ==========",
        "x",
        "[esc]",
    ]
    keylog.record(regular('y'))
    assert "y" not in path.read_text(encoding='utf-8').splitlines()


def test_default_log_path_is_named_key_log():
    assert keylog.default_log_path().name == "key.log"

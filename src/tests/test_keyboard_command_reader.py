import io

import pytest

from input_system import Command, CommandType, KeyboardCommandReader, ScriptedCommandReader


@pytest.fixture
def reader(logger):
    return KeyboardCommandReader(logger=logger, stdin=io.StringIO())


@pytest.mark.parametrize("key,expected", [
    ("0", Command(CommandType.ENTER_DIGIT, 0)),
    ("7", Command(CommandType.ENTER_DIGIT, 7)),
    ("\r", Command(CommandType.SUBMIT)),
    ("\x7f", Command(CommandType.DELETE)),
    ("s", Command(CommandType.START)),
    ("S", Command(CommandType.START)),
    ("n", Command(CommandType.NEXT_ROUND)),
    ("+", Command(CommandType.STEP_LEVEL, 1)),
    ("-", Command(CommandType.STEP_LEVEL, -1)),
    ("t", Command(CommandType.CYCLE_DURATION)),
    ("m", Command(CommandType.TOGGLE_SOUND)),
    ("r", Command(CommandType.SHOW_RULES)),
    ("c", Command(CommandType.CLOSE_RULES)),
    ("b", Command(CommandType.BACK_TO_SETUP)),
])
def test_key_translation(reader, key, expected):
    assert reader.translate_key(key) == expected


def test_unknown_key_gives_nothing(reader):
    assert reader.translate_key("z") is None
    assert reader.translate_key("٣") is None  # non-ASCII digit


def test_quit_needs_confirmation(reader):
    assert reader.translate_key("q") is None
    assert reader.quit_pending is True

    assert reader.translate_key("y") == Command(CommandType.QUIT)
    assert reader.quit_pending is False


def test_any_other_key_cancels_quit(reader):
    reader.translate_key("q")

    assert reader.translate_key("5") is None
    assert reader.quit_pending is False
    assert reader.translate_key("5") == Command(CommandType.ENTER_DIGIT, 5)


@pytest.mark.parametrize("key", ["x", "\x03"])
def test_exit_keys_request_exit(reader, key):
    assert reader.exit_requested is False

    assert reader.translate_key(key) is None
    assert reader.exit_requested is True


def test_setup_without_tty_raises(reader):
    with pytest.raises(RuntimeError):
        reader.setup()


def test_read_commands_without_setup_is_empty(reader):
    assert reader.read_commands() == []


def test_scripted_reader_replays_batches_then_exits():
    start = Command(CommandType.START)
    reader = ScriptedCommandReader([[start], []])

    assert reader.read_commands() == [start]
    assert reader.read_commands() == []
    assert reader.exit_requested is False
    assert reader.read_commands() == []
    assert reader.exit_requested is True


def test_command_str():
    assert str(Command(CommandType.START)) == "start"
    assert str(Command(CommandType.ENTER_DIGIT, 4)) == "enter_digit(4)"

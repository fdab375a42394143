import io

from display_system import ConsoleRenderer, format_marks, format_percent, format_time
from drill_system import Phase


def test_format_time():
    assert format_time(300) == "5:00"
    assert format_time(65) == "1:05"
    assert format_time(9) == "0:09"
    assert format_time(-3) == "0:00"


def test_format_percent():
    assert format_percent(1 / 3) == "33%"
    assert format_percent(0.75) == "75%"
    assert format_percent(1.5) == "100%"


def test_format_marks():
    assert format_marks("402", (True, False, True, None)) == "4 [0] 2 -"


def test_renders_only_changed_lines(make_harness):
    stream = io.StringIO()
    renderer = ConsoleRenderer(stream)
    harness = make_harness(sequences=[[1, 2, 3]])
    harness.machine.add_listener(renderer)

    renderer.render(harness.machine.snapshot())
    renderer.render(harness.machine.snapshot())

    lines = stream.getvalue().split("\r\n")
    assert lines[0].startswith("Start level 3")
    assert lines[1:] == [""]


def test_round_screens(make_harness):
    renderer = ConsoleRenderer(io.StringIO())
    harness = make_harness(sequences=[[1, 2, 3]], session_duration_seconds=60)
    machine = harness.machine

    machine.start()
    assert "Get ready... 3" in renderer.describe(machine.snapshot())

    harness.advance(2400)
    assert "Memorize: 1" in renderer.describe(machine.snapshot())
    harness.advance(800)
    assert "Memorize: _" in renderer.describe(machine.snapshot())

    harness.advance(2200)
    harness.type_answer([3, 2])
    assert "Reverse: 32" in renderer.describe(machine.snapshot())

    harness.type_answer([2])
    machine.submit()
    feedback = renderer.describe(machine.snapshot())
    assert "Level Down... Next: 3 digits." in feedback
    assert "Accuracy 67%" in feedback
    assert "Answer 321" in feedback
    assert "3 2 [2]" in feedback

    machine.quit()
    assert machine.phase is Phase.SUMMARY
    summary = renderer.describe(machine.snapshot())
    assert summary.startswith("Done! Max level 3")
    assert "Mean accuracy 67%" in summary


def test_rules_screen(make_harness):
    renderer = ConsoleRenderer(io.StringIO())
    harness = make_harness()

    harness.machine.show_rules()

    assert "REVERSE" in renderer.describe(harness.machine.snapshot())

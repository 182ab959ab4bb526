import re

import pytest

from racerep import logger
from racerep.logger import LogLevel

LINE_PATTERN = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] \[([A-Z]+)\] (.*)$")


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path, monkeypatch):
    logger.shutdown()
    monkeypatch.chdir(tmp_path)
    yield
    logger.shutdown()
    logger.set_level(LogLevel.INFO)


def read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_configure_writes_start_message_and_messages(tmp_path):
    path = tmp_path / "app.log"
    logger.configure(str(path))
    logger.info("hola")
    logger.shutdown()
    lines = read_lines(path)
    assert lines[0].endswith("[INFO] === iRacing Reputation System Started ===")
    assert lines[1].endswith("[INFO] hola")
    assert lines[-1].endswith("[INFO] === iRacing Reputation System Shutdown ===")
    for line in lines:
        assert LINE_PATTERN.match(line)


def test_level_labels(tmp_path):
    path = tmp_path / "levels.log"
    logger.configure(str(path), LogLevel.DEBUG)
    logger.debug("a")
    logger.warning("b")
    logger.critical("c")
    logger.error("d")
    parsed = [LINE_PATTERN.match(line).groups() for line in read_lines(path)[1:]]
    assert parsed == [("DEBUG", "a"), ("WARN", "b"), ("CRIT", "c"), ("ERROR", "d")]


def test_messages_below_min_level_are_dropped(tmp_path):
    path = tmp_path / "filter.log"
    logger.configure(str(path), LogLevel.WARNING)
    logger.info("hidden")
    logger.debug("hidden too")
    logger.warning("shown")
    text = path.read_text(encoding="utf-8")
    assert "hidden" not in text
    assert "[WARN] shown" in text


def test_set_level_changes_filtering(tmp_path):
    path = tmp_path / "set.log"
    logger.configure(str(path))
    logger.debug("before")
    logger.set_level(LogLevel.DEBUG)
    logger.debug("after")
    text = path.read_text(encoding="utf-8")
    assert "before" not in text
    assert "[DEBUG] after" in text


def test_first_message_opens_default_file(tmp_path, capsys):
    default = tmp_path / "iRacingReputation.log"
    assert not default.exists()
    logger.info("lazy")
    console = capsys.readouterr().out.strip().splitlines()
    assert LINE_PATTERN.match(console[-1]).groups() == ("INFO", "lazy")
    last = read_lines(default)[-1]
    assert LINE_PATTERN.match(last).groups() == ("INFO", "lazy")
    assert last == console[-1]


def test_messages_go_to_console(tmp_path, capsys):
    logger.configure(str(tmp_path / "console.log"))
    capsys.readouterr()
    logger.error("boom")
    out = capsys.readouterr().out.strip()
    assert out.endswith("[ERROR] boom")


def test_reconfigure_appends(tmp_path):
    path = tmp_path / "append.log"
    logger.configure(str(path))
    logger.info("first")
    logger.shutdown()
    logger.configure(str(path))
    logger.info("second")
    messages = [LINE_PATTERN.match(line).group(2) for line in read_lines(path)]
    assert "first" in messages
    assert "second" in messages
    assert messages.index("first") < messages.index("second")


def test_set_level_rejects_unknown_level():
    with pytest.raises(ValueError):
        logger.set_level(42)
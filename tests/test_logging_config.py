"""Tests for logging setup."""

import json
import logging

import pytest

from core.logging_config import DialogLoggerAdapter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_records_written_to_file(self, restore_root_logger, tmp_path) -> None:
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(log_level="debug", log_file=str(log_file), json_format=True, app_name="Helpline")

        adapter = DialogLoggerAdapter(get_logger("forms.dialog"), {"dialog": "Add User", "session": 3})
        adapter.info("Dialog opened")
        for handler in restore_root_logger.handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["level"] == "INFO"
        assert record["name"] == "forms.dialog"
        assert record["message"] == "Dialog opened"
        assert record["dialog"] == "Add User"
        assert record["session"] == 3
        assert record["app"] == "Helpline"
        assert "timestamp" in record

    def test_text_lines_carry_dialog_context(self, restore_root_logger, tmp_path) -> None:
        log_file = tmp_path / "app.log"
        setup_logging(log_file=str(log_file), json_format=False)

        get_logger("main").info("Started")
        DialogLoggerAdapter(get_logger("forms.dialog"), {"dialog": "Add User", "session": 2}).info("Dialog opened")
        for handler in restore_root_logger.handlers:
            handler.flush()

        started, opened = log_file.read_text().strip().splitlines()
        assert started.endswith("main: Started")
        assert opened.endswith("forms.dialog: Dialog opened [dialog=Add User session=2]")

    def test_replaces_existing_handlers(self, restore_root_logger) -> None:
        setup_logging(json_format=False)
        setup_logging(json_format=False)
        assert len(restore_root_logger.handlers) == 1
        assert logging.getLogger("streamlit").level == logging.WARNING


class TestDialogLoggerAdapter:
    """Tests for DialogLoggerAdapter."""

    def test_explicit_extra_wins(self) -> None:
        adapter = DialogLoggerAdapter(get_logger("test"), {"dialog": "Add User", "session": 1})
        _, kwargs = adapter.process("msg", {"extra": {"session": 9}})
        assert kwargs["extra"] == {"dialog": "Add User", "session": 9}

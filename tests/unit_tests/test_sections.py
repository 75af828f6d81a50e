"""
Section nesting and indentation tests.
"""

from __future__ import annotations

import pytest

from mulog.config import LoggingSettings
from mulog.core import SectionLogger
from mulog.exceptions import UninitializedSection, UserError


class TestSectionNesting:
    """STARTED/COMPLETED pairs"""

    def test_nested_sections(self, file_logger, read_lines, strip) -> None:
        file_logger.start("A")
        file_logger.start("B")
        file_logger.complete()
        file_logger.complete()

        assert file_logger.titles == ()
        assert [strip(line) for line in read_lines()] == [
            " STATUS STARTED A",
            " STATUS     STARTED B",
            " STATUS     COMPLETED B",
            " STATUS COMPLETED A",
            "",
        ]

    def test_records_inside_sections_use_current_depth(self, file_logger, read_lines, strip) -> None:
        file_logger.start("Outer")
        file_logger.info("one")
        file_logger.start("Inner")
        file_logger.warning("two")
        file_logger.complete()
        file_logger.status("three")

        lines = [strip(line) for line in read_lines()]
        assert lines[1] == "   INFO     one"
        assert lines[3] == "WARNING         two"
        assert lines[5] == " STATUS     three"

    def test_blank_line_only_after_outermost(self, file_logger, read_lines) -> None:
        file_logger.start("A")
        file_logger.start("B")
        file_logger.complete()
        assert "" not in read_lines()
        file_logger.complete()
        assert read_lines()[-1] == ""

    def test_title_parts_joined(self, file_logger) -> None:
        file_logger.start(["Step", 3, "of", 5])
        assert file_logger.titles == ("Step 3 of 5",)

    def test_sequential_top_level_sections(self, file_logger, read_lines, strip) -> None:
        for name in ("first", "second"):
            file_logger.start(name)
            file_logger.complete()
        assert [strip(line) for line in read_lines()] == [
            " STATUS STARTED first",
            " STATUS COMPLETED first",
            "",
            " STATUS STARTED second",
            " STATUS COMPLETED second",
            "",
        ]

    def test_custom_indent_unit(self, tmp_path, sampler, strip) -> None:
        path = tmp_path / "tabs.log"
        logger = SectionLogger(LoggingSettings(indent="\t", disk_path=str(tmp_path)), sampler)
        logger.init(str(path), title="A")
        logger.report_memory = False
        logger.info("x")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert strip(lines[1]) == "   INFO \tx"


class TestCompleteWithoutSection:
    """complete() on an empty stack"""

    def test_logs_error_and_raises(self, file_logger, read_lines, strip) -> None:
        with pytest.raises(UninitializedSection) as exc_info:
            file_logger.complete()
        assert exc_info.value.text == "No section to complete"
        assert [strip(line) for line in read_lines()] == ["  ERROR No section to complete"]

    def test_is_catchable_as_user_error(self, file_logger) -> None:
        with pytest.raises(UserError):
            file_logger.complete()

    def test_logger_remains_usable(self, file_logger, read_lines) -> None:
        with pytest.raises(UninitializedSection):
            file_logger.complete()
        file_logger.start("later")
        file_logger.complete()
        assert file_logger.titles == ()
        assert len(read_lines()) == 4

    def test_uninitialized_logger_auto_initializes(self, section_logger, capsys) -> None:
        with pytest.raises(UninitializedSection):
            section_logger.complete()
        assert section_logger.is_initialized()
        assert "ERROR No section to complete" in capsys.readouterr().out

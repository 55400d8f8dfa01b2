"""Tests for the attribute file reader."""

import pytest

from bridge.ingest.value_reader import parse_value, read_value
from shared.schemas import ReadStatus


class TestParseValue:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("21.5", 21.5),
            ("21.5\n", 21.5),
            ("  -3 ", -3.0),
            ("2.9e0", 2.9),
        ],
    )
    def test_numbers(self, text, expected):
        assert parse_value(text) == expected

    @pytest.mark.parametrize("text", ["", "\n", "abc", "NaN", "nan", "inf", "21.5 C"])
    def test_not_numbers(self, text):
        assert parse_value(text) is None


class TestReadValue:
    async def test_reads_value(self, make_device):
        device_dir = make_device(value="21.5\n")

        outcome = await read_value(device_dir, "value")

        assert outcome.status == ReadStatus.VALUE
        assert outcome.value == 21.5

    async def test_missing_file(self, make_device):
        device_dir = make_device()

        outcome = await read_value(device_dir, "batt")

        assert outcome.status == ReadStatus.MISSING_FILE
        assert outcome.cause

    async def test_missing_directory(self, tmp_path):
        outcome = await read_value(tmp_path / "nowhere", "value")
        assert outcome.status == ReadStatus.MISSING_FILE

    async def test_unreadable_when_path_is_directory(self, make_device):
        device_dir = make_device()
        (device_dir / "value").mkdir()

        outcome = await read_value(device_dir, "value")

        assert outcome.status == ReadStatus.UNREADABLE_FILE

    async def test_unreadable_when_not_utf8(self, make_device):
        device_dir = make_device()
        (device_dir / "value").write_bytes(b"\xff\xfe\x00")

        outcome = await read_value(device_dir, "value")

        assert outcome.status == ReadStatus.UNREADABLE_FILE

    async def test_empty_file_is_not_a_number(self, make_device):
        device_dir = make_device(value="")

        outcome = await read_value(device_dir, "value")

        assert outcome.status == ReadStatus.NOT_A_NUMBER
        assert outcome.value is None

    async def test_nan_text_is_not_a_number(self, make_device):
        device_dir = make_device(batt="NaN")

        outcome = await read_value(device_dir, "batt")

        assert outcome.status == ReadStatus.NOT_A_NUMBER

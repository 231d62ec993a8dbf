from datetime import date

import pytest

from gallery.services.metadata import extract_capture_date, parse_exif_date
from tests.imaging import make_jpeg, make_png


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2021:05:01 10:11:12", date(2021, 5, 1)),
        ("2021:05:01 10:11:12.345+02:00", date(2021, 5, 1)),
        (b"2019:12:31 23:59:59\x00", date(2019, 12, 31)),
        ("2020-02-29T08:00:00", date(2020, 2, 29)),
        ("2020:02:29", date(2020, 2, 29)),
    ],
)
def test_parse_exif_date_accepts_common_forms(raw, expected):
    assert parse_exif_date(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "    ", "0000:00:00 00:00:00", "yesterday", 42])
def test_parse_exif_date_rejects_garbage(raw):
    assert parse_exif_date(raw) is None


def test_extracts_generic_datetime_tag():
    outcome = extract_capture_date(make_jpeg(datetime_tag="2019:06:15 08:30:00"))

    assert outcome.ok
    assert outcome.value == date(2019, 6, 15)


def test_original_capture_time_wins_over_other_tags():
    data = make_jpeg(
        datetime_tag="2022:01:01 00:00:00",
        digitized_tag="2021:01:01 00:00:00",
        original_tag="2020:07:04 12:00:00",
    )

    assert extract_capture_date(data).value == date(2020, 7, 4)


def test_digitized_time_used_when_original_missing():
    data = make_jpeg(datetime_tag="2022:01:01 00:00:00", digitized_tag="2021:03:02 00:00:00")

    assert extract_capture_date(data).value == date(2021, 3, 2)


def test_unparsable_tag_falls_through_to_next():
    data = make_jpeg(datetime_tag="2018:08:08 08:08:08", original_tag="0000:00:00 00:00:00")

    assert extract_capture_date(data).value == date(2018, 8, 8)


def test_image_without_metadata_is_unavailable():
    outcome = extract_capture_date(make_png())

    assert not outcome.ok
    assert outcome.value is None
    assert outcome.reason


def test_non_image_bytes_never_raise():
    outcome = extract_capture_date(b"definitely not an image")

    assert not outcome.ok

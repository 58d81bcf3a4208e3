from datetime import timedelta

from ragparsers.core.processor.vtt_handler import (
    VTTHandler,
    format_duration,
    parse_cues,
    parse_timestamp,
)

TRANSCRIPT = """WEBVTT

1
00:00:01.000 --> 00:00:03.500
<v Alice>Hello everyone</v>

intro-2
00:01:00.000 --> 00:01:02.000 align:start
Second line
continues here
"""


def convert(text, make_file, encoding="utf-8"):
    return VTTHandler().extract(make_file(text.encode(encoding), "talk.vtt"))


def test_transcript(make_file):
    assert convert(TRANSCRIPT, make_file).output == (
        "> [00:00:01.000 / 00:00:02.500]\n"
        "\n"
        "**Alice:** Hello everyone\n"
        "\n"
        "> [00:01:00.000 / 00:00:02.000]\n"
        "\n"
        "Second line\n"
        "continues here"
    )


def test_hour_timestamps_and_voice_class(make_file):
    text = "WEBVTT\n\n01:00:00.000 --> 01:00:01.250\n<v.loud Bob>Hey\n"
    assert convert(text, make_file).output == "> [01:00:00.000 / 00:00:01.250]\n\n**Bob:** Hey"


def test_cues_without_text_are_dropped():
    cues = parse_cues("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n\n00:00:03.000 --> 00:00:04.000\nKept\n")
    assert len(cues) == 1
    assert cues[0].lines == ["Kept"]


def test_byte_order_mark_and_latin1_fallback(make_file):
    text = "WEBVTT\n\n00:00:00.000 --> 00:00:01.000\ncafé\n"
    assert convert(text, make_file, encoding="utf-8-sig").output.endswith("café")
    assert convert(text, make_file, encoding="latin-1").output.endswith("café")


def test_timestamps():
    assert parse_timestamp("00:01:02.500") == timedelta(minutes=1, seconds=2.5)
    assert parse_timestamp("01:02.500") == timedelta(minutes=1, seconds=2.5)
    assert format_duration(timedelta(hours=1, milliseconds=5)) == "01:00:00.005"
    assert format_duration(timedelta(seconds=-1)) == "00:00:00.000"


def test_empty_file(make_file):
    assert VTTHandler().extract(make_file(b"", "empty.vtt")).output == ""

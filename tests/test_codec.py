# tests/test_codec.py
import json

import pytest

from storyboardcreator.core.errors import StoryboardFormatError
from storyboardcreator.core.models import Shot
from storyboardcreator.storage.codec import (
    FORMAT_VERSION,
    JsonMetadataCodec,
    StoryboardRecord,
)


def test_encode_decode_preserves_schema():
    rec = StoryboardRecord(
        title="Pilot: 第一集",
        author="A. Writer",
        shots=[
            Shot(title="Open", body="Wide shot", image_file_name="0.png"),
            Shot(title="Close-up", body=""),
        ],
    )
    codec = JsonMetadataCodec()
    data = codec.encode(rec)
    assert isinstance(data, bytes)

    raw = json.loads(data.decode("utf-8"))
    assert set(raw) == {"format_version", "title", "author", "shots"}
    assert raw["shots"][1]["image_file_name"] is None

    back = codec.decode(data)
    assert back == rec
    assert back.format_version == FORMAT_VERSION


def test_missing_optional_fields_default():
    back = JsonMetadataCodec().decode(b'{"title": "T", "shots": [{"title": "s"}]}')
    assert back.author == ""
    assert back.shots == [Shot(title="s")]


@pytest.mark.parametrize(
    "payload",
    [
        b"\xff\xfe not utf8",
        b"{not json",
        b"[]",
        b'{"title": 3}',
        b'{"shots": {}}',
        b'{"shots": ["x"]}',
        b'{"shots": [{"image_file_name": 5}]}',
        b'{"shots": [{"body": null}]}',
        b'{"format_version": "1"}',
        b'{"format_version": 999}',
    ],
)
def test_malformed_records_raise_format_error(payload):
    with pytest.raises(StoryboardFormatError):
        JsonMetadataCodec().decode(payload)

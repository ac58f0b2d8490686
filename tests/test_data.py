import pytest

from snapmatch import Data, DataFormat, DataError


@pytest.mark.parametrize(
    "name, fmt",
    [
        ("out.txt", DataFormat.TEXT),
        ("out.json", DataFormat.JSON),
        ("out.JSON5", DataFormat.JSON),
        ("out.jsonl", DataFormat.JSON_LINES),
        ("screen.svg", DataFormat.TERM_SVG),
        ("stdout", DataFormat.TEXT),
    ],
)
def test_format_from_path(name, fmt):
    assert DataFormat.from_path(name) is fmt


def test_read_text(write_file):
    path = write_file("out.txt", "Hello\nWorld\n")
    data = Data.try_read_from(path)
    assert data.format is DataFormat.TEXT
    assert data.inner == "Hello\nWorld\n"
    assert data.source == path


def test_read_json5(write_file):
    path = write_file("expected.json5", "{name: 'demo', items: [1, 2, '{...}'],}")
    data = Data.try_read_from(path)
    assert data.format is DataFormat.JSON
    assert data.inner == {"name": "demo", "items": [1, 2, "{...}"]}


def test_read_json_lines(write_file):
    path = write_file("events.jsonl", '{"event": "start"}\n\n{"event": "stop"}\n')
    data = Data.try_read_from(path)
    assert data.inner == [{"event": "start"}, {"event": "stop"}]


def test_non_utf8_text_loads_as_binary(write_file):
    path = write_file("blob.txt", b"\xff\xfe\x00")
    data = Data.try_read_from(path)
    assert data.format is DataFormat.BINARY
    assert data.render() is None


def test_format_override(write_file):
    path = write_file("expected.txt", '{"a": 1}')
    data = Data.try_read_from(path, DataFormat.JSON)
    assert data.inner == {"a": 1}


def test_malformed_json_raises(write_file):
    path = write_file("bad.json", "{not json")
    with pytest.raises(DataError):
        Data.try_read_from(path)


def test_missing_file_reads_as_error(tmp_path):
    data = Data.read_from(tmp_path / "missing.txt")
    assert data.is_error
    assert "missing.txt" in data.inner
    assert data.render() is None


def test_render_json():
    assert Data.json({"a": [1]}).render() == '{\n  "a": [\n    1\n  ]\n}\n'


def test_render_json_lines():
    assert Data.json_lines([{"a": 1}, 2]).render() == '{"a": 1}\n2\n'


def test_write_and_reload(tmp_path):
    path = tmp_path / "snapshots" / "out.json"
    Data.json({"a": "{...}"}).write_to(path)
    assert Data.try_read_from(path).inner == {"a": "{...}"}
    assert not path.with_suffix(".json.tmp").exists()


def test_write_binary(tmp_path):
    path = tmp_path / "out.bin"
    Data.binary(b"\x00\x01").write_to(path)
    assert path.read_bytes() == b"\x00\x01"


def test_write_error_data_refused(tmp_path):
    with pytest.raises(DataError):
        Data.error("boom").write_to(tmp_path / "out.txt")


def test_json_lines_keep_unicode_line_separators_in_strings(write_file):
    path = write_file("events.jsonl", '{"msg": "a\u2028b"}\n{"n": 2}\n')
    data = Data.try_read_from(path)
    assert data.inner == [{"msg": "a\u2028b"}, {"n": 2}]

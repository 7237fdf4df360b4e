import json

import pytest

from vivatech.extract import (
    ExtractionError,
    extract_embedded_json,
    find_embedded_array,
    unescape_unicode,
)


def _escape(text):
    return json.dumps(text, ensure_ascii=True)[1:-1]


def _embed(data):
    body = json.dumps(data, separators=(",", ":"), ensure_ascii=True)
    return body.replace('"', '\\"')


def test_unescape_ampersand():
    assert unescape_unicode("a\\u0026b") == "a&b"


@pytest.mark.parametrize(
    "original",
    ["plain text", "line\nbreak\ttab\rret", 'quote " and \\ slash', "Café Ünïcode ∑"],
)
def test_unescape_round_trip(original):
    assert unescape_unicode(_escape(original)) == original


@pytest.mark.parametrize(
    "text",
    ["\\uZZZZ", "\\q", "abc\\", "\\ud800", "\\u12", "\\uDFFFx"],
)
def test_undecodable_escapes_are_kept(text):
    assert unescape_unicode(text) == text


def test_unescape_without_escapes_is_identity():
    text = "nothing to do here"
    assert unescape_unicode(text) == text


def test_find_embedded_array_returns_raw_slice():
    raw = '[{\\"id\\":\\"1\\",\\"tags\\":[\\"x\\",\\"y\\"]}]'
    html = "<script>self.push(" + raw + ")</script>[trailing]"
    assert find_embedded_array(html) == raw


def test_find_embedded_array_picks_first_array():
    first = '[{\\"id\\":\\"a\\"}]'
    second = '[{\\"id\\":\\"b\\"}]'
    assert find_embedded_array("x" + first + "y" + second) == first


def test_find_embedded_array_missing():
    assert find_embedded_array("<html><body>no data</body></html>") is None


def test_find_embedded_array_unterminated():
    assert find_embedded_array('<p>[{\\"id\\":\\"1\\"}') is None


def test_extract_embedded_json_round_trip():
    data = [
        {"id": "1", "name": "Café", "tags": ["ai", "web"]},
        {"id": "2", "name": "Second", "tags": []},
    ]
    html = "<html>" + _embed(data) + "</html>"
    assert json.loads(extract_embedded_json(html)) == data


def test_extract_embedded_json_missing_raises():
    with pytest.raises(ExtractionError):
        extract_embedded_json("<html></html>")
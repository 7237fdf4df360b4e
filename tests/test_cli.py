import csv
import json

import pytest
import requests
import responses

from vivatech.cli import (
    DEBUG_HTML_FILE,
    USER_AGENT,
    fetch_page_content,
    main,
    run_partners,
    run_speakers,
    save_debug_html,
)
from vivatech.extract import ExtractionError
from vivatech.partners import NoPartnerDataError

PAGE_URL = "https://conference.example.com/page"

SPEAKERS = [
    {
        "id": "1",
        "firstname": "Ada",
        "lastname": "Lovelace",
        "jobTitle": "Engineer",
        "company": "Analytical",
        "tags": ["math", "code"],
    },
    {
        "id": "2",
        "firstname": "Alan",
        "lastname": "Turing",
        "jobTitle": "Researcher",
        "company": "Bletchley",
        "email": "alan@example.com",
    },
]

PARTNERS = [
    {"id": "p1", "name": "Acme", "type": "partner", "key_figures": {"city": "Berlin"}},
    {"id": "p2", "name": "Person", "type": "speaker"},
]


def _page(items):
    payload = json.dumps(items, separators=(",", ":")).replace('"', '\\"')
    return f'<html><script>var data = "{payload}";</script></html>'


def _read_csv(path):
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def test_fetch_returns_body_and_sends_user_agent():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body="<html>hello</html>", status=200)
        body = fetch_page_content(PAGE_URL)
        sent = rsps.calls[0].request.headers["User-Agent"]
    assert body == "<html>hello</html>"
    assert sent == USER_AGENT


def test_fetch_honours_charset():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            PAGE_URL,
            body="Caf\u00e9".encode("latin-1"),
            content_type="text/html; charset=iso-8859-1",
        )
        assert fetch_page_content(PAGE_URL) == "Caf\u00e9"


def test_fetch_non_success_raises():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body="gone", status=404)
        with pytest.raises(requests.HTTPError, match="404"):
            fetch_page_content(PAGE_URL)


def test_save_debug_html(tmp_path, capsys):
    target = tmp_path / "debug.html"
    save_debug_html("<p>x</p>", target)
    assert target.read_text(encoding="utf-8") == "<p>x</p>"
    assert str(target) in capsys.readouterr().out


def test_run_speakers_writes_csv(tmp_path):
    output = tmp_path / "speakers.csv"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body=_page(SPEAKERS))
        count = run_speakers(PAGE_URL, output)
    rows = _read_csv(output)
    assert count == 2
    assert [row["LastName"] for row in rows] == ["Lovelace", "Turing"]
    assert rows[0]["Tags"] == "math, code"
    assert rows[1]["Email"] == "alan@example.com"
    assert rows[0]["ImageMainURL"] == "N/A"


def test_run_speakers_saves_debug_page_on_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    body = "<html>no data</html>"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body=body)
        with pytest.raises(ExtractionError):
            run_speakers(PAGE_URL, tmp_path / "out.csv")
    assert (tmp_path / DEBUG_HTML_FILE).read_text(encoding="utf-8") == body
    assert not (tmp_path / "out.csv").exists()


def test_run_partners_writes_csv(tmp_path):
    output = tmp_path / "partners.csv"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body=_page(PARTNERS))
        count = run_partners(PAGE_URL, output)
    rows = _read_csv(output)
    assert count == 1
    assert rows[0]["CompanyName"] == "Acme"
    assert rows[0]["Country"] == "Germany"


def test_run_partners_without_data_raises(tmp_path):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body="<html></html>")
        with pytest.raises(NoPartnerDataError):
            run_partners(PAGE_URL, tmp_path / "p.csv")


def test_main_speakers(tmp_path, capsys):
    output = tmp_path / "s.csv"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body=_page(SPEAKERS))
        status = main(["--url", PAGE_URL, "-o", str(output)])
    assert status == 0
    assert len(_read_csv(output)) == 2
    assert "Found 2 speakers" in capsys.readouterr().out


def test_main_partners(tmp_path, capsys):
    output = tmp_path / "p.csv"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body=_page(PARTNERS))
        status = main(["partners", "--url", PAGE_URL, "--output", str(output), "-vv"])
    assert status == 0
    assert [row["CompanyName"] for row in _read_csv(output)] == ["Acme"]
    assert "Found 1 partners" in capsys.readouterr().out


def test_main_reports_http_error(tmp_path, capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PAGE_URL, body="boom", status=500)
        status = main(["--url", PAGE_URL, "-o", str(tmp_path / "x.csv")])
    assert status == 1
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "500" in err


def test_main_rejects_unknown_target():
    with pytest.raises(SystemExit) as info:
        main(["exhibitors"])
    assert info.value.code == 2
import io
import json

import pytest

from htmlview.main import main

PAGE = ('<html><body><div id="nav"><a href="/a" title="A">Alpha</a>'
        '<a href="/b">Beta</a></div><p class="note">Note</p><img src="i.png"></body></html>')


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return str(path)


def test_links(page, capsys):
    assert main([page, "--links"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"text": "Alpha", "href": "/a", "title": "A"},
        {"text": "Beta", "href": "/b", "title": ""},
    ]


def test_select_summary(page, capsys):
    assert main([page, "--select", ".note"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"index": 0, "tag": "P", "id": None, "class_name": "note",
         "text_content": "Note", "attributes": {"class": "note"}},
    ]


def test_select_outer_html(page, capsys):
    assert main([page, "-s", "img, .note", "--html", "outer"]) == 0
    assert capsys.readouterr().out.splitlines() == ['<img src="i.png" />', '<p class="note">Note</p>']


def test_select_first_inner_html(page, capsys):
    assert main([page, "-s", "a[href]", "--first", "--html", "inner"]) == 0
    assert capsys.readouterr().out == "Alpha\n"


def test_unsupported_selector_is_no_match(page, capsys):
    assert main([page, "-s", "div a"]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_strict_selector_error(page, capsys):
    assert main([page, "-s", "div a", "--strict"]) == 1
    assert capsys.readouterr().out == ""


def test_strict_from_config_file(page, tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"selector": {"strict": True}}))
    assert main([page, "-s", "a:hover", "--config", str(config)]) == 1


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.html")]) == 1


def test_empty_input(tmp_path, capsys):
    path = tmp_path / "empty.html"
    path.write_text("")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "[]\n"


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(PAGE.encode("utf-8"))))
    assert main(["-s", "#nav", "--html", "outer"]) == 0
    assert capsys.readouterr().out.startswith('<div id="nav"><a href="/a" title="A">Alpha</a>')


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "htmlview 1.0.0" in capsys.readouterr().out


def test_malformed_config_file(page, tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text("{not json")
    assert main([page, "--config", str(config)]) == 1
    assert capsys.readouterr().out == ""


def test_unknown_union_dedup_mode(page, tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"selector": {"union_dedup": "fuzzy"}}))
    assert main([page, "-s", "a", "--config", str(config)]) == 1
    assert capsys.readouterr().out == ""

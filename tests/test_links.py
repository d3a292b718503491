import pytest
import responses

from workbook.links import (
    FetchError,
    extract,
    fetch,
    fetch_main,
    find_links,
    findlinks_main,
)

PAGE = (
    '<html><body><a href="/x">x</a><a name="skip">s</a>'
    '<a href="http://example.org/y">y</a></body></html>'
)


def test_extract_resolves_links_against_page_url():
    url = "http://example.com/dir/page"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body=PAGE, content_type="text/html")
        links = extract(url)
    assert links == ["http://example.com/x", "http://example.org/y"]


def test_extract_rejects_non_ok_status():
    url = "http://example.com/gone"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body="nope", status=404)
        with pytest.raises(FetchError) as info:
            extract(url)
    assert str(info.value).startswith(f"getting {url}: 404")


def test_extract_wraps_connection_errors():
    with responses.RequestsMock():
        with pytest.raises(FetchError) as info:
            extract("http://example.com/unreachable")
    assert str(info.value).startswith('Get "http://example.com/unreachable"')


def test_find_links_returns_raw_hrefs():
    url = "http://example.com/dir/page"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body=PAGE, content_type="text/html")
        assert find_links(url) == ["/x", "http://example.org/y"]


def test_find_links_rejects_non_ok_status():
    url = "http://example.com/broken"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body="", status=500)
        with pytest.raises(FetchError) as info:
            find_links(url)
    assert str(info.value).startswith(f"getting {url}: 500")


def test_fetch_saves_file_named_after_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    url = "http://example.com/files/data.bin"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body=b"abc")
        assert fetch(url) == ("data.bin", 3)
    assert (tmp_path / "data.bin").read_bytes() == b"abc"


def test_fetch_root_is_saved_as_index(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    url = "http://example.com/"
    body = b"<p>home</p>"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body=body)
        local, n = fetch(url)
    assert local == "index.html"
    assert n == len(body)
    assert (tmp_path / "index.html").read_bytes() == body


def test_fetch_main_reports_result(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    url = "http://example.com/files/data.bin"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body=b"abc")
        assert fetch_main([url]) == 0
    assert capsys.readouterr().err == f"{url} => data.bin (3 bytes).\n"


def test_fetch_main_reports_errors(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    url = "http://example.com/unreachable"
    with responses.RequestsMock():
        assert fetch_main([url]) == 0
    assert capsys.readouterr().err.startswith(f"fetch {url}: ")


def test_findlinks_main_prints_links_and_errors(capsys):
    good = "http://example.com/dir/page"
    bad = "http://example.com/broken"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, good, body=PAGE, content_type="text/html")
        rsps.add(responses.GET, bad, body="", status=500)
        assert findlinks_main([good, bad]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["/x", "http://example.org/y"]
    assert captured.err.startswith(f"findlinks2: getting {bad}: 500")
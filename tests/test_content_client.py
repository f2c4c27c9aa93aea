import pytest
import responses

from paperchat.clients.base import ClientError, NotFoundError
from paperchat.clients.content import ContentClient
from paperchat.core.index import build_index
from paperchat.core.models import Confident
from paperchat.core.router import route


def test_fetch_text_reads_relative_locator_from_root(tmp_path):
    (tmp_path / "paper_text").mkdir()
    (tmp_path / "paper_text" / "p1.txt").write_text("Abstract: results.", encoding="utf-8")

    client = ContentClient(root=tmp_path)

    assert client.fetch_text("paper_text/p1.txt") == "Abstract: results."


def test_fetch_text_missing_file_raises_not_found(tmp_path):
    client = ContentClient(root=tmp_path)

    with pytest.raises(NotFoundError):
        client.fetch_text("missing.txt")


def test_fetch_json_decodes_feed_and_rejects_invalid_json(tmp_path):
    (tmp_path / "papers.json").write_text('[{"id": "p1", "title": "T"}]', encoding="utf-8")
    (tmp_path / "broken.json").write_text("[{", encoding="utf-8")
    client = ContentClient(root=tmp_path)

    assert client.fetch_json("papers.json") == [{"id": "p1", "title": "T"}]
    with pytest.raises(ClientError):
        client.fetch_json("broken.json")


def test_resolve_joins_relative_locators_to_base_url():
    client = ContentClient(base_url="http://docs.test/site")

    assert client.resolve("paper_text/p1.txt") == "http://docs.test/site/paper_text/p1.txt"
    assert client.resolve("https://cdn.test/p2.txt") == "https://cdn.test/p2.txt"


@responses.activate
def test_fetch_text_over_http():
    responses.add(responses.GET, "http://docs.test/context.txt", body="Profile text", status=200)
    client = ContentClient(base_url="http://docs.test")

    assert client.fetch_text("context.txt") == "Profile text"
    assert len(responses.calls) == 1


@responses.activate
def test_fetch_text_http_404_raises_not_found():
    responses.add(responses.GET, "http://docs.test/paper_text/p9.txt", status=404)
    client = ContentClient(base_url="http://docs.test/")

    with pytest.raises(NotFoundError):
        client.fetch_text("paper_text/p9.txt")


@responses.activate
def test_fetch_text_decodes_utf8_when_no_charset_is_declared():
    body = "Name: José Núñez – Lecturer"
    responses.add(
        responses.GET,
        "http://docs.test/context.txt",
        body=body.encode("utf-8"),
        content_type="text/plain",
    )
    client = ContentClient(base_url="http://docs.test")

    assert client.fetch_text("context.txt") == body


@responses.activate
def test_fetch_text_honours_a_declared_charset():
    responses.add(
        responses.GET,
        "http://docs.test/context.txt",
        body="Café".encode("latin-1"),
        content_type="text/plain; charset=ISO-8859-1",
    )
    client = ContentClient(base_url="http://docs.test")

    assert client.fetch_text("context.txt") == "Café"


@responses.activate
def test_fetch_json_over_http_keeps_accented_titles_routable():
    feed = '[{"id": "p1", "title": "Señales – Detección de Noticias"}]'
    responses.add(
        responses.GET,
        "http://docs.test/papers.json",
        body=feed.encode("utf-8"),
        content_type="text/plain",
    )
    client = ContentClient(base_url="http://docs.test")

    documents = client.fetch_json("papers.json")

    assert documents == [{"id": "p1", "title": "Señales – Detección de Noticias"}]
    assert route("tell me about Señales – Detección de Noticias", build_index(documents)) == Confident(
        id="p1", title="Señales – Detección de Noticias"
    )


@responses.activate
def test_fetch_json_over_http_rejects_invalid_json():
    responses.add(responses.GET, "http://docs.test/papers.json", body="[{", content_type="application/json")
    client = ContentClient(base_url="http://docs.test")

    with pytest.raises(ClientError):
        client.fetch_json("papers.json")

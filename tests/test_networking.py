import pytest
import requests

from courtvision.core import SessionStats
from courtvision.networking import (
    ApiClient, InvalidURLError, TransportError, ServerError, InsightsError, RemoteInsightsService
)

from conftest import FakeSession, FakeResponse, HtmlJsonResponse


@pytest.mark.parametrize("base_url", [None, "", "ftp://example.com"])
def test_invalid_base_url(base_url):
    client = ApiClient(base_url, session=FakeSession())
    with pytest.raises(InvalidURLError):
        client.get("insights")


def test_builds_url_and_returns_json():
    session = FakeSession(FakeResponse(body={'ok': True}))
    client = ApiClient("https://api.example.com/v1/", timeout=3, session=session)

    assert client.get("/status") == {'ok': True}
    assert session.requests == [("GET", "https://api.example.com/v1/status", None, 3)]


def test_text_response():
    client = ApiClient("http://localhost", session=FakeSession(FakeResponse(text="pong")))
    assert client.get("ping") == "pong"


def test_server_error():
    client = ApiClient("http://localhost", session=FakeSession(FakeResponse(status_code=503, body={})))

    with pytest.raises(ServerError) as excinfo:
        client.get("insights")
    assert excinfo.value.status_code == 503


def test_transport_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    client = ApiClient("http://localhost", session=session)

    with pytest.raises(TransportError):
        client.post("insights", {})


def test_remote_insights_posts_stats():
    session = FakeSession(FakeResponse(body={'insights': "Keep your elbow in."}))
    service = RemoteInsightsService(ApiClient("http://localhost", session=session))
    stats = SessionStats(total_attempts=2, total_makes=1)

    assert service.fetch_insights(stats) == "Keep your elbow in."
    method, url, payload, _ = session.requests[0]
    assert method == "POST"
    assert url == "http://localhost/insights"
    assert payload['total_attempts'] == 2


def test_remote_insights_wraps_api_errors():
    service = RemoteInsightsService(ApiClient(None))
    with pytest.raises(InsightsError):
        service.fetch_insights(SessionStats())


def test_remote_insights_rejects_malformed_body():
    session = FakeSession(FakeResponse(body={'tips': []}))
    service = RemoteInsightsService(ApiClient("http://localhost", session=session))

    with pytest.raises(InsightsError):
        service.fetch_insights(SessionStats())


def test_undecodable_json_is_transport_error():
    client = ApiClient("http://localhost", session=FakeSession(HtmlJsonResponse()))

    with pytest.raises(TransportError):
        client.post("insights", {})


def test_remote_insights_wraps_undecodable_body():
    service = RemoteInsightsService(ApiClient("http://localhost", session=FakeSession(HtmlJsonResponse())))

    with pytest.raises(InsightsError):
        service.fetch_insights(SessionStats())

import json

import httpx
import pytest

from app.services.voiceflow_client import VoiceflowClient


class FakeUpstream:
    """Routes requests by (method, url) to canned responses and records them."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, url, response):
        self.routes[(method, url)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url).split("?", 1)[0]
        response = self.routes.get((request.method, url))
        if response is None:
            return httpx.Response(404, text="not found")
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        # fresh copy so a canned response can be served more than once
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    def client(self) -> VoiceflowClient:
        return VoiceflowClient(transport=httpx.MockTransport(self.handler))

    def bodies(self):
        return [json.loads(r.content) for r in self.requests if r.content]


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    client = fake.client()
    monkeypatch.setattr("app.api.routes_knowledge.get_voiceflow_client", lambda: client)
    monkeypatch.setattr("app.api.routes_transcripts.get_voiceflow_client", lambda: client)
    return fake

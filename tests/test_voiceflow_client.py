import httpx
import pytest

from app.services.voiceflow_client import UpstreamError, VoiceflowClient

TRANSCRIPTS_URL = "https://api.voiceflow.com/v2/transcripts"


def make_client(handler):
    return VoiceflowClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_cookies_are_not_carried_between_callers():
    seen = []

    def handler(request):
        seen.append((request.headers.get("authorization"), request.headers.get("cookie")))
        if str(request.url).startswith("https://docs.example.com"):
            return httpx.Response(200, headers={"Set-Cookie": "tracker=page; Path=/"}, text="<title>x</title>")
        return httpx.Response(200, headers={"Set-Cookie": "vfsession=caller-a; Path=/"}, json=[])

    client = make_client(handler)
    await client.list_transcripts("key-A", "p1")
    await client.http.get("https://docs.example.com/")
    await client.list_transcripts("key-B", "p1")
    await client.aclose()

    assert seen == [("key-A", None), (None, None), ("key-B", None)]


@pytest.mark.asyncio
async def test_list_transcripts_rejects_non_list():
    client = make_client(lambda r: httpx.Response(200, json={"error": "nope"}))
    with pytest.raises(UpstreamError) as exc:
        await client.list_transcripts("k", "p1")
    assert exc.value.details == {"error": "nope"}
    await client.aclose()


@pytest.mark.asyncio
async def test_transcript_events_accepts_turns_wrapper():
    events = [{"type": "text"}]

    def handler(request):
        assert str(request.url) == f"{TRANSCRIPTS_URL}/p1/t1"
        return httpx.Response(200, json={"turns": events})

    client = make_client(handler)
    assert await client.get_transcript_events("k", "p1", "t1") == events
    await client.aclose()

from datetime import datetime, timedelta, timezone

from app.schemas.transcript import Message, Speaker
from app.services.transcript_renderer import (
    CTA_LABEL,
    render_fallback_page,
    render_missing_session_page,
    render_not_found_page,
    render_transcript_page,
)

URL = "https://creator.voiceflow.com/project/p/transcripts/t1"
T0 = datetime(2025, 1, 5, 14, 30, tzinfo=timezone.utc)


def msg(speaker, text, minutes=0):
    return Message(speaker=speaker, text=text, timestamp=T0 + timedelta(minutes=minutes))


def test_bubbles_are_styled_per_speaker_and_keep_order():
    page = render_transcript_page(
        [msg(Speaker.USER, "question one"), msg(Speaker.ASSISTANT, "answer one", 1), msg(Speaker.USER, "question two", 2)],
        URL,
    )
    assert page.count('class="bubble user"') == 2
    assert page.count('class="bubble assistant"') == 1
    assert page.index("question one") < page.index("answer one") < page.index("question two")
    assert page.index("question two") < page.index(CTA_LABEL)
    assert f'href="{URL}"' in page


def test_message_text_is_escaped():
    page = render_transcript_page([msg(Speaker.USER, "<script>alert(1)</script>")], URL)
    assert "<script>alert" not in page
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page


def test_empty_conversation_still_links_out():
    page = render_transcript_page([], URL)
    assert "No messages" in page
    assert CTA_LABEL in page


def test_fallback_page_has_only_the_link():
    page = render_fallback_page(URL)
    assert CTA_LABEL in page
    assert "bubble" not in page.split("</style>", 1)[1]


def test_missing_session_page():
    page = render_missing_session_page()
    assert "Missing Session ID" in page
    assert CTA_LABEL not in page


def test_not_found_page_shows_ids():
    page = render_not_found_page("sess-<1>", "proj-9")
    assert "Conversation Not Found" in page
    assert "sess-&lt;1&gt;" in page
    assert "proj-9" in page

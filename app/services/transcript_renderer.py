"""
HTML views of a conversation transcript.

Pages are hand-built strings with inline CSS so the output can be embedded or
opened directly without any static assets. Every value that comes from a
caller or from upstream is escaped before it is written into the markup.
"""

from __future__ import annotations

from html import escape
from typing import List, Sequence

from app.schemas.transcript import Message, Speaker

CTA_LABEL = "View full transcript in Voiceflow"

_STYLE = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
       background: #f5f6f8; margin: 0; padding: 24px; color: #1f2330; }
.container { max-width: 720px; margin: 0 auto; }
h1 { font-size: 20px; margin: 0 0 16px; }
.notice { background: #fff; border-radius: 12px; padding: 20px;
          box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08); }
.notice code { background: #eef0f4; padding: 1px 6px; border-radius: 4px; }
.messages { display: flex; flex-direction: column; gap: 12px; margin-bottom: 24px; }
.bubble { max-width: 75%; padding: 10px 14px; border-radius: 14px;
          box-shadow: 0 1px 2px rgba(0, 0, 0, 0.06); white-space: pre-wrap; }
.bubble.user { align-self: flex-end; background: #dbe8ff; border-bottom-right-radius: 4px; }
.bubble.assistant { align-self: flex-start; background: #ffffff; border-bottom-left-radius: 4px; }
.speaker { font-size: 12px; font-weight: 600; color: #5b6275; margin-bottom: 4px; }
.time { font-size: 11px; color: #8a90a0; margin-top: 6px; text-align: right; }
.empty { color: #8a90a0; font-style: italic; }
.cta { display: inline-block; background: #2f6fed; color: #fff; text-decoration: none;
       padding: 10px 18px; border-radius: 8px; font-weight: 600; }
"""


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>{_STYLE}</style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="container">\n{body}\n</div>\n'
        "</body>\n"
        "</html>\n"
    )


def _cta(transcript_url: str) -> str:
    return f'<a class="cta" href="{escape(transcript_url, quote=True)}" target="_blank" rel="noopener">{CTA_LABEL}</a>'


def render_bubble(message: Message) -> str:
    css = "user" if message.speaker is Speaker.USER else "assistant"
    return (
        f'<div class="bubble {css}">'
        f'<div class="speaker">{escape(message.speaker.label)}</div>'
        f'<div class="text">{escape(message.text)}</div>'
        f'<div class="time">{escape(message.display_time)}</div>'
        "</div>"
    )


def render_transcript_page(messages: Sequence[Message], transcript_url: str) -> str:
    """Full conversation view: one bubble per message, then the link out.

    `messages` must already be in display order.
    """
    if messages:
        bubbles: List[str] = [render_bubble(m) for m in messages]
        listing = '<div class="messages">\n' + "\n".join(bubbles) + "\n</div>"
    else:
        listing = '<p class="empty">No messages in this conversation.</p>'
    body = f"<h1>Conversation</h1>\n{listing}\n{_cta(transcript_url)}"
    return _page("Conversation Transcript", body)


def render_fallback_page(transcript_url: str) -> str:
    """Minimal view used when the conversation detail could not be loaded."""
    return _page("Conversation Transcript", f"<h1>Conversation</h1>\n{_cta(transcript_url)}")


def render_missing_session_page() -> str:
    body = (
        '<div class="notice">\n'
        "<h1>Missing Session ID</h1>\n"
        "<p>No session ID was provided, so there is no conversation to show.</p>\n"
        "</div>"
    )
    return _page("Missing Session ID", body)


def render_not_found_page(session_id: str, project_id: str) -> str:
    body = (
        '<div class="notice">\n'
        "<h1>Conversation Not Found</h1>\n"
        "<p>We couldn't find a conversation for this session. It may not have been recorded yet.</p>\n"
        f"<p>Session ID: <code>{escape(session_id)}</code></p>\n"
        f"<p>Project ID: <code>{escape(project_id)}</code></p>\n"
        "</div>"
    )
    return _page("Conversation Not Found", body)

import pytest

from app.services.session_resolver import (
    PROJECT_ID_ALIASES,
    TranscriptNotFound,
    build_transcript_url,
    find_transcript,
    link_project_id,
    parse_transcripts,
)

RECORDS = [
    {"_id": "t1", "sessionID": "sess-a", "browser": "Chrome"},
    {"_id": "t2", "sessionID": "sess-b", "unread": True},
    {"_id": "t3", "sessionID": "sess-b"},
]


def test_find_returns_first_exact_match():
    found = find_transcript(parse_transcripts(RECORDS), "sess-b")
    assert found.id == "t2"
    assert found.to_upstream() == {"_id": "t2", "sessionID": "sess-b", "unread": True}


def test_not_found_lists_all_sessions():
    with pytest.raises(TranscriptNotFound) as exc:
        find_transcript(parse_transcripts(RECORDS), "SESS-A")
    assert exc.value.session_id == "SESS-A"
    assert exc.value.available_sessions == ["sess-a", "sess-b", "sess-b"]


def test_not_found_on_empty_list():
    with pytest.raises(TranscriptNotFound) as exc:
        find_transcript([], "x")
    assert exc.value.available_sessions == []


def test_parse_skips_non_objects():
    assert [t.id for t in parse_transcripts([RECORDS[0], "junk", None])] == ["t1"]


def test_project_alias_table_has_single_entry():
    assert PROJECT_ID_ALIASES == {"678e0f128a8526a7fdf491cd": "678e0f128a8526a7fdf491ce"}
    assert link_project_id("678e0f128a8526a7fdf491cd") == "678e0f128a8526a7fdf491ce"
    assert link_project_id("678e0f128a8526a7fdf491ce") == "678e0f128a8526a7fdf491ce"
    assert link_project_id("abc123") == "abc123"


def test_build_transcript_url():
    assert (
        build_transcript_url("678e0f128a8526a7fdf491cd", "t9")
        == "https://creator.voiceflow.com/project/678e0f128a8526a7fdf491ce/transcripts/t9"
    )
    assert build_transcript_url("proj", "t1") == "https://creator.voiceflow.com/project/proj/transcripts/t1"


def test_record_without_id_links_to_empty_segment():
    found = find_transcript(parse_transcripts([{"sessionID": "sess-x"}]), "sess-x")
    assert found.id is None
    assert build_transcript_url("proj", found.id) == "https://creator.voiceflow.com/project/proj/transcripts/"

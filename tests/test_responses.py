import json

import pytest

from vllmchill.responses import JsonResponse


def test_default_content_type_is_json():
    response = JsonResponse(200, {"status": "success"})
    assert response.content_type == "application/json"


def test_json_body_is_compact_with_trailing_newline():
    response = JsonResponse(200, {"status": "success"})
    assert response.body() == b'{"status":"success"}\n'


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "success", "message": "vLLM started successfully"},
        {"error": {"message": "boom", "type": "start_failed"}},
        {"models": [], "count": 0},
        [1, 2, 3],
    ],
)
def test_json_body_round_trips(payload):
    body = JsonResponse(500, payload).body()
    assert body.endswith(b"\n")
    assert json.loads(body) == payload


def test_html_characters_are_escaped_but_decode_back():
    payload = {"message": "<a> & <b>"}
    body = JsonResponse(200, payload).body()
    assert b"<" not in body
    assert b">" not in body
    assert b"&" not in body
    assert json.loads(body) == payload


def test_non_ascii_is_kept_as_utf8():
    payload = {"message": "café"}
    body = JsonResponse(200, payload).body()
    assert "café".encode("utf-8") in body
    assert json.loads(body) == payload


def test_text_payload_is_sent_verbatim():
    response = JsonResponse(405, "Method not allowed", content_type="text/plain; charset=utf-8")
    assert response.body() == b"Method not allowed\n"


def test_string_payload_with_json_type_is_encoded_as_json():
    response = JsonResponse(200, "hello")
    assert json.loads(response.body()) == "hello"
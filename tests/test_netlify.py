from __future__ import annotations

import base64
import json

from gemini_proxy.serve.netlify import gemini_proxy, gemini_recommendations_proxy, make_handler

from conftest import candidate


def test_netlify_success_shape(fake_gemini) -> None:
    fake_gemini.respond(candidate('{ "score": 0.75 }'))
    out = gemini_proxy({"httpMethod": "POST", "body": json.dumps({"prompt": "score"})}, None)
    assert out["statusCode"] == 200
    assert out["headers"] == {"Content-Type": "application/json"}
    assert json.loads(out["body"]) == {"success": True, "response": '{ "score": 0.75 }'}


def test_netlify_non_post() -> None:
    out = gemini_recommendations_proxy({"httpMethod": "GET"}, None)
    assert out["statusCode"] == 405


def test_netlify_base64_body(fake_gemini) -> None:
    raw = base64.b64encode(json.dumps({"prompt": "recommend"}).encode()).decode()
    out = gemini_recommendations_proxy({"httpMethod": "POST", "body": raw, "isBase64Encoded": True}, None)
    assert out["statusCode"] == 200
    assert fake_gemini.calls[0]["json"]["contents"][0]["parts"][0]["text"] == "recommend"


def test_netlify_bad_base64_is_400(fake_gemini) -> None:
    out = gemini_proxy({"httpMethod": "POST", "body": "%%%", "isBase64Encoded": True}, None)
    assert out["statusCode"] == 400
    assert json.loads(out["body"])["message"] == "Request body could not be parsed."
    assert fake_gemini.calls == []


def test_netlify_base64_invalid_utf8_is_400(fake_gemini) -> None:
    raw = base64.b64encode(b'{"prompt": "\xff"}').decode()
    out = gemini_proxy({"httpMethod": "POST", "body": raw, "isBase64Encoded": True}, None)
    assert out["statusCode"] == 400
    assert fake_gemini.calls == []


def test_unknown_variant_handler_is_404() -> None:
    out = make_handler("missing")({"httpMethod": "POST", "body": "{}"}, None)
    assert out["statusCode"] == 404

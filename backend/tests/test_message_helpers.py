"""Tests for message helper utilities."""

from relay.models.request import ChatMessage, ImageUrl, ImageUrlContent, TextContent
from relay.utils.message_helpers import (
    as_message_dict,
    build_user_content,
    format_for_gemini,
    get_mime_type_from_data_url,
    split_data_url,
)


def test_format_for_gemini_multimodal():
    msg = {
        "role": "user",
        "content": [
            {"type": "text", "text": "hi"},
            {"type": "image_url", "image_url": {"url": "data:image/png;base64,QQ=="}},
        ]
    }
    result = format_for_gemini(msg)
    assert result == {
        "role": "user",
        "parts": [
            {"text": "hi"},
            {"inlineData": {"mimeType": "image/png", "data": "QQ=="}},
        ],
    }


def test_format_for_gemini_roles():
    assert format_for_gemini({"role": "assistant", "content": "a"})["role"] == "model"
    assert format_for_gemini({"role": "system", "content": "s"})["role"] == "user"
    assert format_for_gemini({"role": "user", "content": "u"})["role"] == "user"


def test_format_for_gemini_text_content():
    result = format_for_gemini({"role": "user", "content": "Hello"})
    assert result["parts"] == [{"text": "Hello"}]


def test_format_for_gemini_keeps_part_order():
    msg = {
        "role": "user",
        "content": [
            {"type": "image_url", "image_url": {"url": "data:image/webp;base64,AAA"}},
            {"type": "text", "text": "first caption"},
            {"type": "text", "text": "second caption"},
        ]
    }
    parts = format_for_gemini(msg)["parts"]
    assert parts[0]["inlineData"]["mimeType"] == "image/webp"
    assert parts[1] == {"text": "first caption"}
    assert parts[2] == {"text": "second caption"}


def test_get_mime_type_defaults_to_jpeg():
    assert get_mime_type_from_data_url("data:image/gif;base64,R0lG") == "image/gif"
    assert get_mime_type_from_data_url("invalid") == "image/jpeg"
    assert get_mime_type_from_data_url("data:application/pdf;base64,JVBE") == "image/jpeg"


def test_split_data_url():
    mime, data = split_data_url("data:image/png;base64,iVBORw0KGgo")
    assert mime == "image/png"
    assert data == "iVBORw0KGgo"


def test_split_data_url_without_prefix():
    mime, data = split_data_url("iVBORw0KGgo")
    assert mime == "image/jpeg"
    assert data == "iVBORw0KGgo"


def test_as_message_dict_drops_unset_detail():
    msg = ChatMessage(
        role="user",
        content=[
            TextContent(text="What's this?"),
            ImageUrlContent(image_url=ImageUrl(url="https://img.test/cat.png")),
        ],
    )
    assert as_message_dict(msg) == {
        "role": "user",
        "content": [
            {"type": "text", "text": "What's this?"},
            {"type": "image_url", "image_url": {"url": "https://img.test/cat.png"}},
        ],
    }


def test_as_message_dict_passes_dicts_through():
    msg = {"role": "user", "content": "Hello"}
    assert as_message_dict(msg) is msg


def test_build_user_content():
    content = build_user_content("Look", "data:image/png;base64,QQ==")
    assert content == [
        {"type": "text", "text": "Look"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,QQ==", "detail": "auto"}},
    ]
    assert "detail" not in build_user_content("Look", "x", detail=None)[1]["image_url"]


def test_format_for_gemini_skips_remote_image_urls():
    msg = {
        "role": "user",
        "content": [
            {"type": "text", "text": "what is this?"},
            {"type": "image_url", "image_url": {"url": "https://img.test/cat.png"}},
        ]
    }
    assert format_for_gemini(msg)["parts"] == [{"text": "what is this?"}]

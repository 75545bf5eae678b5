"""Tests for full-content retrieval by ref."""

from conftest import OTHER_PROJECT

from cc_history.getter import get_message, parse_char_range
from cc_history.models import ErrorResponse, GetResponse, TooLargeResponse


def test_get_message(config):
    response = get_message(config, "abcd1234:5")

    assert isinstance(response, GetResponse)
    assert response.type == "assistant"
    assert response.content == "Here are the logs\n[IMAGE:1 size=0.4MB]"
    assert response.content_size == len(response.content)
    assert response.image_count == 1


def test_get_message_range(config):
    response = get_message(config, "abcd1234:1", char_range=(0, 5))

    assert response.content == "fatal"
    assert response.content_size == len("fatal error occurred in the build")


def test_get_message_range_clamped(config):
    response = get_message(config, "abcd1234:1", char_range=(30, 500))
    assert response.content == "ild"

    response = get_message(config, "abcd1234:1", char_range=(900, 1000))
    assert response.content == ""


def test_get_message_too_large(config):
    response = get_message(config, "abcd1234:1", max_direct_size=10)

    assert isinstance(response, TooLargeResponse)
    assert response.size == 33
    assert "--range" in response.suggestion
    assert response.to_dict()["error"] == "content_too_large"


def test_get_message_errors(config):
    assert get_message(config, "abcd1234:99").error == "ref_not_found"
    assert get_message(config, "abcd1234:6").error == "parse_error"
    assert get_message(config, "abcd1234").error == "invalid_ref"

    response = get_message(config, "abcd1234:1", project=OTHER_PROJECT)
    assert isinstance(response, ErrorResponse)
    assert response.error == "session_not_found"


def test_parse_char_range():
    assert parse_char_range("0-100") == (0, 100)
    assert parse_char_range(None) is None
    assert parse_char_range("10") is None
    assert parse_char_range("a-b") is None

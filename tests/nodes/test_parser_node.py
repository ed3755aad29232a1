"""Tests for the mealie-parser node."""
import pytest

from mealie_nodes.nodes import ParserNode


@pytest.fixture
def parser(make_node):
    return make_node(ParserNode)


def test_parse_url(parser, send, mock_client):
    mock_client.parser.parse_url.return_value = {"name": "Pancakes"}

    result = send(parser, {"operation": "parseUrl", "url": "https://example.com/pancakes"})

    assert result["data"] == {"name": "Pancakes"}
    mock_client.parser.parse_url.assert_called_once_with("https://example.com/pancakes")


def test_parse_url_requires_url(parser, send):
    result = send(parser, {"operation": "parseUrl"})

    assert result["error"]["message"] == (
        "No URL provided for parseUrl operation. Specify in node config or msg.payload.url"
    )


def test_parse_text(parser, send, mock_client):
    send(parser, {"operation": "parseText", "ingredientText": "2 cups flour"})

    mock_client.parser.parse_ingredient_text.assert_called_once_with("2 cups flour")


def test_parse_text_requires_text(parser, send):
    result = send(parser, {"operation": "parseText"})

    assert result["error"]["message"].startswith("No ingredient text provided for parseText operation")

#!/usr/bin/env python3
"""
Unit tests for the Pootle API Agent
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

import requests

from pootle.agent import Agent, parse_credentials
from pootle.exceptions import (
    PootleClientError, TransportError, HTTPError,
    NotFound, MethodNotAllowed, Unauthorized,
)


def _response(status_code=200, json_data=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = json_data
    return resp


class TestCredentials:

    def test_inline_pair(self):
        assert parse_credentials("user:secret") == ("user", "secret")

    def test_password_may_contain_colon(self):
        assert parse_credentials("user:se:cret") == ("user", "se:cret")

    def test_credentials_file(self, tmp_path):
        path = tmp_path / "credentials.txt"
        path.write_text("translator:pa55\nignored\n", encoding="utf-8")
        assert parse_credentials(str(path)) == ("translator", "pa55")

    def test_missing_credentials_file_named(self, tmp_path):
        missing = str(tmp_path / "credentials.txt")
        with pytest.raises(PootleClientError) as exc:
            parse_credentials(missing)
        assert "Credentials file not found" in str(exc.value)
        assert missing in str(exc.value)

    def test_malformed_credentials_file(self, tmp_path):
        path = tmp_path / "credentials.txt"
        path.write_text("only-a-username\n", encoding="utf-8")
        with pytest.raises(PootleClientError) as exc:
            parse_credentials(str(path))
        assert "username:password" in str(exc.value)

    def test_empty(self):
        with pytest.raises(PootleClientError):
            parse_credentials("")


class TestAgentInit:

    def test_init_strips_trailing_slash(self):
        agent = Agent("https://translate.example.com/", "u:p")
        assert agent.base_url == "https://translate.example.com"
        assert agent.auth == ("u", "p")
        assert agent.timeout == Agent.DEFAULT_TIMEOUT

    def test_anonymous(self):
        agent = Agent("https://translate.example.com")
        assert agent.auth is None

    def test_custom_timeout(self):
        assert Agent("https://t.example.com", "u:p", timeout=5).timeout == 5

    def test_init_counters_zero(self):
        agent = Agent("https://t.example.com", "u:p")
        assert agent._request_count == 0
        assert agent._error_count == 0


class TestAgentRequest:

    @pytest.fixture
    def agent(self):
        return Agent("https://translate.example.com", "user:secret", timeout=7)

    @patch("pootle.agent.requests.request")
    def test_get_decodes_body(self, mock_req, agent):
        mock_req.return_value = _response(200, {"objects": [{"code": "fi"}]})

        body = agent.request("get", "/api/v1/languages/", {})

        assert body == {"objects": [{"code": "fi"}]}
        args, kwargs = mock_req.call_args
        assert args == ("GET", "https://translate.example.com/api/v1/languages/")
        assert kwargs["auth"] == ("user", "secret")
        assert kwargs["timeout"] == 7
        assert "params" not in kwargs

    @patch("pootle.agent.requests.request")
    def test_get_params_as_query(self, mock_req, agent):
        mock_req.return_value = _response(200, {})
        agent.request("get", "/api/v1/units/", {"limit": 5})
        assert mock_req.call_args.kwargs["params"] == {"limit": 5}

    @patch("pootle.agent.requests.request")
    def test_post_params_as_json(self, mock_req, agent):
        mock_req.return_value = _response(201, {"ok": True})
        agent.request("post", "/api/v1/suggestions/", {"target_f": "moi"})
        assert mock_req.call_args.kwargs["json"] == {"target_f": "moi"}

    @patch("pootle.agent.requests.request")
    def test_404_raises_not_found(self, mock_req, agent):
        mock_req.return_value = _response(404, text="Not found")

        with pytest.raises(NotFound) as exc:
            agent.request("get", "/api/v1/stores/9/")

        assert exc.value.status_code == 404
        assert exc.value.endpoint == "/api/v1/stores/9/"
        assert agent.get_stats()["total_errors"] == 1

    @patch("pootle.agent.requests.request")
    def test_405_raises_method_not_allowed(self, mock_req, agent):
        mock_req.return_value = _response(405, text="")
        with pytest.raises(MethodNotAllowed):
            agent.request("get", "/api/v1/translation-projects/")

    @patch("pootle.agent.requests.request")
    def test_401_raises_unauthorized(self, mock_req, agent):
        mock_req.return_value = _response(401, text="Unauthorized")
        with pytest.raises(Unauthorized):
            agent.request("get", "/api/v1/languages/")

    @patch("pootle.agent.requests.request")
    def test_500_raises_generic_http_error(self, mock_req, agent):
        mock_req.return_value = _response(500, text="boom")
        with pytest.raises(HTTPError) as exc:
            agent.request("get", "/api/v1/languages/")
        assert type(exc.value) is HTTPError
        assert "boom" in str(exc.value)

    @patch("pootle.agent.requests.request")
    def test_connection_error_raises_transport_error(self, mock_req, agent):
        mock_req.side_effect = requests.ConnectionError()
        with pytest.raises(TransportError):
            agent.request("get", "/api/v1/languages/")

    @patch("pootle.agent.requests.request")
    def test_timeout_raises_transport_error(self, mock_req, agent):
        mock_req.side_effect = requests.Timeout()
        with pytest.raises(TransportError):
            agent.request("get", "/api/v1/languages/")

    @patch("pootle.agent.requests.request")
    def test_undecodable_body(self, mock_req, agent):
        mock_req.return_value = _response(200, None, text="<html>")
        with pytest.raises(TransportError):
            agent.request("get", "/api/v1/languages/")

    @patch("pootle.agent.requests.request")
    def test_stats(self, mock_req, agent):
        mock_req.side_effect = [_response(200, {}), _response(500, text="x")]

        agent.request("get", "/a/")
        with pytest.raises(HTTPError):
            agent.request("get", "/b/")

        stats = agent.get_stats()
        assert stats["total_requests"] == 2
        assert stats["total_errors"] == 1
        assert stats["error_rate_percent"] == 50.0
        assert stats["auth_configured"] is True

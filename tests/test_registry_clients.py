"""Tests for the npm and JSR latest-version clients."""

from unittest.mock import patch

import pytest

from constants import Constants
from registry import jsr, npm
from versioning.errors import DecodeError, TransportError
from versioning.models import Registry


class TestNpmFetchLatest:
    """npm reads dist-tags.latest from the packument."""

    @patch("registry.npm.get_json")
    def test_reads_latest_dist_tag(self, mock_get_json):
        mock_get_json.return_value = {"dist-tags": {"latest": "4.17.21", "next": "5.0.0-rc"}}

        assert npm.fetch_latest("lodash") == "4.17.21"
        url = mock_get_json.call_args[0][0]
        assert url == "https://registry.npmjs.org/lodash"
        assert mock_get_json.call_args.kwargs["headers"] == {"Accept": "application/json"}
        assert mock_get_json.call_args.kwargs["context"] == Registry.NPM.tag

    @patch("registry.npm.get_json")
    def test_scoped_name_in_url(self, mock_get_json):
        mock_get_json.return_value = {"dist-tags": {"latest": "0.1.0"}}

        npm.fetch_latest("@google/gemini-cli")

        assert mock_get_json.call_args[0][0] == "https://registry.npmjs.org/@google/gemini-cli"

    @patch("registry.npm.get_json")
    def test_custom_registry_url(self, mock_get_json):
        mock_get_json.return_value = {"dist-tags": {"latest": "1.0.0"}}

        npm.fetch_latest("lodash", "https://npm.example.test/")

        assert mock_get_json.call_args[0][0] == "https://npm.example.test/lodash"

    @patch("registry.npm.get_json")
    def test_configured_registry_url(self, mock_get_json):
        Constants.REGISTRY_URL_NPM = "https://mirror.example.test/npm/"
        mock_get_json.return_value = {"dist-tags": {"latest": "1.0.0"}}

        npm.fetch_latest("lodash")

        assert mock_get_json.call_args[0][0] == "https://mirror.example.test/npm/lodash"

    @pytest.mark.parametrize("body", [
        {},
        {"dist-tags": {}},
        {"dist-tags": "latest"},
        {"dist-tags": {"latest": 4}},
        {"dist-tags": {"latest": ""}},
        ["not", "an", "object"],
    ])
    @patch("registry.npm.get_json")
    def test_missing_or_mistyped_field(self, mock_get_json, body):
        mock_get_json.return_value = body

        with pytest.raises(DecodeError):
            npm.fetch_latest("lodash")

    @patch("registry.npm.get_json")
    def test_transport_error_propagates(self, mock_get_json):
        mock_get_json.side_effect = TransportError("status code 404", status_code=404)

        with pytest.raises(TransportError):
            npm.fetch_latest("doesnotexist")


class TestJsrFetchLatest:
    """JSR reads the top-level latest field of meta.json."""

    @patch("registry.jsr.get_json")
    def test_reads_latest(self, mock_get_json):
        mock_get_json.return_value = {"scope": "sigma", "name": "bisect", "latest": "1.2.0"}

        assert jsr.fetch_latest("@sigma/bisect") == "1.2.0"
        assert mock_get_json.call_args[0][0] == "https://jsr.io/@sigma/bisect/meta.json"
        assert mock_get_json.call_args.kwargs["context"] == Registry.JSR.tag

    def test_package_url_with_custom_registry(self):
        assert jsr.package_url("@std/path", "https://jsr.example.test/") == \
            "https://jsr.example.test/@std/path/meta.json"

    @pytest.mark.parametrize("body", [{}, {"latest": None}, {"latest": 1}, "1.2.0"])
    @patch("registry.jsr.get_json")
    def test_missing_or_mistyped_field(self, mock_get_json, body):
        mock_get_json.return_value = body

        with pytest.raises(DecodeError):
            jsr.fetch_latest("@sigma/bisect")

    @patch("common.http_client.requests.get")
    def test_end_to_end_through_http_client(self, mock_get, make_response):
        mock_get.return_value = make_response(200, data={"latest": "0.224.0"})

        assert jsr.fetch_latest("@std/path") == "0.224.0"
        assert mock_get.call_args[0][0] == "https://jsr.io/@std/path/meta.json"

"""
Tests for the read-only HueController.

All HTTP calls go through a mocked requests.Session.
"""

import pytest
import requests
from unittest.mock import patch, MagicMock
from core.controller import HueController


def json_response(data):
    response = MagicMock()
    response.json.return_value = data
    return response


@pytest.fixture
def controller():
    """A controller with credentials and a mocked session."""
    controller = HueController(bridge_ip='10.0.0.2', api_token='token-123')
    controller.session = MagicMock()
    return controller


class TestV2Requests:
    """Test v2 resource requests."""

    def test_base_url(self):
        """The v2 base URL is built from the bridge IP."""
        assert HueController(bridge_ip='10.0.0.2').base_url == 'https://10.0.0.2/clip/v2'
        assert HueController().base_url is None

    def test_get_lights_returns_data(self, controller):
        """Resource getters return the envelope's data list."""
        controller.session.get.return_value = json_response({'errors': [], 'data': [{'id': 'light-1'}]})

        assert controller.get_lights() == [{'id': 'light-1'}]
        url = controller.session.get.call_args[0][0]
        assert url == 'https://10.0.0.2/clip/v2/resource/light'
        assert controller.session.get.call_args[1]['headers'] == {'hue-application-key': 'token-123'}

    def test_envelope_errors_give_empty_result(self, controller):
        """Errors in the response envelope are treated as no data."""
        controller.session.get.return_value = json_response(
            {'errors': [{'description': 'unauthorized user'}], 'data': []}
        )
        assert controller.get_rooms() == []

    def test_network_error_gives_empty_result(self, controller):
        """Network errors are reported and give no data."""
        controller.session.get.side_effect = requests.exceptions.ConnectionError('unreachable')
        assert controller.get_scenes() == []

    def test_results_cached(self, controller):
        """Each resource type is fetched once until the cache is cleared."""
        controller.session.get.return_value = json_response({'errors': [], 'data': [{'id': 'd'}]})

        controller.get_devices()
        controller.get_devices()
        assert controller.session.get.call_count == 1

        controller.clear_cache()
        controller.get_devices()
        assert controller.session.get.call_count == 2

    def test_get_bridge(self, controller):
        """get_bridge returns the single bridge resource."""
        controller.session.get.return_value = json_response({'errors': [], 'data': [{'id': 'b', 'bridge_id': 'abc'}]})
        assert controller.get_bridge()['bridge_id'] == 'abc'

    def test_no_token_no_request(self):
        """Without a token nothing is requested."""
        controller = HueController(bridge_ip='10.0.0.2')
        controller.session = MagicMock()
        assert controller.get_lights() == []
        controller.session.get.assert_not_called()


class TestV1Config:
    """Test the v1 full configuration request."""

    def test_full_config(self, controller):
        """The full v1 configuration is returned as a dict."""
        controller.session.get.return_value = json_response({'lights': {}, 'rules': {'1': {}}})

        assert controller.get_full_config_v1() == {'lights': {}, 'rules': {'1': {}}}
        assert controller.session.get.call_args[0][0] == 'https://10.0.0.2/api/token-123'

    def test_error_list(self, controller):
        """v1 errors come back as a list and give None."""
        controller.session.get.return_value = json_response(
            [{'error': {'type': 1, 'description': 'unauthorized user'}}]
        )
        assert controller.get_full_config_v1() is None

    def test_not_connected(self):
        """Without credentials the request is not made."""
        assert HueController().get_full_config_v1() is None


class TestConnect:
    """Test connecting with credentials from the auth priority system."""

    @patch('core.auth.get_auth_credentials')
    def test_connect_uses_auth(self, mock_auth):
        """Credentials are loaded when not provided."""
        mock_auth.return_value = {'bridge_ip': '10.0.0.9', 'api_token': 'abc'}
        controller = HueController()
        controller.session = MagicMock()
        controller.session.get.return_value = json_response({'errors': [], 'data': [{'id': 'b'}]})

        assert controller.connect() is True
        assert controller.bridge_ip == '10.0.0.9'
        assert controller.api_token == 'abc'

    @patch('core.auth.get_auth_credentials', return_value=None)
    def test_connect_without_credentials(self, mock_auth):
        """No credentials means no connection."""
        assert HueController().connect(interactive=False) is False

    def test_connect_with_provided_credentials(self, controller):
        """Provided credentials are tested against the bridge resource."""
        controller.session.get.return_value = json_response({'errors': [], 'data': []})
        assert controller.connect() is False

"""Unit tests for MIDI endpoint enumeration and selection."""

from unittest.mock import patch

import pytest

from midistatus.midi import Endpoint, list_endpoints, list_inputs, select_endpoint

ENDPOINTS = [
    Endpoint("0", "Midi Through Port-0"),
    Endpoint("1", "Launchpad Pro MIDI 1"),
    Endpoint("2", "Launchpad Pro MIDI 2"),
    Endpoint("3", "1 Weird Device"),
]


@pytest.mark.unit
class TestEndpointListing:

    @patch('midistatus.midi.endpoints.mido')
    def test_inputs_are_numbered_in_backend_order(self, mock_mido):
        mock_mido.get_input_names.return_value = ["A", "B"]

        assert list_inputs() == [Endpoint("0", "A"), Endpoint("1", "B")]

    @patch('midistatus.midi.endpoints.mido')
    def test_list_endpoints_has_both_directions(self, mock_mido):
        mock_mido.get_input_names.return_value = ["In"]
        mock_mido.get_output_names.return_value = ["Out", "Other"]

        endpoints = list_endpoints()
        assert endpoints["input"] == [Endpoint("0", "In")]
        assert [e.name for e in endpoints["output"]] == ["Out", "Other"]


@pytest.mark.unit
class TestSelectEndpoint:

    def test_select_by_id(self):
        assert select_endpoint(ENDPOINTS, "2").name == "Launchpad Pro MIDI 2"

    def test_id_wins_over_name_prefix(self):
        assert select_endpoint(ENDPOINTS, "1").name == "Launchpad Pro MIDI 1"

    def test_select_by_case_insensitive_prefix(self):
        assert select_endpoint(ENDPOINTS, "launchpad").id == "1"

    def test_prefix_only_matches_start_of_name(self):
        assert select_endpoint(ENDPOINTS, "MIDI 2") is None

    def test_selector_longer_than_name(self):
        assert select_endpoint([Endpoint("0", "LP")], "LP Pro") is None

    def test_empty_selector(self):
        assert select_endpoint(ENDPOINTS, "") is None

    def test_no_match(self):
        assert select_endpoint(ENDPOINTS, "APC40") is None

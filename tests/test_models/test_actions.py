"""
Tests for action manifest validation.
"""

import pytest

from votefeed.contracts import PROPOSAL_CONTRACT_ABI
from votefeed.exceptions import MetadataValidationError
from votefeed.models import ActionMetadata, ExecutionResponse, create_metadata

ADDRESS = "0x" + "ab" * 20


def _dynamic_action(**overrides):
    action = {
        "type": "dynamic",
        "label": "Submit Proposal",
        "chains": {"source": "fuji"},
        "path": "/api/proposal",
        "params": [{"name": "proposal", "label": "Your Proposal", "type": "text"}],
    }
    action.update(overrides)
    return action


def _blockchain_action(**overrides):
    action = {
        "type": "blockchain",
        "label": "Vote Up",
        "address": ADDRESS,
        "abi": PROPOSAL_CONTRACT_ABI,
        "functionName": "vote",
        "chains": {"source": "fuji"},
        "params": [
            {"name": "_proposalId", "label": "1", "type": "uint256", "value": "1"},
            {"name": "_isUpVote", "label": "Up Vote", "type": "boolean", "value": True},
        ],
    }
    action.update(overrides)
    return action


def _manifest(actions):
    return {
        "url": "https://sherry.social",
        "icon": "https://votes.example.com/icon.jpg",
        "title": "Proposal",
        "description": "Submit a proposal",
        "actions": actions,
    }


class TestCreateMetadata:
    """Tests for create_metadata()."""

    def test_valid_dynamic_manifest(self):
        metadata = create_metadata(_manifest([_dynamic_action()]))

        assert isinstance(metadata, ActionMetadata)
        assert metadata.actions[0].type == "dynamic"

    def test_valid_blockchain_manifest(self):
        metadata = create_metadata(_manifest([_blockchain_action()]))
        assert metadata.actions[0].function_name == "vote"

    def test_response_is_camel_case_without_nulls(self):
        body = create_metadata(_manifest([_blockchain_action()])).to_response()

        action = body["actions"][0]
        assert action["functionName"] == "vote"
        assert "amount" not in action
        assert "baseUrl" not in body

    def test_accepts_built_model(self):
        metadata = create_metadata(_manifest([_dynamic_action()]))
        assert create_metadata(metadata) == metadata

    def test_unknown_function_rejected(self):
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([_blockchain_action(functionName="withdraw")]))

    def test_param_count_mismatch_rejected(self):
        action = _blockchain_action()
        action["params"] = action["params"][:1]
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([action]))

    def test_invalid_address_rejected(self):
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([_blockchain_action(address="0x123")]))

    def test_too_many_actions_rejected(self):
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([_dynamic_action() for _ in range(5)]))

    def test_no_actions_rejected(self):
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([]))

    def test_empty_title_rejected(self):
        data = _manifest([_dynamic_action()])
        data["title"] = ""
        with pytest.raises(MetadataValidationError):
            create_metadata(data)

    def test_unsupported_chain_rejected(self):
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([_dynamic_action(chains={"source": "solana"})]))

    def test_relative_path_rejected(self):
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([_dynamic_action(path="api/proposal")]))

    def test_select_without_options_rejected(self):
        action = _dynamic_action(
            params=[{"name": "choice", "label": "Choice", "type": "select"}]
        )
        with pytest.raises(MetadataValidationError):
            create_metadata(_manifest([action]))

    def test_error_details_do_not_echo_input(self):
        with pytest.raises(MetadataValidationError) as exc_info:
            create_metadata(_manifest([_blockchain_action(address="0x123")]))

        details = exc_info.value.to_response()["details"]
        assert details
        assert all(set(d) == {"loc", "type", "msg"} for d in details)
        assert exc_info.value.status_code == 400


class TestExecutionResponse:
    """Tests for the dynamic action answer."""

    def test_to_response(self):
        response = ExecutionResponse(serialized_transaction="{}", chain_id="Avalanche Fuji")
        assert response.to_response() == {
            "serializedTransaction": "{}",
            "chainId": "Avalanche Fuji",
        }

# tests/test_mapping.py
from app.services.mapping import (
    legacy_presentation_attributes,
    no_presentation_attributes,
    presentation_attributes,
)
from payloads import CREDENTIAL, PROOF, declination, legacy_presentation, presentation


def test_presentation_attributes():
    attrs = presentation_attributes(presentation("pr-1"), True)

    assert attrs == {
        "presentation_context": ["https://www.w3.org/2018/credentials/v1"],
        "presentation_type": ["VerifiablePresentation"],
        "presentation_verifiable_credentials": [CREDENTIAL],
        "presentation_proof": PROOF,
        "presentation_presentation_request_uuid": "pr-1",
        "verifier_did": "did:example:verifier",
        "is_verified": True,
    }


def test_presentation_without_credentials_defaults_to_empty_list():
    attrs = presentation_attributes(presentation("pr-1", with_credentials=False), True)
    assert attrs["presentation_verifiable_credentials"] == []


def test_legacy_presentation_attributes():
    attrs = legacy_presentation_attributes(legacy_presentation("id-1"), False)

    assert attrs["presentation_verifiable_credentials"] == [CREDENTIAL]
    assert attrs["presentation_presentation_request_id"] == "id-1"
    assert "presentation_presentation_request_uuid" not in attrs
    assert attrs["is_verified"] is False


def test_no_presentation_attributes():
    attrs = no_presentation_attributes(declination("pr-2"), True)

    assert attrs == {
        "np_type": ["DeclinedPresentation"],
        "np_proof": PROOF,
        "np_holder": "did:example:holder",
        "np_presentation_request_uuid": "pr-2",
        "is_verified": True,
    }

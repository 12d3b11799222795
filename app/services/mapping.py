# app/services/mapping.py
"""Traduce una presentación descifrada a los atributos de la entidad a persistir."""


def presentation_attributes(presentation: dict, is_verified: bool) -> dict:
    return {
        "presentation_context": presentation.get("@context"),
        "presentation_type": presentation.get("type"),
        "presentation_verifiable_credentials": presentation.get("verifiableCredentials") or [],
        "presentation_proof": presentation.get("proof"),
        "presentation_presentation_request_uuid": presentation.get("presentationRequestUuid"),
        "verifier_did": presentation.get("verifierDid"),
        "is_verified": is_verified,
    }


def legacy_presentation_attributes(presentation: dict, is_verified: bool) -> dict:
    # formato < 2.0.0: "verifiableCredential" en singular y referencia por id
    return {
        "presentation_context": presentation.get("@context"),
        "presentation_type": presentation.get("type"),
        "presentation_verifiable_credentials": presentation.get("verifiableCredential") or [],
        "presentation_proof": presentation.get("proof"),
        "presentation_presentation_request_id": presentation.get("presentationRequestId"),
        "verifier_did": presentation.get("verifierDid"),
        "is_verified": is_verified,
    }


def no_presentation_attributes(no_presentation: dict, is_verified: bool) -> dict:
    return {
        "np_type": no_presentation.get("type"),
        "np_proof": no_presentation.get("proof"),
        "np_holder": no_presentation.get("holder"),
        "np_presentation_request_uuid": no_presentation.get("presentationRequestUuid"),
        "is_verified": is_verified,
    }

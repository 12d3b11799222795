# tests/payloads.py
"""Payloads de ejemplo compartidos por los tests."""

HOLDER_DID = "did:example:holder"
VERIFIER_DID = "did:example:verifier"

CREDENTIAL = {
    "@context": ["https://www.w3.org/2018/credentials/v1"],
    "type": ["VerifiableCredential", "EmailCredential"],
    "issuer": "did:example:issuer",
    "credentialSubject": {"id": HOLDER_DID, "email": "holder@example.com"},
    "proof": {"type": "secp256r1Signature2020", "verificationMethod": "did:example:issuer#key-1"},
}

PROOF = {
    "type": "secp256r1Signature2020",
    "verificationMethod": HOLDER_DID,
    "signatureValue": "c2lnbmF0dXJl",
}


def presentation(pr_uuid: str, with_credentials: bool = True) -> dict:
    p = {
        "@context": ["https://www.w3.org/2018/credentials/v1"],
        "type": ["VerifiablePresentation"],
        "proof": PROOF,
        "presentationRequestUuid": pr_uuid,
        "verifierDid": VERIFIER_DID,
    }
    if with_credentials:
        p["verifiableCredentials"] = [CREDENTIAL]
    return p


def legacy_presentation(pr_id: str) -> dict:
    return {
        "@context": ["https://www.w3.org/2018/credentials/v1"],
        "type": ["VerifiablePresentation"],
        "verifiableCredential": [CREDENTIAL],
        "proof": PROOF,
        "presentationRequestId": pr_id,
        "verifierDid": VERIFIER_DID,
    }


def declination(pr_uuid: str) -> dict:
    return {
        "type": ["DeclinedPresentation"],
        "proof": PROOF,
        "holder": HOLDER_DID,
        "presentationRequestUuid": pr_uuid,
    }


def encrypted_presentation(pr_uuid: str, pr_id: str, version: str | None = None) -> dict:
    body = {
        "encryptedPresentation": {
            "data": "Y2lwaGVydGV4dA",
            "key": {"iv": "aXY", "key": "a2V5", "algorithm": "aes-256-cbc"},
        },
        "presentationRequestInfo": {
            "presentationRequest": {
                "uuid": pr_uuid,
                "id": pr_id,
                "holderAppUuid": "holder-app-1",
                "verifier": VERIFIER_DID,
            },
        },
    }
    if version is not None:
        body["version"] = version
    return body

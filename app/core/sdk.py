# app/core/sdk.py
"""
Cliente del servicio externo de verificación ("server SDK").

La verificación de firmas, el descifrado y la resolución de DIDs ocurren en el
servicio remoto; aquí solo se envía la petición y se normaliza la respuesta.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from app.core.config import settings

VERIFIABLE_PRESENTATION = "VerifiablePresentation"
DECLINED_PRESENTATION = "DeclinedPresentation"


class CryptoError(Exception):
    """El servicio no pudo descifrar o comprobar criptográficamente la presentación."""


class VerificationServiceError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"verification service responded {status_code}: {message}")


@dataclass
class DecryptedPresentation:
    is_verified: bool
    type: str
    presentation: dict[str, Any]
    message: str | None = None

    def to_dict(self) -> dict:
        return {
            "isVerified": self.is_verified,
            "type": self.type,
            "presentation": self.presentation,
            "message": self.message,
        }


@dataclass
class VerifyResponse:
    body: DecryptedPresentation
    auth_token: str


@dataclass
class CredentialInfo:
    subject_did: str | None
    credential_types: list[str] = field(default_factory=list)


def _error_message(resp: httpx.Response) -> tuple[str | None, str]:
    try:
        data = resp.json()
    except ValueError:
        return None, resp.text
    if not isinstance(data, dict):
        return None, resp.text
    return data.get("name"), data.get("message") or resp.text


async def verify_presentation(
    auth_token: str,
    encrypted_presentation: dict | str,
    verifier_did: str,
    encryption_private_key: str,
    presentation_request_info: dict,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VerifyResponse:
    """
    Envía la presentación cifrada al servicio de verificación.

    Devuelve el resultado descifrado y el token de autenticación rotado
    (cabecera x-auth-token; si no viene se conserva el enviado).
    """
    payload = {
        "encryptedPresentation": encrypted_presentation,
        "verifier": verifier_did,
        "encryptionPrivateKey": encryption_private_key,
        "presentationRequestInfo": presentation_request_info,
    }

    async with httpx.AsyncClient(
        base_url=settings.verification_service_url,
        timeout=settings.verification_timeout,
        transport=transport,
    ) as client:
        resp = await client.post("/presentation", json=payload, headers={"Authorization": auth_token})

    if resp.is_error:
        name, message = _error_message(resp)
        if name == "CryptoError":
            raise CryptoError(message)
        raise VerificationServiceError(resp.status_code, message)

    data = resp.json()
    body = DecryptedPresentation(
        is_verified=bool(data.get("isVerified")),
        type=data.get("type", ""),
        presentation=data.get("presentation") or {},
        message=data.get("message"),
    )
    return VerifyResponse(body=body, auth_token=resp.headers.get("x-auth-token", auth_token))


def extract_credential_info(presentation: dict) -> CredentialInfo:
    credentials = presentation.get("verifiableCredentials")
    if credentials is None:
        credentials = presentation.get("verifiableCredential") or []

    # el primer tipo siempre es "VerifiableCredential"
    credential_types = [t for cred in credentials for t in cred.get("type", [])[1:]]
    subject_did = (presentation.get("proof") or {}).get("verificationMethod")
    return CredentialInfo(subject_did=subject_did, credential_types=credential_types)

# app/services/verifier.py
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from app.core import sdk
from app.core.sdk import CryptoError, DecryptedPresentation, VerifyResponse
from app.db.models import Verifier
from app.db.stores import VerifierStore

log = logging.getLogger(__name__)

VerifyFn = Callable[..., Awaitable[VerifyResponse]]

BEARER_PREFIX = "Bearer "


def bearer(token: str) -> str:
    # tokens antiguos se guardaban sin el prefijo
    return token if token.startswith(BEARER_PREFIX) else f"{BEARER_PREFIX}{token}"


class VerifierAdapter:
    """
    Envuelve la llamada al servicio de verificación y rota el token del verifier.

    El token se actualiza una vez por llamada, tanto si la presentación se
    verifica como si no.
    """

    def __init__(self, verifiers: VerifierStore, verify_fn: VerifyFn | None = None):
        self.verifiers = verifiers
        self._verify_fn = verify_fn

    async def verify(self, verifier: Verifier, encrypted_presentation: dict | str, request_info: dict) -> DecryptedPresentation:
        verify_fn = self._verify_fn or sdk.verify_presentation
        try:
            response = await verify_fn(
                bearer(verifier.auth_token),
                encrypted_presentation,
                verifier.verifier_did,
                verifier.encryption_private_key,
                request_info,
            )
        except CryptoError:
            log.exception("Crypto error verifying presentation for verifier %s", verifier.verifier_did)
            raise

        patched = await self.verifiers.patch(
            verifier.uuid, auth_token=response.auth_token, expected_version=verifier.version
        )
        if not patched:
            log.warning("Auth token of verifier %s was rotated concurrently, keeping the newer value", verifier.uuid)

        return response.body

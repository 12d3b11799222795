# app/services/presentation.py
"""
Handlers de presentaciones cifradas.

Secuencia común a todas las generaciones:
búsqueda de la petición -> verificación -> rama (presentación / declinación)
-> persistencia -> notificación -> recibo.

Las generaciones solo cambian el formato esperado del payload, cómo se busca
la petición original y qué campos lleva el recibo.
"""
from __future__ import annotations

import json
import logging

from fastapi import HTTPException

from app.core.errors import BadRequest, NotFound
from app.core.sdk import VERIFIABLE_PRESENTATION, CryptoError, DecryptedPresentation, extract_credential_info
from app.db.models import NoPresentation, Presentation, PresentationRequest, Verifier
from app.db.stores import NoPresentationStore, PresentationRequestStore, PresentationStore, VerifierStore
from app.services.channel import PresentationChannel
from app.services.mapping import (
    legacy_presentation_attributes,
    no_presentation_attributes,
    presentation_attributes,
)
from app.services.verifier import VerifierAdapter

log = logging.getLogger(__name__)


class PresentationService:
    """Generación actual (versiones >= 2.0.0)."""

    name = "current"

    def __init__(
        self,
        requests: PresentationRequestStore,
        verifiers: VerifierStore,
        presentations: PresentationStore,
        no_presentations: NoPresentationStore,
        adapter: VerifierAdapter,
        channel: PresentationChannel,
    ):
        self.requests = requests
        self.verifiers = verifiers
        self.presentations = presentations
        self.no_presentations = no_presentations
        self.adapter = adapter
        self.channel = channel

    # --- puntos de variación entre generaciones ---

    async def find_request(self, request_info: dict) -> PresentationRequest | None:
        return await self.requests.find_one(pr_uuid=request_info["presentationRequest"].get("uuid"))

    def presentation_attributes(self, result: DecryptedPresentation) -> dict:
        return presentation_attributes(result.presentation, result.is_verified)

    def notification(self, entity: Presentation | NoPresentation, data: dict) -> dict:
        return entity.to_dict()

    async def handle_declination(self, result: DecryptedPresentation, data: dict) -> None:
        entity = await self.create_no_presentation_entity(result)
        self.notify(self.notification(entity, data))

    def receipt(
        self,
        data: dict,
        result: DecryptedPresentation,
        presentation_request: PresentationRequest,
        verifier: Verifier,
    ) -> dict:
        receipt_info = self.receipt_info(result, presentation_request, verifier)
        receipt_info["holderApp"] = result.presentation.get("holder")
        return {
            "isVerified": True,
            "type": result.type,
            "presentationReceiptInfo": receipt_info,
            "presentationRequestUuid": data["presentationRequestInfo"]["presentationRequest"].get("uuid"),
        }

    # --- comunes ---

    def receipt_info(self, result: DecryptedPresentation, presentation_request: PresentationRequest, verifier: Verifier) -> dict:
        credential_info = extract_credential_info(result.presentation)
        info = {
            "subjectDid": credential_info.subject_did,
            "credentialTypes": credential_info.credential_types,
            "verifierDid": verifier.verifier_did,
        }
        if result.type == VERIFIABLE_PRESENTATION:
            info["issuers"] = presentation_request.pr_issuer_info
        return info

    async def create_presentation_entity(self, result: DecryptedPresentation) -> Presentation:
        attrs = self.presentation_attributes(result)
        try:
            return await self.presentations.create(attrs)
        except Exception:
            log.exception("%s: failed to persist Presentation entity", type(self).__name__)
            raise

    async def create_no_presentation_entity(self, result: DecryptedPresentation) -> NoPresentation:
        attrs = no_presentation_attributes(result.presentation, result.is_verified)
        try:
            return await self.no_presentations.create(attrs)
        except Exception:
            log.exception("%s: failed to persist NoPresentation entity", type(self).__name__)
            raise

    def notify(self, payload: dict) -> None:
        # el canal no debe bloquear ni tumbar la respuesta
        try:
            self.channel.publish(payload)
        except Exception:
            log.exception("Failed to publish presentation to the websocket channel")

    async def create(self, data: dict) -> dict:
        request_info = data["presentationRequestInfo"]
        try:
            presentation_request = await self.find_request(request_info)
            if presentation_request is None:
                raise NotFound("PresentationRequest not found.")

            verifier = await self.verifiers.get_default()
            if verifier is None:
                raise RuntimeError("No default verifier configured.")

            result = await self.adapter.verify(verifier, data["encryptedPresentation"], request_info)
            log.debug("response from verification service %s", json.dumps(result.to_dict(), default=str))

            if not result.is_verified:
                log.warning("Presentation verification failed: %s", result.message)
                raise BadRequest(f"Verification failed: {result.message or ''}")

            if result.type == VERIFIABLE_PRESENTATION:
                entity = await self.create_presentation_entity(result)
                self.notify(self.notification(entity, data))
            else:
                await self.handle_declination(result, data)

            receipt = self.receipt(data, result, presentation_request, verifier)
            info = receipt["presentationReceiptInfo"]
            log.info(
                "Handled encrypted presentation of type %s%s for subject %s",
                result.type,
                f" with credentials {info['credentialTypes']}" if result.type == VERIFIABLE_PRESENTATION else "",
                info["subjectDid"],
                extra={
                    "version": data.get("version"),
                    "presentation_request": presentation_request.pr_uuid,
                    "verifier_did": verifier.verifier_did,
                },
            )
            return receipt
        except HTTPException as e:
            log.warning("Rejected encrypted presentation: %s", e.detail)
            raise
        except CryptoError:
            log.exception("Crypto error handling encrypted presentation")
            raise
        except Exception:
            log.exception("Error handling encrypted presentation")
            raise


class LegacyPresentationService(PresentationService):
    """Generación para clientes < 2.0.0."""

    name = "legacy"

    def __init__(self, *args, persist_declinations: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.persist_declinations = persist_declinations

    async def find_request(self, request_info: dict) -> PresentationRequest | None:
        # se busca por id (no por uuid): el id se mantiene entre versiones de la petición
        return await self.requests.find_one(pr_id=request_info["presentationRequest"].get("id"))

    def presentation_attributes(self, result: DecryptedPresentation) -> dict:
        return legacy_presentation_attributes(result.presentation, result.is_verified)

    def notification(self, entity: Presentation | NoPresentation, data: dict) -> dict:
        return {**entity.to_dict(), "version": data.get("version")}

    async def handle_declination(self, result: DecryptedPresentation, data: dict) -> None:
        if self.persist_declinations:
            await super().handle_declination(result, data)
            return
        log.info("Presentation was declined, not storing.")
        self.notify(result.presentation)

    def receipt(
        self,
        data: dict,
        result: DecryptedPresentation,
        presentation_request: PresentationRequest,
        verifier: Verifier,
    ) -> dict:
        pr = data["presentationRequestInfo"]["presentationRequest"]
        receipt_info = self.receipt_info(result, presentation_request, verifier)
        receipt_info["holderApp"] = pr.get("holderAppUuid")
        receipt_info["presentationRequestUuid"] = pr.get("uuid")
        return {"isVerified": True, "type": result.type, "presentationReceiptInfo": receipt_info}

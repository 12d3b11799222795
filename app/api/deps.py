# app/api/deps.py
from functools import lru_cache

from app.core.config import settings
from app.db.stores import NoPresentationStore, PresentationRequestStore, PresentationStore, VerifierStore
from app.services.channel import channel
from app.services.presentation import LegacyPresentationService, PresentationService
from app.services.verifier import VerifierAdapter
from app.services.versioning import VersionRouter, build_routes


def build_version_router() -> VersionRouter:
    verifiers = VerifierStore()
    stores = dict(
        requests=PresentationRequestStore(),
        verifiers=verifiers,
        presentations=PresentationStore(),
        no_presentations=NoPresentationStore(),
        adapter=VerifierAdapter(verifiers),
        channel=channel,
    )
    legacy = LegacyPresentationService(persist_declinations=settings.legacy_persist_declinations, **stores)
    current = PresentationService(**stores)
    return VersionRouter(build_routes(legacy, current), default_version=settings.default_protocol_version)


@lru_cache
def get_version_router() -> VersionRouter:
    return build_version_router()

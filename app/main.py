# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.api.presentation import router as presentation_router
from app.api.websocket import router as websocket_router

from app.core.config import settings
from app.core.keys import load_encryption_private_key
from app.core.logging_config import configure_logging
from app.core.sdk import VerificationServiceError
from app.db.session import engine, create_tables
from app.db.stores import VerifierStore

log = logging.getLogger(__name__)


async def seed_default_verifier(store: VerifierStore) -> None:
    if await store.get_default() is not None:
        return
    if not (settings.verifier_did and settings.verifier_auth_token):
        log.warning("No verifier configured: set VERIFIER_DID and VERIFIER_AUTH_TOKEN")
        return
    private_key = load_encryption_private_key(settings.verifier_key_path)
    if private_key is None:
        log.warning("Verifier encryption key not found at %s", settings.verifier_key_path)
        return
    await store.create(
        verifier_did=settings.verifier_did,
        encryption_private_key=private_key,
        auth_token=settings.verifier_auth_token,
    )
    log.info("Seeded default verifier %s", settings.verifier_did)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === STARTUP ===
    configure_logging()
    await create_tables()
    await seed_default_verifier(VerifierStore())
    yield
    # === SHUTDOWN ===
    await engine.dispose()

app = FastAPI(title="Presentation verifier", lifespan=lifespan)

app.include_router(presentation_router, prefix="/presentation", tags=["presentation"])
app.include_router(websocket_router, prefix="/presentation", tags=["presentation"])


@app.exception_handler(VerificationServiceError)
async def verification_service_error(request: Request, exc: VerificationServiceError):
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.get("/")
def root():
    return {"ok": True}

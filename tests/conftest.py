# tests/conftest.py
import os
import sys
from functools import partial
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# --- Asegurar que podemos importar 'app' desde la raíz del repo ---
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# --- Generación de clave efímera del verifier (RSA 2048) ---
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

VERIFIER_DID = "did:example:verifier"
INITIAL_AUTH_TOKEN = "initial-token"


def _generate_ephemeral_key(keys_dir: Path) -> Path:
    keys_dir.mkdir(parents=True, exist_ok=True)

    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem_priv = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    (keys_dir / "verifier_private.pem").write_bytes(pem_priv)
    return keys_dir / "verifier_private.pem"


def _prepare_test_env() -> None:
    tmp = (ROOT / ".pytest_tmp").absolute()
    tmp.mkdir(exist_ok=True)

    # BD SQLite temporal para pruebas (limpia en cada sesión)
    db_file = tmp / "test.sqlite3"
    if db_file.exists():
        db_file.unlink()
    os.environ["DB_URL"] = f"sqlite+aiosqlite:///{db_file.as_posix()}"

    os.environ["VERIFICATION_SERVICE_URL"] = "http://verification.test"
    os.environ["VERIFIER_DID"] = VERIFIER_DID
    # sin prefijo "Bearer " a propósito
    os.environ["VERIFIER_AUTH_TOKEN"] = INITIAL_AUTH_TOKEN
    os.environ["VERIFIER_ENCRYPTION_PRIVATE_KEY_PATH"] = _generate_ephemeral_key(tmp).as_posix()
    os.environ["LOG_JSON"] = "false"


# Antes de que cualquier módulo de test importe app.* (el engine se crea al importar)
_prepare_test_env()


@pytest.fixture(scope="session")
def client():
    """
    Cliente de pruebas con entorno efímero:
    - BD sqlite en .pytest_tmp/test.sqlite3
    - verifier por defecto sembrado en el arranque con una clave RSA generada al vuelo
    """
    from app.main import app
    # Con 'with' forzamos lifespan: crea tablas y siembra el verifier
    with TestClient(app) as c:
        yield c


@pytest.fixture
def run(client):
    """Ejecuta una corrutina en el mismo event loop que la app."""
    def _run(fn, *args, **kwargs):
        return client.portal.call(partial(fn, *args, **kwargs))
    return _run


@pytest.fixture
def seed_request(run):
    from app.db.stores import PresentationRequestStore

    def _seed(**attrs):
        return run(PresentationRequestStore().create, **attrs)
    return _seed


@pytest.fixture
def default_verifier(run):
    from app.db.stores import VerifierStore

    def _get():
        return run(VerifierStore().get_default)
    return _get


@pytest.fixture
def fake_verify(monkeypatch):
    """
    Sustituye la llamada al servicio de verificación.

    Se configura con fake_verify.respond(...) y registra cada llamada en fake_verify.calls.
    """
    from app.core import sdk

    class _FakeVerify:
        def __init__(self):
            self.calls = []
            self.result = None
            self.error = None

        def respond(self, **result):
            self.result = sdk.DecryptedPresentation(**result)

        def fail(self, exc):
            self.error = exc

        async def __call__(self, auth_token, encrypted_presentation, verifier_did, private_key, request_info):
            self.calls.append({
                "auth_token": auth_token,
                "encrypted_presentation": encrypted_presentation,
                "verifier_did": verifier_did,
                "private_key": private_key,
                "request_info": request_info,
            })
            if self.error is not None:
                raise self.error
            return sdk.VerifyResponse(body=self.result, auth_token=f"Bearer rotated-{len(self.calls)}")

    fake = _FakeVerify()
    monkeypatch.setattr(sdk, "verify_presentation", fake)
    return fake

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from pathlib import Path
import sys

# Uso: python tools/generate_verifier_key.py [directorio]  (por defecto keys/)
out = Path(sys.argv[1] if len(sys.argv) > 1 else "keys")
out.mkdir(parents=True, exist_ok=True)

key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
(out / "verifier_private.pem").write_bytes(key.private_bytes(
    encoding=serialization.Encoding.PEM,
    format=serialization.PrivateFormat.PKCS8,
    encryption_algorithm=serialization.NoEncryption(),
))
(out / "verifier_public.pem").write_bytes(key.public_key().public_bytes(
    encoding=serialization.Encoding.PEM,
    format=serialization.PublicFormat.SubjectPublicKeyInfo,
))
print(f"VERIFIER_ENCRYPTION_PRIVATE_KEY_PATH={(out / 'verifier_private.pem').as_posix()}")

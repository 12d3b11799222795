from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Base de datos
    db_url: str = Field("sqlite+aiosqlite:///./verifier.sqlite3", alias="DB_URL")

    # Servicio externo de verificación (server SDK)
    verification_service_url: str = Field("http://127.0.0.1:8080", alias="VERIFICATION_SERVICE_URL")
    verification_timeout: float = Field(10.0, alias="VERIFICATION_TIMEOUT")

    # Verifier por defecto (se crea en el arranque si la tabla está vacía)
    verifier_did: str | None = Field(None, alias="VERIFIER_DID")
    verifier_auth_token: str | None = Field(None, alias="VERIFIER_AUTH_TOKEN")
    verifier_key_path: str = Field("keys/verifier_private.pem", alias="VERIFIER_ENCRYPTION_PRIVATE_KEY_PATH")

    # Versionado del protocolo
    default_protocol_version: str = Field("1.0.0", alias="DEFAULT_PROTOCOL_VERSION")
    legacy_persist_declinations: bool = Field(True, alias="LEGACY_PERSIST_DECLINATIONS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(True, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,  # permite defaults si no hay variable de entorno
    )


settings = Settings()

# app/db/models.py
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import JSON, Boolean, String, Text, Integer, DateTime


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid.uuid4())


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


class Base(DeclarativeBase):
    pass


class PresentationRequest(Base):
    __tablename__ = "presentation_requests"

    uuid: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    pr_uuid: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    # id estable entre versiones de la misma petición
    pr_id: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    pr_holder_app_uuid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    pr_verifier_did: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pr_credential_requests: Mapped[list] = mapped_column(JSON, default=list)
    pr_issuer_info: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    pr_metadata: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)


class Verifier(Base):
    __tablename__ = "verifiers"

    uuid: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    verifier_did: Mapped[str] = mapped_column(String(255))
    encryption_private_key: Mapped[str] = mapped_column(Text)
    auth_token: Mapped[str] = mapped_column(Text)
    # contador para la actualización optimista del token
    version: Mapped[int] = mapped_column(Integer, default=1)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)


class Presentation(Base):
    __tablename__ = "presentations"

    uuid: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    presentation_context: Mapped[list] = mapped_column(JSON)
    presentation_type: Mapped[list] = mapped_column(JSON)
    presentation_verifiable_credentials: Mapped[list] = mapped_column(JSON, default=list)
    presentation_proof: Mapped[dict] = mapped_column(JSON)
    presentation_presentation_request_uuid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    presentation_presentation_request_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    verifier_did: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    def to_dict(self) -> dict:
        return {
            "uuid": self.uuid,
            "createdAt": _iso(self.created_at),
            "presentationContext": self.presentation_context,
            "presentationType": self.presentation_type,
            "presentationVerifiableCredentials": self.presentation_verifiable_credentials,
            "presentationProof": self.presentation_proof,
            "presentationPresentationRequestUuid": self.presentation_presentation_request_uuid,
            "presentationPresentationRequestId": self.presentation_presentation_request_id,
            "verifierDid": self.verifier_did,
            "isVerified": self.is_verified,
        }


class NoPresentation(Base):
    __tablename__ = "no_presentations"

    uuid: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    np_type: Mapped[list] = mapped_column(JSON)
    np_proof: Mapped[dict] = mapped_column(JSON)
    np_holder: Mapped[str | None] = mapped_column(String(255), nullable=True)
    np_presentation_request_uuid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    def to_dict(self) -> dict:
        return {
            "uuid": self.uuid,
            "createdAt": _iso(self.created_at),
            "npType": self.np_type,
            "npProof": self.np_proof,
            "npHolder": self.np_holder,
            "npPresentationRequestUuid": self.np_presentation_request_uuid,
            "isVerified": self.is_verified,
        }

# app/db/stores.py
"""
Acceso a datos de las entidades del verifier.

Cada store abre su propia sesión por operación (igual que las rutas), de modo
que el handler puede recibir stores falsos en los tests.
"""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.models import NoPresentation, Presentation, PresentationRequest, Verifier
from app.db.session import SessionLocal


class PresentationRequestStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = SessionLocal):
        self._sessions = session_factory

    async def find_one(self, *, pr_uuid: str | None = None, pr_id: str | None = None) -> PresentationRequest | None:
        """Busca por pr_uuid o, si no se da, por pr_id (la versión más reciente)."""
        if pr_uuid is None and pr_id is None:
            return None

        stmt = select(PresentationRequest)
        if pr_uuid is not None:
            stmt = stmt.where(PresentationRequest.pr_uuid == pr_uuid)
        else:
            stmt = stmt.where(PresentationRequest.pr_id == pr_id)
        stmt = stmt.order_by(PresentationRequest.created_at.desc()).limit(1)

        async with self._sessions() as s:
            return (await s.execute(stmt)).scalars().first()

    async def create(self, **attrs) -> PresentationRequest:
        async with self._sessions() as s:
            row = PresentationRequest(**attrs)
            s.add(row)
            await s.commit()
            return row


class VerifierStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = SessionLocal):
        self._sessions = session_factory

    async def get_default(self) -> Verifier | None:
        stmt = select(Verifier).order_by(Verifier.created_at.desc()).limit(1)
        async with self._sessions() as s:
            return (await s.execute(stmt)).scalars().first()

    async def create(self, **attrs) -> Verifier:
        async with self._sessions() as s:
            row = Verifier(**attrs)
            s.add(row)
            await s.commit()
            return row

    async def patch(self, uuid: str, *, auth_token: str, expected_version: int) -> bool:
        """
        Actualiza el token solo si nadie lo ha cambiado desde que se leyó.

        Devuelve False si la versión ya no coincide (otra petición rotó el token antes).
        """
        stmt = (
            update(Verifier)
            .where(Verifier.uuid == uuid, Verifier.version == expected_version)
            .values(auth_token=auth_token, version=Verifier.version + 1)
        )
        async with self._sessions() as s:
            res = await s.execute(stmt)
            await s.commit()
        return res.rowcount == 1


class PresentationStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = SessionLocal):
        self._sessions = session_factory

    async def create(self, attrs: dict) -> Presentation:
        async with self._sessions() as s:
            row = Presentation(**attrs)
            s.add(row)
            await s.commit()
            return row

    async def get(self, uuid: str) -> Presentation | None:
        async with self._sessions() as s:
            return await s.get(Presentation, uuid)

    async def find_all(self) -> list[Presentation]:
        async with self._sessions() as s:
            res = await s.execute(select(Presentation).order_by(Presentation.created_at))
            return list(res.scalars().all())


class NoPresentationStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = SessionLocal):
        self._sessions = session_factory

    async def create(self, attrs: dict) -> NoPresentation:
        async with self._sessions() as s:
            row = NoPresentation(**attrs)
            s.add(row)
            await s.commit()
            return row

    async def get(self, uuid: str) -> NoPresentation | None:
        async with self._sessions() as s:
            return await s.get(NoPresentation, uuid)

    async def find_all(self) -> list[NoPresentation]:
        async with self._sessions() as s:
            res = await s.execute(select(NoPresentation).order_by(NoPresentation.created_at))
            return list(res.scalars().all())

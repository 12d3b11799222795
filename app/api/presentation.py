# app/api/presentation.py
from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel, ConfigDict

from app.api.deps import get_version_router
from app.core.errors import NotFound
from app.db.stores import NoPresentationStore, PresentationStore
from app.services.versioning import VersionRouter

router = APIRouter()


class PresentationRequestRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    uuid: str | None = None
    id: str | None = None
    holderAppUuid: str | None = None


class PresentationRequestInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    presentationRequest: PresentationRequestRef


class EncryptedPresentationInput(BaseModel):
    model_config = ConfigDict(extra="allow")

    encryptedPresentation: dict | str
    presentationRequestInfo: PresentationRequestInfo
    version: str | None = None


@router.post("")
async def create_presentation(
    body: EncryptedPresentationInput,
    version: str | None = Header(None),
    versions: VersionRouter = Depends(get_version_router),
):
    return await versions.create(body.model_dump(), header_version=version)


@router.get("/list")
async def list_presentations():
    presentations = await PresentationStore().find_all()
    declinations = await NoPresentationStore().find_all()
    return {
        "presentations": [p.to_dict() for p in presentations],
        "noPresentations": [np.to_dict() for np in declinations],
    }


@router.get("/{uuid}")
async def get_presentation(uuid: str):
    entity = await PresentationStore().get(uuid) or await NoPresentationStore().get(uuid)
    if not entity:
        raise NotFound("Presentation not found.")
    return entity.to_dict()

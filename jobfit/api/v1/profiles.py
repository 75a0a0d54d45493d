from fastapi import APIRouter, HTTPException, Request, Response, status

from jobfit.core.errors import InvalidInputError, ProfileNotFoundError
from jobfit.schemas.api import ProfileDeleteResponse
from jobfit.schemas.profile import ProfileRecord
from jobfit.storage.profile_io import export_profile, import_profile
from jobfit.storage.profile_store import ProfileStore

router = APIRouter()


def _store(request: Request) -> ProfileStore:
    return request.app.state.profile_store


def _raise_http(exc: InvalidInputError | ProfileNotFoundError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


def _get_or_404(store: ProfileStore, profile_id: str) -> ProfileRecord:
    try:
        record = store.get(profile_id)
    except InvalidInputError as exc:
        _raise_http(exc)
    if record is None:
        _raise_http(ProfileNotFoundError(profile_id))
    return record


@router.get("/profiles", response_model=list[ProfileRecord])
def list_profiles(request: Request):
    return _store(request).list_profiles()


@router.post("/profiles", response_model=ProfileRecord, status_code=status.HTTP_201_CREATED)
def create_profile(request: Request, payload: ProfileRecord):
    try:
        return _store(request).create(payload)
    except InvalidInputError as exc:
        _raise_http(exc)


@router.post("/profiles/import", response_model=ProfileRecord, status_code=status.HTTP_201_CREATED)
async def import_profile_document(request: Request):
    raw = await request.body()
    try:
        return _store(request).create(import_profile(raw))
    except InvalidInputError as exc:
        _raise_http(exc)


@router.delete("/profiles", response_model=ProfileDeleteResponse)
def delete_all_profiles(request: Request):
    return ProfileDeleteResponse(deleted=_store(request).delete_all())


@router.get("/profiles/{profile_id}", response_model=ProfileRecord)
def get_profile(request: Request, profile_id: str):
    return _get_or_404(_store(request), profile_id)


@router.get("/profiles/{profile_id}/export")
def export_profile_document(request: Request, profile_id: str):
    record = _get_or_404(_store(request), profile_id)
    try:
        filename, content = export_profile(record)
    except InvalidInputError as exc:
        _raise_http(exc)
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.put("/profiles/{profile_id}", response_model=ProfileRecord)
def update_profile(request: Request, profile_id: str, payload: ProfileRecord):
    try:
        return _store(request).update(profile_id, payload)
    except (InvalidInputError, ProfileNotFoundError) as exc:
        _raise_http(exc)


@router.delete("/profiles/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(request: Request, profile_id: str):
    try:
        deleted = _store(request).delete(profile_id)
    except InvalidInputError as exc:
        _raise_http(exc)
    if not deleted:
        _raise_http(ProfileNotFoundError(profile_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

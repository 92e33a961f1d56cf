"""
Drive backup endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends

from second_brain.api.dependencies import get_backup_service, get_save_backup
from second_brain.application.dto.requests import DriveRequest
from second_brain.application.dto.responses import (
    AuthUrlResponse,
    DriveSaveResponse,
    DriveTokensResponse,
    ErrorResponse,
)
from second_brain.application.use_cases import SaveBackupUseCase
from second_brain.core.exceptions import ValidationError
from second_brain.core.services import BackupService

router = APIRouter(prefix="/api/drive", tags=["drive"])


@router.post(
    "",
    response_model=None,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def drive_action(
    request: DriveRequest,
    backup: BackupService = Depends(get_backup_service),
    save_backup: SaveBackupUseCase = Depends(get_save_backup),
) -> dict[str, Any]:
    """
    Exchange an authorization code, or save a snapshot.

    ``{code}`` returns the token set; ``{accessToken, data}`` uploads the
    dataset and returns the file id.
    """
    if request.code:
        tokens = await backup.exchange_auth_code(request.code)
        return DriveTokensResponse(tokens=tokens.raw).model_dump(by_alias=True)

    if request.access_token and request.data is not None:
        file_id = await save_backup.execute(request.access_token, request.data)
        return DriveSaveResponse(file_id=file_id).model_dump(by_alias=True)

    raise ValidationError("body", "expected {code} or {accessToken, data}")


@router.get("/auth-url", response_model=AuthUrlResponse)
async def auth_url(
    state: str | None = None,
    backup: BackupService = Depends(get_backup_service),
) -> AuthUrlResponse:
    """Consent screen URL for the authorization-code flow."""
    return AuthUrlResponse(url=backup.authorization_url(state))

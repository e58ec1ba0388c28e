from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile
import structlog

from autotest.models.schemas import TokenUser, UploadResponse
from autotest.services.upload_service import UploadService
from autotest.core.dependencies import get_upload_service
from autotest.core.security import get_current_user

logger = structlog.get_logger()

router = APIRouter(tags=["uploads"])


@router.post("/upload-files", response_model=UploadResponse)
async def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    current_user: TokenUser = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    """Analyse uploaded source files and return them as a ``code`` input"""
    logger.info("Receiving uploaded files", user_id=current_user.id, count=len(files or []))
    return await service.process_uploads(files)

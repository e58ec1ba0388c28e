from typing import List, Optional

import structlog
from fastapi import UploadFile

from autotest.config.settings import settings
from autotest.core.exceptions import ValidationError
from autotest.models.schemas import SourceFileAnalysis, UploadedFileOut, UploadResponse
from autotest.services.source_inspector import (
    combine_files,
    file_type,
    inspect_file,
    is_source_file,
    project_structure,
)

logger = structlog.get_logger()

MB = 1024 * 1024


class UploadService:
    """Validates uploaded source files and analyses them without calling the model."""

    async def process_uploads(self, uploads: Optional[List[UploadFile]]) -> UploadResponse:
        if not uploads:
            raise ValidationError("No files provided")

        max_file = settings.max_upload_file_bytes
        max_total = settings.max_upload_total_bytes
        accepted = []
        total_size = 0

        for upload in uploads:
            name = upload.filename or ""
            if not is_source_file(name):
                logger.info("Skipping unsupported upload", filename=name)
                continue

            # One byte past the limit is enough to reject the file
            data = await upload.read(max_file + 1)
            if len(data) > max_file:
                raise ValidationError(f"File {name} is too large. Maximum size is {max_file // MB}MB.")

            total_size += len(data)
            if total_size > max_total:
                raise ValidationError(f"Total upload size exceeds {max_total // MB}MB limit.")

            accepted.append((name, data))

        inspected = []
        files = []
        for name, data in accepted:
            content = data.decode("utf-8", errors="replace")
            source = inspect_file(name, content)
            inspected.append(source)
            files.append(
                UploadedFileOut(
                    name=name.rsplit("/", 1)[-1],
                    size=len(data),
                    type=file_type(name),
                    path=name,
                    analysis=SourceFileAnalysis(
                        lines_of_code=source.lines_of_code,
                        total_lines=len(content.split("\n")),
                        language=source.language,
                        complexity=source.complexity,
                        testable_elements=list(dict.fromkeys(source.testable_elements)),
                    ),
                )
            )

        logger.info("Processed uploaded files", files=len(files), total_size=total_size, skipped=len(uploads) - len(files))
        return UploadResponse(
            files=files,
            project_analysis=project_structure(inspected),
            total_files=len(files),
            total_size=total_size,
            input_data=combine_files(inspected),
            message=f"Successfully processed {len(files)} files",
        )

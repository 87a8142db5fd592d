# gobarber/routers/files_routes.py

import logging
import shutil
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, UploadFile
from sqlmodel import Session

from gobarber.auth import get_current_user
from gobarber.config import settings
from gobarber.db import get_session
from gobarber.errors import ValidationError
from gobarber.models import File, User
from gobarber.schemas import FilePublic
from gobarber.store import FileStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/files",
    tags=["files"],
)


@router.post("", status_code=201, response_model=FilePublic)
def upload_file(
    file: UploadFile,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    if not file.filename:
        raise ValidationError("File name is missing")

    # stored under a random name, keeping the extension so it is served with the right type
    stored_name = uuid.uuid4().hex + Path(file.filename).suffix.lower()
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    with (upload_dir / stored_name).open("wb") as target:
        shutil.copyfileobj(file.file, target)

    db_file = FileStore(session).insert(File(name=file.filename, path=stored_name))
    logger.info("User %s uploaded file %s as %s", current_user.id, db_file.id, stored_name)
    return FilePublic.build(db_file)

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session

from account_api.core.auth import CurrentUser, get_current_user
from account_api.core.config import settings
from account_api.core.db import get_db
from account_api.core.exceptions import UnsupportedMediaError
from account_api.schemas.user import ChangePasswordIn, UserProfileOut, UserUpdateIn
from account_api.services import users as users_service
from account_api.utils.files import get_file_url, get_user_logo_path, remove_file, save_image_upload

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserProfileOut)
def get_profile(current: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return users_service.get_user_profile(db, current.user_id)


@router.patch("/profile", response_model=UserProfileOut)
def update_profile(
    payload: UserUpdateIn,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = payload.model_dump(exclude_unset=True, by_alias=False)
    return users_service.update_user_info(
        db,
        current.user_id,
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
    )


@router.patch("/profile/change-password", response_model=UserProfileOut)
def change_password(
    payload: ChangePasswordIn,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return users_service.change_password(db, current.user_id, payload.current_password, payload.new_password)


@router.post("/profile/logo", response_model=UserProfileOut)
def upload_logo(
    request: Request,
    file: Optional[UploadFile] = File(None),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if file is None or not file.filename:
        raise UnsupportedMediaError()

    filename = save_image_upload(file, settings.MAX_LOGO_SIZE)
    try:
        return users_service.update_user_logo(
            db,
            current.user_id,
            logo_url=get_file_url(filename, request),
            logo_file=filename,
        )
    except Exception:
        # 저장은 됐지만 사용자에 연결되지 않은 파일은 지움
        remove_file(get_user_logo_path(filename))
        raise


@router.delete("/profile/logo", response_model=UserProfileOut)
def remove_logo(current: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return users_service.update_user_logo(db, current.user_id, logo_url=None, logo_file=None)

# gobarber/routers/users_routes.py

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from gobarber.auth import get_current_user, hash_password
from gobarber.db import get_session
from gobarber.errors import NotFoundError
from gobarber.models import User
from gobarber.schemas import UserCreate, UserPublic, UserUpdate
from gobarber.store import FileStore, UserStore

router = APIRouter(
    tags=["users"],
)


@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(get_current_user)):
    return UserPublic.build(current_user)


@router.put("/me", response_model=UserPublic)
def update_me(
    changes: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    if changes.avatar_id is not None:
        if FileStore(session).find_by_id(changes.avatar_id) is None:
            raise NotFoundError("File not found")
        current_user.avatar_id = changes.avatar_id
    if changes.name is not None:
        current_user.name = changes.name

    return UserPublic.build(UserStore(session).update(current_user))


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    session: Session = Depends(get_session),
):
    users = UserStore(session)

    # 1) Check if email already exists
    if users.find_by_email(user.email) is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 2) Create user in DB
    db_user = users.insert(User(
        name=user.name,
        email=user.email,
        password_hash=hash_password(user.password),
        provider=user.provider,
    ))

    return UserPublic.build(db_user)

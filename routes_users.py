from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database import get_db
from mappers import user_to_out
from schemas import (
    AddressUpdate,
    Message,
    PasswordChange,
    PasswordCheck,
    PasswordReset,
    PhoneUpdate,
    UserCreate,
    UserOut,
    UserUpdate,
)
from user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("/all", response_model=List[UserOut])
def list_users(users: UserService = Depends(get_user_service)):
    return [user_to_out(u) for u in users.get_all()]


@router.get("/email/{email}", response_model=UserOut)
def get_user_by_email(email: str, users: UserService = Depends(get_user_service)):
    return user_to_out(users.get_by_email(email))


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, users: UserService = Depends(get_user_service)):
    return user_to_out(users.get_by_id(user_id))


@router.post("/new", response_model=UserOut, status_code=201)
def register(payload: UserCreate, users: UserService = Depends(get_user_service)):
    return user_to_out(users.create_user(payload.model_dump()))


@router.put("/update/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdate, users: UserService = Depends(get_user_service)):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return user_to_out(users.update_user(user_id, changes))


@router.patch("/{user_id}/password", response_model=Message)
def change_password(user_id: int, payload: PasswordChange, users: UserService = Depends(get_user_service)):
    users.update_password(user_id, payload.old_password, payload.new_password)
    return Message(message="Password updated")


@router.post("/{user_id}/verify-password", response_model=Message)
def verify_password(user_id: int, payload: PasswordCheck, users: UserService = Depends(get_user_service)):
    users.verify_password(user_id, payload.password)
    return Message(message="Password verified")


@router.patch("/{user_id}/reset-password", response_model=Message)
def reset_password(user_id: int, payload: PasswordReset, users: UserService = Depends(get_user_service)):
    users.reset_password(user_id, payload.new_password)
    return Message(message="Password reset")


@router.patch("/{user_id}/address", response_model=UserOut)
def update_address(user_id: int, payload: AddressUpdate, users: UserService = Depends(get_user_service)):
    return user_to_out(users.update_address(user_id, payload.address))


@router.patch("/{user_id}/phone", response_model=UserOut)
def update_phone(user_id: int, payload: PhoneUpdate, users: UserService = Depends(get_user_service)):
    return user_to_out(users.update_phone(user_id, payload.phone))


@router.delete("/delete/{user_id}", status_code=204, response_class=Response)
def delete_user(user_id: int, users: UserService = Depends(get_user_service)):
    users.delete_user(user_id)
    return Response(status_code=204)

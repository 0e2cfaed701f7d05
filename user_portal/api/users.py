# User CRUD and role listing endpoints
from typing import Dict, List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from user_portal.api.deps import require_session
from user_portal.api.responses import to_response
from user_portal.db.session import get_db
from user_portal.models.schemas import RoleGroup, UserCreate, UserResponse, UserUpdate
from user_portal.models.user import User, UserRole
from user_portal.services import user_service

router = APIRouter(prefix="/users")


def _user_out(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def _users_out(users: List[User]) -> List[UserResponse]:
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, db: Session = Depends(get_db)) -> Response:
    result = user_service.create_user(db, user_in)
    return to_response(result, status.HTTP_201_CREATED, _user_out)


@router.get("/me", response_model=UserResponse)
def get_current_user(
    session: Dict = Depends(require_session),
    db: Session = Depends(get_db),
) -> Response:
    """Return the user owning the session cookie."""
    result = user_service.get_user_by_id(db, session["sub"])
    return to_response(result, status.HTTP_200_OK, _user_out)


@router.get("/role/{group}", response_model=List[UserResponse])
def get_all_users_by_role_group(group: RoleGroup, db: Session = Depends(get_db)) -> Response:
    """
    List users for one role.

    `group` is one of managers, supervisors, hr, secretaries or employees,
    each mapped to a fixed UserRole.
    """
    return get_all_users_by_role(group.role, db)


def get_all_users_by_role(role: UserRole, db: Session) -> Response:
    result = user_service.get_users_by_role(db, role)
    return to_response(result, status.HTTP_200_OK, _users_out)


@router.get("/{user_id}", response_model=UserResponse)
def get_user_by_id(user_id: str, db: Session = Depends(get_db)) -> Response:
    result = user_service.get_user_by_id(db, user_id)
    return to_response(result, status.HTTP_200_OK, _user_out)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, user_in: UserUpdate, db: Session = Depends(get_db)) -> Response:
    result = user_service.update_person(db, user_id, user_in)
    return to_response(result, status.HTTP_200_OK, _user_out)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Session = Depends(get_db)) -> Response:
    result = user_service.delete_user(db, user_id)
    return to_response(result, status.HTTP_204_NO_CONTENT)

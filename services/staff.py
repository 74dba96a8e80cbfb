import logging
from typing import Optional
from models.staff import StaffRole
from schemas.staff import LoginResponse, StaffInDB
from services.exceptions import InvalidCredentials, NotFound, ValidationError
from storage.base import EntityStore
from utils.auth import create_access_token, verify_password

logger = logging.getLogger(__name__)


class StaffDirectory:
    """Read-only staff reference data and the login stub built on it."""

    def __init__(self, store: EntityStore):
        self.store = store

    def get(self, staff_id: str) -> StaffInDB:
        member = self.store.staff.get(staff_id)
        if not member:
            raise NotFound(f"Staff member {staff_id} not found")
        return member

    def authenticate(self, username: Optional[str], password: Optional[str],
                     role: Optional[StaffRole]) -> LoginResponse:
        if not username or not password or not role:
            raise ValidationError("Username, password, and role are required")

        member = self.store.staff.get_by_username(username)
        if not member or not verify_password(password, member.password) or member.role != role:
            logger.warning(f"Failed login for '{username}' as {role.value}")
            raise InvalidCredentials("Invalid credentials or role")

        token = create_access_token({"sub": member.username, "role": member.role.value})
        logger.info(f"Staff {member.id} logged in as {member.role.value}")
        return LoginResponse(
            success=True,
            username=member.username,
            role=member.role,
            name=member.name,
            id=member.id,
            token=token,
        )

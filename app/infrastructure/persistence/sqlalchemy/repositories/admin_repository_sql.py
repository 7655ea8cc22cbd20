from typing import Optional

from sqlmodel import Session, select

from .....models import AdminUser
from .....application.ports.admin_repo import AdminDto, AdminRepository


class SqlAdminRepository(AdminRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, user: AdminUser) -> AdminDto:
        return AdminDto(
            id=user.id,
            username=user.username,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )

    def get_by_username(self, username: str) -> Optional[AdminDto]:
        user = self.session.exec(select(AdminUser).where(AdminUser.username == username)).first()
        return self._to_dto(user) if user else None

    def get_by_id(self, admin_id: str) -> Optional[AdminDto]:
        user = self.session.get(AdminUser, admin_id)
        return self._to_dto(user) if user else None

    def create(self, username: str, password_hash: str) -> AdminDto:
        user = AdminUser(username=username, password_hash=password_hash)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return self._to_dto(user)

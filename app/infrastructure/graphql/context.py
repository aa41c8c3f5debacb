"""Per-request GraphQL context — session, signed-in user and use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from app.application.use_cases.get_assignment import GetAssignmentUseCase
from app.application.use_cases.update_assignment import UpdateAssignmentUseCase
from app.domain.entities.user import User
from app.infrastructure.api.auth import get_current_user
from app.infrastructure.api.dependencies import (
    get_db_session,
    get_get_assignment_uc,
    get_update_assignment_uc,
)


class GraphQLContext(BaseContext):
    def __init__(
        self,
        session: AsyncSession,
        current_user: User | None,
        update_assignment: UpdateAssignmentUseCase,
        get_assignment: GetAssignmentUseCase,
    ):
        super().__init__()
        self.session = session
        self.current_user = current_user
        self.update_assignment = update_assignment
        self.get_assignment = get_assignment

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


async def get_context(
    session: AsyncSession = Depends(get_db_session),
    current_user: User | None = Depends(get_current_user),
    update_assignment: UpdateAssignmentUseCase = Depends(get_update_assignment_uc),
    get_assignment: GetAssignmentUseCase = Depends(get_get_assignment_uc),
) -> GraphQLContext:
    return GraphQLContext(
        session=session,
        current_user=current_user,
        update_assignment=update_assignment,
        get_assignment=get_assignment,
    )

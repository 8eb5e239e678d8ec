"""
FastAPI router for the admin dashboard.

Every route requires the caller to carry the admin flag.
"""

from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from cryptofund.application.funding.admin import (
    GetAdminStatsUseCase,
    ListTransactionsUseCase,
    ListUsersUseCase,
    SetAdminFlagUseCase,
)
from cryptofund.application.funding.dtos import ListTransactionsQuery
from cryptofund.application.funding.users import GetUserUseCase
from cryptofund.domain.funding.entities import TransactionStatus
from cryptofund.interfaces.admin.schemas import (
    AdminStatsResponse,
    SetAdminFlagRequest,
    TransactionItem,
    TransactionPageResponse,
    UserListResponse,
)
from cryptofund.interfaces.auth import require_admin
from cryptofund.interfaces.funding.dependencies import (
    get_admin_stats_use_case,
    get_list_transactions_use_case,
    get_list_users_use_case,
    get_set_admin_flag_use_case,
    get_user_use_case,
)
from cryptofund.interfaces.funding.schemas import UserResponse
from cryptofund.interfaces.schemas import ErrorResponse, ValidationErrorResponse

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@router.get(
    "/stats",
    response_model=AdminStatsResponse,
    summary="Platform statistics",
)
def get_admin_stats(
    use_case: GetAdminStatsUseCase = Depends(get_admin_stats_use_case),
) -> AdminStatsResponse:
    return AdminStatsResponse.from_entity(use_case.execute())


@router.get(
    "/users",
    response_model=UserListResponse,
    summary="List users",
)
def list_users(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
) -> UserListResponse:
    return UserListResponse(users=[UserResponse.from_entity(u) for u in use_case.execute()])


@router.post(
    "/users/{user_id}/toggle-admin",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Grant or revoke admin rights",
    description="Sets the flag from the body, or flips it when no body is sent.",
)
def toggle_admin(
    user_id: UUID,
    payload: Optional[SetAdminFlagRequest] = Body(default=None),
    get_user: GetUserUseCase = Depends(get_user_use_case),
    use_case: SetAdminFlagUseCase = Depends(get_set_admin_flag_use_case),
) -> UserResponse:
    if payload is not None:
        is_admin = payload.is_admin
    else:
        is_admin = not get_user.execute(user_id).is_admin
    return UserResponse.from_entity(use_case.execute(user_id, is_admin))


@router.get(
    "/transactions",
    response_model=TransactionPageResponse,
    responses={400: {"model": ValidationErrorResponse}},
    summary="Browse the transaction ledger",
)
def list_transactions(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    tx_status: Literal["all", "pending", "confirmed", "failed"] = Query(
        default="all", alias="status"
    ),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> TransactionPageResponse:
    result = use_case.execute(
        ListTransactionsQuery(
            page=page,
            limit=limit,
            status=None if tx_status == "all" else TransactionStatus(tx_status),
        )
    )
    return TransactionPageResponse(
        transactions=[TransactionItem.from_entity(t) for t in result.transactions],
        total_count=result.total_count,
        total_pages=result.total_pages,
        page=result.page,
    )

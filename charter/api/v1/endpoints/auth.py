from fastapi import APIRouter

from charter.core.common_deps import CurrentUserDep
from charter.schemas.responses import CurrentUserResponse

router = APIRouter()


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(current_user: CurrentUserDep):
    return CurrentUserResponse(
        id=current_user.id,
        roles=sorted(role.value for role in current_user.roles),
        is_admin=current_user.is_admin,
    )

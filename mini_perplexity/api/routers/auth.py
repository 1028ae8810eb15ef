"""
Authentication API endpoints.

Routes:
- POST /auth/signup - Register with email and password
- POST /auth/login - Check credentials

Dependencies: mini_perplexity.application.services.auth_service
System role: Account HTTP API
"""

from fastapi import APIRouter, Depends

from mini_perplexity.api.deps import get_auth_service
from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.application.services.auth_service import AuthService
from mini_perplexity.models.auth import LoginRequest, LoginResponse, SignupRequest, UserResponse
from mini_perplexity.models.common import SuccessResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SuccessResponse)
@handle_api_errors
async def signup(
    request: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """
    Register a new user.

    Raises:
        HTTPException(400): Invalid email, short password or email already in use
    """
    await auth_service.signup(request.email, request.password, name=request.name)
    return SuccessResponse()


@router.post("/login", response_model=LoginResponse)
@handle_api_errors
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Check credentials.

    Raises:
        HTTPException(401): Unknown email or wrong password
    """
    user = await auth_service.authenticate(request.email, request.password)
    return LoginResponse(user=UserResponse.model_validate(user))

"""
FastAPI Application Entry Point

Food Delivery Platform - customers, restaurant owners and an administrator.

Endpoints:
    - POST /register: Create an account (restaurant owners also get a profile)
    - POST /login: Check credentials, return the account
    - POST /update-promote-list: Replace the promoted restaurant list
    - POST /approve-user, /reject-user: Admin approval decisions
    - GET /fetch-users, /fetch-restaurants: Listings
    - POST /add-to-cart: Append a cart line item
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings, setup_logging
from app.core.exceptions import AppError, MissingFieldsError
from app.database import engine, get_db, init_db
from app.schemas import (
    AddToCartRequest,
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    MessageResponse,
    PromoteListRequest,
    RegisterRequest,
    RestaurantResponse,
    UserIdRequest,
    UserMessageResponse,
    UserResponse,
)
from app.services import (
    AccountService,
    ApprovalService,
    CartAggregator,
    CredentialStore,
    RestaurantDirectory,
    get_account_service,
    get_approval_service,
    get_cart_aggregator,
    get_credential_store,
    get_restaurant_directory,
)

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.

    An unreachable store is fatal: the exception propagates and the
    server process exits instead of serving in a degraded state.
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    try:
        await init_db()
    except Exception as e:
        logger.critical(f"Database connection error: {e}")
        raise
    logger.info("Database initialized")

    yield  # Application runs

    logger.info("Shutting down...")
    await engine.dispose()
    logger.info("Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Backend for a food ordering platform: account registration, "
        "restaurant owner approval and cart assembly."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    """Verify the store is reachable."""
    db_status = "healthy"
    try:
        await db.execute(select(1))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    return HealthResponse(
        status="operational" if db_status == "healthy" else "degraded",
        database=db_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# ACCOUNT ENDPOINTS
# =============================================================================

@app.post(
    "/register",
    status_code=201,
    response_model=UserMessageResponse,
    responses=ERROR_RESPONSES,
    tags=["Accounts"],
    summary="Register Account",
)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> UserMessageResponse:
    """
    Create a new account.

    Customers and admins are approved immediately. Restaurant owners
    start ``pending`` and get a restaurant profile titled with their
    username.
    """
    result = await accounts.register(
        username=body.username,
        email=body.email,
        usertype=body.usertype,
        password=body.password,
        restaurant_address=body.restaurant_address,
        restaurant_image=body.restaurant_image,
    )
    return UserMessageResponse(
        message=result.message,
        user=UserResponse.model_validate(result.user),
    )


@app.post(
    "/login",
    response_model=UserMessageResponse,
    responses={**ERROR_RESPONSES, 401: {"model": ErrorResponse}},
    tags=["Accounts"],
    summary="Login",
)
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> UserMessageResponse:
    """Check credentials. The caller inspects ``user.approval`` itself."""
    user = await accounts.login(body.email, body.password)
    return UserMessageResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
    )


# =============================================================================
# ADMIN ENDPOINTS
# =============================================================================

@app.post(
    "/update-promote-list",
    response_model=MessageResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    tags=["Admin"],
)
async def update_promote_list(
    body: PromoteListRequest,
    restaurants: RestaurantDirectory = Depends(get_restaurant_directory),
) -> MessageResponse:
    await restaurants.update_promotion_list(body.promote_list)
    return MessageResponse(message="Promote list updated successfully")


@app.post(
    "/approve-user",
    response_model=MessageResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    tags=["Admin"],
)
async def approve_user(
    body: UserIdRequest,
    approvals: ApprovalService = Depends(get_approval_service),
) -> MessageResponse:
    if not body.id:
        raise MissingFieldsError(["id"], "User ID is required")
    await approvals.approve(body.id)
    return MessageResponse(message="User approved")


@app.post(
    "/reject-user",
    response_model=MessageResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    tags=["Admin"],
)
async def reject_user(
    body: UserIdRequest,
    approvals: ApprovalService = Depends(get_approval_service),
) -> MessageResponse:
    if not body.id:
        raise MissingFieldsError(["id"], "User ID is required")
    await approvals.reject(body.id)
    return MessageResponse(message="User rejected")


@app.get(
    "/fetch-users",
    response_model=list[UserResponse],
    tags=["Admin"],
)
async def fetch_users(
    credentials: CredentialStore = Depends(get_credential_store),
) -> list[UserResponse]:
    users = await credentials.list_all()
    return [UserResponse.model_validate(u) for u in users]


@app.get(
    "/fetch-restaurants",
    response_model=list[RestaurantResponse],
    tags=["Restaurants"],
)
async def fetch_restaurants(
    restaurants: RestaurantDirectory = Depends(get_restaurant_directory),
) -> list[RestaurantResponse]:
    profiles = await restaurants.list_all()
    return [RestaurantResponse.model_validate(r) for r in profiles]


# =============================================================================
# CART ENDPOINTS
# =============================================================================

@app.post(
    "/add-to-cart",
    response_model=MessageResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    tags=["Cart"],
)
async def add_to_cart(
    body: AddToCartRequest,
    cart: CartAggregator = Depends(get_cart_aggregator),
) -> MessageResponse:
    """Append a line item; the restaurant name is captured at this moment."""
    await cart.add_item(
        user_id=body.user_id,
        food_item_id=body.food_item_id,
        food_item_name=body.food_item_name,
        restaurant_id=body.restaurant_id,
        food_item_img=body.food_item_img,
        price=body.price,
        discount=body.discount,
        quantity=body.quantity,
    )
    return MessageResponse(message="Item added to cart")


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map typed service failures onto their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are reported as 400, like missing fields."""
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "error": errors or "Malformed body"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "message": "Server Error",
            "error": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    run()

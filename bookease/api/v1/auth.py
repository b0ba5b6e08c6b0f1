from fastapi import APIRouter, Depends, HTTPException, Response

from bookease.api.v1.schemas import (
    AdminSchema,
    LoginRequestSchema,
    ProfileUpdateSchema,
    RegisterRequestSchema,
    UserSchema,
)
from bookease.application.exceptions import AuthenticationError, DuplicateUserError
from bookease.application.ports.auth import AuthPort
from bookease.wiring.dependencies import get_auth

router = APIRouter()


@router.post("/auth/register", response_model=UserSchema, status_code=201)
def register(req: RegisterRequestSchema, auth: AuthPort = Depends(get_auth)):
    try:
        user = auth.register_user(email=req.email, name=req.name, phone=req.phone, password=req.password)
    except DuplicateUserError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return UserSchema.model_validate(user)


@router.post("/auth/login", response_model=UserSchema)
def login(req: LoginRequestSchema, auth: AuthPort = Depends(get_auth)):
    try:
        return UserSchema.model_validate(auth.login_user(req.email, req.password))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/auth/logout", status_code=204)
def logout(auth: AuthPort = Depends(get_auth)) -> Response:
    auth.logout_user()
    return Response(status_code=204)


@router.get("/auth/me", response_model=UserSchema)
def me(auth: AuthPort = Depends(get_auth)):
    user = auth.current_user()
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return UserSchema.model_validate(user)


@router.patch("/auth/me", response_model=UserSchema)
def update_profile(req: ProfileUpdateSchema, auth: AuthPort = Depends(get_auth)):
    user = auth.update_user_profile(req.model_dump(exclude_unset=True))
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return UserSchema.model_validate(user)


@router.post("/auth/admin/login", response_model=AdminSchema)
def admin_login(req: LoginRequestSchema, auth: AuthPort = Depends(get_auth)):
    try:
        return AdminSchema.model_validate(auth.login_admin(req.email, req.password))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/auth/admin/logout", status_code=204)
def admin_logout(auth: AuthPort = Depends(get_auth)) -> Response:
    auth.logout_admin()
    return Response(status_code=204)

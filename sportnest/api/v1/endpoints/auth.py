import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from uuid import uuid4
from datetime import datetime, timezone
from sportnest.api.deps import get_admins_repository, get_members_repository
from sportnest.core.security import (
    ROLE_ADMIN, ROLE_MEMBER, Caller, create_access_token, get_current_caller, hash_password, verify_password
)
from sportnest.db.repository.admins import AdminsRepository
from sportnest.db.repository.members import MembersRepository
from sportnest.models.member import Admin, Member
from sportnest.schemas.auth import LoginRequest, MemberCreate, MemberResponse, Token

logger = logging.getLogger(__name__)

router = APIRouter()

def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

def _issue_token(account_id: str, role: str) -> Token:
    token = create_access_token({"_id": account_id, "role": role})
    return Token(access_token=token, id=account_id, role=role)

@router.post("/members/signup", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def signup_member(
    member: MemberCreate,
    members_repo: MembersRepository = Depends(get_members_repository),
):
    email = member.email.lower()
    if await members_repo.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="Email already registered")

    new_member = {
        "_id": str(uuid4()),
        "first_name": member.first_name.strip(),
        "last_name": member.last_name.strip(),
        "email": email,
        "contact_number": member.contact_number,
        "hashed_password": hash_password(member.password),
        "role": ROLE_MEMBER,
        "created_at": datetime.now(timezone.utc),
    }
    await members_repo.insert_one(new_member)
    logger.info(f"Member {new_member['_id']} signed up")

    return MemberResponse(
        id=new_member["_id"],
        first_name=new_member["first_name"],
        last_name=new_member["last_name"],
        email=new_member["email"],
        contact_number=new_member["contact_number"],
    )

@router.post("/members/login", response_model=Token)
async def login_member(
    credentials: LoginRequest,
    members_repo: MembersRepository = Depends(get_members_repository),
):
    doc = await members_repo.find_one({"email": credentials.email.lower()})
    member = Member(**doc) if doc else None
    if not member or not verify_password(credentials.password, member.hashed_password):
        raise _invalid_credentials()
    return _issue_token(member.id, ROLE_MEMBER)

@router.post("/admin/login", response_model=Token)
async def login_admin(
    credentials: LoginRequest,
    admins_repo: AdminsRepository = Depends(get_admins_repository),
):
    doc = await admins_repo.find_one({"email": credentials.email.lower()})
    admin = Admin(**doc) if doc else None
    if not admin or not verify_password(credentials.password, admin.hashed_password):
        logger.warning(f"Failed admin login for {credentials.email}")
        raise _invalid_credentials()
    return _issue_token(admin.id, ROLE_ADMIN)

@router.post("/swagger-login", response_model=Token)
async def swagger_login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    members_repo: MembersRepository = Depends(get_members_repository),
    admins_repo: AdminsRepository = Depends(get_admins_repository),
):
    """Form login used by the Swagger UI; the username field takes the email."""
    email = form_data.username.lower()
    admin = await admins_repo.find_one({"email": email})
    if admin and verify_password(form_data.password, admin["hashed_password"]):
        return _issue_token(admin["_id"], ROLE_ADMIN)

    member = await members_repo.find_one({"email": email})
    if member and verify_password(form_data.password, member["hashed_password"]):
        return _issue_token(member["_id"], ROLE_MEMBER)

    raise _invalid_credentials()

@router.get("/me", response_model=Caller)
async def read_current_caller(caller: Caller = Depends(get_current_caller)):
    return caller

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import EmailStr, Field
from pymongo.database import Database

from config import Settings
from database import create_document, get_document_by_id
from dependencies import TOKEN_HEADER, authenticate, get_db, get_settings
from schemas import User
from security import Identity, create_access_token, hash_password
from validation import RequestModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class UserIn(RequestModel):
    name: str = Field(..., min_length=5, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=5, max_length=255)


def public_profile(user: dict) -> dict:
    return {
        "id": str(user["_id"]),
        "name": user.get("name", ""),
        "email": user.get("email", ""),
        "isAdmin": bool(user.get("isAdmin", False)),
    }


@router.get("/me")
def me(identity: Identity = Depends(authenticate), db: Database = Depends(get_db)):
    user = get_document_by_id(db, "user", identity.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found.")
    return public_profile(user)


@router.post("")
def register(
    payload: UserIn,
    response: Response,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if db["user"].find_one({"email": payload.email}):
        raise HTTPException(status_code=400, detail="User already registered.")
    user = User(name=payload.name, email=payload.email, password=hash_password(payload.password))
    new_id = create_document(db, "user", user)
    doc = get_document_by_id(db, "user", new_id)
    logger.info("Registered user %s", new_id)
    response.headers[TOKEN_HEADER] = create_access_token(settings, doc)
    return public_profile(doc)

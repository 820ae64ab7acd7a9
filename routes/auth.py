import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import EmailStr, Field
from pymongo.database import Database

from config import Settings
from dependencies import get_db, get_settings
from security import create_access_token, verify_password
from validation import RequestModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=5, max_length=255)


@router.post("", response_class=PlainTextResponse)
def login(payload: LoginRequest, db: Database = Depends(get_db), settings: Settings = Depends(get_settings)):
    # same answer for an unknown email and a wrong password
    user = db["user"].find_one({"email": payload.email})
    if not user or not verify_password(payload.password, user.get("password", "")):
        logger.info("Failed login for %s", payload.email)
        raise HTTPException(status_code=400, detail="Invalid email or password.")
    return create_access_token(settings, user)

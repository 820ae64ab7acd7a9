"""
Request interceptors

Each route declares an ordered list of these dependencies. FastAPI runs them in
declaration order; any of them can stop the chain by raising HTTPException,
otherwise the value it returns is handed to the next step.
"""

import logging
from typing import Optional

from bson import ObjectId
from fastapi import Depends, Header, HTTPException, Request
from pymongo.database import Database

from config import Settings
from security import Identity, InvalidToken, decode_access_token

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-auth-token"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    return request.app.state.db


def authenticate(
    token: Optional[str] = Header(None, alias=TOKEN_HEADER),
    settings: Settings = Depends(get_settings),
) -> Identity:
    if not token:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        return decode_access_token(settings, token)
    except InvalidToken as exc:
        logger.info("Rejected token: %s", exc)
        raise HTTPException(status_code=401, detail="Invalid token.")


def require_admin(identity: Identity = Depends(authenticate)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Access denied.")
    return identity


def valid_object_id(id: str) -> ObjectId:
    # an id that cannot exist is reported the same way as a missing record
    if not ObjectId.is_valid(id):
        raise HTTPException(status_code=404, detail="Invalid id.")
    return ObjectId(id)

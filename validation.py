"""
Request payload validation helpers.

Request bodies are declared as pydantic models on the route. When a body does
not validate, only the first problem is reported back, as a 400.
"""

from typing import Annotated, Any, Dict, Sequence

from bson import ObjectId
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _check_object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError("must be a valid id")
    return value


ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


class RequestModel(BaseModel):
    """Base for request bodies: camelCase on the wire, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


def first_error_message(errors: Sequence[Dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request."
    error = errors[0]
    # drop the "body"/"path"/"query" prefix FastAPI adds to the location
    loc = [str(part) for part in error.get("loc", ())[1:]]
    msg = error.get("msg", "is invalid")
    if not loc:
        return msg
    return f'"{".".join(loc)}" {msg[:1].lower()}{msg[1:]}'


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": first_error_message(exc.errors())})

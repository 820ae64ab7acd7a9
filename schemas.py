"""
Database Schemas

MongoDB collection schemas defined as Pydantic models.
Each top-level model represents a collection in the database and the model
name is converted to lowercase for the collection name:
- Genre -> "genre" collection
- Customer -> "customer" collection
- Movie -> "movie" collection
- User -> "user" collection
- Rental -> "rental" collection

Documents are stored with camelCase keys (numberInStock, dateOut, ...), the
same shape the API accepts and returns. Snapshot models are point-in-time
copies embedded into other documents; they are never updated after the fact.
"""

from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        str_strip_whitespace=True,
    )


# ------------------------- Snapshots ---------------------------
class GenreSnapshot(MongoModel):
    id: ObjectId = Field(..., alias="_id", description="Genre _id at time of copy")
    name: str = Field(..., min_length=5, max_length=50)


class CustomerSnapshot(MongoModel):
    id: ObjectId = Field(..., alias="_id", description="Customer _id at time of rental")
    name: str = Field(..., min_length=5, max_length=50)
    phone: str = Field(..., min_length=5, max_length=50)
    is_gold: bool = Field(False)


class MovieSnapshot(MongoModel):
    id: ObjectId = Field(..., alias="_id", description="Movie _id at time of rental")
    title: str = Field(..., min_length=5, max_length=255)
    daily_rental_rate: float = Field(..., ge=0, le=255)


# ------------------------- Collections -------------------------
class Genre(MongoModel):
    name: str = Field(..., min_length=5, max_length=50, description="Unique genre name")


class Customer(MongoModel):
    name: str = Field(..., min_length=5, max_length=50, description="Customer name")
    phone: str = Field(..., min_length=5, max_length=50, description="Phone number")
    is_gold: bool = Field(False, description="Gold membership flag")


class Movie(MongoModel):
    title: str = Field(..., min_length=5, max_length=255, description="Unique movie title")
    genre: GenreSnapshot = Field(..., description="Embedded copy of the genre")
    number_in_stock: int = Field(..., ge=0, le=255, description="Copies available to rent")
    daily_rental_rate: float = Field(..., ge=0, le=255, description="Fee per rented day")


class User(MongoModel):
    name: str = Field(..., min_length=5, max_length=50, description="Full name")
    email: str = Field(..., min_length=5, max_length=255, description="Unique email address")
    password: str = Field(..., description="PBKDF2 hash of the password, never returned")
    is_admin: bool = Field(False, description="Grants access to admin-only operations")


class Rental(MongoModel):
    customer: CustomerSnapshot = Field(..., description="Embedded copy of the customer")
    movie: MovieSnapshot = Field(..., description="Embedded copy of the movie")
    date_out: datetime = Field(default_factory=utcnow, description="When the movie was rented")
    date_returned: Optional[datetime] = Field(None, description="Unset while the rental is open")
    rental_fee: Optional[float] = Field(None, ge=0, description="Computed on return")

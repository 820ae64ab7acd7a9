"""
Rental lifecycle

A rental is open while ``dateReturned`` is unset and closed once it is set.
Closing is terminal. Opening a rental takes one copy out of stock and closing
it puts the copy back; the rental write and the stock write are separate
operations and are not applied atomically.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from database import create_document, get_document_by_id, increment_field
from schemas import CustomerSnapshot, MovieSnapshot, Rental

logger = logging.getLogger(__name__)


class RentalError(Exception):
    status_code = 400


class NotInStock(RentalError):
    pass


class RentalNotFound(RentalError):
    status_code = 404


class AlreadyProcessed(RentalError):
    pass


def _as_utc(value: datetime) -> datetime:
    # MongoDB hands back naive datetimes that are already in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_rented(date_out: datetime, date_returned: datetime) -> int:
    """Whole days elapsed between rental and return, never negative."""
    return max((_as_utc(date_returned) - _as_utc(date_out)).days, 0)


def rental_fee(date_out: datetime, date_returned: datetime, daily_rental_rate: float) -> float:
    return days_rented(date_out, date_returned) * daily_rental_rate


def open_rental(db: Database, customer: Dict[str, Any], movie: Dict[str, Any]) -> Dict[str, Any]:
    """Create a rental for customer/movie and take one copy out of stock."""
    if movie.get("numberInStock", 0) <= 0:
        raise NotInStock("Movie not in stock.")

    rental = Rental(
        customer=CustomerSnapshot.model_validate(customer),
        movie=MovieSnapshot.model_validate(movie),
    )
    rental_id = create_document(db, "rental", rental)
    if not increment_field(db, "movie", movie["_id"], "numberInStock", -1):
        logger.warning("Rental %s created but movie %s no longer exists", rental_id, movie["_id"])
    logger.info("Opened rental %s for customer %s, movie %s", rental_id, customer["_id"], movie["_id"])
    return get_document_by_id(db, "rental", rental_id)


def lookup(db: Database, customer_id: ObjectId, movie_id: ObjectId) -> Optional[Dict[str, Any]]:
    """Most recent rental for the pair, preferring one that is still open."""
    query = {"customer._id": customer_id, "movie._id": movie_id}
    newest_first = [("dateOut", DESCENDING)]
    rental = db["rental"].find_one({**query, "dateReturned": None}, sort=newest_first)
    if rental is None:
        rental = db["rental"].find_one(query, sort=newest_first)
    return rental


def process_return(db: Database, customer_id: ObjectId, movie_id: ObjectId, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Close the open rental for customer/movie, charge it and restock the movie."""
    rental = lookup(db, customer_id, movie_id)
    if rental is None:
        raise RentalNotFound("Rental not found.")
    if rental.get("dateReturned") is not None:
        raise AlreadyProcessed("Rental already processed.")

    date_returned = now or datetime.now(timezone.utc)
    fee = rental_fee(rental["dateOut"], date_returned, rental["movie"]["dailyRentalRate"])

    # only an open rental may be closed, so a concurrent return loses here
    updated = db["rental"].find_one_and_update(
        {"_id": rental["_id"], "dateReturned": None},
        {"$set": {"dateReturned": date_returned, "rentalFee": fee, "updated_at": date_returned}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise AlreadyProcessed("Rental already processed.")

    if not increment_field(db, "movie", movie_id, "numberInStock", 1):
        logger.warning("Rental %s returned but movie %s no longer exists", rental["_id"], movie_id)
    logger.info("Closed rental %s, fee %s", rental["_id"], fee)
    return updated

from fastapi import APIRouter, Depends, HTTPException
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

import lifecycle
from database import get_document_by_id, get_documents, serialize
from dependencies import authenticate, get_db, valid_object_id
from validation import ObjectIdStr, RequestModel

router = APIRouter(prefix="/api/rentals", tags=["rentals"])


class RentalIn(RequestModel):
    customer_id: ObjectIdStr
    movie_id: ObjectIdStr


@router.get("")
def list_rentals(db: Database = Depends(get_db)):
    return [serialize(r) for r in get_documents(db, "rental", sort=[("dateOut", DESCENDING)])]


@router.get("/{id}")
def get_rental(rental_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = get_document_by_id(db, "rental", rental_id)
    if not doc:
        raise HTTPException(status_code=404, detail="The rental with the given ID was not found.")
    return serialize(doc)


@router.post("", dependencies=[Depends(authenticate)])
def create_rental(payload: RentalIn, db: Database = Depends(get_db)):
    customer = get_document_by_id(db, "customer", payload.customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Invalid customer.")
    movie = get_document_by_id(db, "movie", payload.movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Invalid movie.")
    try:
        rental = lifecycle.open_rental(db, customer, movie)
    except lifecycle.RentalError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc))
    return serialize(rental)

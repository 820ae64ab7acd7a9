from fastapi import APIRouter, Depends, HTTPException
from bson import ObjectId
from pymongo.database import Database

import lifecycle
from database import serialize
from dependencies import authenticate, get_db
from validation import ObjectIdStr, RequestModel

router = APIRouter(prefix="/api/returns", tags=["returns"])


class ReturnIn(RequestModel):
    customer_id: ObjectIdStr
    movie_id: ObjectIdStr


@router.post("", dependencies=[Depends(authenticate)])
def return_rental(payload: ReturnIn, db: Database = Depends(get_db)):
    try:
        rental = lifecycle.process_return(db, ObjectId(payload.customer_id), ObjectId(payload.movie_id))
    except lifecycle.RentalError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc))
    return serialize(rental)

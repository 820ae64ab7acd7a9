from fastapi import APIRouter, Depends, HTTPException
from bson import ObjectId
from pydantic import Field
from pymongo.database import Database

from database import create_document, delete_document, get_document_by_id, get_documents, replace_document, serialize
from dependencies import authenticate, get_db, require_admin, valid_object_id
from schemas import Customer
from validation import RequestModel

router = APIRouter(prefix="/api/customers", tags=["customers"])

NOT_FOUND = "The customer with the given ID was not found."


class CustomerIn(RequestModel):
    name: str = Field(..., min_length=5, max_length=50)
    phone: str = Field(..., min_length=5, max_length=50)
    is_gold: bool = False


@router.get("")
def list_customers(db: Database = Depends(get_db)):
    return [serialize(c) for c in get_documents(db, "customer", sort=[("name", 1)])]


@router.get("/{id}")
def get_customer(customer_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = get_document_by_id(db, "customer", customer_id)
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)


@router.post("", dependencies=[Depends(authenticate)])
def create_customer(payload: CustomerIn, db: Database = Depends(get_db)):
    new_id = create_document(db, "customer", Customer(**payload.model_dump()))
    return serialize(get_document_by_id(db, "customer", new_id))


@router.put("/{id}", dependencies=[Depends(authenticate)])
def update_customer(payload: CustomerIn, customer_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = replace_document(db, "customer", customer_id, Customer(**payload.model_dump()))
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)


@router.delete("/{id}", dependencies=[Depends(require_admin)])
def delete_customer(customer_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = delete_document(db, "customer", customer_id)
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)

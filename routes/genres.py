from fastapi import APIRouter, Depends, HTTPException
from bson import ObjectId
from pydantic import Field
from pymongo.database import Database

from database import create_document, delete_document, get_document_by_id, get_documents, replace_document, serialize
from dependencies import authenticate, get_db, require_admin, valid_object_id
from schemas import Genre
from validation import RequestModel

router = APIRouter(prefix="/api/genres", tags=["genres"])

NOT_FOUND = "The genre with the given ID was not found."


class GenreIn(RequestModel):
    name: str = Field(..., min_length=5, max_length=50)


@router.get("")
def list_genres(db: Database = Depends(get_db)):
    return [serialize(g) for g in get_documents(db, "genre", sort=[("name", 1)])]


@router.get("/{id}")
def get_genre(genre_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = get_document_by_id(db, "genre", genre_id)
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)


@router.post("", dependencies=[Depends(authenticate)])
def create_genre(payload: GenreIn, db: Database = Depends(get_db)):
    new_id = create_document(db, "genre", Genre(name=payload.name))
    return serialize(get_document_by_id(db, "genre", new_id))


@router.put("/{id}", dependencies=[Depends(authenticate)])
def update_genre(payload: GenreIn, genre_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = replace_document(db, "genre", genre_id, Genre(name=payload.name))
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)


@router.delete("/{id}", dependencies=[Depends(require_admin)])
def delete_genre(genre_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = delete_document(db, "genre", genre_id)
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)

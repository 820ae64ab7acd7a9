from fastapi import APIRouter, Depends, HTTPException
from bson import ObjectId
from pydantic import Field
from pymongo.database import Database

from database import create_document, delete_document, get_document_by_id, get_documents, replace_document, serialize
from dependencies import authenticate, get_db, require_admin, valid_object_id
from schemas import GenreSnapshot, Movie
from validation import ObjectIdStr, RequestModel

router = APIRouter(prefix="/api/movies", tags=["movies"])

NOT_FOUND = "The movie with the given ID was not found."


class MovieIn(RequestModel):
    title: str = Field(..., min_length=5, max_length=255)
    genre_id: ObjectIdStr
    number_in_stock: int = Field(..., ge=0, le=255)
    daily_rental_rate: float = Field(..., ge=0, le=255)


def build_movie(db: Database, payload: MovieIn) -> Movie:
    """Resolve genreId and embed a copy of the genre into the movie."""
    genre = get_document_by_id(db, "genre", payload.genre_id)
    if not genre:
        raise HTTPException(status_code=404, detail="Invalid genre.")
    return Movie(
        title=payload.title,
        genre=GenreSnapshot.model_validate(genre),
        number_in_stock=payload.number_in_stock,
        daily_rental_rate=payload.daily_rental_rate,
    )


@router.get("")
def list_movies(db: Database = Depends(get_db)):
    return [serialize(m) for m in get_documents(db, "movie", sort=[("title", 1)])]


@router.get("/{id}")
def get_movie(movie_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = get_document_by_id(db, "movie", movie_id)
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)


@router.post("", dependencies=[Depends(authenticate)])
def create_movie(payload: MovieIn, db: Database = Depends(get_db)):
    new_id = create_document(db, "movie", build_movie(db, payload))
    return serialize(get_document_by_id(db, "movie", new_id))


@router.put("/{id}", dependencies=[Depends(authenticate)])
def update_movie(payload: MovieIn, movie_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    if not get_document_by_id(db, "movie", movie_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    doc = replace_document(db, "movie", movie_id, build_movie(db, payload))
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)


@router.delete("/{id}", dependencies=[Depends(require_admin)])
def delete_movie(movie_id: ObjectId = Depends(valid_object_id), db: Database = Depends(get_db)):
    doc = delete_document(db, "movie", movie_id)
    if not doc:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return serialize(doc)

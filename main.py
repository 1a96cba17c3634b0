import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from bson.errors import InvalidId
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from database import (
    close,
    connect,
    create_document,
    get_db,
    get_documents,
    object_id,
    serialize_doc,
)
from schemas import AmenityRequest, Hotel, HotelUpdate

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def _fail(status_code: int, exc: Exception) -> HTTPException:
    if status_code >= 500:
        logger.error("Store error: %s", exc, exc_info=exc)
    else:
        logger.warning("Request rejected: %s", exc)
    return HTTPException(status_code=status_code, detail=str(exc))


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Application factory.

    When `database` is given it is used as the store handle and left open on
    shutdown; otherwise a client is opened from the environment settings on
    startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database if database is not None else connect()
        app.state.db = db
        try:
            yield
        finally:
            if database is None:
                close(db)

    app = FastAPI(title="Hotel API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.get("/")
    def read_root():
        return {"message": "Hotel API ready"}

    @app.get("/test")
    def test_database(db: Database = Depends(get_db)):
        response = {
            "backend": "✅ Running",
            "database": "❌ Not Available",
            "database_url": "✅ Set" if os.getenv("MONGO_URI") or os.getenv("DATABASE_URL") else "❌ Not Set",
            "database_name": None,
            "connection_status": "Not Connected",
            "collections": []
        }
        try:
            response["collections"] = db.list_collection_names()[:10]
            response["database_name"] = db.name
            response["database"] = "✅ Connected & Working"
            response["connection_status"] = "Connected"
        except Exception as e:
            response["database"] = f"❌ Error: {str(e)[:50]}"
        return response

    @app.get("/hotels")
    def list_hotels(db: Database = Depends(get_db)):
        try:
            items = get_documents(db, "hotel")
        except PyMongoError as e:
            raise _fail(500, e)
        return [serialize_doc(i) for i in items]

    @app.post("/hotels", status_code=201)
    def create_hotel(payload: Hotel, db: Database = Depends(get_db)):
        try:
            hotel_id = create_document(db, "hotel", payload)
            doc = db["hotel"].find_one({"_id": object_id(hotel_id)})
        except PyMongoError as e:
            raise _fail(400, e)
        return serialize_doc(doc)

    @app.put("/hotels/{hotel_id}")
    def update_hotel(hotel_id: str, payload: HotelUpdate, db: Database = Depends(get_db)):
        fields = payload.model_dump(exclude_unset=True)
        try:
            query = {"_id": object_id(hotel_id)}
            if fields:
                doc = db["hotel"].find_one_and_update(
                    query, {"$set": fields}, return_document=ReturnDocument.AFTER
                )
            else:
                doc = db["hotel"].find_one(query)
        except (InvalidId, PyMongoError) as e:
            raise _fail(400, e)
        if not doc:
            raise HTTPException(status_code=404, detail="Hotel not found")
        return serialize_doc(doc)

    # Unknown ids answer null instead of 404 on the amenity routes
    @app.put("/hotels/{hotel_id}/add-amenity")
    def add_amenity(hotel_id: str, payload: AmenityRequest, db: Database = Depends(get_db)):
        try:
            doc = db["hotel"].find_one_and_update(
                {"_id": object_id(hotel_id)},
                {"$push": {"amenities": payload.amenity}},
                return_document=ReturnDocument.AFTER,
            )
        except (InvalidId, PyMongoError) as e:
            raise _fail(400, e)
        return serialize_doc(doc)

    @app.put("/hotels/{hotel_id}/remove-amenity")
    def remove_amenity(hotel_id: str, payload: AmenityRequest, db: Database = Depends(get_db)):
        try:
            doc = db["hotel"].find_one_and_update(
                {"_id": object_id(hotel_id)},
                {"$pull": {"amenities": payload.amenity}},
                return_document=ReturnDocument.AFTER,
            )
        except (InvalidId, PyMongoError) as e:
            raise _fail(400, e)
        return serialize_doc(doc)

    @app.delete("/hotels/{hotel_id}")
    def delete_hotel(hotel_id: str, db: Database = Depends(get_db)):
        try:
            db["hotel"].delete_one({"_id": object_id(hotel_id)})
        except (InvalidId, PyMongoError) as e:
            raise _fail(500, e)
        return {"message": "Hotel deleted"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format=LOG_FORMAT)
    port = int(os.getenv("PORT", 3000))
    uvicorn.run(app, host="0.0.0.0", port=port)

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

import routes_orders
import routes_products
import routes_users
import routes_wishlists
from config import CORS_ORIGINS, DATABASE_URL, PORT
from database import engine, get_db, init_db
from errors import RecordStoreError
from logging_config import get_logger, setup_logging
from seed import seed_database

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info("Record store API started")
    yield


app = FastAPI(title="Record Store API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Errors
@app.exception_handler(RecordStoreError)
async def handle_domain_error(request: Request, exc: RecordStoreError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


for router in routes_products.routers:
    app.include_router(router)
app.include_router(routes_users.router)
app.include_router(routes_orders.router)
app.include_router(routes_wishlists.router)


@app.get("/")
def read_root():
    return {"message": "Record store backend is running"}


# Seed sample data if empty
@app.post("/seed")
def seed(db: Session = Depends(get_db)):
    created = seed_database(db)
    return {"ok": True, "created": created}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": "✅ Set" if DATABASE_URL else "❌ Not Set",
        "connection_status": "Not Connected",
        "tables": []
    }
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            response["connection_status"] = "Connected"
            response["tables"] = inspect(connection).get_table_names()[:10]
            response["database"] = "✅ Connected & Working"
    except Exception as e:
        response["database"] = f"❌ Error: {str(e)[:50]}"
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)

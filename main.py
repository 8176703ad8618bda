import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.errors import PyMongoError

import database
from auth import AuthServiceUnavailable, InvalidCredentials, login_admin, require_admin
from catalog import categories as distinct_categories, featured, filter_products
from invoice import invoice_filename, render_invoice
from payments import payment_status
from schemas import AdminLoginInput, OrderIn, Product as ProductSchema, ProductUpdate, TokenResponse
from seed import seed_initial_products
from storage import Storage

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if database.db is not None:
        try:
            seed_initial_products(database.db)
        except PyMongoError:
            logger.exception("Failed to seed initial products")
    yield


app = FastAPI(title="FarmaPlus API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handling

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})


@app.exception_handler(PyMongoError)
async def database_exception_handler(request: Request, exc: PyMongoError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Dependencies

def get_storage() -> Storage:
    if database.db is None:
        raise HTTPException(status_code=500, detail="Database not configured")
    return Storage(database.db)


# Routes
@app.get("/")
def read_root():
    return {"message": "FarmaPlus API"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": "✅ Set" if database.DATABASE_URL else "❌ Not Set",
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": []
    }
    try:
        if database.db is not None:
            response["database"] = "✅ Available"
            response["connection_status"] = "Connected"
            response["database_name"] = database.db.name
            response["collections"] = database.db.list_collection_names()
    except Exception as e:
        response["database"] = f"❌ Error: {str(e)[:80]}"
    return response


# Products
@app.get("/api/products")
def list_products(
    q: Optional[str] = None,
    category: Optional[List[str]] = Query(default=None),
    min_price: Optional[float] = Query(default=None, allow_inf_nan=False),
    max_price: Optional[float] = Query(default=None, allow_inf_nan=False),
    storage: Storage = Depends(get_storage),
):
    products = storage.get_all_products()
    return filter_products(products, query=q, categories=category, min_price=min_price, max_price=max_price)


@app.get("/api/products/featured")
def list_featured_products(storage: Storage = Depends(get_storage)):
    return featured(storage.get_all_products())


@app.get("/api/categories")
def list_categories(storage: Storage = Depends(get_storage)):
    return distinct_categories(storage.get_all_products())


@app.get("/api/products/{product_id}")
def get_product(product_id: str, storage: Storage = Depends(get_storage)):
    product = storage.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# Orders
@app.post("/api/orders", status_code=201)
def create_order(payload: OrderIn, storage: Storage = Depends(get_storage)):
    return storage.create_order(payload)


@app.get("/api/orders")
def list_orders(storage: Storage = Depends(get_storage)):
    return storage.get_all_orders()


@app.get("/api/orders/{order_id}")
def get_order(order_id: str, storage: Storage = Depends(get_storage)):
    order = storage.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@app.get("/api/orders/{order_id}/items")
def get_order_items(order_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_order_items(order_id)


@app.get("/api/orders/{order_id}/payment")
def get_payment_status(order_id: str, storage: Storage = Depends(get_storage)):
    order = storage.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"order_id": order["id"], "status": payment_status(order)}


@app.get("/api/orders/{order_id}/invoice", response_class=PlainTextResponse)
def get_invoice(order_id: str, storage: Storage = Depends(get_storage)):
    order = storage.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    content = render_invoice(order, storage.get_order_items(order_id))
    headers = {"Content-Disposition": f'attachment; filename="{invoice_filename(order["id"])}"'}
    return PlainTextResponse(content, headers=headers)


# Admin
@app.post("/api/admin/login", response_model=TokenResponse)
def admin_login(payload: AdminLoginInput):
    try:
        token = login_admin(payload.email, payload.password)
    except InvalidCredentials:
        logger.warning("Failed admin login for %s", payload.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    except AuthServiceUnavailable:
        raise HTTPException(status_code=500, detail="Login failed")
    return TokenResponse(token=token)


@app.post("/api/admin/products", status_code=201)
def create_product(data: ProductSchema, admin: dict = Depends(require_admin), storage: Storage = Depends(get_storage)):
    product = storage.create_product(data)
    logger.info("Product %s created by %s", product["id"], admin.get("email"))
    return product


@app.patch("/api/admin/products/{product_id}")
def update_product(product_id: str, data: ProductUpdate, admin: dict = Depends(require_admin), storage: Storage = Depends(get_storage)):
    if not data.model_dump(exclude_unset=True, exclude_none=True):
        raise HTTPException(status_code=400, detail="No fields to update")
    product = storage.update_product(product_id, data)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@app.delete("/api/admin/products/{product_id}")
def delete_product(product_id: str, admin: dict = Depends(require_admin), storage: Storage = Depends(get_storage)):
    if not storage.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info("Product %s deleted by %s", product_id, admin.get("email"))
    return {"success": True}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)

# farmfresh/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmfresh.config import settings
from farmfresh.database import init_db

# Routers
from farmfresh.routes.auth import router as auth_router
from farmfresh.routes.categories import router as categories_router
from farmfresh.routes.products import router as products_router
from farmfresh.routes.reviews import router as reviews_router
from farmfresh.routes.users import router as users_router
from farmfresh.routes.cart import router as cart_router
from farmfresh.routes.orders import router as orders_router

logger = logging.getLogger(__name__)

# Create tables for development databases; production schemas go through Alembic
init_db()

app = FastAPI(title="FarmFresh Market API", version="1.0.0")

# Cookie sessions need explicit origins, a wildcard is not allowed with credentials
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router registration
app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(reviews_router)
app.include_router(users_router)
app.include_router(cart_router)
app.include_router(orders_router)

@app.get("/")
def read_root():
    return {"message": "FarmFresh Market API is running"}

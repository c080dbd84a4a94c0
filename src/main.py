"""
Module principal de l'application FastAPI QuickCommerce.

Ce module configure et initialise l'instance FastAPI, ajoute le middleware CORS
et inclut les routeurs des différentes fonctionnalités de l'API
(authentification, utilisateurs, boutiques, catalogue, panier, commandes, etc.).
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings
from src.database import create_tables

# --- Importer les routeurs ---
from src.auth.router import auth_router
from src.users.router import user_router
from src.addresses.router import router as address_router
from src.categories.router import router as categories_router
from src.stores.router import router as store_router
from src.products.router import router as product_router
from src.cart.router import router as cart_router
from src.orders.router import order_router
from src.reviews.router import review_router
from src.wishlist.router import wishlist_router
from src.sellers.router import seller_router
from src.admin.router import admin_router

# Configurer le logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Création des tables manquantes au démarrage...")
    await create_tables()
    yield


app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="API multi-vendeurs de commerce rapide : catalogue, panier, commandes, avis et back-office.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
api = settings.API_V1_PREFIX

# Authentification et utilisateurs
app.include_router(auth_router, prefix=f"{api}/auth", tags=["Authentification"])
app.include_router(user_router, prefix=f"{api}/users", tags=["Utilisateurs"])
app.include_router(address_router, prefix=f"{api}/addresses", tags=["Addresses"])

# Catalogue
app.include_router(categories_router, prefix=f"{api}/categories", tags=["Categories"])
app.include_router(store_router, prefix=f"{api}/stores", tags=["Stores"])
app.include_router(product_router, prefix=f"{api}/products", tags=["Produits"])

# Achat
app.include_router(cart_router, prefix=f"{api}/cart", tags=["Cart"])
app.include_router(order_router, prefix=f"{api}/orders", tags=["Orders"])
app.include_router(review_router, prefix=f"{api}/reviews", tags=["Reviews"])
app.include_router(wishlist_router, prefix=f"{api}/wishlist", tags=["Wishlist"])

# Back-office
app.include_router(seller_router, prefix=f"{api}/sellers", tags=["Sellers"])
app.include_router(admin_router, prefix=f"{api}/admin", tags=["Admin"])


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "ok"}

# module storefront.cart.views
"""Endpoints panier (un panier par utilisateur authentifié, persisté dans Redis).
- GET    /api/v1/cart                      : contenu + total affichable
- POST   /api/v1/cart/items                : ajoute un produit (merge par _id)
- DELETE /api/v1/cart/items/{product_id}   : retire un produit
- DELETE /api/v1/cart                      : vide le panier (après paiement)
"""
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from storefront.cart.storage import RedisStorage
from storefront.cart.store import CartStore, PRODUCT_ID_FIELD
from storefront.infra.redis_client import get_cart_redis
from storefront.utils.security import require_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])

def get_cart_storage(user: Dict[str, Any] = Depends(require_user)) -> RedisStorage:
    return RedisStorage(get_cart_redis(), namespace=f"cart:{user.get('id')}:")

def get_cart_store(storage: RedisStorage = Depends(get_cart_storage)) -> CartStore:
    return CartStore(storage)

def _cart_body(store: CartStore) -> Dict[str, Any]:
    return {"cart": store.items, "total": store.formatted_total()}

@router.get("")
def read_cart(store: CartStore = Depends(get_cart_store)):
    return _cart_body(store)

@router.post("/items")
async def add_cart_item(request: Request, store: CartStore = Depends(get_cart_store)):
    """
    Ajoute un produit au panier.
    - Entrée JSON: {"_id": "...", "name": "...", "price": 10.0, ...}
    - Erreurs: 400 si le corps n'est pas un objet avec _id
    """
    try:
        product = await request.json()
    except ValueError:
        product = None
    if not isinstance(product, dict) or product.get(PRODUCT_ID_FIELD) in (None, ""):
        raise HTTPException(status_code=400, detail="Product _id is required")
    await run_in_threadpool(store.add_item, product)
    return _cart_body(store)

@router.delete("/items/{product_id}")
def remove_cart_item(product_id: str, store: CartStore = Depends(get_cart_store)):
    # Le chemin est toujours une chaîne; les _id stockés peuvent être numériques
    target = next(
        (it.get(PRODUCT_ID_FIELD) for it in store.items if str(it.get(PRODUCT_ID_FIELD)) == product_id),
        product_id,
    )
    store.remove_item(target)
    return _cart_body(store)

@router.delete("")
def clear_cart(store: CartStore = Depends(get_cart_store)):
    store.clear()
    return _cart_body(store)

# module storefront.orders.views
"""Endpoints de consultation des commandes.
- /orders: commandes de l'utilisateur connecté
- /all-orders: toutes les commandes (admin)
La mise à jour du statut n'est pas exposée ici.
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends

from storefront.utils.security import require_user, require_admin
from storefront.orders import service as orders_service

router = APIRouter(prefix="/api/v1/auth", tags=["Orders API"])

@router.get("/orders")
def get_orders(user: Dict[str, Any] = Depends(require_user)):
    return orders_service.list_buyer_orders(user.get("id"))

@router.get("/all-orders")
def get_all_orders(limit: int = 100, user: Dict[str, Any] = Depends(require_admin)):
    return orders_service.list_all_orders(limit=limit)

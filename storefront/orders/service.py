"""Couche service des commandes (lecture; la création passe par le checkout)."""
from typing import List
from storefront.orders import repository

def list_buyer_orders(buyer_id: str) -> List[dict]:
    return repository.fetch_buyer_orders(buyer_id)

def list_all_orders(limit: int = 100) -> List[dict]:
    return repository.fetch_all_orders(limit=limit)

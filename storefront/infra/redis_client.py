from typing import Optional
import redis
from storefront.config import CART_REDIS_URL

_cart_redis: Optional[redis.Redis] = None

def get_cart_redis() -> redis.Redis:
    """
    Client Redis synchrone partagé pour les paniers (une clé par utilisateur).
    Créé paresseusement: aucune connexion n'est ouverte à l'import.
    """
    global _cart_redis
    if _cart_redis is None:
        _cart_redis = redis.Redis.from_url(CART_REDIS_URL, encoding="utf-8", decode_responses=True)
    return _cart_redis

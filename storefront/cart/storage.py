"""
Stockage clé/valeur du panier (équivalent serveur du localStorage navigateur).
"""
from typing import Optional
import redis


class RedisStorage:
    """
    get_item/set_item/remove_item au-dessus d'un client Redis.
    - namespace: préfixe des clés (ex: "cart:<user_id>:") pour isoler les paniers.
    - Les erreurs Redis remontent: c'est le CartStore qui décide de les ignorer.
    """

    def __init__(self, client: redis.Redis, namespace: str = ""):
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    def get_item(self, key: str) -> Optional[str]:
        value = self._client.get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_item(self, key: str, value: str) -> None:
        self._client.set(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self._client.delete(self._key(key))

"""
Conteneur d'état du panier.

Liste de lignes {_id, name, price, quantity, ...} tenue en mémoire et
sérialisée intégralement (JSON) à chaque mutation sous une clé fixe.
La mémoire fait foi: un échec de persistance est logué, jamais propagé.
"""
import copy
import json
import logging
from decimal import Decimal
from typing import Any, Dict, List

from storefront.payments.cart import compute_amount, format_total

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"
PRODUCT_ID_FIELD = "_id"


class CartStore:
    def __init__(self, storage, key: str = CART_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._items: List[Dict[str, Any]] = self._load()

    def _load(self) -> List[Dict[str, Any]]:
        try:
            raw = self._storage.get_item(self._key)
        except Exception:
            logger.exception("cart.store lecture impossible key=%s", self._key)
            return []
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("cart.store snapshot illisible key=%s", self._key)
            return []
        if not isinstance(items, list):
            logger.warning("cart.store snapshot inattendu key=%s type=%s", self._key, type(items).__name__)
            return []
        lines = [item for item in items if isinstance(item, dict)]
        if len(lines) != len(items):
            logger.warning("cart.store lignes non objet ignorées key=%s count=%s", self._key, len(items) - len(lines))
        return lines

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._key, json.dumps(self._items))
        except Exception:
            logger.exception("cart.store persistance impossible key=%s", self._key)

    @property
    def items(self) -> List[Dict[str, Any]]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add_item(self, product: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Ajoute un produit:
        - déjà présent (même _id): quantity = (quantity ou 0) + 1, ordre conservé
        - sinon: ajouté en fin avec quantity = 1
        """
        product_id = product.get(PRODUCT_ID_FIELD)
        for index, item in enumerate(self._items):
            if item.get(PRODUCT_ID_FIELD) == product_id:
                self._items[index] = {**item, "quantity": (item.get("quantity") or 0) + 1}
                break
        else:
            self._items.append({**product, "quantity": 1})
        self._persist()
        return self.items

    def remove_item(self, product_id: Any) -> List[Dict[str, Any]]:
        """Retire la ligne du produit; sans effet si absent."""
        for index, item in enumerate(self._items):
            if item.get(PRODUCT_ID_FIELD) == product_id:
                del self._items[index]
                break
        self._persist()
        return self.items

    def clear(self) -> None:
        """Vide le panier et supprime la clé (après un paiement réussi)."""
        self._items = []
        try:
            self._storage.remove_item(self._key)
        except Exception:
            logger.exception("cart.store suppression impossible key=%s", self._key)

    def snapshot(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._items)

    def payment_payload(self, nonce: str) -> Dict[str, Any]:
        """Corps de POST /api/v1/product/braintree/payment."""
        return {"nonce": nonce, "cart": self.snapshot()}

    def total(self) -> Decimal:
        return compute_amount(self._items)

    def formatted_total(self) -> str:
        return format_total(self._items)

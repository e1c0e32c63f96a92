"""
Logique panier pure (pas de Braintree, pas de DB).
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

# module storefront.payments.cart
def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return d if d.is_finite() else None


def line_quantity(item: Dict[str, Any]) -> Any:
    """Quantité d'une ligne: absente (None) => 1; 0 reste 0."""
    quantity = item.get("quantity")
    return 1 if quantity is None else quantity


def line_total(item: Dict[str, Any]) -> Optional[Decimal]:
    """price * quantity pour une ligne, None si prix ou quantité non numérique."""
    if not isinstance(item, dict):
        return None
    price = _to_decimal(item.get("price"))
    quantity = _to_decimal(line_quantity(item))
    if price is None or quantity is None:
        return None
    return price * quantity


def invalid_lines(cart: Iterable[Any]) -> List[int]:
    """Index des lignes non débitables: prix/quantité non numérique ou négatif."""
    indexes = []
    for index, item in enumerate(cart or []):
        total = line_total(item)
        if total is None or _to_decimal(item.get("price")) < 0 or _to_decimal(line_quantity(item)) < 0:
            indexes.append(index)
    return indexes


def compute_amount(cart: Iterable[Dict[str, Any]]) -> Decimal:
    """
    Montant à débiter: somme de price * (quantity ou 1).
    - Un prix nul est valide; le total peut valoir 0.
    - Une ligne illisible compte pour 0 et est loguée (affichage seulement:
      le checkout refuse ces paniers via invalid_lines).
    """
    amount = Decimal("0")
    for index, item in enumerate(cart or []):
        total = line_total(item)
        if total is None:
            logger.warning("payments.cart.compute_amount ligne ignorée index=%s item=%s", index, item)
            continue
        amount += total
    return amount


def format_total(cart: Any) -> str:
    """
    Total affichable en dollars US ("$1,005.00").
    - Panier absent/vide => "$0.00".
    - Toute ligne invalide rend le total invalide: log + "$0.00".
    """
    try:
        total = Decimal("0")
        for item in cart or []:
            line = line_total(item)
            if line is None:
                logger.info("Invalid total calculated")
                return "$0.00"
            total += line
        return f"${total:,.2f}"
    except TypeError:
        logger.exception("payments.cart.format_total panier illisible")
        return "$0.00"

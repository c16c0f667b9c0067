import firebase_admin
from firebase_admin import credentials, db, exceptions
from loguru import logger

from basket import Basket, BasketItem
from config import get_settings
from errors import StoreUnavailable
from money import to_money

# Realtime Database keys may not contain these characters
_FORBIDDEN_KEY_CHARS = set(".$#[]/")


def get_db_ref():
    """Return the Firebase root reference, initializing the app on first use."""
    if not firebase_admin._apps:
        settings = get_settings()
        try:
            cred = credentials.Certificate(settings.firebase_cred_path)
            firebase_admin.initialize_app(cred, {
                'databaseURL': settings.firebase_db_url
            })
        except (ValueError, OSError) as e:
            raise StoreUnavailable(f"🔥 Firebase initialization failed: {e}")
    return db.reference("/")


def _item_to_dict(item: BasketItem) -> dict:
    # RTDB has no decimal type; keep amounts exact as strings
    return {
        "name": item.name,
        "price": str(item.price),
        "quantity": item.quantity,
        "total": str(item.total),
    }


def _item_from_dict(data: dict) -> BasketItem:
    return BasketItem(
        name=data["name"],
        price=to_money(data["price"]),
        quantity=int(data["quantity"]),
        total=to_money(data["total"]),
    )


class FirebaseBasketStore:
    """Baskets under ``baskets/<push key>`` in the Realtime Database."""

    def __init__(self, root_ref=None):
        self._root_ref = root_ref

    @property
    def _baskets(self):
        if self._root_ref is None:
            self._root_ref = get_db_ref()
        return self._root_ref.child("baskets")

    def save(self, basket: Basket) -> Basket:
        data = {"items": [_item_to_dict(item) for item in basket.items]}
        try:
            ref = self._baskets.push(data)
        except (exceptions.FirebaseError, ValueError) as e:
            logger.error("Failed to save basket: {}", e)
            raise StoreUnavailable(f"Could not save basket: {e}")
        return Basket(id=ref.key, items=tuple(basket.items))

    def find_by_id(self, basket_id: str):
        if not basket_id or _FORBIDDEN_KEY_CHARS & set(basket_id):
            return None
        try:
            data = self._baskets.child(basket_id).get()
        except (exceptions.FirebaseError, ValueError) as e:
            logger.error("Failed to load basket '{}': {}", basket_id, e)
            raise StoreUnavailable(f"Could not load basket {basket_id}: {e}")
        if not data:
            return None
        try:
            items = data.get("items") or []
            if isinstance(items, dict):
                # RTDB may hand back a list with integer keys as a dict
                items = [items[k] for k in sorted(items, key=int)]
            loaded = tuple(_item_from_dict(i) for i in items)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error("Malformed basket record '{}': {!r}", basket_id, e)
            raise StoreUnavailable(f"Stored basket {basket_id} is malformed")
        return Basket(id=basket_id, items=loaded)

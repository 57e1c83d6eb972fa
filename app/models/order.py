"""
Per-request order and subscription models.

Nothing here is persisted; instances live for the duration of one webhook.
Unknown values are always None, never an empty string.
"""
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any


def _clean(value) -> Optional[str]:
    """Normalize an inbound identifier: blanks and non-values become None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class OrderContext:
    """What we know about the order that triggered the webhook."""

    shop_domain: str
    order_id: Optional[str] = None
    order_name: Optional[str] = None
    customer_id: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'OrderContext':
        """
        Build a context from a Flow webhook body.

        Accepts the camelCase keys Flow is configured to send, with
        snake_case fallbacks. The shop domain is kept exactly as sent.
        """
        def pick(*keys):
            for key in keys:
                if payload.get(key) is not None:
                    return payload.get(key)
            return None

        return cls(
            shop_domain=pick('shopDomain', 'shop_domain'),
            order_id=_clean(pick('orderId', 'order_id')),
            order_name=_clean(pick('orderName', 'order_name')),
            customer_id=_clean(pick('customerId', 'customer_id')),
            email=_clean(pick('email')),
        )

    @property
    def is_complete(self) -> bool:
        return all((self.order_id, self.customer_id, self.email, self.order_name))

    def fill_missing(self, **values) -> 'OrderContext':
        """
        Return a copy where each given value fills its field only if the
        field is still unknown. Known fields are never overwritten.
        """
        updates = {}
        for field_name, value in values.items():
            value = _clean(value)
            if value is not None and getattr(self, field_name) is None:
                updates[field_name] = value
        return replace(self, **updates) if updates else self

    def to_dict(self) -> Dict[str, Any]:
        return {
            'shopDomain': self.shop_domain,
            'orderId': self.order_id,
            'orderName': self.order_name,
            'customerId': self.customer_id,
            'email': self.email,
        }


@dataclass(frozen=True)
class SubscriptionSummary:
    """The fields of a Seal subscription that drive tagging."""

    id: Any
    billing_min_cycles: Optional[int] = None

    @classmethod
    def from_detail(cls, detail: Dict[str, Any], fallback_id=None) -> 'SubscriptionSummary':
        detail = detail or {}
        sub_id = detail.get('id')
        if sub_id is None:
            sub_id = fallback_id
        return cls(id=sub_id, billing_min_cycles=detail.get('billing_min_cycles'))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'billing_min_cycles': self.billing_min_cycles,
        }

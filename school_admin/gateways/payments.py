# school_admin/gateways/payments.py
"""Razorpay client: order creation and payment signature verification."""
from typing import Any, Dict, Optional
import hashlib
import hmac
import logging

import httpx

from ..core.exceptions import UpstreamGatewayError

logger = logging.getLogger(__name__)


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """Hex HMAC-SHA256 of "<order_id>|<payment_id>" keyed by the account secret"""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class RazorpayGateway:
    BASE_URL = "https://api.razorpay.com/v1"

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        currency: str = "INR",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.currency = currency
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings) -> Optional["RazorpayGateway"]:
        if not (settings.razorpay_key_id and settings.razorpay_key_secret):
            return None
        return cls(
            settings.razorpay_key_id,
            settings.razorpay_key_secret,
            currency=settings.razorpay_currency,
            timeout=settings.gateway_timeout_seconds,
        )

    async def create_order(self, amount_paise: int, receipt: str, notes: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Create an order; amount is in the currency's smallest unit"""
        payload = {
            "amount": amount_paise,
            "currency": self.currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        try:
            response = await self._client.post(
                f"{self.BASE_URL}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
            )
            response.raise_for_status()
            order = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Razorpay order rejected ({e.response.status_code}): {e.response.text[:200]}")
            raise UpstreamGatewayError("Error creating payment order")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Razorpay order request failed: {e}")
            raise UpstreamGatewayError("Error creating payment order")

        logger.info(f"Created Razorpay order {order.get('id')} for receipt {receipt}")
        return order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        expected = compute_signature(self.key_secret, order_id, payment_id)
        return hmac.compare_digest(expected, signature or "")

    async def aclose(self):
        await self._client.aclose()

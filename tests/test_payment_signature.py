import hashlib
import hmac

import httpx
import pytest

from school_admin.core.exceptions import UpstreamGatewayError
from school_admin.gateways.payments import RazorpayGateway, compute_signature
from school_admin.gateways.storage import CloudinaryStorage

from .conftest import RAZORPAY_SECRET


def test_signature_is_hmac_of_order_and_payment():
    expected = hmac.new(b"rzp_test_secret", b"order_1|pay_1", hashlib.sha256).hexdigest()
    assert compute_signature(RAZORPAY_SECRET, "order_1", "pay_1") == expected


def test_verify_signature(payments):
    good = compute_signature(RAZORPAY_SECRET, "order_1", "pay_1")
    assert payments.verify_signature("order_1", "pay_1", good)
    assert not payments.verify_signature("order_1", "pay_2", good)
    assert not payments.verify_signature("order_1", "pay_1", good.upper())
    assert not payments.verify_signature("order_1", "pay_1", None)


async def test_create_order_sends_paise_and_receipt(payments, payment_backend):
    order = await payments.create_order(150000, "fee_abc", {"admissionNumber": "ADM202612345"})
    assert order["id"] == "order_0001"
    assert payment_backend.orders == [
        {"id": "order_0001", "amount": 150000, "currency": "INR", "receipt": "fee_abc"}
    ]


async def test_rejected_order_raises_gateway_error():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(401, json={})))
    gateway = RazorpayGateway("key", "secret", client=client)
    with pytest.raises(UpstreamGatewayError, match="Error creating payment order"):
        await gateway.create_order(100, "r")
    await gateway.aclose()


def test_from_settings_needs_both_keys():
    class Incomplete:
        razorpay_key_id = "rzp_key"
        razorpay_key_secret = ""

    assert RazorpayGateway.from_settings(Incomplete()) is None


def test_cloudinary_signature_skips_empty_params():
    storage = CloudinaryStorage("demo", "key", "cloud-secret", client=httpx.AsyncClient())
    signature = storage.sign({"timestamp": 1700000000, "folder": "dmps", "public_id": None})
    expected = hashlib.sha1(b"folder=dmps&timestamp=1700000000cloud-secret").hexdigest()
    assert signature == expected


async def test_upload_and_delete(storage, storage_backend):
    stored = await storage.upload(b"data", "dmps/gallery", "a.png", "image/png")
    assert stored.url == "https://res.cloudinary.test/dmps/file1.jpg"
    assert stored.public_id == "dmps/file1"
    assert stored.file_name == "a.png"

    assert await storage.delete(stored.public_id) is True
    assert "dmps%2Ffile1" in storage_backend.deleted[0]

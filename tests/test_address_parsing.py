import pytest

from school_admin.core.exceptions import ValidationError
from school_admin.schemas.admission_schemas import ADDRESS_REQUIRED_MESSAGE, AdmissionCreate

ADDRESS = {"street": "12 MG Road", "city": "Patna", "state": "Bihar", "pincode": "800001"}


@pytest.fixture
def base(application_payload):
    return {k: v for k, v in application_payload.items() if k != "address"}


def test_nested_object(base):
    application = AdmissionCreate.from_payload(dict(base, address=ADDRESS))
    assert application.address.model_dump() == ADDRESS


def test_json_string(base):
    application = AdmissionCreate.from_payload(
        dict(base, address='{"street": "1 Main", "city": "Gaya", "state": "Bihar", "pincode": 823001}')
    )
    assert application.address.city == "Gaya"
    assert application.address.pincode == "823001"


def test_flattened_keys(base):
    flattened = {f"address.{key}": value for key, value in ADDRESS.items()}
    application = AdmissionCreate.from_payload(dict(base, **flattened))
    assert application.address.model_dump() == ADDRESS


def test_nested_values_win_and_flattened_fill_gaps(base):
    payload = dict(
        base,
        address={"street": "7 Boring Road", "city": "Patna", "state": "", "pincode": "800001"},
        **{"address.street": "ignored", "address.state": "Bihar"},
    )
    application = AdmissionCreate.from_payload(payload)
    assert application.address.street == "7 Boring Road"
    assert application.address.state == "Bihar"


@pytest.mark.parametrize("address", [
    None,
    "",
    "not json",
    {"street": "12 MG Road", "city": "Patna", "state": "Bihar"},
    {"street": "  ", "city": "Patna", "state": "Bihar", "pincode": "800001"},
])
def test_incomplete_address_is_rejected(base, address):
    payload = dict(base) if address is None else dict(base, address=address)
    with pytest.raises(ValidationError) as exc:
        AdmissionCreate.from_payload(payload)
    assert exc.value.message == ADDRESS_REQUIRED_MESSAGE


def test_other_field_errors_are_reported(base):
    payload = dict(base, address=ADDRESS, gender="Unknown")
    with pytest.raises(ValidationError) as exc:
        AdmissionCreate.from_payload(payload)
    assert "gender" in exc.value.message


def test_contact_email_prefers_father(base):
    payload = dict(base, address=ADDRESS, fatherEmail="", motherEmail="mother@dmps.in")
    assert AdmissionCreate.from_payload(payload).contact_email == "mother@dmps.in"

"""
Tests for GET and PUT /patient/profile.
"""
from portal.auth.models import UserRole


def test_get_patient_profile(client, make_user, auth_headers):
    make_user(email="a@x.com", first_name="Ada", city="London")

    response = client.get("/patient/profile", headers=auth_headers("a@x.com"))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["city"] == "London"
    assert data["user"]["firstName"] == "Ada"
    assert data["user"]["email"] == "a@x.com"


def test_update_only_changes_supplied_fields(client, make_user, auth_headers):
    make_user(email="a@x.com", city="London", allergies="Peanuts")
    headers = auth_headers("a@x.com")

    response = client.put("/patient/profile", json={"state": "NY", "city": ""}, headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["state"] == "NY"
    assert data["city"] == "London"
    assert data["allergies"] == "Peanuts"


def test_update_can_clear_allergies(client, make_user, auth_headers):
    make_user(email="a@x.com", allergies="Peanuts", medications="Aspirin")

    response = client.put(
        "/patient/profile", json={"allergies": "", "medications": "None"}, headers=auth_headers("a@x.com")
    )

    data = response.json()["data"]
    assert data["allergies"] == ""
    assert data["medications"] == "None"


def test_provider_cannot_access_patient_profile(client, make_user, auth_headers):
    make_user(email="doc@x.com", role=UserRole.PROVIDER)

    response = client.get("/patient/profile", headers=auth_headers("doc@x.com"))

    assert response.status_code == 403


def test_patient_without_profile(client, make_user, auth_headers):
    make_user(email="a@x.com", with_profile=False)

    response = client.get("/patient/profile", headers=auth_headers("a@x.com"))

    assert response.status_code == 404
    assert response.json()["error"] == "Patient profile not found"

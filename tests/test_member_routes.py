"""API tests for reading and updating the current member's profile."""

import pytest

from memberportal.config import settings

MEMBERS = settings.members_table_id


@pytest.fixture
def member_one(store):
    return store.seed(
        MEMBERS,
        {
            "id": 1,
            "Name": "Member One",
            "Email": "one@example.com",
            "Title": "Partner",
            "Bio": None,
            "AUM": {"id": 2, "value": "$10M - $50M", "color": "blue"},
            "Sector Preference": [{"id": 4, "value": "Fintech"}, {"id": 7, "value": "Health"}],
            "Funding Types": [{"id": 11, "value": "Equity"}],
            "Headshot": [{"url": "https://files.example.com/one.png", "name": "one.png"}],
            "Accredited Investor": True,
        },
    )


@pytest.mark.asyncio
async def test_get_member_profile(client, auth_headers, member_one):
    response = await client.get("/api/v1/member", headers=auth_headers("m1"))
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["member"]["Name"] == "Member One"
    assert data["member"]["id"] == 1


@pytest.mark.asyncio
async def test_missing_member_record_is_not_found(client, auth_headers, member_one):
    response = await client.get("/api/v1/member", headers=auth_headers("m2"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unchanged_form_issues_no_write(client, auth_headers, store, member_one):
    response = await client.patch(
        "/api/v1/member",
        json={
            "ID": 1,
            "TITLE": "Partner",
            "BIO": None,
            "AUM": 2,
            "SECTOR_PREFERENCE": [7, 4],
            "FUNDING_TYPES": [11],
            "HEADSHOT": [{"url": "https://files.example.com/one.png", "name": "renamed.png"}],
            "ACCREDITED_INVESTOR": True,
        },
        headers=auth_headers("m1"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "No changes detected"
    assert "changedFields" not in data
    assert store.writes == []


@pytest.mark.asyncio
async def test_only_changed_fields_are_written(client, auth_headers, store, member_one):
    response = await client.patch(
        "/api/v1/member",
        json={
            "TITLE": "Managing Partner",
            "SECTOR_PREFERENCE": [4, 7, 9],
            "AUM": 2,
            "NAME": "Someone Else",
            "ID": 42,
        },
        headers=auth_headers("m1"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Profile updated successfully"
    assert data["changedFields"] == 2
    assert data["member"]["Title"] == "Managing Partner"
    assert data["member"]["Name"] == "Member One"

    [(op, table, row_id, fields)] = store.writes
    assert (op, table, row_id) == ("update", MEMBERS, 1)
    assert fields == {"Title": "Managing Partner", "Sector Preference": [4, 7, 9]}


@pytest.mark.asyncio
async def test_clearing_a_field_is_a_change(client, auth_headers, store, member_one):
    response = await client.patch("/api/v1/member", json={"FUNDING_TYPES": []}, headers=auth_headers("m1"))
    assert response.json()["changedFields"] == 1
    assert store.writes[0][3] == {"Funding Types": []}


@pytest.mark.asyncio
async def test_unknown_profile_field_rejected(client, auth_headers, store, member_one):
    response = await client.patch("/api/v1/member", json={"FAVOURITE_COLOUR": "green"}, headers=auth_headers("m1"))
    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"fields": ["FAVOURITE_COLOUR"]}
    assert store.writes == []


@pytest.mark.asyncio
async def test_full_record_form_round_trips_without_changes(client, auth_headers, store):
    store.seed(
        MEMBERS,
        {
            "id": 1,
            "Name": "Member One",
            "Association to Capital": {"id": 3060, "value": "Own capital (team)"},
            "Reason Not Accredited": "Pending paperwork",
            "Agreed Not to Circumvent CC on Investments": True,
            "Internal Tiers": {"id": 3111, "value": "Core Circle"},
            "Deals": [{"id": 10, "value": "Acme Series A"}],
        },
    )
    form = {
        "ID": 1,
        "NAME": "Member One",
        "ASSOCIATION_TO_CAPITAL": 3060,
        "REASON_NOT_ACCREDITED": "Pending paperwork",
        "AGREED_NOT_CIRCUMVENT": True,
        "INTERNAL_TIERS": 3111,
        "DEALS": [10],
    }
    response = await client.patch("/api/v1/member", json=form, headers=auth_headers("m1"))
    assert response.status_code == 200
    assert response.json()["message"] == "No changes detected"

    response = await client.patch(
        "/api/v1/member",
        json={**form, "ASSOCIATION_TO_CAPITAL": 3061, "DEALS": []},
        headers=auth_headers("m1"),
    )
    assert response.status_code == 200
    assert response.json()["changedFields"] == 1
    assert store.writes[-1][3] == {"Association to Capital": 3061}

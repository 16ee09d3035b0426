"""Tests for the resource endpoints."""

from datetime import timedelta

import pytest

from modules.auth.models import Role


BOOTCAMP = {
    "name": "Devworks Bootcamp",
    "description": "Devworks is a full stack JavaScript Bootcamp",
    "website": "https://devworks.com",
    "careers": ["Web Development", "UI/UX"],
    "housing": True,
    "jobAssistance": True,
}

COURSE = {
    "title": "Front End Web Development",
    "description": "HTML, CSS and JavaScript",
    "weeks": "8",
    "tuition": 8000,
    "minimumSkill": "beginner",
}


@pytest.fixture
def publisher(make_account):
    return make_account(Role.PUBLISHER)


@pytest.fixture
def bootcamp(client, publisher):
    _, headers = publisher
    response = client.post("/api/v1/bootcamps", json=BOOTCAMP, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


class TestBootcampEndpoints:
    def test_create_returns_camel_case(self, bootcamp, publisher):
        account, _ = publisher
        assert bootcamp["slug"] == "devworks-bootcamp"
        assert bootcamp["jobAssistance"] is True
        assert bootcamp["user"] == account.id
        assert "createdAt" in bootcamp

    def test_list_with_pagination(self, client, make_account, clock):
        for n in range(25):
            _, headers = make_account(Role.PUBLISHER)
            clock.advance(timedelta(minutes=1))
            client.post(
                "/api/v1/bootcamps",
                json={**BOOTCAMP, "name": f"Bootcamp {n:02d}"},
                headers=headers,
            )

        response = client.get("/api/v1/bootcamps?select=name&sort=-createdAt&page=2&limit=10")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 10
        assert body["pagination"] == {
            "next": {"page": 3, "limit": 10},
            "prev": {"page": 1, "limit": 10},
        }
        assert [d["name"] for d in body["data"]] == [f"Bootcamp {n:02d}" for n in range(14, 4, -1)]
        assert set(body["data"][0]) == {"id", "name", "courses"}

    def test_list_filters(self, client, bootcamp):
        response = client.get("/api/v1/bootcamps?housing=false")
        assert response.json()["count"] == 0

        response = client.get("/api/v1/bootcamps?careers[in]=UI/UX")
        assert response.json()["count"] == 1

    def test_list_ignores_storage_directives(self, client, bootcamp):
        response = client.get("/api/v1/bootcamps", params={"name[$ne]": "nothing"})
        assert response.status_code == 200
        assert response.json()["count"] == 0

    def test_get(self, client, bootcamp):
        response = client.get(f"/api/v1/bootcamps/{bootcamp['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Devworks Bootcamp"

    def test_get_unknown(self, client):
        response = client.get("/api/v1/bootcamps/5d725a1b7b292f5f8ceff788")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Bootcamp not found with id of 5d725a1b7b292f5f8ceff788",
        }

    def test_update_by_stranger(self, client, bootcamp, make_account):
        _, headers = make_account(Role.PUBLISHER)

        response = client.put(f"/api/v1/bootcamps/{bootcamp['id']}", json={"housing": False}, headers=headers)

        assert response.status_code == 403

    def test_second_bootcamp_rejected(self, client, bootcamp, publisher):
        _, headers = publisher

        response = client.post("/api/v1/bootcamps", json={**BOOTCAMP, "name": "Other"}, headers=headers)

        assert response.status_code == 400

    def test_delete(self, client, bootcamp, publisher):
        _, headers = publisher

        response = client.delete(f"/api/v1/bootcamps/{bootcamp['id']}", headers=headers)

        assert response.json() == {"success": True, "data": {}}
        assert client.get(f"/api/v1/bootcamps/{bootcamp['id']}").status_code == 404


class TestCourseEndpoints:
    def test_create_and_average_cost(self, client, bootcamp, publisher):
        _, headers = publisher

        response = client.post(f"/api/v1/bootcamps/{bootcamp['id']}/courses", json=COURSE, headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["minimumSkill"] == "beginner"
        client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json={**COURSE, "title": "Back End", "tuition": 10001},
            headers=headers,
        )

        camp = client.get(f"/api/v1/bootcamps/{bootcamp['id']}").json()["data"]
        assert camp["averageCost"] == 9010

    def test_list_bootcamp_courses(self, client, bootcamp, publisher):
        _, headers = publisher
        client.post(f"/api/v1/bootcamps/{bootcamp['id']}/courses", json=COURSE, headers=headers)

        body = client.get(f"/api/v1/bootcamps/{bootcamp['id']}/courses").json()

        assert body["success"] is True
        assert body["count"] == 1
        assert "pagination" not in body

    def test_list_courses_expands_bootcamp(self, client, bootcamp, publisher):
        _, headers = publisher
        client.post(f"/api/v1/bootcamps/{bootcamp['id']}/courses", json=COURSE, headers=headers)

        body = client.get("/api/v1/courses?tuition[lte]=8000").json()

        assert body["count"] == 1
        assert body["data"][0]["bootcamp"] == {
            "id": bootcamp["id"],
            "name": bootcamp["name"],
            "description": bootcamp["description"],
        }

    def test_list_courses_by_bootcamp_id(self, client, bootcamp, publisher, make_account):
        _, headers = publisher
        client.post(f"/api/v1/bootcamps/{bootcamp['id']}/courses", json=COURSE, headers=headers)
        _, other_headers = make_account(Role.PUBLISHER)
        other = client.post(
            "/api/v1/bootcamps", json={**BOOTCAMP, "name": "Codemasters"}, headers=other_headers
        ).json()["data"]
        client.post(f"/api/v1/bootcamps/{other['id']}/courses", json=COURSE, headers=other_headers)

        body = client.get(f"/api/v1/courses?bootcamp={bootcamp['id']}").json()

        assert body["count"] == 1
        assert body["data"][0]["bootcamp"]["id"] == bootcamp["id"]

    def test_huge_page_is_not_a_server_error(self, client, bootcamp):
        response = client.get("/api/v1/courses?page=99999999999999999999")
        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_invalid_skill(self, client, bootcamp, publisher):
        _, headers = publisher
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/courses",
            json={**COURSE, "minimumSkill": "expert"},
            headers=headers,
        )
        assert response.status_code == 400


class TestReviewEndpoints:
    def test_review_lifecycle(self, client, bootcamp, make_account):
        alice_account, alice = make_account(Role.USER)
        url = f"/api/v1/bootcamps/{bootcamp['id']}/reviews"
        review = {"title": "Learned a ton", "text": "Great bootcamp", "rating": 8}

        response = client.post(url, json=review, headers=alice)
        assert response.status_code == 200
        review_id = response.json()["data"]["id"]

        response = client.post(url, json=review, headers=alice)
        assert response.status_code == 400
        assert response.json()["error"] == "Duplicate field value entered"

        assert client.get(f"/api/v1/bootcamps/{bootcamp['id']}").json()["data"]["averageRating"] == 8

        response = client.get(f"/api/v1/reviews/{review_id}")
        assert response.json()["data"]["bootcamp"]["name"] == bootcamp["name"]

        body = client.get(f"/api/v1/reviews?user={alice_account.id}").json()
        assert [r["id"] for r in body["data"]] == [review_id]

    def test_publisher_cannot_review(self, client, bootcamp, publisher):
        _, headers = publisher
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp['id']}/reviews",
            json={"title": "Mine", "text": "Best", "rating": 10},
            headers=headers,
        )
        assert response.status_code == 403


class TestUserEndpoints:
    def test_requires_admin(self, client, make_account):
        _, headers = make_account(Role.PUBLISHER)
        assert client.get("/api/v1/users", headers=headers).status_code == 403
        assert client.get("/api/v1/users").status_code == 401

    def test_admin_crud(self, client, make_account):
        _, headers = make_account(Role.ADMIN)

        response = client.post(
            "/api/v1/users",
            json={"name": "Jane", "email": "jane@example.com", "password": "123456", "role": "publisher"},
            headers=headers,
        )
        assert response.status_code == 201
        user = response.json()["data"]
        assert user["role"] == "publisher"
        assert "password" not in user

        listing = client.get("/api/v1/users?role=publisher", headers=headers).json()
        assert [u["email"] for u in listing["data"]] == ["jane@example.com"]
        assert all("password" not in u for u in listing["data"])

        response = client.put(f"/api/v1/users/{user['id']}", json={"name": "Janet"}, headers=headers)
        assert response.json()["data"]["name"] == "Janet"

        assert client.delete(f"/api/v1/users/{user['id']}", headers=headers).status_code == 200
        assert client.get(f"/api/v1/users/{user['id']}", headers=headers).status_code == 404

"""Tests for the User resource."""

from __future__ import annotations

import uuid

from articles.models import Article
from tests.utils import APITestCase, create_user
from users.models import User


class UserResourceTests(APITestCase):
    """CRUD, ownership and include-set behavior of /user."""

    @classmethod
    def setUpTestData(cls):
        cls.owner = create_user("owner@example.com", name="Owner")
        cls.other = create_user("other@example.com", name="Other")

    def test_create_get_delete_roundtrip(self):
        """Registration assigns the id; duplicates conflict; delete removes the row."""
        payload = {"name": "Ada", "email": "ada@x.io", "password": "pw", "id": "not-an-id"}
        response = self.api_client.post("/user/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["message"], "User created successfully")
        created = body["data"]
        self.assertNotEqual(created["id"], "not-an-id")
        uuid.UUID(created["id"])
        self.assertEqual(created["name"], "Ada")
        self.assertNotIn("password", created)

        duplicate = self.api_client.post(
            "/user/", {"name": "Ada 2", "email": "ada@x.io", "password": "pw2"}, format="json"
        )
        self.assertEqual(duplicate.status_code, 409)
        self.assertEqual(duplicate.json()["status"], 409)
        self.assertEqual(duplicate.json()["data"], {"email": "ada@x.io"})
        self.assertEqual(User.objects.filter(email="ada@x.io").count(), 1)

        fetched = self.api_client.get(f"/user/{created['id']}/")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["data"], created)

        ada = User.objects.get(pk=created["id"])
        delete_response = self.auth_client(ada).delete(f"/user/{created['id']}/")
        self.assertEqual(delete_response.status_code, 204)
        self.assertEqual(delete_response.content, b"")

        missing = self.api_client.get(f"/user/{created['id']}/")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["data"], {"id": created["id"]})

    def test_created_user_can_log_in(self):
        self.api_client.post("/user/", {"name": "Bob", "email": "bob@x.io", "password": "secret"}, format="json")
        response = self.api_client.post("/auth/login/", {"email": "bob@x.io", "password": "secret"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["data"]["token"])

    def test_create_missing_fields_400(self):
        response = self.api_client.post("/user/", {"name": "No Email"}, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertIn("email", body["data"])
        self.assertIn("password", body["data"])

    def test_list_returns_envelope(self):
        response = self.api_client.get("/user/")
        emails = [user["email"] for user in response.json()["data"]]

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Success")
        self.assertEqual(emails, ["owner@example.com", "other@example.com"])

    def test_get_unknown_and_malformed_id_404(self):
        self.assertEqual(self.api_client.get(f"/user/{uuid.uuid4()}/").status_code, 404)
        self.assertEqual(self.api_client.get("/user/not-a-uuid/").status_code, 404)

    def test_update_merges_fields(self):
        """PUT changes only the provided fields and keeps the rest."""
        client = self.auth_client(self.owner)
        response = client.put(f"/user/{self.owner.pk}/", {"name": "Renamed"}, format="json")
        data = response.json()["data"]

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "User updated")
        self.assertEqual(data["name"], "Renamed")
        self.assertEqual(data["email"], "owner@example.com")

    def test_update_password_rehashes(self):
        client = self.auth_client(self.owner)
        client.patch(f"/user/{self.owner.pk}/", {"password": "new-secret"}, format="json")

        self.owner.refresh_from_db()
        self.assertTrue(self.owner.check_password("new-secret"))
        self.assertFalse(self.owner.check_password("password123"))

    def test_update_to_taken_email_conflicts(self):
        client = self.auth_client(self.owner)
        response = client.put(f"/user/{self.owner.pk}/", {"email": "other@example.com"}, format="json")
        self.assertEqual(response.status_code, 409)

    def test_cannot_modify_other_user_403(self):
        client = self.auth_client(self.owner)
        self.assertEqual(client.put(f"/user/{self.other.pk}/", {"name": "x"}, format="json").status_code, 403)

        response = client.delete(f"/user/{self.other.pk}/")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["status"], 403)
        self.assertTrue(User.objects.filter(pk=self.other.pk).exists())

    def test_unauthenticated_delete_401(self):
        response = self.api_client.delete(f"/user/{self.owner.pk}/")

        self.assertEqual(response.status_code, 401)
        self.assertIn("WWW-Authenticate", response)
        self.assertTrue(User.objects.filter(pk=self.owner.pk).exists())

    def test_include_flags(self):
        Article.objects.create(title="Hello", content="World", author=self.owner)

        plain = self.api_client.get(f"/user/{self.owner.pk}/").json()["data"]
        self.assertNotIn("articles", plain)
        self.assertNotIn("avatar", plain)

        included = self.api_client.get(
            f"/user/{self.owner.pk}/", {"articles": "true", "avatar": "true", "opinions": "false"}
        ).json()["data"]
        self.assertEqual([article["title"] for article in included["articles"]], ["Hello"])
        self.assertIsNone(included["avatar"])
        self.assertNotIn("opinions", included)

    def test_me_returns_own_profile(self):
        response = self.auth_client(self.other).get("/user/me/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["email"], "other@example.com")

    def test_email_is_unique_regardless_of_case(self):
        first = self.api_client.post(
            "/user/", {"name": "Ada", "email": "Ada@Example.com", "password": "pw"}, format="json"
        )
        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json()["data"]["email"], "ada@example.com")

        second = self.api_client.post(
            "/user/", {"name": "Ada", "email": "ada@example.com", "password": "pw"}, format="json"
        )
        self.assertEqual(second.status_code, 409)
        self.assertEqual(User.objects.filter(email__iexact="ada@example.com").count(), 1)

        login = self.api_client.post("/auth/login/", {"email": "ADA@example.COM", "password": "pw"}, format="json")
        self.assertEqual(login.status_code, 200)

    def test_update_to_taken_email_in_other_case_conflicts(self):
        client = self.auth_client(self.owner)
        response = client.put(f"/user/{self.owner.pk}/", {"email": "Other@Example.com"}, format="json")
        self.assertEqual(response.status_code, 409)

"""Tests for the Article resource and article opinions."""

from __future__ import annotations

import uuid

from django.core.files.storage import default_storage

from articles.models import Article
from assets.models import Asset
from opinions.models import Opinion, OpinionType
from tests.utils import APITestCase, create_user, image_upload


class ArticleResourceTests(APITestCase):
    """CRUD, windowing and per-author listing of /article."""

    @classmethod
    def setUpTestData(cls):
        cls.author = create_user("author@example.com", name="Author")
        cls.reader = create_user("reader@example.com", name="Reader")
        cls.articles = [
            Article.objects.create(title=f"Article {index}", content="Body", author=cls.author)
            for index in range(3)
        ]

    def _expected_ids(self):
        return [str(pk) for pk in Article.objects.order_by("created_at", "id").values_list("id", flat=True)]

    def test_list_is_ordered_and_windowed(self):
        expected = self._expected_ids()

        everything = self.api_client.get("/article/").json()["data"]
        self.assertEqual([article["id"] for article in everything], expected)

        window = self.api_client.get("/article/", {"limit": 1, "offset": 1}).json()["data"]
        self.assertEqual([article["id"] for article in window], expected[1:2])

        past_the_end = self.api_client.get("/article/", {"offset": 10})
        self.assertEqual(past_the_end.status_code, 200)
        self.assertEqual(past_the_end.json()["data"], [])

    def test_invalid_window_400(self):
        oversized = "99999999999999999999999"
        for params in ({"limit": "-1"}, {"offset": "abc"}, {"limit": "1.5"}, {"limit": oversized}, {"offset": oversized}):
            with self.subTest(params=params):
                response = self.api_client.get("/article/", params)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["status"], 400)

    def test_create_sets_author(self):
        client = self.auth_client(self.reader)
        response = client.post("/article/", {"title": "Mine", "content": "Text"}, format="json")
        data = response.json()["data"]

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "Article created successfully")
        self.assertEqual(data["authorId"], str(self.reader.pk))
        self.assertTrue(Article.objects.filter(pk=data["id"], author=self.reader).exists())

    def test_create_ignores_author_in_body(self):
        client = self.auth_client(self.reader)
        response = client.post(
            "/article/", {"title": "Mine", "content": "Text", "authorId": str(self.author.pk)}, format="json"
        )
        self.assertEqual(response.json()["data"]["authorId"], str(self.reader.pk))

    def test_create_requires_authentication(self):
        response = self.api_client.post("/article/", {"title": "Anon", "content": "Text"}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_create_missing_title_400(self):
        response = self.auth_client(self.reader).post("/article/", {"content": "Text"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("title", response.json()["data"])

    def test_include_author(self):
        article = self.articles[0]
        data = self.api_client.get(f"/article/{article.pk}/", {"author": "true"}).json()["data"]

        self.assertEqual(data["author"]["email"], "author@example.com")
        self.assertNotIn("password", data["author"])
        self.assertNotIn("opinions", data)

    def test_list_by_author(self):
        Article.objects.create(title="Reader's", content="Body", author=self.reader)

        response = self.api_client.get(f"/article/user/{self.author.pk}/", {"limit": 2})
        data = response.json()["data"]

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(data), 2)
        self.assertTrue(all(article["authorId"] == str(self.author.pk) for article in data))

    def test_list_by_unknown_author_404(self):
        response = self.api_client.get(f"/article/user/{uuid.uuid4()}/")
        self.assertEqual(response.status_code, 404)

    def test_only_author_can_update(self):
        article = self.articles[0]
        denied = self.auth_client(self.reader).put(f"/article/{article.pk}/", {"title": "Hijack"}, format="json")
        self.assertEqual(denied.status_code, 403)

        allowed = self.auth_client(self.author).put(f"/article/{article.pk}/", {"title": "Edited"}, format="json")
        self.assertEqual(allowed.status_code, 200)
        self.assertEqual(allowed.json()["data"]["title"], "Edited")
        self.assertEqual(allowed.json()["data"]["content"], "Body")

    def test_delete_removes_assets_and_files(self):
        """Deleting an article deletes its gallery rows and backing files."""
        article = self.articles[1]
        client = self.auth_client(self.author)
        upload = client.post(
            f"/article/{article.pk}/upload-file/",
            {"articles": [image_upload("a.png"), image_upload("b.png")]},
            format="multipart",
        )
        self.assertEqual(upload.status_code, 201)
        paths = [asset["path"] for asset in upload.json()["data"]]
        self.assertTrue(all(default_storage.exists(path) for path in paths))

        with self.captureOnCommitCallbacks(execute=True):
            response = client.delete(f"/article/{article.pk}/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(Article.objects.filter(pk=article.pk).exists())
        self.assertFalse(Asset.objects.filter(path__in=paths).exists())
        self.assertFalse(any(default_storage.exists(path) for path in paths))


class ArticleOpinionTests(APITestCase):
    """POST/DELETE /article/{id}/opinion/{userId}/."""

    @classmethod
    def setUpTestData(cls):
        cls.author = create_user("writer@example.com", name="Writer")
        cls.reader = create_user("fan@example.com", name="Fan")
        cls.article = Article.objects.create(title="Opinionated", content="Body", author=cls.author)

    def setUp(self):
        super().setUp()
        self.reader_client = self.auth_client(self.reader)
        self.url = f"/article/{self.article.pk}/opinion/{self.reader.pk}/"

    def test_upsert_creates_then_changes(self):
        created = self.reader_client.post(self.url, {"opinionType": "LIKE"}, format="json")
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["data"]["opinionType"], "LIKE")

        changed = self.reader_client.post(self.url, {"opinionType": "DISLIKE"}, format="json")
        self.assertEqual(changed.status_code, 200)
        self.assertEqual(changed.json()["data"]["id"], created.json()["data"]["id"])

        opinion = Opinion.objects.get(user=self.reader, article=self.article)
        self.assertEqual(opinion.opinion_type, OpinionType.DISLIKE)

    def test_invalid_opinion_type_400(self):
        for value in ("LOVE", ""):
            with self.subTest(value=value):
                response = self.reader_client.post(self.url, {"opinionType": value}, format="json")
                self.assertEqual(response.status_code, 400)
        self.assertFalse(Opinion.objects.exists())

    def test_non_object_body_400(self):
        for body in ([1, 2], "LIKE", 3):
            with self.subTest(body=body):
                response = self.reader_client.post(self.url, body, format="json")
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["status"], 400)
        self.assertFalse(Opinion.objects.exists())

    def test_unknown_article_404(self):
        response = self.reader_client.post(
            f"/article/{uuid.uuid4()}/opinion/{self.reader.pk}/", {"opinionType": "LIKE"}, format="json"
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Article not found")

    def test_opinion_for_other_user_403(self):
        response = self.reader_client.post(
            f"/article/{self.article.pk}/opinion/{self.author.pk}/", {"opinionType": "LIKE"}, format="json"
        )
        self.assertEqual(response.status_code, 403)
        self.assertFalse(Opinion.objects.exists())

    def test_requires_authentication(self):
        response = self.api_client.post(self.url, {"opinionType": "LIKE"}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_delete_then_missing(self):
        self.reader_client.post(self.url, {"opinionType": "LIKE"}, format="json")

        deleted = self.reader_client.delete(self.url)
        self.assertEqual(deleted.status_code, 204)
        self.assertFalse(Opinion.objects.exists())

        again = self.reader_client.delete(self.url)
        self.assertEqual(again.status_code, 404)
        self.assertEqual(
            again.json()["data"], {"articleId": str(self.article.pk), "userId": str(self.reader.pk)}
        )

    def test_include_opinions_on_article(self):
        self.reader_client.post(self.url, {"opinionType": "LIKE"}, format="json")
        data = self.api_client.get(f"/article/{self.article.pk}/", {"opinions": "true"}).json()["data"]

        self.assertEqual(len(data["opinions"]), 1)
        self.assertEqual(data["opinions"][0]["userId"], str(self.reader.pk))

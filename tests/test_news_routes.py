"""Tests for the /admin/news article management routes and the public /news page."""

import json

PLACEHOLDER = "https://via.placeholder.com/400x200"


def _articles(settings) -> list:
    return json.loads(settings.content_path.read_text(encoding="utf-8"))["news"]["articles"]


def _add(client, title: str, date: str, **files):
    return client.post(
        "/admin/news/add",
        data={"title": title, "date": date, "tag": "Wildlife", "content": "Body text"},
        files=files or None,
        follow_redirects=False,
    )


class TestAddArticle:
    def test_add_without_image_uses_placeholder(self, admin_client, settings):
        resp = _add(admin_client, "Wild dog sighting", "2024-04-02")

        assert resp.status_code == 303
        assert resp.headers["location"] == "/admin/news"
        [article] = _articles(settings)
        assert article["title"] == "Wild dog sighting"
        assert article["image"] == PLACEHOLDER
        assert isinstance(article["id"], int)

    def test_add_with_image_stores_upload(self, admin_client, settings):
        _add(admin_client, "Census", "2024-04-02", image=("census.jpg", b"jpg", "image/jpeg"))

        [article] = _articles(settings)
        assert article["image"].startswith("/uploads/image-")
        assert article["image"].endswith(".jpg")

    def test_list_is_newest_first(self, admin_client):
        _add(admin_client, "January", "2024-01-01")
        _add(admin_client, "June", "2024-06-01")
        _add(admin_client, "December", "2023-12-31")

        text = admin_client.get("/admin/news").text
        assert text.index("June") < text.index("January") < text.index("December")


class TestEditArticle:
    def test_edit_form_renders(self, admin_client, settings):
        _add(admin_client, "Census", "2024-04-02")
        article_id = _articles(settings)[0]["id"]

        resp = admin_client.get(f"/admin/news/edit/{article_id}")
        assert resp.status_code == 200
        assert 'name="currentImage"' in resp.text

    def test_edit_form_for_unknown_article_is_404(self, admin_client):
        resp = admin_client.get("/admin/news/edit/42")
        assert resp.status_code == 404
        assert resp.text == "Article not found"

    def test_edit_without_upload_keeps_current_image(self, admin_client, settings):
        _add(admin_client, "Census", "2024-04-02", image=("census.jpg", b"jpg", "image/jpeg"))
        article = _articles(settings)[0]

        resp = admin_client.post(
            f"/admin/news/edit/{article['id']}",
            data={
                "title": "Census results",
                "date": "2024-04-03",
                "tag": "Research",
                "content": "Updated",
                "currentImage": article["image"],
            },
            follow_redirects=False,
        )

        assert resp.status_code == 303
        [edited] = _articles(settings)
        assert edited == {
            "id": article["id"],
            "title": "Census results",
            "date": "2024-04-03",
            "tag": "Research",
            "content": "Updated",
            "image": article["image"],
        }

    def test_edit_unknown_article_redirects_without_changes(self, admin_client, settings):
        _add(admin_client, "Census", "2024-04-02")
        before = _articles(settings)

        resp = admin_client.post(
            "/admin/news/edit/42", data={"title": "Ghost", "date": "2024-01-01"}, follow_redirects=False
        )

        assert resp.status_code == 303
        assert _articles(settings) == before


class TestDeleteArticle:
    def test_delete_removes_article(self, admin_client, settings):
        _add(admin_client, "Census", "2024-04-02")
        article_id = _articles(settings)[0]["id"]

        resp = admin_client.post(f"/admin/news/delete/{article_id}", follow_redirects=False)

        assert resp.status_code == 303
        assert _articles(settings) == []

    def test_delete_unknown_article_is_harmless(self, admin_client, settings):
        _add(admin_client, "Census", "2024-04-02")
        before = _articles(settings)

        resp = admin_client.post("/admin/news/delete/42", follow_redirects=False)

        assert resp.status_code == 303
        assert _articles(settings) == before


class TestPublicNews:
    def test_public_news_page_lists_articles_newest_first(self, admin_client):
        _add(admin_client, "Older story", "2023-05-01")
        _add(admin_client, "Newer story", "2024-05-01")

        text = admin_client.get("/news").text
        assert text.index("Newer story") < text.index("Older story")

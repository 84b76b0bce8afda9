"""News article CRUD on top of the ``news.articles`` list of the content store."""

import logging
import threading
import time
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from app.models.article import Article, ArticleFields
from app.models.content import ARTICLES_FIELD, PageContent
from app.services.content_store import ContentStore
from app.services.sanitizer import clean_rich_text

logger = logging.getLogger(__name__)

NEWS_PAGE = "news"


class IdGenerator:
    """Millisecond-clock ids, strictly increasing within the process."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            candidate = int(time.time() * 1000)
            self._last = max(candidate, self._last + 1)
            return self._last


def parse_article_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date or datetime string; ``None`` when it is not one."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text[:10]), datetime.min.time())
        except ValueError:
            return None
    # Compare aware and naive values on the same footing
    return parsed.replace(tzinfo=None)


def sort_for_display(articles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Newest first by ``date``; ties keep stored order, undated articles last."""

    def key(article: Dict[str, Any]):
        parsed = parse_article_date(article.get("date"))
        return (parsed is not None, parsed or datetime.min)

    return sorted(articles, key=key, reverse=True)


def _stored_articles(page: PageContent) -> List[Dict[str, Any]]:
    articles = page.get(ARTICLES_FIELD)
    return list(articles) if isinstance(articles, list) else []


class ArticleRepository:
    def __init__(
        self,
        store: ContentStore,
        placeholder_image: str,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self.store = store
        self.placeholder_image = placeholder_image
        self.next_id = id_generator or IdGenerator()

    def _articles(self) -> List[Dict[str, Any]]:
        if not self.store.has_page(NEWS_PAGE):
            return []
        return _stored_articles(self.store.get_page(NEWS_PAGE))

    def list(self) -> List[Dict[str, Any]]:
        return sort_for_display(self._articles())

    def get(self, article_id: int) -> Optional[Dict[str, Any]]:
        return next((a for a in self._articles() if a.get("id") == article_id), None)

    async def add(self, fields: ArticleFields, uploaded_image: Optional[str] = None) -> Article:
        article = Article(
            id=self.next_id(),
            image=uploaded_image or self.placeholder_image,
            **self._clean(fields),
        )

        def build(page: PageContent) -> PageContent:
            page[ARTICLES_FIELD] = [article.model_dump()] + _stored_articles(page)
            return page

        await self.store.update_page(NEWS_PAGE, build)
        logger.info("Article added", extra={"article_id": article.id, "title": article.title})
        return article

    async def edit(
        self,
        article_id: int,
        fields: ArticleFields,
        uploaded_image: Optional[str] = None,
        current_image: Optional[str] = None,
    ) -> bool:
        """Replace every field of article *article_id* except its id.

        Without an upload the image becomes *current_image* exactly as
        given.  Returns ``False`` (and changes nothing) for an unknown id.
        """
        found = False
        updated = Article(
            id=article_id,
            image=uploaded_image or (current_image if current_image is not None else ""),
            **self._clean(fields),
        )

        def build(page: PageContent) -> PageContent:
            nonlocal found
            articles = _stored_articles(page)
            for index, article in enumerate(articles):
                if article.get("id") == article_id:
                    articles[index] = updated.model_dump()
                    found = True
                    break
            page[ARTICLES_FIELD] = articles
            return page

        if self.get(article_id) is None:
            logger.info("Article %s not found – nothing to edit", article_id)
            return False

        await self.store.update_page(NEWS_PAGE, build)
        if found:
            logger.info("Article edited", extra={"article_id": article_id})
        return found

    async def delete(self, article_id: int) -> None:
        def build(page: PageContent) -> PageContent:
            page[ARTICLES_FIELD] = [
                a for a in _stored_articles(page) if a.get("id") != article_id
            ]
            return page

        await self.store.update_page(NEWS_PAGE, build)
        logger.info("Article deleted", extra={"article_id": article_id})

    @staticmethod
    def _clean(fields: ArticleFields) -> Dict[str, str]:
        data = fields.model_dump()
        data["content"] = clean_rich_text(data["content"])
        return data

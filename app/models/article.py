from pydantic import BaseModel, Field


class ArticleFields(BaseModel):
    """Editable fields of a news article, as posted by the admin form."""

    title: str = ""
    date: str = Field(default="", description="ISO date (YYYY-MM-DD) used for display ordering.")
    tag: str = ""
    content: str = ""


class Article(ArticleFields):
    id: int
    image: str

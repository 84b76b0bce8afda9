from typing import Dict, List

from pydantic import BaseModel, Field


class SectionSubmission(BaseModel):
    """Parallel value lists for one list-valued section, keyed by item field.

    ``fields["name"][i]`` is the ``name`` of the i-th submitted item.
    """

    fields: Dict[str, List[str]] = Field(default_factory=dict)

    def lengths(self) -> Dict[str, int]:
        return {name: len(values) for name, values in self.fields.items()}

    @property
    def item_count(self) -> int:
        if not self.fields:
            return 0
        return len(next(iter(self.fields.values())))

    def is_aligned(self) -> bool:
        """True when every field carries the same number of values."""
        return len(set(self.lengths().values())) <= 1


class PageSubmission(BaseModel):
    """Typed view of one admin edit-page form post."""

    scalars: Dict[str, str] = Field(default_factory=dict)
    sections: Dict[str, SectionSubmission] = Field(default_factory=dict)

"""Turn an admin edit-page form post into the new content of that page.

Admin forms post list-valued sections as parallel value lists, one per item
field, using bracket names::

    initiatives[title][]=Rhino patrol
    initiatives[title][]=Water points
    initiatives[image][]=/uploads/old.jpg
    initiatives[image][]=/uploads/other.jpg

Files attached to a list item are posted separately under
``<section>_<field>_<index>``; a file replacing a top-level string field is
posted under ``new_<field>``.  :func:`parse_form` turns the text fields into
a :class:`PageSubmission`; :func:`apply_submission` transposes it into the
page's list of records and substitutes stored upload paths.
"""

import re
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from app.models.content import ARTICLES_FIELD, FieldKind, PageContent, classify
from app.models.submission import PageSubmission, SectionSubmission

# section[field], section[field][] or section[field][3]
_SECTION_FIELD_RE = re.compile(r"^(?P<section>[^\[\]]+)\[(?P<field>[^\[\]]+)\](?:\[(?P<index>\d*)\])?$")


class SubmissionError(ValueError):
    """Raised when a form post cannot be mapped onto a page."""


def scalar_upload_key(field: str) -> str:
    return f"new_{field}"


def item_upload_key(section: str, field: str, index: int) -> str:
    return f"{section}_{field}_{index}"


def parse_form(form: Iterable[Tuple[str, object]]) -> PageSubmission:
    """Build a :class:`PageSubmission` from ``(name, value)`` pairs.

    Only string values are considered; file parts are handled by the upload
    resolver.  Repeated ``section[field][]`` names append in order; explicit
    ``section[field][i]`` indices are ordered by ``i``.
    """
    scalars: Dict[str, str] = {}
    appended: Dict[str, Dict[str, List[str]]] = {}
    indexed: Dict[str, Dict[str, Dict[int, str]]] = {}

    for name, value in form:
        if not isinstance(value, str):
            continue
        match = _SECTION_FIELD_RE.match(name)
        if match is None:
            scalars[name] = value
            continue

        section, field, index = match.group("section", "field", "index")
        if index:
            indexed.setdefault(section, {}).setdefault(field, {})[int(index)] = value
        else:
            appended.setdefault(section, {}).setdefault(field, []).append(value)

    sections: Dict[str, SectionSubmission] = {}
    for section in list(appended) + [s for s in indexed if s not in appended]:
        fields: Dict[str, List[str]] = dict(appended.get(section, {}))
        for field, by_index in indexed.get(section, {}).items():
            ordered = [by_index[i] for i in sorted(by_index)]
            fields[field] = fields.get(field, []) + ordered
        sections[section] = SectionSubmission(fields=fields)

    return PageSubmission(scalars=scalars, sections=sections)


def _build_items(
    section: str, submitted: SectionSubmission, file_map: Mapping[str, str]
) -> List[Dict[str, str]]:
    if not submitted.is_aligned():
        raise SubmissionError(
            f"Section '{section}' has fields with different numbers of values: "
            f"{submitted.lengths()}"
        )

    items: List[Dict[str, str]] = []
    for i in range(submitted.item_count):
        item: Dict[str, str] = {}
        for field, values in submitted.fields.items():
            uploaded = file_map.get(item_upload_key(section, field, i))
            item[field] = uploaded if uploaded else values[i]
        items.append(item)
    return items


def apply_submission(
    existing: PageContent,
    submission: PageSubmission,
    file_map: Mapping[str, str],
) -> PageContent:
    """Return the new content of a page.

    Only fields already present in *existing* are considered.  String fields
    take the ``new_<field>`` upload, else the submitted value, else keep
    their value.  List fields are rebuilt entirely from the submitted value
    lists; a list field absent from the submission becomes empty, except
    ``articles``, which is left alone.  Fields of any other shape are kept.

    Raises:
        SubmissionError: if a submitted section's value lists differ in length.
    """
    updated: PageContent = dict(existing)

    for key, value in existing.items():
        kind = classify(value)

        if kind is FieldKind.SCALAR:
            uploaded = file_map.get(scalar_upload_key(key))
            if uploaded:
                updated[key] = uploaded
            elif key in submission.scalars:
                updated[key] = submission.scalars[key]

        elif kind is FieldKind.ITEM_LIST:
            if key in submission.sections:
                updated[key] = _build_items(key, submission.sections[key], file_map)
            elif key != ARTICLES_FIELD:
                updated[key] = []

    return updated


def unused_uploads(
    existing: PageContent, submission: PageSubmission, file_map: Mapping[str, str]
) -> Set[str]:
    """Return upload field names that :func:`apply_submission` will not place.

    That covers files for unknown fields and files for item positions past
    the submitted item count.
    """
    used: Set[str] = set()
    for key, value in existing.items():
        kind = classify(value)
        if kind is FieldKind.SCALAR:
            used.add(scalar_upload_key(key))
        elif kind is FieldKind.ITEM_LIST and key in submission.sections:
            submitted = submission.sections[key]
            for field in submitted.fields:
                used.update(
                    item_upload_key(key, field, i) for i in range(submitted.item_count)
                )
    return set(file_map) - used

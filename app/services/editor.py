"""Entry-level edits on ResumeData sections.

Every helper returns a new ResumeData and leaves its input untouched.
"""
import uuid
from typing import Any, Iterable

from pydantic import BaseModel, ValidationError

from app.models.resume import Education, Experience, ResumeData, SectionType, Skill
from app.services.exceptions import EntryNotFoundError, InvalidInputError


SECTION_MODELS: dict[str, type[BaseModel]] = {
    "experience": Experience,
    "education": Education,
    "skills": Skill,
}

DEFAULT_SKILL_CATEGORY = "General"


def new_entry_id(existing_ids: Iterable[str]) -> str:
    """Generate an identifier not present in existing_ids."""
    taken = set(existing_ids)
    while True:
        candidate = uuid.uuid4().hex[:12]
        if candidate not in taken:
            return candidate


def _normalize_fields(model: type[BaseModel], fields: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases to field names and reject unknown keys."""
    lookup = {}
    for name, info in model.model_fields.items():
        lookup[name] = name
        if info.alias:
            lookup[info.alias] = name

    normalized = {}
    for key, value in fields.items():
        if key not in lookup:
            raise InvalidInputError(f"Unknown field '{key}' for {model.__name__}", field=key)
        normalized[lookup[key]] = value
    # Identifiers are assigned here, never by the caller
    normalized.pop("id", None)
    return normalized


def _build_entry(model: type[BaseModel], values: dict[str, Any]) -> BaseModel:
    try:
        entry = model.model_validate(values)
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid {model.__name__} entry: {exc}") from exc

    if isinstance(entry, Skill):
        if not entry.name:
            raise InvalidInputError("Skill name must not be blank", field="name")
        if not entry.category.strip():
            entry.category = DEFAULT_SKILL_CATEGORY
    return entry


def add_entry(data: ResumeData, section: SectionType, fields: dict[str, Any]) -> tuple[ResumeData, BaseModel]:
    """
    Append a new entry to a section.

    Args:
        data: Resume to edit
        section: "experience", "education" or "skills"
        fields: Entry fields, by name or camelCase alias

    Returns:
        Tuple of (updated resume, created entry)

    Raises:
        InvalidInputError: If the fields do not form a valid entry
    """
    model = SECTION_MODELS[section]
    updated = data.model_copy(deep=True)
    entries = getattr(updated, section)

    values = _normalize_fields(model, fields)
    values["id"] = new_entry_id(e.id for e in entries)
    entry = _build_entry(model, values)

    entries.append(entry)
    return updated, entry


def update_entry(data: ResumeData, section: SectionType, entry_id: str, fields: dict[str, Any]) -> ResumeData:
    """
    Change fields of an existing entry, keeping its id and position.

    Raises:
        EntryNotFoundError: If the section has no entry with entry_id
        InvalidInputError: If the result is not a valid entry
    """
    model = SECTION_MODELS[section]
    updated = data.model_copy(deep=True)
    entries = getattr(updated, section)

    for index, existing in enumerate(entries):
        if existing.id == entry_id:
            break
    else:
        raise EntryNotFoundError(entry_id)

    values = existing.model_dump()
    values.update(_normalize_fields(model, fields))
    entries[index] = _build_entry(model, values)
    return updated


def remove_entry(data: ResumeData, section: SectionType, entry_id: str) -> ResumeData:
    """Drop an entry from a section. Unknown ids leave the section unchanged."""
    updated = data.model_copy(deep=True)
    entries = getattr(updated, section)
    setattr(updated, section, [e for e in entries if e.id != entry_id])
    return updated

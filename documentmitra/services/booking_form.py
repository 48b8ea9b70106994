"""
Admin-configured booking forms.

Each bookable service carries a ``BookingConfig``: the form fields a
user fills in and the documents they must upload. This module has two
halves:

* the form builder used by the admin editor, a reducer that applies one
  ``FormAction`` to a config and returns a new config;
* the user side, which turns a config into a pydantic model and
  validates submitted booking details against it.
"""

import uuid
from datetime import date
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Type, Union

from pydantic import (
    BaseModel, ConfigDict, EmailStr, Field, StringConstraints, TypeAdapter,
    ValidationError, create_model,
)

from documentmitra.core.exceptions import BookingFormError, InvalidFormActionError
from documentmitra.models.service import (
    BookingConfig, DocumentRequirement, FieldType, FormField,
)

PHONE_PATTERN = r"^\+?[0-9][0-9 ()\-]{6,19}$"

Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]

FIELD_ANNOTATIONS: Dict[FieldType, Any] = {
    FieldType.TEXT: str,
    FieldType.EMAIL: EmailStr,
    FieldType.DATE: date,
    FieldType.TEL: Phone,
    FieldType.NUMBER: float,
}


# ─── Form builder actions ────────────────────────────────────────────

class AddFormField(BaseModel):
    action: Literal["add_form_field"] = "add_form_field"


class RemoveFormField(BaseModel):
    action: Literal["remove_form_field"] = "remove_form_field"
    index: int


class UpdateFormField(BaseModel):
    action: Literal["update_form_field"] = "update_form_field"
    index: int
    field: Literal["id", "label", "type", "required"]
    value: Any = None


class AddDocumentRequirement(BaseModel):
    action: Literal["add_document_requirement"] = "add_document_requirement"


class RemoveDocumentRequirement(BaseModel):
    action: Literal["remove_document_requirement"] = "remove_document_requirement"
    index: int


class UpdateDocumentRequirement(BaseModel):
    action: Literal["update_document_requirement"] = "update_document_requirement"
    index: int
    field: Literal["id", "name", "description"]
    value: Any = None


FormAction = Annotated[
    Union[
        AddFormField, RemoveFormField, UpdateFormField,
        AddDocumentRequirement, RemoveDocumentRequirement, UpdateDocumentRequirement,
    ],
    Field(discriminator="action"),
]

_action_adapter = TypeAdapter(FormAction)


def parse_action(data: Dict[str, Any]):
    """Parse a JSON action (``{"action": "add_form_field", ...}``)."""
    try:
        return _action_adapter.validate_python(data)
    except ValidationError as e:
        raise BookingFormError(f"Invalid form action: {e}") from e


def _check_index(items: List[Any], index: int, kind: str) -> None:
    if not 0 <= index < len(items):
        raise InvalidFormActionError(f"No {kind} at index {index} (have {len(items)})")


def _updated(model: BaseModel, field: str, value: Any) -> BaseModel:
    try:
        return type(model).model_validate({**model.model_dump(), field: value})
    except ValidationError as e:
        raise BookingFormError(f"Invalid value for {field!r}: {e}") from e


def apply_action(config: Optional[BookingConfig], action) -> BookingConfig:
    """Return a new config with ``action`` applied; ``config`` is left untouched."""
    config = config or BookingConfig()
    form_fields = list(config.form_fields)
    documents = list(config.document_requirements)

    if isinstance(action, AddFormField):
        form_fields.append(FormField(
            id=f"field_{uuid.uuid4().hex[:8]}", label="New Field", type=FieldType.TEXT, required=False,
        ))
    elif isinstance(action, RemoveFormField):
        _check_index(form_fields, action.index, "form field")
        del form_fields[action.index]
    elif isinstance(action, UpdateFormField):
        _check_index(form_fields, action.index, "form field")
        form_fields[action.index] = _updated(form_fields[action.index], action.field, action.value)
    elif isinstance(action, AddDocumentRequirement):
        documents.append(DocumentRequirement(
            id=f"doc_{uuid.uuid4().hex[:8]}", name="New Document", description="Description",
        ))
    elif isinstance(action, RemoveDocumentRequirement):
        _check_index(documents, action.index, "document requirement")
        del documents[action.index]
    elif isinstance(action, UpdateDocumentRequirement):
        _check_index(documents, action.index, "document requirement")
        documents[action.index] = _updated(documents[action.index], action.field, action.value)
    else:
        raise BookingFormError(f"Unknown form action: {action!r}")

    return BookingConfig(form_fields=form_fields, document_requirements=documents)


# ─── Submission validation ───────────────────────────────────────────

def build_submission_model(config: Optional[BookingConfig]) -> Type[BaseModel]:
    """Create a pydantic model whose fields mirror the configured form.

    Field ids become aliases, so ids that are not Python identifiers
    (``"father-name"``) still work.
    """
    definitions: Dict[str, Any] = {}
    for i, form_field in enumerate((config or BookingConfig()).form_fields):
        annotation = FIELD_ANNOTATIONS[form_field.type]
        if form_field.required:
            definitions[f"field_{i}"] = (annotation, Field(..., alias=form_field.id, title=form_field.label))
        else:
            definitions[f"field_{i}"] = (
                Optional[annotation], Field(None, alias=form_field.id, title=form_field.label),
            )
    return create_model(
        "BookingSubmission",
        __config__=ConfigDict(extra="ignore"),
        **definitions,
    )


def form_json_schema(config: Optional[BookingConfig]) -> Dict[str, Any]:
    """JSON schema of the form plus the documents the user must upload."""
    config = config or BookingConfig()
    return {
        "form": build_submission_model(config).model_json_schema(by_alias=True),
        "documents": [doc.model_dump() for doc in config.document_requirements],
    }


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_submission(
    config: Optional[BookingConfig],
    details: Dict[str, Any],
    documents: Iterable[str] = (),
) -> Dict[str, str]:
    """Check booking details and uploaded documents against the form.

    Returns ``{field or document id: message}``; an empty dict means the
    submission is complete. Blank values count as not provided.
    """
    config = config or BookingConfig()
    labels = {f.id: f.label for f in config.form_fields}
    cleaned = {key: value for key, value in (details or {}).items() if not _is_blank(value)}

    errors: Dict[str, str] = {}
    try:
        build_submission_model(config).model_validate(cleaned)
    except ValidationError as e:
        for error in e.errors():
            field_id = str(error["loc"][0]) if error["loc"] else ""
            label = labels.get(field_id, field_id)
            if field_id in errors:
                continue
            if error["type"] == "missing":
                errors[field_id] = f"{label} is required."
            else:
                errors[field_id] = f"{label}: {error['msg']}"

    provided = set(documents)
    for doc in config.document_requirements:
        if doc.id not in provided:
            errors[doc.id] = f"{doc.name} is required."
    return errors

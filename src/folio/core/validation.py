"""Document validation against the schema registry, with field-level results"""

import json
import types
from typing import Annotated, Any, Mapping, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from folio.core.registry import ContentType, SchemaRegistry
from folio.errors import UnknownContentType, UnknownField


class FieldIssue(BaseModel):
    """One violated constraint (or advisory warning) at a dot-joined field path."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class ValidationResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    is_valid: bool
    errors: list[FieldIssue] = Field(default_factory=list)
    warnings: list[FieldIssue] = Field(default_factory=list)


class ValidationSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    total_content_types: int = 0
    valid_content_types: int = 0
    invalid_content_types: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    valid_types: list[str] = Field(default_factory=list)
    invalid_types: list[str] = Field(default_factory=list)


def _issues(exc: ValidationError, prefix: tuple = ()) -> list[FieldIssue]:
    return [
        FieldIssue(path=".".join(str(p) for p in (*prefix, *err["loc"])), message=err["msg"])
        for err in exc.errors()
    ]


def _strip(tp: Any) -> Any:
    """Peel Annotated and Optional wrappers off a type to reach the container or model."""
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
        elif origin is Union or origin is types.UnionType:
            args = [a for a in get_args(tp) if a is not type(None)]
            if len(args) != 1:
                return tp
            tp = args[0]
        else:
            return tp


def _field_type(model: type[BaseModel], key: str) -> Any:
    for name, info in model.model_fields.items():
        if (info.alias or name) == key:
            return Annotated[(info.annotation, *info.metadata)] if info.metadata else info.annotation
    return None


class Validator:
    """Applies registry schemas to documents. Never raises for malformed input."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def validate(self, content_type: ContentType | str, document: Any) -> ValidationResult:
        schema = self.registry.schema_for(content_type)
        try:
            schema.model.model_validate(document)
        except ValidationError as e:
            return ValidationResult(is_valid=False, errors=_issues(e))
        return ValidationResult(is_valid=True)

    def validate_field(self, content_type: ContentType | str, path: str, value: Any) -> ValidationResult:
        """Validate one value against the rule declared at `path` (e.g. 'location.city', 'skills.0.name').

        Cross-field rules are not applied in isolation.
        Raises UnknownField if the path is not declared in the schema.
        """
        schema = self.registry.schema_for(content_type)
        segments = path.split(".") if path else []
        if not segments:
            raise UnknownField(schema.content_type.value, path)

        tp: Any = schema.model
        for seg in segments:
            base = _strip(tp)
            if isinstance(base, type) and issubclass(base, BaseModel):
                tp = _field_type(base, seg)
            elif get_origin(base) is list and seg.isdigit():
                tp = get_args(base)[0]
            elif get_origin(base) is dict:
                tp = get_args(base)[1]
            else:
                tp = None
            if tp is None:
                raise UnknownField(schema.content_type.value, path)

        try:
            TypeAdapter(tp).validate_python(value)
        except ValidationError as e:
            return ValidationResult(is_valid=False, errors=_issues(e, tuple(segments)))
        return ValidationResult(is_valid=True)

    def check_warnings(self, content_type: ContentType | str, document: Any) -> list[FieldIssue]:
        """Advisory checks that do not fail validation: SEO lengths and empty collections."""
        ct = ContentType.parse(content_type)
        if not document:
            return [FieldIssue(path="", message="Content is empty")]
        if not isinstance(document, dict):
            return []

        warnings = []
        meta_title = document.get("metaTitle")
        if isinstance(meta_title, str) and len(meta_title) > 60:
            warnings.append(FieldIssue(path="metaTitle", message="Meta title is longer than recommended 60 characters"))
        meta_description = document.get("metaDescription")
        if isinstance(meta_description, str) and len(meta_description) > 160:
            warnings.append(FieldIssue(
                path="metaDescription", message="Meta description is longer than recommended 160 characters",
            ))

        for key, message in _EMPTY_COLLECTION_WARNINGS[ct]:
            if document.get(key) == []:
                warnings.append(FieldIssue(path=key, message=message))
        return warnings

    def validate_all(self, documents: Mapping[str, Any]) -> dict[str, ValidationResult]:
        """Validate a type -> document mapping. Unknown types give an invalid result instead of raising."""
        results = {}
        for key, document in documents.items():
            try:
                results[key] = self.validate(key, document)
            except UnknownContentType as e:
                results[key] = ValidationResult(is_valid=False, errors=[FieldIssue(path="", message=str(e))])
        return results


_EMPTY_COLLECTION_WARNINGS: dict[ContentType, list[tuple[str, str]]] = {
    ContentType.person: [("social", "No social links provided"), ("skills", "No skills provided")],
    ContentType.experience: [
        ("workExperience", "No work experience entries provided"),
        ("education", "No education entries provided"),
    ],
    ContentType.skills: [("skills", "No skills provided"), ("categories", "No skill categories provided")],
    ContentType.projects: [("projects", "No projects provided")],
    ContentType.writing: [("writings", "No writing entries provided")],
}


def summarize(results: Mapping[str, ValidationResult]) -> ValidationSummary:
    summary = ValidationSummary(total_content_types=len(results))
    for content_type, result in results.items():
        if result.is_valid:
            summary.valid_content_types += 1
            summary.valid_types.append(content_type)
        else:
            summary.invalid_content_types += 1
            summary.invalid_types.append(content_type)
        summary.total_errors += len(result.errors)
        summary.total_warnings += len(result.warnings)
    return summary


def format_errors(issues: list[FieldIssue]) -> str:
    """Human-readable, numbered rendering of validation issues."""
    if not issues:
        return "No validation errors found."
    if len(issues) == 1:
        return f"Validation error: {issues[0]}"
    lines = "\n".join(f"{i}. {issue}" for i, issue in enumerate(issues, start=1))
    return f"Validation errors:\n{lines}"


def parse_document(raw: str | bytes) -> tuple[Any, ValidationResult]:
    """Parse raw JSON into a document. Returns (document or None, format check result)."""
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return None, ValidationResult(is_valid=False, errors=[FieldIssue(path="", message=f"Invalid JSON format: {e}")])

    if not isinstance(document, dict):
        return None, ValidationResult(is_valid=False, errors=[FieldIssue(path="", message="Content must be a JSON object")])

    result = ValidationResult(is_valid=True)
    if not document:
        result.warnings.append(FieldIssue(path="", message="Content object is empty"))
    return document, result

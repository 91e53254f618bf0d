"""Form schemas for the admin dialogs.

Each dialog posts a payload that is parsed by one of the pydantic models
below. ``parse_form`` turns validation failures into a flat
``{field: message}`` mapping that the routes hand back to the client.
"""

import re
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)

MULTIPLE_CHOICE = 1
TRUE_FALSE = 2
QUESTION_TYPES = {MULTIPLE_CHOICE: "Multiple Choice", TRUE_FALSE: "True/False"}

STATUS_OPTIONS = {1: "Live", 0: "Draft"}
LANGUAGE_OPTIONS = {"en": "English", "hi": "Hindi"}
ANSWER_KEYS = ("a", "b", "c", "d")

# What the markdown editor hands back when the user clears it.
EMPTY_EDITOR_MARKUP = "<p><br></p>"

_TAG_RE = re.compile(r"<[^>]*>")
_url_adapter = TypeAdapter(HttpUrl)

FormT = TypeVar("FormT", bound="AdminForm")


def strip_tags(markup: Optional[str]) -> str:
    """Return ``markup`` with HTML tags removed and whitespace trimmed."""
    return _TAG_RE.sub("", markup or "").strip()


def _check_url(value: str, message: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError(message)
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class AdminForm(BaseModel):
    """Base class for dialog forms.

    ``messages`` overrides pydantic's wording for a field, whatever the
    failure was, so the client sees the same text the dashboard always showed.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    messages: ClassVar[Dict[str, str]] = {}


def form_errors(form_cls: Type[AdminForm], exc: ValidationError) -> Dict[str, str]:
    """Flatten a :class:`ValidationError` into ``{field: message}``."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__all__",)
        field = str(loc[0])
        if field in errors:
            continue
        if field in form_cls.messages:
            message = form_cls.messages[field]
        elif error.get("type") == "value_error":
            message = str(error.get("ctx", {}).get("error", error.get("msg")))
        else:
            message = error.get("msg", "Invalid value")
        errors[field] = message
    return errors


def parse_form(
    form_cls: Type[FormT], payload: Optional[Dict[str, Any]]
) -> Tuple[Optional[FormT], Dict[str, str]]:
    """Validate ``payload`` against ``form_cls``.

    Returns ``(form, {})`` on success and ``(None, errors)`` otherwise.
    """
    try:
        return form_cls.model_validate(payload or {}), {}
    except ValidationError as exc:
        return None, form_errors(form_cls, exc)


# ============================================================================
# QUIZ HIERARCHY
# ============================================================================


class ExamBookForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {
        "title": "Title is required",
        "subtitle": "Subtitle is required",
        "icon": "Icon must be a valid URL",
    }

    title: str = Field(min_length=1)
    subtitle: str = Field(min_length=1)
    icon: str
    order: int = Field(default=0, ge=0)
    total_category_hi: int = Field(default=0, ge=0)
    total_category_en: int = Field(default=0, ge=0)

    @field_validator("icon")
    @classmethod
    def _icon_url(cls, value: str) -> str:
        return _check_url(value, "Icon must be a valid URL")


class QuizSectionForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {
        "module_code": "Module Code is required",
        "module_title": "Module Title is required",
        "book_ref": "Book Ref is required",
        "language_code": "Language Code is required",
    }

    module_code: str = Field(min_length=1)
    module_title: str = Field(min_length=1)
    section_status: int = Field(default=1, ge=0, le=1)
    live_timestamp: Optional[datetime] = None
    display_order: int = Field(default=0, ge=0)
    icon_link: Optional[str] = None
    book_ref: str = Field(min_length=1)
    language_code: str = Field(min_length=1)

    @field_validator("live_timestamp", "icon_link", mode="before")
    @classmethod
    def _empty_is_none(cls, value):
        return _blank_to_none(value)

    @field_validator("icon_link")
    @classmethod
    def _icon_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _check_url(value, "Icon must be a valid URL")


class QuizCategoryForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {
        "segment_title": "Segment Title is required",
        "language_code": "Language is required",
        "module_code": "Module Code is required",
        "module_title": "Module Title is required",
    }

    segment_title: str = Field(min_length=1)
    display_order: int = Field(default=0, ge=0)
    category_status: int = Field(default=1, ge=0, le=1)
    language_code: str = Field(min_length=1)
    module_code: str = Field(min_length=1)
    module_title: str = Field(min_length=1)


class QuizForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {
        "quiz_title": "Quiz Title is required",
        "language_code": "Language is required",
        "segment_ref": "Segment is required",
    }

    quiz_title: str = Field(min_length=1)
    quiz_status: int = Field(default=1, ge=0, le=1)
    language_code: str = Field(min_length=1)
    segment_ref: str = Field(min_length=1)
    cover_image_link: Optional[str] = None

    @field_validator("cover_image_link", mode="before")
    @classmethod
    def _empty_is_none(cls, value):
        return _blank_to_none(value)

    @field_validator("cover_image_link")
    @classmethod
    def _cover_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _check_url(value, "Cover image must be a valid URL")


class QuestionForm(AdminForm):
    """Question dialog.

    The option fields depend on ``question_type``: true/false questions
    always store ``True``/``False`` as options A/B and no C/D, so only the
    first two answer keys are accepted for them.
    """

    messages: ClassVar[Dict[str, str]] = {
        "question_type": "Question type must be 1 (Multiple Choice) or 2 (True/False)",
    }

    question_type: int = MULTIPLE_CHOICE
    correct_answer: Optional[str] = Field(default=None, validate_default=True)
    option_a: str = Field(default="", validate_default=True)
    option_b: str = Field(default="", validate_default=True)
    option_c: Optional[str] = None
    option_d: Optional[str] = None
    previously_asked_in: Optional[str] = None
    language_code: str = "en"
    question_text: str = Field(default="", validate_default=True)
    note_text: Optional[str] = None

    @field_validator("question_type")
    @classmethod
    def _known_type(cls, value: int) -> int:
        if value not in QUESTION_TYPES:
            raise ValueError("unknown question type")
        return value

    @field_validator("correct_answer")
    @classmethod
    def _answer_key(cls, value: Optional[str], info: ValidationInfo) -> str:
        answer = (value or "").strip().lower()
        if answer not in ANSWER_KEYS:
            raise ValueError("Please select the correct answer")
        if info.data.get("question_type") == TRUE_FALSE and answer not in ("a", "b"):
            raise ValueError("True/False questions only accept answer a or b")
        return answer

    @field_validator("option_a", "option_b")
    @classmethod
    def _mcq_options(cls, value: str, info: ValidationInfo) -> str:
        if info.data.get("question_type") == TRUE_FALSE:
            return value
        if not (value or "").strip():
            label = info.field_name[-1].upper()
            raise ValueError(f"Option {label} is required")
        return value

    @field_validator("language_code")
    @classmethod
    def _language(cls, value: str) -> str:
        if value not in LANGUAGE_OPTIONS:
            raise ValueError("Language must be 'en' or 'hi'")
        return value

    @field_validator("question_text")
    @classmethod
    def _question_text(cls, value: str) -> str:
        if not value or value == EMPTY_EDITOR_MARKUP:
            raise ValueError("Question text is required")
        return value

    def to_record(self) -> Dict[str, Any]:
        """Column values to store, with the type-specific option rules applied."""
        record = self.model_dump()
        if self.question_type == TRUE_FALSE:
            record["option_a"] = "True"
            record["option_b"] = "False"
            record["option_c"] = None
            record["option_d"] = None
        else:
            record["option_c"] = self.option_c or ""
            record["option_d"] = self.option_d or ""
        record["note_text"] = self.note_text or ""
        record["previously_asked_in"] = self.previously_asked_in or None
        return record


# ============================================================================
# GENERAL KNOWLEDGE
# ============================================================================


class GKSubjectForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {
        "title": "Title is required",
        "language_code": "Language is required",
    }

    title: str = Field(min_length=1)
    language_code: str = Field(min_length=1)


class GKTopicForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {"title": "Title is required"}

    title: str = Field(min_length=1)


class GKOneLinerQuestionForm(AdminForm):
    question: str = Field(default="", validate_default=True)

    @field_validator("question")
    @classmethod
    def _has_text(cls, value: str) -> str:
        if not strip_tags(value):
            raise ValueError("Question text is required")
        return value


# ============================================================================
# AUTH
# ============================================================================


class LoginForm(AdminForm):
    messages: ClassVar[Dict[str, str]] = {
        "email": "Invalid email",
        "password": "Password must be at least 6 characters",
    }

    email: EmailStr
    password: str = Field(min_length=6)

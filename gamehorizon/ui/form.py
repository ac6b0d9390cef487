"""Create/edit form state and its client-side validation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Union

from ..models import (
    MAX_TITLE_LENGTH,
    MIN_RELEASE_YEAR,
    PLATFORMS,
    RATING_OPTIONS,
    Game,
    clamp_release_year,
    current_year,
)

FORM_FIELDS = (
    "title",
    "genre",
    "platforms",
    "releaseYear",
    "rating",
    "completed",
    "multiplayer",
)
BOOLEAN_FIELDS = ("completed", "multiplayer")
TRUTHY_VALUES = {"1", "true", "on", "yes"}


class FieldErrors:
    """Per-field error messages with explicit set/clear operations."""

    def __init__(self) -> None:
        self._errors: Dict[str, str] = {}

    def set(self, field: str, message: str) -> None:
        self._errors[field] = message

    def clear(self, field: str) -> None:
        self._errors.pop(field, None)

    def clear_all(self) -> None:
        self._errors.clear()

    def get(self, field: str) -> Optional[str]:
        return self._errors.get(field)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._errors)

    def __contains__(self, field: object) -> bool:
        return field in self._errors

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"FieldErrors({self._errors!r})"


class ValidationError(ValueError):
    """Raised by :meth:`GameForm.submit` when one or more fields are invalid."""

    def __init__(self, errors: FieldErrors) -> None:
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.as_dict().items()))
        self.errors = errors


def blank_form_data() -> Dict[str, Any]:
    return {
        "title": "",
        "genre": "Action",
        "platforms": [],
        "releaseYear": current_year(),
        "rating": 3.0,
        "completed": False,
        "multiplayer": False,
    }


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_VALUES
    return bool(value)


def _coerce_year(value: Any) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return MIN_RELEASE_YEAR
    return clamp_release_year(value)


def _coerce_rating(value: Any) -> float:
    try:
        rating = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("Rating must be a number") from exc
    if rating not in RATING_OPTIONS:
        raise ValueError("Rating must be between 1 and 5 in steps of 0.5")
    return rating


class GameForm:
    """Form state machine: closed, open for create, or open for edit."""

    def __init__(self) -> None:
        self.is_open = False
        self.editing_id: Optional[Union[int, str]] = None
        self.data: Dict[str, Any] = blank_form_data()
        self.errors = FieldErrors()
        self._rejected: Dict[str, str] = {}

    @property
    def is_editing(self) -> bool:
        return self.is_open and self.editing_id is not None

    @property
    def heading(self) -> str:
        return "Edit Game" if self.is_editing else "Add New Game"

    @property
    def submit_label(self) -> str:
        return "Update Game" if self.is_editing else "Add Game"

    def open_create(self) -> None:
        self.is_open = True
        self.editing_id = None
        self.data = blank_form_data()
        self.errors.clear_all()
        self._rejected.clear()

    def open_edit(self, game: Union[Game, Mapping]) -> None:
        values = dict(game) if isinstance(game, Mapping) else game.model_dump(by_alias=True)
        data = blank_form_data()
        data.update({key: values[key] for key in FORM_FIELDS if key in values})
        data["platforms"] = list(values.get("platforms") or [])
        data["rating"] = float(data["rating"])
        self.is_open = True
        self.editing_id = values.get("id")
        self.data = data
        self.errors.clear_all()
        self._rejected.clear()

    def change(self, name: str, value: Any) -> None:
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field {name!r}")
        try:
            value = self._coerce(name, value)
        except ValueError as exc:
            # unparsable input stays an error until the field gets a usable value
            self._rejected[name] = str(exc)
            self.errors.set(name, str(exc))
            return
        self._rejected.pop(name, None)
        self.data[name] = value
        self.errors.clear(name)

    @staticmethod
    def _coerce(name: str, value: Any) -> Any:
        if name in BOOLEAN_FIELDS:
            return _coerce_bool(value)
        if name == "rating":
            return _coerce_rating(value)
        if name == "releaseYear":
            return _coerce_year(value)
        if name == "platforms":
            return list(value)
        return value

    def toggle_platform(self, platform: str, checked: bool) -> None:
        if platform not in PLATFORMS:
            raise ValueError(f"Unknown platform {platform!r}")
        platforms = [item for item in self.data["platforms"] if item != platform]
        if checked:
            platforms.append(platform)
        self.data["platforms"] = platforms
        if platforms:
            self.errors.clear("platforms")

    def set_platforms(self, selected: Iterable[str]) -> None:
        """Sync the checkbox group to *selected*, one toggle per platform."""
        chosen = set(selected)
        for platform in PLATFORMS:
            checked = platform in chosen
            if checked != (platform in self.data["platforms"]):
                self.toggle_platform(platform, checked)

    def validate(self) -> FieldErrors:
        errors = FieldErrors()
        title = str(self.data.get("title") or "")
        if not title.strip():
            errors.set("title", "Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            errors.set("title", "Title must be less than 100 characters")
        if not self.data.get("platforms"):
            errors.set("platforms", "Select at least one platform")
        for field, message in self._rejected.items():
            errors.set(field, message)
        self.errors = errors
        return errors

    def submit(self) -> Dict[str, Any]:
        """Validate and return the payload; ``id`` is present only when editing."""
        if not self.is_open:
            raise RuntimeError("The game form is not open")
        errors = self.validate()
        if errors:
            raise ValidationError(errors)
        payload = dict(self.data)
        payload["platforms"] = list(self.data["platforms"])
        payload["rating"] = float(self.data["rating"])
        if self.editing_id is not None:
            payload["id"] = self.editing_id
        return payload

    def cancel(self) -> None:
        self.is_open = False
        self.editing_id = None
        self.data = blank_form_data()
        self.errors.clear_all()
        self._rejected.clear()

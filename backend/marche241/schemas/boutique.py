"""Boutique configuration schemas."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")
SLUG_PATTERN = re.compile(r"[a-z0-9][a-z0-9_-]*")
CORE_COLORS = ("primary", "secondary", "accent")


def _check_hex(value: str) -> str:
    if not _HEX_COLOR_RE.fullmatch(value):
        raise ValueError("Must be a hex color in #RRGGBB format")
    return value


class ThemePalette(BaseModel):
    """Core colours every page relies on, plus per-boutique extras."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str
    extras: dict[str, str] = Field(default_factory=dict)

    @field_validator("primary", "secondary", "accent")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        return _check_hex(v)

    @field_validator("extras")
    @classmethod
    def validate_extras(cls, v: dict[str, str]) -> dict[str, str]:
        for name, color in v.items():
            if not name:
                raise ValueError("Extra color names must not be empty")
            if name in CORE_COLORS:
                raise ValueError(f"Extra color {name!r} would shadow a core color")
            _check_hex(color)
        return v

    def css_variables(self) -> dict[str, str]:
        """Map the palette to ``--<name>-color`` custom properties."""
        variables = {
            "--primary-color": self.primary,
            "--secondary-color": self.secondary,
            "--accent-color": self.accent,
        }
        for name, color in self.extras.items():
            variables[f"--{name}-color"] = color
        return variables


class BoutiqueConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    theme: ThemePalette

    @field_validator("name", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be blank")
        return v


class BoutiqueLink(BaseModel):
    slug: str
    name: str
    href: str


class BoutiqueResponse(BoutiqueConfig):
    slug: str

"""
Conversion options for romakana.

KanaOptions is the finalized configuration record consumed by the
converter. merge_with_default_options() accepts the loose forms callers
tend to pass (None, dicts with camelCase or snake_case keys, booleans or
strings for the IME mode) and produces one.
"""

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from romakana.constants import TO_KANA_METHODS, IME_MODE_ALIASES
from romakana.mapping import MappingNode


class ImeMode(str, Enum):
    """IME composition mode."""
    OFF = "off"
    ON = "on"
    HIRAGANA = TO_KANA_METHODS.HIRAGANA
    KATAKANA = TO_KANA_METHODS.KATAKANA

    @property
    def enabled(self) -> bool:
        return self is not ImeMode.OFF


def parse_ime_mode(value: Any) -> ImeMode:
    """
    Coerce an IME mode value.

    Accepts an ImeMode, None, booleans, or the strings "hiragana",
    "katakana", "toHiragana", "toKatakana", "on" and "off"
    (case-insensitive).

    Raises:
        ValueError: For any other value.
    """
    if isinstance(value, ImeMode):
        return value
    if value is None or value is False:
        return ImeMode.OFF
    if value is True:
        return ImeMode.ON
    if isinstance(value, str):
        key = value.strip().lower()
        if key in IME_MODE_ALIASES:
            return ImeMode(IME_MODE_ALIASES[key])
        if key in ("on", "true", "1"):
            return ImeMode.ON
        if key in ("off", "false", "0", ""):
            return ImeMode.OFF
    raise ValueError(f"Invalid IME mode: {value!r}")


CustomKanaMapping = Union[Dict[str, str], Callable[[MappingNode], MappingNode]]


class KanaOptions(BaseModel):
    """Finalized options for romaji -> kana conversion."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    ime_mode: ImeMode = Field(
        ImeMode.OFF, alias="IMEMode",
        description="IME composition mode; HIRAGANA/KATAKANA also force the output script",
    )
    use_obsolete_kana: bool = Field(
        False, alias="useObsoleteKana",
        description="Map wi/we to the obsolete ゐ/ゑ",
    )
    custom_kana_mapping: Optional[CustomKanaMapping] = Field(
        None, alias="customKanaMapping",
        description="romaji -> kana overrides, or a function transforming the tree",
    )

    @field_validator("ime_mode", mode="before")
    @classmethod
    def _coerce_ime_mode(cls, value: Any) -> ImeMode:
        return parse_ime_mode(value)

    @property
    def enforce_hiragana(self) -> bool:
        return self.ime_mode is ImeMode.HIRAGANA

    @property
    def enforce_katakana(self) -> bool:
        return self.ime_mode is ImeMode.KATAKANA

    def mapping_cache_key(self) -> tuple:
        """Hashable key identifying the tree these options produce."""
        custom = self.custom_kana_mapping
        if custom is None:
            custom_key = None
        elif callable(custom):
            custom_key = ('fn', custom)
        else:
            custom_key = ('map', tuple(sorted(custom.items())))
        return (self.ime_mode.enabled, self.use_obsolete_kana, custom_key)


DEFAULT_OPTIONS = KanaOptions()


def merge_with_default_options(
    options: Union[None, KanaOptions, Mapping[str, Any]] = None,
) -> KanaOptions:
    """
    Merge caller options over the defaults.

    Args:
        options: None, a KanaOptions, or a mapping using either field names
            (ime_mode, use_obsolete_kana, custom_kana_mapping) or their
            camelCase aliases (IMEMode, useObsoleteKana, customKanaMapping).

    Returns:
        Finalized KanaOptions.

    Raises:
        pydantic.ValidationError: If a value is invalid.
    """
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, KanaOptions):
        return options
    return KanaOptions.model_validate(dict(options))

"""Pick the message text to show for the configured language."""

from typing import Optional

from lootcli.sorter.models import DEFAULT_LANGUAGE, MessageContent

__all__ = ["language_code", "select_message_content"]


def language_code(language: str) -> str:
    """"de_DE" → "de"; a bare code is returned unchanged."""
    return language.split("_", 1)[0]


def select_message_content(
    content: list[MessageContent], language: str
) -> Optional[MessageContent]:
    """
    Choose one localisation of a message.

    Preference order: exact language match ("pt_BR"), then the same language
    code ("pt"), then DEFAULT_LANGUAGE. Returns None when none is present.
    """
    code = language_code(language)
    same_code: Optional[MessageContent] = None
    default: Optional[MessageContent] = None

    for mc in content:
        if mc.language == language:
            return mc
        if same_code is None and mc.language == code:
            same_code = mc
        if default is None and mc.language == DEFAULT_LANGUAGE:
            default = mc

    return same_code or default

"""Operation kinds and the per-operation instruction, temperature and wording."""

from dataclasses import dataclass
from enum import Enum

from ..settings import Settings
from ..settings.config import NOTIFICATION_PREVIEW_LENGTH

TRANSLATE_INSTRUCTION = (
    "Translate the following text to English. If the text is already in English, "
    "keep it as is. Only return the translated text without any additional explanation:"
)

ELLIPSIS = "..."


class OperationKind(Enum):
    POLISH = "polish"
    TRANSLATE = "translate"


@dataclass(frozen=True)
class OperationProfile:
    temperature: float
    success_title: str
    success_body: str
    failure_title: str
    failure_body: str


PROFILES = {
    OperationKind.POLISH: OperationProfile(
        temperature=0.3,
        success_title="Text Polished",
        success_body="Polished text copied to clipboard:\n{preview}",
        failure_title="Polish Failed",
        failure_body="Failed to polish text: {error}",
    ),
    # Lower temperature for more consistent translations
    OperationKind.TRANSLATE: OperationProfile(
        temperature=0.1,
        success_title="Text Translated",
        success_body="Translated text copied to clipboard:\n{preview}",
        failure_title="Translation Failed",
        failure_body="Failed to translate text: {error}",
    ),
}


def get_profile(kind: OperationKind) -> OperationProfile:
    return PROFILES[kind]


def get_instruction(kind: OperationKind, settings: Settings) -> str:
    if kind is OperationKind.TRANSLATE:
        return TRANSLATE_INSTRUCTION
    return settings.prompt


def make_preview(text: str, limit: int = NOTIFICATION_PREVIEW_LENGTH) -> str:
    if len(text) > limit:
        return text[: limit - len(ELLIPSIS)] + ELLIPSIS
    return text

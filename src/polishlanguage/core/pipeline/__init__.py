from .guard import InvocationGuard
from .operations import (
    TRANSLATE_INSTRUCTION,
    OperationKind,
    OperationProfile,
    get_instruction,
    get_profile,
    make_preview,
)
from .pipeline import OutcomeStatus, TransformOutcome, TransformPipeline

__all__ = [
    "InvocationGuard",
    "OperationKind",
    "OperationProfile",
    "OutcomeStatus",
    "TransformOutcome",
    "TransformPipeline",
    "TRANSLATE_INSTRUCTION",
    "get_instruction",
    "get_profile",
    "make_preview",
]

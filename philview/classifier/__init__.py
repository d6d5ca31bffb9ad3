from philview.classifier.intent_classifier import IntentClassifier
from philview.classifier.llm_client import ToolCallingModel
from philview.classifier.outcomes import (
    ClassificationOutcome,
    Direct,
    Err,
    NeedsConfirmation,
    Ok,
    Reply,
    TransportError,
    unwrap_or_else,
)

__all__ = [
    "IntentClassifier",
    "ToolCallingModel",
    "ClassificationOutcome",
    "Direct",
    "NeedsConfirmation",
    "Reply",
    "Ok",
    "Err",
    "TransportError",
    "unwrap_or_else",
]

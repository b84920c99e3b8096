"""Protocolos e contratos do core da aplicação."""

from .key_value_store import MAX_BATCH_KEYS, AsyncKeyValueStoreProtocol
from .text_standardizer import TextStandardizerProtocol

__all__ = [
    "MAX_BATCH_KEYS",
    "AsyncKeyValueStoreProtocol",
    "TextStandardizerProtocol",
]

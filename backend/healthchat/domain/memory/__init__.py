# backend/healthchat/domain/memory/__init__.py
from .extractor import (
    PATTERNS,
    ExtractionPattern,
    extract_memory,
    levenshtein_distance,
    similarity,
)
from .service import MemoryService, MemoryValidationError

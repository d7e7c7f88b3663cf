"""calais: a client for the OpenCalais semantic analysis service.

Public API:
    - analyze(): One-shot analysis of a text
    - CalaisClient: Reusable client (text, URL and file inputs)
    - CalaisConfig: Processing and user directives
    - AnalysisResult / AnalysisObject: Read-only normalized results
"""

from __future__ import annotations

import logging

from calais._version import __version__
from calais.client import CalaisClient
from calais.config import Settings
from calais.directives import CalaisConfig, ProcessingDirectives, UserDirectives
from calais.errors import (
    CalaisError,
    ConfigurationError,
    InvalidInputError,
    MalformedResponseError,
    TransportError,
)
from calais.normalize import normalize
from calais.result import AnalysisObject, AnalysisResult, TypeGroup

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("calais").addHandler(logging.NullHandler())


def analyze(
    text: str,
    *,
    api_key: str | None = None,
    config: CalaisConfig | None = None,
    settings: Settings | None = None,
) -> AnalysisResult:
    """Analyze a single text with a short-lived client.

    Example:
        result = analyze("Apple Inc. was founded by Steve Jobs.")
        print([e.get_field("name") for e in result.entities])
    """
    with CalaisClient(api_key, config=config, settings=settings) as client:
        return client.analyze(text)


__all__ = [
    "AnalysisObject",
    "AnalysisResult",
    "CalaisClient",
    "CalaisConfig",
    "CalaisError",
    "ConfigurationError",
    "InvalidInputError",
    "MalformedResponseError",
    "ProcessingDirectives",
    "Settings",
    "TransportError",
    "TypeGroup",
    "UserDirectives",
    "__version__",
    "analyze",
    "normalize",
]

"""Base class for remote service wrappers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping

logger = logging.getLogger(__name__)

RAW_RESULT = Dict[str, Any]
"""A remote result, wrapped in a single-entry record keyed by ``<operation>Result``."""


@dataclass
class BaseWrapper(ABC):
    """
    A view over a remote service that answers named operations.
    """

    name: ClassVar[str] = "__base__"

    def call(self, operation: str, params: Mapping[str, Any]) -> RAW_RESULT:
        """
        Invoke a remote operation.

        :param operation: operation name, e.g. runMutalyzer
        :param params: operation parameters
        :return: raw result
        """
        logger.info(f"Calling {self.name}:{operation} with {dict(params)}")
        return self.invoke(operation, params)

    @abstractmethod
    def invoke(self, operation: str, params: Mapping[str, Any]) -> RAW_RESULT:
        """
        Perform the remote call.

        :param operation:
        :param params:
        :return:
        """
        raise NotImplementedError

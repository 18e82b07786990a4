"""Base class for output format providers."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, TypeVar

DocumentT = TypeVar("DocumentT")


class OutputProvider(ABC, Generic[DocumentT]):
    """Abstract base class for output format providers."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, document: DocumentT) -> bytes:
        """
        Encode a document into the output format.

        Args:
            document: The object to serialize

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to a file.

        Args:
            data: Encoded data to write
        """
        if not self.path:
            raise ValueError("Output path not set")
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "wb") as f:
            f.write(data)


class JsonOutputProvider(OutputProvider[DocumentT], ABC):
    """Template provider for documents that serialize to indented JSON."""

    @abstractmethod
    def to_payload(self, document: DocumentT) -> Any:
        """JSON-compatible structure for ``document``."""
        raise NotImplementedError

    def encode(self, document: DocumentT) -> bytes:
        text = json.dumps(self.to_payload(document), indent=2, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

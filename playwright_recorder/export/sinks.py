"""Output sinks for the rendered recording document."""

from pathlib import Path
from typing import Protocol, Union

from ..utils.logging import get_logger

logger = get_logger(__name__)


class OutputSink(Protocol):
    """A document that accepts full-content replacements."""

    def get_text(self) -> str:
        ...

    def replace(self, content: str) -> None:
        ...


class MemorySink:
    """Keeps the document in memory and counts replacements."""

    def __init__(self, text: str = ""):
        self.text = text
        self.replace_count = 0

    def get_text(self) -> str:
        return self.text

    def replace(self, content: str) -> None:
        self.text = content
        self.replace_count += 1


class FileSink:
    """Writes the whole document to a file on every replacement.

    The content goes to a sibling temp file first and is then moved over
    the target, so editors watching the file never see a partial write.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self.log = logger.bind(component="file_sink", path=str(self.path))

    def get_text(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding=self.encoding)

    def replace(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(content, encoding=self.encoding)
        tmp_path.replace(self.path)
        self.log.debug("Document written", size=len(content))

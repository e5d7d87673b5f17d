"""Storage tier backed by a local directory."""

import logging
from pathlib import Path
from typing import List, Union

from constants import Constants
from tools.errors import TransportError
from .base import TierReader

logger = logging.getLogger(__name__)


class DirectoryTierReader(TierReader):
    """Tier reading ``<root>/tools/juju-*.tgz``.

    A missing directory is an empty tier; any other filesystem error is a
    transport failure.
    """

    def __init__(self, name: str, root: Union[str, Path]):
        super().__init__(name)
        self.root = Path(root).expanduser().resolve()

    @property
    def tools_dir(self) -> Path:
        return self.root / Constants.TOOLS_DIR

    def list_names(self) -> List[str]:
        try:
            entries = sorted(self.tools_dir.iterdir())
        except FileNotFoundError:
            logger.debug("tools directory %s does not exist", self.tools_dir)
            return []
        except OSError as exc:
            raise TransportError(self.name, str(exc)) from exc
        return [f"{Constants.TOOLS_DIR}/{entry.name}" for entry in entries if entry.is_file()]

    def url_for(self, name: str) -> str:
        return (self.root / name).as_uri()

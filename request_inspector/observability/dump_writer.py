import os
import re
from datetime import datetime, timezone
from typing import Optional

from request_inspector.common.request_context import get_correlation_id
from request_inspector.config.log import get_logger
from request_inspector.config.models import InspectorConfig

logger = get_logger(__name__)


class DumpPathGenerator:
    EXTENSION = '.txt'
    _UNSAFE = re.compile(r'[^A-Za-z0-9._-]')

    def generate_path(self, dump_dir: str, correlation_id: str, now: Optional[datetime] = None) -> str:
        ts = (now or datetime.now(timezone.utc)).strftime('%Y-%m-%dT%H-%M-%S.%fZ')
        # Correlation ids come from a client header
        safe_id = self._UNSAFE.sub('_', correlation_id)
        return os.path.join(dump_dir, f'{ts}_{safe_id}_request{self.EXTENSION}')


class DumpWriter:
    """Writes rendered request reports into the configured dump directory."""

    def __init__(self, cfg: InspectorConfig):
        self.cfg = cfg
        self.path_generator = DumpPathGenerator()

    @property
    def enabled(self) -> bool:
        return bool(self.cfg.dump_dir)

    def _ensure_dir(self) -> Optional[str]:
        if not self.cfg.dump_dir:
            return None
        try:
            os.makedirs(self.cfg.dump_dir, exist_ok=True)
            return self.cfg.dump_dir
        except OSError as e:
            logger.error('cannot create dump directory', dump_dir=self.cfg.dump_dir, error=str(e))
            return None

    def write(self, report: str, correlation_id: Optional[str] = None) -> Optional[str]:
        """Write ``report`` and return its path, or ``None`` when disabled or on failure."""
        dump_dir = self._ensure_dir()
        if not dump_dir:
            return None

        file_path = self.path_generator.generate_path(dump_dir, correlation_id or get_correlation_id())
        try:
            with open(file_path, 'w', encoding='utf-8', newline='') as f:
                f.write(report)
        except OSError as e:
            logger.error('cannot write request dump', path=file_path, error=str(e))
            return None
        return file_path

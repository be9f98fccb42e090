# itr_engine/domain/services/year_config_service.py
"""
Year configuration service with 2-layer resolution.

Resolution order per assessment year:
1. JSON override file (``settings.YEAR_CONFIG_PATH``), one entry per AY
2. Hardcoded defaults (year_config_defaults)

The resolved table is built once and then served from memory. The engine never
calls this module directly when a table is passed to ``compute``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from itr_engine.config.settings import settings
from itr_engine.domain.models.enums import AssessmentYear
from itr_engine.domain.models.year_config import (
    YearConfiguration,
    YearConfigurationTable,
)
from itr_engine.domain.services.year_config_defaults import default_year_config

logger = logging.getLogger("year_config_service")


class YearConfigService:
    """File override -> hardcoded defaults."""

    def __init__(self, config_path: str | None = None) -> None:
        self._config_path = settings.YEAR_CONFIG_PATH if config_path is None else config_path
        self._table: YearConfigurationTable | None = None

    # ---- Layer 1: JSON file ----

    def _load_overrides(self) -> dict[AssessmentYear, YearConfiguration]:
        if not self._config_path:
            return {}
        path = Path(self._config_path)
        if not path.is_file():
            logger.warning("Year config file %s not found, using hardcoded tables", path)
            return {}

        raw = json.loads(path.read_text(encoding="utf-8"))
        overrides: dict[AssessmentYear, YearConfiguration] = {}
        for year, data in raw.items():
            config = YearConfiguration.from_dict({**data, "assessment_year": year})
            config.source = "file"
            overrides[config.assessment_year] = config
            logger.info("Loaded year config override for AY %s from %s", year, path)
        return overrides

    # ---- Public API ----

    def table(self) -> YearConfigurationTable:
        """Return the resolved configuration table, building it on first use."""
        if self._table is None:
            overrides = self._load_overrides()
            configs = {ay: overrides.get(ay) or default_year_config(ay) for ay in AssessmentYear}
            self._table = YearConfigurationTable(configs)
            logger.debug(
                "Year config table ready (%d years, %d overridden)",
                len(configs), len(overrides),
            )
        return self._table

    def get(self, assessment_year: str) -> YearConfiguration:
        """Raises ConfigurationMissingError for an unknown year."""
        return self.table().get(assessment_year)

    def reload(self) -> YearConfigurationTable:
        """Drop the cached table and resolve again."""
        self._table = None
        return self.table()


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: YearConfigService | None = None


def get_year_config_service() -> YearConfigService:
    """Get the singleton YearConfigService instance."""
    global _service
    if _service is None:
        _service = YearConfigService()
    return _service

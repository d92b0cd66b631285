from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable

import httpx

from shot2table.client import create_client
from shot2table.config import AIConfig, apply_preset
from shot2table.errors import AnalysisInProgressError, ConfigMissingError
from shot2table.exporter import DEFAULT_EXPORT_FILENAME, ExportArtifact, ExportFormat, export_table
from shot2table.logging_config import logger
from shot2table.models import TableData

GridOperation = Callable[..., TableData]


@dataclass
class TableSession:
    """Config and table of one user, replaced wholesale by every operation."""

    config: AIConfig = field(default_factory=AIConfig)
    table: TableData = field(default_factory=TableData)
    busy: bool = False
    http_client: httpx.Client | None = None

    def update_config(self, **changes: Any) -> AIConfig:
        self.config = replace(self.config, **changes)
        return self.config

    def apply_preset(self, preset_name: str) -> AIConfig:
        self.config = apply_preset(self.config, preset_name)
        return self.config

    def analyze(self, image: bytes) -> TableData:
        if self.busy:
            raise AnalysisInProgressError("An analysis is already running.")
        if not self.config.has_api_key:
            raise ConfigMissingError("API key is missing. Configure the AI settings first.")

        self.busy = True
        try:
            table = create_client(self.config, http_client=self.http_client).analyze(image)
        finally:
            self.busy = False
        self.table = table
        return table

    def apply(self, operation: GridOperation, *args: Any, **kwargs: Any) -> TableData:
        self.table = operation(self.table, *args, **kwargs)
        return self.table

    def export(
        self,
        fmt: ExportFormat = ExportFormat.SPREADSHEET,
        filename: str = DEFAULT_EXPORT_FILENAME,
    ) -> ExportArtifact:
        return export_table(self.table, filename=filename, fmt=fmt)

    def reset(self) -> None:
        logger.info("Session table reset headers=%s rows=%s", len(self.table.headers), len(self.table.rows))
        self.table = TableData()

"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from cutplan.domain.entities import CuttingPlan

logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all plan exporters.

    Exporters render a CuttingPlan to a text document. Each exporter
    defines its format name and file extension.

    Attributes:
        format_name: Registry key for the format (e.g., "csv", "json").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def render(self, plan: CuttingPlan) -> str:
        """Render the plan as a string document."""
        ...

    def export(self, plan: CuttingPlan, path: Path) -> None:
        """Write the rendered plan to a file.

        Args:
            plan: The cutting plan to export.
            path: Path where the file will be saved.
        """
        ...


class BaseExporter:
    """Shared ``export`` implementation writing ``render`` output as UTF-8."""

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    def render(self, plan: CuttingPlan) -> str:
        raise NotImplementedError

    def export(self, plan: CuttingPlan, path: Path) -> None:
        Path(path).write_text(self.render(plan), encoding="utf-8")


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves using the @ExporterRegistry.register
    decorator.

    Example:
        @ExporterRegistry.register("csv")
        class CsvExporter(BaseExporter):
            format_name = "csv"
            file_extension = "csv"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Decorator to register an exporter class under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    "Overwriting existing exporter for format '%s'", format_name
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(
                "Registered exporter '%s': %s", format_name, exporter_class.__name__
            )
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Manages export operations to multiple formats.

    Files are named ``{traceability_code}_{format}.{ext}``.

    Attributes:
        output_dir: Directory where exported files will be saved.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(self, formats: list[str], plan: CuttingPlan) -> dict[str, Path]:
        """Export a plan to several formats.

        Args:
            formats: Format names to export (e.g., ["csv", "json"]).
            plan: The cutting plan to export.

        Returns:
            Dictionary mapping format names to output file paths.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        # Resolve every format before writing anything
        exporters = {name: ExporterRegistry.get(name)() for name in formats}

        self.output_dir.mkdir(parents=True, exist_ok=True)
        results: dict[str, Path] = {}
        for format_name, exporter in exporters.items():
            filename = (
                f"{plan.traceability_code}_{format_name}.{exporter.file_extension}"
            )
            filepath = self.output_dir / filename
            logger.info("Exporting %s to %s: %s", plan.traceability_code, format_name, filepath)
            exporter.export(plan, filepath)
            results[format_name] = filepath
        return results

    def export_single(self, format_name: str, plan: CuttingPlan) -> Path:
        """Export a plan to a single format and return the file path."""
        return self.export_all([format_name], plan)[format_name]

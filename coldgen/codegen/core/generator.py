"""
Base generator interface for all code generation targets.

Defines the contract that all target emitters must implement and the
shared run loop: wipe the output tree, write the project descriptors, then
emit one file per class in tree order.
"""

import asyncio
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger
from ...utils import Timer
from .comments import comment_block
from .config import Definitions, ProjectConfig
from .domain import ClassDef
from .errors import GeneratorError
from .resolver import DomainModel
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


def load_percentage(total: int, count: int) -> str:
    """Progress as a two-digit percentage string (``07%``), ``??%`` if unknown."""
    if total <= 0 or count < 0:
        return "??%"
    return f"{int(count / total * 100):02d}%"


class ProgressSink:
    """Receives progress updates from a running generator. Output only."""

    def update(self, processed: int, total: int, label: str) -> None:
        pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(
        self,
        model: DomainModel,
        config: ProjectConfig,
        definitions: Definitions,
        progress: Optional[ProgressSink] = None,
    ):
        """
        Initialize generator.

        Args:
            model: Resolved domain model shared by all generators
            config: Run configuration
            definitions: Parsed definition documents
            progress: Optional progress sink
        """
        self.model = model
        self.registries = model.registries
        self.config = config
        self.definitions = definitions
        self.progress = progress or ProgressSink()
        self.indent = config.indent
        self._template_engine: Optional[TemplateEngine] = None
        self.reset()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target (e.g., 'java', 'mongoose')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            template_dir = self.get_template_directory()
            if template_dir is None:
                raise TemplateError(f"{self.language_name} has no templates")
            self._template_engine = create_template_engine(template_dir)
        return self._template_engine

    # Output layout

    @property
    def output_dir(self) -> Path:
        return self.config.target.output_dir(self.language_name)

    @property
    def refresh_dir(self) -> Path:
        return self.config.target.refresh_dir(self.language_name)

    @property
    def source_root(self) -> Path:
        """Directory the namespace tree is written under."""
        return self.output_dir / "src"

    def file_name(self, class_def: ClassDef) -> str:
        return f"{class_def.name}{self.file_extension}"

    def namespace_path(self, class_def: ClassDef) -> Path:
        return Path(*class_def.namespace)

    def file_path(self, class_def: ClassDef) -> Path:
        return self.source_root / self.namespace_path(class_def) / self.file_name(class_def)

    # Per-run state

    def reset(self):
        """Reset per-run state."""
        self.processed = 0
        self.written_files: List[Path] = []
        self.failed_files: List[Tuple[Path, str]] = []
        self.unresolved: Dict[str, List[str]] = {}

    def record_unresolved(self, name: str, context: str):
        """Note a type whose dependency could not be found; its import is omitted."""
        contexts = self.unresolved.setdefault(name, [])
        if context not in contexts:
            contexts.append(context)
            logger.debug("Unresolved %s dependency %s in %s", self.language_name, name, context)

    # Run loop

    async def generate(self) -> List[Path]:
        """
        Generate the whole target tree.

        Returns:
            Paths of the files written

        Raises:
            GeneratorError: On an unresolved extends target or generic bound
        """
        self.reset()
        total = self.model.class_count()
        logger.info(
            "Creating %s library - version: %s", self.language_name, self.config.lib_version
        )

        self.prepare_output()
        self.write_descriptors()

        for class_def in self.model.classes():
            self.processed += 1
            path = self.file_path(class_def)
            self.progress.update(self.processed, total, self.file_label(path))

            self.validate_identity(class_def)
            if self.should_emit(class_def):
                logger.info("Creating %s", self.file_label(path))
                code = self.format_code(self.generate_class(class_def))
                self.write_file(path, code)

            # Let a progress display repaint
            await asyncio.sleep(0)

        logger.info(
            "All %s files generated (%d written, %d failed)",
            self.language_name,
            len(self.written_files),
            len(self.failed_files),
        )
        return list(self.written_files)

    def prepare_output(self):
        """Delete the previous output and recreate the source root."""
        if self.refresh_dir.exists():
            logger.debug("Clearing %s", self.refresh_dir)
            shutil.rmtree(self.refresh_dir)
        self.source_root.mkdir(parents=True, exist_ok=True)

    def write_descriptors(self):
        """Write project-level descriptor files. Nothing by default."""
        pass

    def should_emit(self, class_def: ClassDef) -> bool:
        """Whether a file is written for ``class_def``."""
        return True

    def validate_identity(self, class_def: ClassDef):
        """
        Check the references a declaration needs for its own identity.

        Raises:
            ClassNotFoundError: If the extends target or a generic bound is unknown
        """
        if class_def.extends is not None:
            self.model.require_known(
                class_def.extends.name, f"extends target of {class_def.name}"
            )
        for param in class_def.type_params:
            if param.bound:
                self.model.require_known(
                    param.bound, f"bound of {param.name} in {class_def.name}"
                )

    @abstractmethod
    def generate_class(self, class_def: ClassDef) -> str:
        """
        Generate the source of a single class.

        Args:
            class_def: Class to generate code for

        Returns:
            Generated source
        """
        pass

    def write_file(self, path: Path, content: str) -> bool:
        """
        Write one output file. Failures are logged and recorded, not raised.

        Returns:
            True if the file was written
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            self.failed_files.append((path, str(e)))
            return False
        self.written_files.append(path)
        return True

    def file_label(self, path: Path) -> str:
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()

    def warnings(self) -> List[str]:
        warnings = [
            f"Unresolved dependency '{name}' omitted ({', '.join(contexts)})"
            for name, contexts in sorted(self.unresolved.items())
        ]
        warnings.extend(f"Failed to write {path}: {error}" for path, error in self.failed_files)
        return warnings

    # Shared rendering helpers

    def comment(self, desc) -> List[str]:
        return comment_block(desc, self.config.comment_max_chars)

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - strip trailing whitespace, collapse blank runs
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Optional[List[Path]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        unresolved: Optional[Dict[str, List[str]]] = None,
        failed_files: Optional[List[Tuple[Path, str]]] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Files written
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            unresolved: Type name -> contexts whose import was omitted
            failed_files: (path, error) for files that could not be written
        """
        self.files = files or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.unresolved = unresolved or {}
        self.failed_files = failed_files or []
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator) -> GenerationResult:
    """
    Run a generator to completion with error handling.

    Args:
        generator: Code generator instance

    Returns:
        GenerationResult with written files, warnings, and metadata
    """
    timer = Timer()
    try:
        files = asyncio.run(generator.generate())
    except (GeneratorError, OSError) as e:
        logger.error("%s generation aborted: %s", generator.language_name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "lib_version": generator.config.lib_version,
        "output_dir": str(generator.output_dir),
        "class_count": generator.model.class_count(),
        "processed": generator.processed,
        "elapsed": timer.elapsed,
    }
    return GenerationResult(
        files,
        generator.warnings(),
        metadata,
        unresolved=dict(generator.unresolved),
        failed_files=list(generator.failed_files),
    )

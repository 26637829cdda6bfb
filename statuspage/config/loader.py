"""Page configuration loader with validation."""

import hashlib
import time
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from statuspage.config.constants import COMPONENT_CONFIG
from statuspage.config.schemas import PageFileConfig
from statuspage.status import aggregate


logger = structlog.get_logger()

ROOT_LOCATION = "(root)"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details (loc, msg, type).
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class ConfigLoader:
    """Loads and validates a page YAML file."""

    def __init__(self) -> None:
        """Initialize the loader."""
        self._checksum: str | None = None
        self._log = logger.bind(component=COMPONENT_CONFIG)

    @property
    def checksum(self) -> str | None:
        """Get the SHA-256 checksum of the last file read."""
        return self._checksum

    def load(self, path: Path) -> PageFileConfig:
        """Load and validate a page file.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated page file.

        Raises:
            ConfigValidationError: If the file is missing, is not valid YAML,
                or does not match the schema.
        """
        start_time = time.perf_counter()
        log = self._log.bind(file_path=str(path))
        log.info("loading_config_file")

        data = self._read_yaml(path)

        try:
            page_file = PageFileConfig.model_validate(data)
        except ValidationError as e:
            errors = [
                {
                    "loc": ".".join(str(part) for part in err["loc"]) or ROOT_LOCATION,
                    "msg": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            log.warning(
                "config_validation_failed",
                validation_error_count=len(errors),
            )
            raise ConfigValidationError(errors, str(path)) from e

        self._check_current_status(page_file, log)

        log.info(
            "config_file_loaded",
            file_sha256=self._checksum,
            environments=len(page_file.environments),
            gridfox=page_file.gridfox is not None,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return page_file

    def _read_yaml(self, path: Path) -> dict[str, object]:
        """Read and parse the YAML file.

        Args:
            path: Path to the YAML file.

        Returns:
            Parsed mapping (empty for an empty file).

        Raises:
            ConfigValidationError: If the file cannot be read, is not UTF-8,
                or is not valid YAML.
        """
        try:
            content_bytes = path.read_bytes()
        except FileNotFoundError as e:
            errors = [
                {"loc": str(path), "msg": "File not found", "type": "file_not_found"}
            ]
            raise ConfigValidationError(errors, str(path)) from e
        except OSError as e:
            reason = e.strerror or str(e)
            errors = [{"loc": str(path), "msg": reason, "type": "file_read_error"}]
            raise ConfigValidationError(errors, str(path)) from e

        self._checksum = hashlib.sha256(content_bytes).hexdigest()

        try:
            content = content_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            errors = [
                {"loc": str(path), "msg": str(e), "type": "encoding_error"}
            ]
            raise ConfigValidationError(errors, str(path)) from e

        try:
            parsed = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            errors = [
                {"loc": str(path), "msg": str(e), "type": "yaml_parse_error"}
            ]
            raise ConfigValidationError(errors, str(path)) from e

        if not isinstance(parsed, dict):
            errors = [
                {
                    "loc": ROOT_LOCATION,
                    "msg": "Top level must be a mapping",
                    "type": "model_type",
                }
            ]
            raise ConfigValidationError(errors, str(path))

        return parsed

    def _check_current_status(
        self, page_file: PageFileConfig, log: structlog.stdlib.BoundLogger
    ) -> None:
        """Warn when an explicit current_status disagrees with the services."""
        if page_file.current_status is None:
            return
        derived = aggregate(page_file.environments).status
        if derived != page_file.current_status:
            log.warning(
                "current_status_mismatch",
                configured=page_file.current_status.value,
                derived=derived.value,
            )


def load_page_file(path: Path) -> PageFileConfig:
    """Load a page file with a fresh loader.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated page file.
    """
    return ConfigLoader().load(path)

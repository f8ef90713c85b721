"""
Dataset workspace.
Creates and validates the fixed folder layout every dataset lives in.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

import yaml

from dataset_browser.config import settings
from dataset_browser.models.yolo import DataConfig
from dataset_browser.utils.logging import logger, log_filesystem_operation, EventTimer
from dataset_browser.utils.exceptions import (
    IOFailureError,
    NotFoundError,
    ValidationError,
    DatasetExistsError,
    InvalidDatasetError
)

# Folders created for every dataset, in creation order
REQUIRED_DIRECTORIES = (
    "dataset/test/images",
    "dataset/test/labels",
    "dataset/train/images",
    "dataset/train/labels",
    "dataset/valid/images",
    "dataset/valid/labels",
    "uploaded/images",
    "uploaded/labels",
    "versions",
    "models",
)

DATA_CONFIG_PATH = "dataset/data.yaml"

REQUIRED_PATHS = REQUIRED_DIRECTORIES + (DATA_CONFIG_PATH,)

UPLOADED_IMAGES = "uploaded/images"
UPLOADED_LABELS = "uploaded/labels"


def create_dataset(base_path: Union[str, Path], name: str) -> None:
    """
    Build the folder skeleton and data.yaml of dataset ``name`` under ``base_path``.

    Expects a fresh target. Existing folders are reused. The first failure
    aborts with IOFailureError and whatever was created so far stays on disk.
    """
    if not name:
        raise ValidationError("Dataset name is empty", field="name", value=name)

    timer = EventTimer()
    root = Path(base_path) / name

    for relative in REQUIRED_DIRECTORIES:
        folder = root / relative
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create folder {folder}: {e}")
            raise IOFailureError(f"Cannot create folder: {e}", operation="mkdir", path=str(folder)) from e

    config_path = root / DATA_CONFIG_PATH
    try:
        config_path.write_bytes(DataConfig.template().to_yaml().encode("utf-8"))
    except OSError as e:
        logger.error(f"Failed to write {config_path}: {e}")
        raise IOFailureError(f"Cannot write data.yaml: {e}", operation="write", path=str(config_path)) from e

    log_filesystem_operation("scaffold", str(root), count=len(REQUIRED_PATHS), duration_ms=timer.elapsed_ms)


def missing_paths(base_path: Union[str, Path], name: str) -> List[str]:
    """Required paths of the dataset that are absent on disk."""
    root = Path(base_path) / name
    missing = [relative for relative in REQUIRED_DIRECTORIES if not (root / relative).is_dir()]
    if not (root / DATA_CONFIG_PATH).is_file():
        missing.append(DATA_CONFIG_PATH)
    return missing


class DatasetWorkspace:
    """All datasets stored under one root folder."""

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)

    @staticmethod
    def validate_name(name: Optional[str]) -> str:
        """Dataset names double as folder names, so only a single plain path component is accepted."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("New dataset name is empty", field="dataset", value=name)
        if cleaned in (".", "..") or "/" in cleaned or "\\" in cleaned or "\x00" in cleaned:
            raise ValidationError(f"Invalid dataset name '{cleaned}'", field="dataset", value=name)
        return cleaned

    def dataset_path(self, name: str) -> Path:
        return self.base_path / self.validate_name(name)

    def list_datasets(self) -> List[str]:
        """Names of the folders in the datasets root."""
        if not self.base_path.is_dir():
            logger.error(f"Folder '{self.base_path}' does not exist")
            raise NotFoundError(f"Folder '{self.base_path}' does not exist", path=str(self.base_path))

        try:
            with os.scandir(self.base_path) as it:
                directories = sorted(entry.name for entry in it if entry.is_dir())
        except OSError as e:
            logger.error(f"Failed to list datasets in {self.base_path}: {e}")
            raise IOFailureError(f"Listing failed: {e}", operation="list", path=str(self.base_path)) from e

        logger.info(f"Folders [{len(directories)}]: '{', '.join(directories)}'")
        return directories

    def new_dataset(self, name: Optional[str]) -> str:
        """Create the dataset folder and its skeleton, returning the stored name."""
        name = self.validate_name(name)
        target = self.base_path / name

        logger.info(f"Create a new dataset '{name}'")
        if target.exists():
            logger.error(f"Folder '{target}' already exists")
            raise DatasetExistsError(name)

        try:
            target.mkdir(parents=True)
        except FileExistsError as e:
            raise DatasetExistsError(name) from e
        except OSError as e:
            logger.error(f"Error occurred during folder creation: {e}")
            raise IOFailureError(f"Cannot create folder for the new dataset '{name}'",
                                 operation="mkdir", path=str(target)) from e

        create_dataset(self.base_path, name)
        logger.info(f"Dataset '{name}' created")
        return name

    def missing_paths(self, name: str) -> List[str]:
        return missing_paths(self.base_path, self.validate_name(name))

    def validate_dataset(self, name: str) -> Path:
        """Path of a complete dataset, raising when it is missing or partial."""
        root = self.dataset_path(name)
        if not root.is_dir():
            logger.error(f"Folder '{root}' does not exist")
            raise NotFoundError(f"Dataset '{name}' folder does not exist", path=str(root))

        missing = missing_paths(self.base_path, root.name)
        if missing:
            logger.error(f"Dataset '{name}' is missing {missing}")
            raise InvalidDatasetError(root.name, missing)
        return root

    def asset_folder(self, name: str, relative: str) -> Path:
        return self.validate_dataset(name) / relative

    def read_data_config(self, name: str) -> DataConfig:
        """Parse the dataset's data.yaml."""
        config_path = self.validate_dataset(name) / DATA_CONFIG_PATH
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise IOFailureError(f"Cannot read data.yaml: {e}", operation="read", path=str(config_path)) from e

        try:
            return DataConfig.from_yaml(content)
        except (ValueError, yaml.YAMLError) as e:
            raise ValidationError(f"Invalid data.yaml: {e}", field="data.yaml") from e


def get_workspace() -> DatasetWorkspace:
    """Get the workspace rooted at the configured datasets path."""
    return DatasetWorkspace(settings.datasets_path)

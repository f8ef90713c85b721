"""
YOLO format models.
Defines the data.yaml descriptor every dataset carries for downstream training tools.
"""

from typing import List, Dict, Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator
import yaml


class DataConfig(BaseModel):
    """YOLOv8 dataset descriptor (data.yaml) with split paths and class names."""

    train: Optional[str] = Field(None, description="Training images path, relative to data.yaml")
    val: Optional[str] = Field(None, description="Validation images path")
    test: Optional[str] = Field(None, description="Test images path")
    nc: Optional[int] = Field(None, ge=0, description="Number of classes")
    names: Union[List[str], Dict[int, str]] = Field(default_factory=list, description="Class names (list or dict)")

    @property
    def class_names(self) -> List[str]:
        """Get class names as a list."""
        if isinstance(self.names, dict):
            return [name for _, name in sorted(self.names.items())]
        return self.names

    @field_validator('names')
    @classmethod
    def validate_names(cls, v):
        """Validate class names format."""
        if isinstance(v, dict):
            for key, name in v.items():
                if key < 0:
                    raise ValueError(f"Class indices must be non-negative, got {key}")
                if not isinstance(name, str) or not name.strip():
                    raise ValueError(f"Class name for index {key} must be a non-empty string")
            if sorted(v) != list(range(len(v))):
                raise ValueError("Class indices must run from 0 without gaps")
        else:
            for i, name in enumerate(v):
                if not isinstance(name, str) or not name.strip():
                    raise ValueError(f"Class name at index {i} must be a non-empty string")
        return v

    @model_validator(mode='after')
    def validate_class_count(self):
        """Derive nc from names when omitted, reject a mismatch otherwise."""
        if self.nc is None:
            self.nc = len(self.names)
        elif self.nc != len(self.names):
            raise ValueError(f"nc is {self.nc} but {len(self.names)} class names are listed")
        return self

    @classmethod
    def template(cls) -> 'DataConfig':
        """Descriptor written into every new dataset, edited by the user later."""
        return cls(train="../train/images", val="../valid/images", test="../test/images", nc=0, names=[])

    @classmethod
    def from_yaml(cls, yaml_content: str) -> 'DataConfig':
        """Parse data.yaml content."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("YAML content must be a dictionary")

        return cls(**data)

    def to_yaml(self) -> str:
        """Render in the layout training tools expect.

        Split paths first, a blank line, the class block, and a trailing blank line.
        """
        names = yaml.safe_dump(self.class_names, default_flow_style=True, width=float("inf")).strip()
        return (
            f"train: {self.train}\n"
            f"val: {self.val}\n"
            f"test: {self.test}\n"
            "\n"
            f"nc: {self.nc}\n"
            f"names: {names}\n"
            "\n"
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "train": "../train/images",
                "val": "../valid/images",
                "test": "../test/images",
                "nc": 2,
                "names": ["cat", "dog"]
            }
        }
    }

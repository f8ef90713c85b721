"""
Essential model tests for the YOLO Dataset Browser.
Covers the data.yaml model, error payloads and upload helpers.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from dataset_browser.config import Settings
from dataset_browser.models.api import PaginationInfo
from dataset_browser.models.yolo import DataConfig
from dataset_browser.services.storage import clean_filename, format_file_size, inspect_image
from dataset_browser.utils.exceptions import (
    DatasetBrowserError,
    DatasetExistsError,
    InvalidConfigurationError,
    InvalidDatasetError,
    IOFailureError,
    NotFoundError,
    ValidationError,
    format_exception_response,
    get_http_status_code
)


class TestDataConfig:
    """Test the data.yaml descriptor model."""

    def test_template_renders_exact_descriptor(self):
        assert DataConfig.template().to_yaml() == (
            "train: ../train/images\n"
            "val: ../valid/images\n"
            "test: ../test/images\n"
            "\n"
            "nc: 0\n"
            "names: []\n"
            "\n"
        )

    def test_render_with_classes(self):
        config = DataConfig(train="../train/images", val="../valid/images",
                            test="../test/images", names=["cat", "dog"])

        assert config.nc == 2
        assert "nc: 2\nnames: [cat, dog]\n" in config.to_yaml()

    def test_parse_rendered_descriptor(self):
        config = DataConfig.from_yaml(DataConfig.template().to_yaml())

        assert config == DataConfig.template()

    def test_parse_dict_names(self):
        config = DataConfig.from_yaml("names:\n  0: car\n  1: truck\n")

        assert config.nc == 2
        assert config.class_names == ["car", "truck"]

    def test_parse_unordered_dict_names(self):
        config = DataConfig.from_yaml("names:\n  1: truck\n  0: car\n")

        assert config.class_names == ["car", "truck"]

    @pytest.mark.parametrize("content", ["nc: 1\nnames:\n  1000000000: x\n", "names:\n  0: car\n  2: bus\n"])
    def test_dict_names_with_gaps_rejected(self, content):
        with pytest.raises(PydanticValidationError):
            DataConfig.from_yaml(content)

    def test_class_count_mismatch(self):
        with pytest.raises(PydanticValidationError):
            DataConfig(nc=3, names=["cat"])

    def test_blank_class_name(self):
        with pytest.raises(PydanticValidationError):
            DataConfig(names=["cat", "  "])

    @pytest.mark.parametrize("content", ["- just\n- a list\n", "train: [unclosed\n"])
    def test_invalid_yaml(self, content):
        with pytest.raises(ValueError):
            DataConfig.from_yaml(content)

    def test_empty_file_is_an_empty_config(self):
        config = DataConfig.from_yaml("")

        assert config.nc == 0
        assert config.train is None


class TestSettings:
    """Test configuration validation."""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.items_per_page == 20
        assert config.max_upload_size_bytes == 10 * 1024 * 1024

    def test_zero_page_size_rejected_at_load(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, items_per_page=0)

    def test_environment_is_case_insensitive(self):
        assert Settings(_env_file=None, environment="PRODUCTION").environment.value == "production"


class TestPaginationInfo:
    """Test the pagination response model."""

    def test_page_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            PaginationInfo(page=0, items_per_page=20, total_items=0, last_page=0,
                           url="/", has_next=False, has_prev=False)


class TestExceptions:
    """Test error payloads and status mapping."""

    @pytest.mark.parametrize("exc,status_code", [
        (NotFoundError("missing", path="/datasets/x"), 404),
        (ValidationError("bad", field="dataset"), 400),
        (DatasetExistsError("cats"), 409),
        (InvalidDatasetError("cats", ["models"]), 409),
        (InvalidConfigurationError("zero", setting="items_per_page", value=0), 500),
        (IOFailureError("disk", operation="mkdir"), 500),
        (DatasetBrowserError("generic"), 500),
        (RuntimeError("other"), 500),
    ])
    def test_status_codes(self, exc, status_code):
        assert get_http_status_code(exc) == status_code

    def test_error_response_format(self):
        response = format_exception_response(NotFoundError("Dataset 'x' folder does not exist", path="/d/x"),
                                             request_id="req-1")

        assert response["message"] == "Dataset 'x' folder does not exist"
        assert response["details"] == {"missing_path": "/d/x"}
        assert response["request_id"] == "req-1"
        assert response["timestamp"].endswith("Z")

    def test_invalid_configuration_details(self):
        exc = InvalidConfigurationError("zero", setting="items_per_page", value=0)

        assert exc.details == {"setting": "items_per_page", "invalid_value": "0"}


class TestUploadHelpers:
    """Test upload file helpers."""

    @pytest.mark.parametrize("size,expected", [
        (0, "0Bytes"),
        (512, "512Bytes"),
        (2048, "2KB"),
        (3 * 1024 * 1024 + 5, "3MB"),
        (5 * 1024 ** 3, "5GB"),
        (2 * 1024 ** 4, "2TB"),
    ])
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected

    @pytest.mark.parametrize("filename,expected", [
        ("cat.jpg", "cat.jpg"),
        ("../../etc/passwd", "passwd"),
        ("C:\\photos\\dog.png", "dog.png"),
    ])
    def test_clean_filename(self, filename, expected):
        assert clean_filename(filename) == expected

    @pytest.mark.parametrize("filename", [None, "", "..", "/"])
    def test_clean_filename_rejects_unusable_names(self, filename):
        with pytest.raises(ValidationError):
            clean_filename(filename)

    def test_inspect_image(self, png_bytes):
        assert inspect_image(png_bytes) == (32, 24)

    def test_inspect_rejects_non_images(self):
        with pytest.raises(ValidationError):
            inspect_image(b"definitely not an image")

"""
Essential test configuration for the YOLO Dataset Browser.
Fixtures build real dataset folders under pytest's tmp_path.
"""

import io
import pytest
from pathlib import Path
from typing import Callable, List

from httpx import AsyncClient, ASGITransport
from PIL import Image

from dataset_browser.main import app
from dataset_browser.config import Settings, Environment, get_settings
from dataset_browser.services.pager import LocalDirectoryPager, get_pager
from dataset_browser.services.workspace import DatasetWorkspace, create_dataset, get_workspace


# Core Configuration
@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test configuration pointing at a temporary datasets root."""
    return Settings(
        environment=Environment.LOCAL,
        log_level="DEBUG",
        datasets_path=str(tmp_path / "datasets"),
        items_per_page=20,
        pagination_window=3,
        max_upload_size_bytes=64 * 1024
    )


@pytest.fixture
def datasets_root(test_settings: Settings) -> Path:
    root = Path(test_settings.datasets_path)
    root.mkdir()
    return root


@pytest.fixture
def workspace(datasets_root: Path) -> DatasetWorkspace:
    return DatasetWorkspace(datasets_root)


@pytest.fixture
def pager() -> LocalDirectoryPager:
    return LocalDirectoryPager()


@pytest.fixture
def dataset(datasets_root: Path) -> Path:
    """A freshly scaffolded dataset named 'cats'."""
    create_dataset(datasets_root, "cats")
    return datasets_root / "cats"


@pytest.fixture
def fill_folder() -> Callable[[Path, int], List[str]]:
    """Create ``count`` empty files in a folder and return their names."""

    def _fill(folder: Path, count: int, suffix: str = ".jpg") -> List[str]:
        folder.mkdir(parents=True, exist_ok=True)
        names = [f"img_{i:04d}{suffix}" for i in range(count)]
        for name in names:
            (folder / name).write_bytes(b"")
        return names

    return _fill


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (32, 24), color=(200, 10, 10)).save(buffer, format="PNG")
    return buffer.getvalue()


# API Client Fixtures
@pytest.fixture
async def test_client(test_settings: Settings, workspace: DatasetWorkspace, pager: LocalDirectoryPager):
    """Async client with services bound to the temporary workspace."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_workspace] = lambda: workspace
    app.dependency_overrides[get_pager] = lambda: pager

    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()

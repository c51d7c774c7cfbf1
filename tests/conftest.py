"""
Shared pytest fixtures
"""

import tempfile
from pathlib import Path

import pytest

from core.billing import LineItem


@pytest.fixture
def temp_dir() -> Path:
    """OS-independent temporary directory"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """settings.yaml with every section filled in"""
    settings_content = """# test settings.yaml
backend:
  base_url: "http://backend.test/api/"
  api_token: "token_abc"
  timeout: 12

gst:
  home_state: "Gujarat"

web:
  host: "0.0.0.0"
  port: 9100

logging:
  level: "debug"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid_port(temp_dir: Path) -> Path:
    """settings.yaml with a non-positive web port"""
    settings_content = """backend:
  base_url: "http://backend.test/api"

web:
  port: 0
"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def wholesale_item() -> LineItem:
    """20 g gross, 2 g stone at 92.5 touch, 1000 per kg

    net 18.000, fine 16.650, wholesale labor 20.00
    """
    return LineItem(
        pieces=1,
        gross_weight="20",
        stone_weight="2",
        touch="92.5",
        labor_rate_per_kg="1000",
    )


@pytest.fixture
def ten_gram_item() -> LineItem:
    """100 g gross at 10 touch, 5000 per kg

    fine 10.000, wholesale labor 500.00
    """
    return LineItem(
        pieces=2,
        gross_weight="100",
        stone_weight="0",
        touch="10",
        labor_rate_per_kg="5000",
    )

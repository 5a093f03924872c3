# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from src.logging.init import reset_logging
from src.models.business_lead import BusinessLead

SAMPLE_CSV = (
    "Export Date: 2024-01-01,,,,,,\r\n"
    "Name,Description,Primary Industry,Location,Country,Domain,LinkedIn\r\n"
    'Acme Corp,"Widgets, gears",Manufacturing,New York,US,acme.com,https://linkedin.com/company/acme\r\n'
    'Global Foods,"Spices\nand grains",Agriculture,Mumbai,India,globalfoods.com,\r\n'
    'Acme Robotics,"The ""robot"" people",Electronics,Shenzhen,China,acmerobotics.com,\r\n'
    "Nordic Logistics,Freight,Logistics,Hamburg\r\n"
    ",No name here,Textiles,Pune,India,,\r\n"
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    # logger は sys.stdout を保持するので capsys と合わせてテスト毎に再生成
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("LEADS_SOURCE", raising=False)
        yield p


@pytest.fixture()
def sample_csv_text() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def write_sample_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    path = temp_workdir / "data" / "Companies.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source: ./data/Companies.csv
page_size: 2
export_directory: ./exports
request_timeout_sec: 5
header:
  markers: [name, description]
  min_columns: 7
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "leads.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _build_lead(index: int, name: str, **overrides: str) -> BusinessLead:
    values = {
        "description": "",
        "primary_industry": "Not Specified",
        "location": "Unknown",
        "country": "Unknown",
        "domain": "",
        "linkedin_url": "",
    }
    values.update(overrides)
    return BusinessLead(id=f"lead-{index}", name=name, **values)


@pytest.fixture()
def make_lead():
    """Factory: make_lead(index, name, **overrides) with mapper defaults for the rest."""
    return _build_lead


@pytest.fixture()
def leads() -> list[BusinessLead]:
    return [
        _build_lead(0, "Acme Corp", description="Widgets", primary_industry="Manufacturing", country="US"),
        _build_lead(1, "Global Foods", description="Spices", primary_industry="Agriculture", country="India"),
        _build_lead(2, "Acme Robotics", description="Robots", primary_industry="Electronics", country="China"),
        _build_lead(3, "bolt works", description="Fasteners for acme", primary_industry="Manufacturing", country="India"),
        _build_lead(4, "Ärzte Supply", description="Medical", primary_industry="Healthcare", country="Germany"),
    ]

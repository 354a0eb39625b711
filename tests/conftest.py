from pathlib import Path
import pytest

from streamstack.anim.schedule import ManualScheduler

@pytest.fixture(scope="session")
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]

@pytest.fixture(scope="session")
def cfg_path(project_root: Path) -> Path:
    return project_root / "config" / "config.toml"

@pytest.fixture(scope="session")
def cfg(cfg_path: Path):
    from streamstack.config_model.model import load_config
    return load_config(str(cfg_path))

@pytest.fixture
def sched() -> ManualScheduler:
    return ManualScheduler()

@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d

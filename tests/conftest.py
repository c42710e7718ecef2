"""Global test fixtures."""
import os
import sys
from pathlib import Path

# Headless Qt for every test module.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402

# ---------------------------------------------------------------------------
# Ensure the repository root is on sys.path so that `import ranchops_project`
# is always resolvable when tests are run from any working directory.
# ---------------------------------------------------------------------------
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from ranchops_project.src.services.settings_service import API_BASE_ENV, SettingsService  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point SettingsService at a throwaway file and drop the cached instance."""
    monkeypatch.setattr(SettingsService, "_path", tmp_path / "settings.json")
    monkeypatch.delenv(API_BASE_ENV, raising=False)
    SettingsService.reset_instance()
    yield tmp_path / "settings.json"
    SettingsService.reset_instance()

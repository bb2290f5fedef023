import pytest


@pytest.fixture(autouse=True)
def isolate_user_config(monkeypatch, tmp_path):
    """Point the configuration loader at an empty per-test directory.

    Some tests expect no user-level config to exist, others write one.
    Either way a real ``~/.gcauto/config.json`` must not leak into them.
    """
    config_dir = tmp_path / "gcauto_home"
    config_dir.mkdir()
    monkeypatch.setattr("gcauto.config.loader._get_config_directory", lambda: config_dir)
    return config_dir

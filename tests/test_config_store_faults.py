import json

from inappbrowser.infra import config_store


def _patch_paths(tmp_path, monkeypatch):
    config_dir = tmp_path / "browser_config"
    config_dir.mkdir()
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_store, "CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(config_store, "CONFIG_FILE", str(config_file))
    return config_file


def test_config_load_invalid_json_sets_error(tmp_path, monkeypatch):
    config_file = _patch_paths(tmp_path, monkeypatch)
    config_file.write_text("{invalid", encoding="utf-8")

    cfg = config_store.Config()

    assert cfg.load_error
    assert cfg.get("hardware_back") is True


def test_config_load_non_object_sets_error(tmp_path, monkeypatch):
    config_file = _patch_paths(tmp_path, monkeypatch)
    config_file.write_text('["not", "an", "object"]', encoding="utf-8")

    cfg = config_store.Config()

    assert cfg.load_error == "Config payload must be a JSON object."


def test_config_saved_values_override_defaults(tmp_path, monkeypatch):
    config_file = _patch_paths(tmp_path, monkeypatch)
    config_file.write_text(json.dumps({"clear_cache": True, "custom_user_agent": "Agent/1"}), encoding="utf-8")

    cfg = config_store.Config()

    assert cfg.load_error is None
    assert cfg.get("clear_cache") is True
    assert cfg.get("custom_user_agent") == "Agent/1"
    assert cfg.get("pause_media") is True


def test_config_set_persists(tmp_path, monkeypatch):
    config_file = _patch_paths(tmp_path, monkeypatch)

    cfg = config_store.Config()
    cfg.set("granted_permissions", ["android.permission.CAMERA"])

    saved = json.loads(config_file.read_text(encoding="utf-8"))
    assert saved["granted_permissions"] == ["android.permission.CAMERA"]
    assert config_store.Config().get("granted_permissions") == ["android.permission.CAMERA"]


def test_config_ignores_values_with_wrong_type(tmp_path, monkeypatch):
    config_file = _patch_paths(tmp_path, monkeypatch)
    config_file.write_text(
        json.dumps({"hardware_back": "no", "granted_permissions": "camera", "allow_zoom": False}),
        encoding="utf-8",
    )

    cfg = config_store.Config()

    assert cfg.get("hardware_back") is True
    assert cfg.get("granted_permissions") == []
    assert cfg.get("allow_zoom") is False
    assert cfg.load_error == "Ignored options with the wrong type: granted_permissions, hardware_back"

import pytest

from giftroom.config import Config, RoomSettings


def test_missing_file_uses_defaults(tmp_path):
    config = Config.load(tmp_path / "missing.yaml")

    assert config == Config()
    assert config.rooms == RoomSettings(max_users=20, auth_code_length=16)


def test_load_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("log_level: debug\nrooms:\n  max_users: 5\n")

    config = Config.load(path)

    assert config.log_level == "DEBUG"
    assert config.rooms == RoomSettings(max_users=5, auth_code_length=16)


def test_non_mapping_config_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="mapping"):
        Config.load(path)


@pytest.mark.parametrize("value", [True, "many", 0, -3])
def test_invalid_max_users(value):
    with pytest.raises(ValueError, match="rooms.max_users"):
        Config.from_dict({"rooms": {"max_users": value}})


def test_unknown_log_level():
    with pytest.raises(ValueError, match="log_level"):
        Config.from_dict({"log_level": "chatty"})

import pytest

from minifier.config import MinifyConfig, load_config
from minifier.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MINIFIER_ATTRIBUTES", "MINIFIER_WORKERS"):
        monkeypatch.delenv(name, raising=False)


class TestMinifyConfig:
    def test_defaults(self):
        config = MinifyConfig()

        assert config.attributes == ["class", "id"]
        assert config.workers == 1
        assert config.alias_map_path is None

    def test_attributes_cleaned(self):
        config = MinifyConfig(attributes=[" Class", "id", "class", ""])

        assert config.attributes == ["class", "id"]

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            MinifyConfig(colour="red")


class TestLoadConfig:
    def test_environment(self, monkeypatch):
        monkeypatch.setenv("MINIFIER_ATTRIBUTES", "class, data-role")
        monkeypatch.setenv("MINIFIER_WORKERS", "3")

        config = load_config()

        assert config.attributes == ["class", "data-role"]
        assert config.workers == 3

    def test_overrides_win_and_none_falls_through(self, monkeypatch):
        monkeypatch.setenv("MINIFIER_WORKERS", "3")

        config = load_config(workers=None, attributes=["id"])

        assert config.workers == 3
        assert config.attributes == ["id"]

    @pytest.mark.parametrize(
        "overrides",
        [{"workers": 0}, {"attributes": []}, {"attributes": [" "]}],
    )
    def test_invalid_values_raise_config_error(self, overrides):
        with pytest.raises(ConfigError):
            load_config(**overrides)

import pytest

from bootmeta.core.config import BuildConfig
from bootmeta.core.errors import ConfigError


def test_yaml_build_file_resolves_relative_paths(tmp_path):
    build = tmp_path / "build.yaml"
    build.write_text(
        "kernels: out/vmlinuz\n"
        "disk-images:\n"
        "  - out/disk.img\n"
        "boot_config: esp/loader/loader.conf\n"
        "jobs: 2\n"
    )

    config = BuildConfig.from_yaml(build)

    base = tmp_path.resolve()
    assert config.kernels == [str(base / "out" / "vmlinuz")]
    assert config.disk_images == [str(base / "out" / "disk.img")]
    assert config.boot_config == str(base / "esp" / "loader" / "loader.conf")
    assert config.jobs == 2


def test_empty_yaml_is_default_config(tmp_path):
    build = tmp_path / "build.yaml"
    build.write_text("")
    config = BuildConfig.from_yaml(build)
    assert config.kernels == []
    assert config.jobs == 4


@pytest.mark.parametrize("text", [
    "colour: blue\n",
    "jobs: many\n",
    "kernels: {a: b}\n",
    "- just\n- a list\n",
    "kernels: [unterminated\n",
])
def test_invalid_build_files(tmp_path, text):
    build = tmp_path / "build.yaml"
    build.write_text(text)
    with pytest.raises(ConfigError):
        BuildConfig.from_yaml(build)


def test_cli_values_extend_and_override(tmp_path):
    config = BuildConfig(kernels=["a"], shrinkwrap="old.txt")
    config.extend(kernels=["b"], shrinkwrap="new.txt", jobs=8)

    assert config.kernels == ["a", "b"]
    assert config.shrinkwrap == "new.txt"
    assert config.jobs == 8


def test_jobs_must_be_positive():
    with pytest.raises(ConfigError):
        BuildConfig().extend(jobs=0)


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("BOOTMETA_LOG_LEVEL", "DEBUG")
    assert BuildConfig().log_level == "DEBUG"

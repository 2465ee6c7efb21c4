import importlib
from pathlib import Path

from nvs_partition_gen import config


def test_defaults(monkeypatch):
    for name in ("NVS_PARTITION_SIZE", "NVS_PARTITION_OFFSET", "NVS_TEMPLATE"):
        monkeypatch.delenv(name, raising=False)
    importlib.reload(config)
    assert config.PARTITION_SIZE == 0x3000
    assert config.PARTITION_OFFSET == 0x9000
    assert config.TEMPLATE_PATH == Path("wsPartitions.csv")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NVS_PARTITION_SIZE", "0x6000")
    monkeypatch.setenv("NVS_PARTITION_OFFSET", "36864")
    monkeypatch.setenv("NVS_TEMPLATE", "/tmp/template.csv")
    try:
        importlib.reload(config)
        assert config.PARTITION_SIZE == 0x6000
        assert config.PARTITION_OFFSET == 0x9000
        assert config.TEMPLATE_PATH == Path("/tmp/template.csv")
    finally:
        monkeypatch.undo()
        importlib.reload(config)

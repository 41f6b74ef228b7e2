from modelprices.config.schema import LoggingConfig, Config


def test_logging_config_defaults():
    cfg = LoggingConfig()
    assert cfg.level == "WARNING"
    assert cfg.file_enabled is False
    assert cfg.rotation == "10 MB"
    assert cfg.retention == "7 days"


def test_config_integration():
    cfg = Config()
    assert cfg.logging.file_enabled is False
    assert cfg.source.timeout == 30.0

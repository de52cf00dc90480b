from taskboard.config import PASSWORD, Config, DatabaseConfig, load_config


def test_defaults_match_source():
    cfg = Config()
    assert cfg.repository_type == "memory"
    assert cfg.database == DatabaseConfig(
        host="localhost", port=5432, user="postgres", dbname="taskmanager"
    )
    assert cfg.database.password == PASSWORD


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "absent.yaml")) == Config()


def test_file_overrides_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "repository_type: postgres\n"
        "database:\n"
        "  host: db.example.com\n"
        "  port: 6543\n"
        "  dbname: tasks\n",
        encoding="utf-8",
    )
    cfg = load_config(str(path))
    assert cfg.repository_type == "postgres"
    assert cfg.database.host == "db.example.com"
    assert cfg.database.port == 6543
    assert cfg.database.dbname == "tasks"
    assert cfg.database.user == DatabaseConfig().user


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("repository_type: postgres\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg.repository_type == "postgres"
    assert cfg.database == DatabaseConfig()


def test_invalid_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("repository_type: [unclosed\n", encoding="utf-8")
    assert load_config(str(path)) == Config()


def test_wrong_typed_value_is_skipped(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("database:\n  port: abc\n  host: db.example.com\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg.database.port == DatabaseConfig().port
    assert cfg.database.host == "db.example.com"


def test_non_mapping_document_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- memory\n- postgres\n", encoding="utf-8")
    assert load_config(str(path)) == Config()


def test_default_path_is_read_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("repository_type: postgres\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_config().repository_type == "postgres"
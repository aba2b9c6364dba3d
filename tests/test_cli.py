"""Tests for the schema-codegen command line."""

import sqlite3

import pytest

from schema_codegen.cli import create_parser, main


class TestParser:
    def test_comma_lists(self):
        args = create_parser().parse_args(
            ["model", "-c", "c.yaml", "-l", "go, rust", "-t", "users,posts,", "-v"]
        )
        assert args.lang == ["go", "rust"]
        assert args.table == ["users", "posts"]
        assert args.verbose
        assert not args.init

    def test_config_is_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["model"])


class TestInit:
    def test_creates_config(self, tmp_path, capsys):
        path = tmp_path / "codegen.yaml"
        assert main(["model", "-c", str(path), "--init"]) == 0
        assert path.exists()
        assert "Created default configuration file" in capsys.readouterr().out

    def test_existing_config(self, tmp_path, capsys):
        path = tmp_path / "codegen.yaml"
        path.write_text("active_database: main\n", encoding="utf-8")
        assert main(["model", "-c", str(path), "--init"]) == 1
        assert "already exists" in capsys.readouterr().out
        assert path.read_text(encoding="utf-8") == "active_database: main\n"


class TestModel:
    def test_full_run(self, config_file, schema_file, tmp_path):
        assert main(["model", "-c", str(config_file)]) == 0

        out = tmp_path / "out"
        users = (out / "users.go").read_text(encoding="utf-8")
        assert '    Email *string `json:"email" db:"email"`' in users
        assert (out / "users.rs").exists()
        assert (out / "users.ts").exists()
        assert not (out / "_migrations.go").exists()

    def test_overrides(self, config_file, schema_file, tmp_path):
        out = tmp_path / "rust_only"
        code = main(
            [
                "model", "-c", str(config_file),
                "--schema-file", str(schema_file),
                "-l", "rust",
                "-o", str(out),
                "-t", "_migrations",
            ]
        )
        assert code == 0
        assert sorted(p.name for p in out.iterdir()) == ["migrations.rs"]

    def test_sqlite_database(self, config_file, tmp_path):
        db_path = tmp_path / "app.db"
        connection = sqlite3.connect(str(db_path))
        connection.execute("CREATE TABLE accounts (id INTEGER NOT NULL, name TEXT)")
        connection.commit()
        connection.close()

        code = main(
            [
                "model", "-c", str(config_file),
                "--db-type", "sqlite",
                "--dsn", f"sqlite:{db_path}",
                "-l", "go",
            ]
        )
        assert code == 0
        accounts = (tmp_path / "out" / "accounts.go").read_text(encoding="utf-8")
        assert "type Accounts struct {" in accounts
        assert "    Name *string" in accounts

    def test_missing_config(self, tmp_path, capsys):
        assert main(["model", "-c", str(tmp_path / "nope.yaml")]) == 1
        assert "Error" in capsys.readouterr().out

    def test_unknown_language(self, config_file, schema_file, capsys):
        assert main(["model", "-c", str(config_file), "-l", "java"]) == 1
        assert "java" in capsys.readouterr().out

    def test_missing_schema_file(self, config_file, tmp_path):
        code = main(
            ["model", "-c", str(config_file), "--schema-file", str(tmp_path / "nope.yaml")]
        )
        assert code == 1


def test_languages_command(capsys):
    assert main(["languages"]) == 0
    out = capsys.readouterr().out
    assert "golang" in out
    assert "typescript" in out

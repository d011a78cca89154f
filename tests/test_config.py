"""Tests for YAML configuration loading."""

from config import Config, DEFAULT_CONFIG, merge_config
from uacascade.catalog import DEFAULT_BROWSER_IDENTIFIERS
from uacascade.user_agent import UAParser


def test_config_loads_defaults() -> None:
    cfg = Config()

    assert cfg.get("parser.spider_detection") is True
    assert cfg.get("parser.browser_identifiers") is None
    assert cfg.get("report.format") == "csv"
    assert cfg.get("missing.key", "fallback") == "fallback"
    assert cfg.get("report.format.deeper", "fallback") == "fallback"


def test_config_does_not_share_defaults() -> None:
    cfg = Config()
    cfg.config["parser"]["spider_detection"] = False

    assert DEFAULT_CONFIG["parser"]["spider_detection"] is True
    assert Config().get("parser.spider_detection") is True


def test_config_merges_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "parser:\n"
        "  spider_detection: false\n"
        "  browser_identifiers:\n"
        "    - Firefox\n"
        "    - Chrome\n"
        "report:\n"
        "  format: all\n",
        encoding="utf-8",
    )

    cfg = Config(path)

    assert cfg.get("parser.spider_detection") is False
    assert cfg.get("parser.browser_identifiers") == ["Firefox", "Chrome"]
    assert cfg.get("parser.os_identifiers") is None
    assert cfg.get("report.format") == "all"


def test_config_missing_file_uses_defaults(tmp_path, capsys) -> None:
    cfg = Config(tmp_path / "absent.yaml")

    assert cfg.get("report.format") == "csv"
    assert "не найдена" in capsys.readouterr().out


def test_config_invalid_yaml_uses_defaults(tmp_path, capsys) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("parser: [unclosed\n", encoding="utf-8")

    cfg = Config(path)

    assert cfg.get("parser.spider_detection") is True
    assert "Ошибка" in capsys.readouterr().out


def test_parser_from_config(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "parser:\n"
        "  spider_detection: false\n"
        "  os_identifiers: [Android]\n",
        encoding="utf-8",
    )

    parser = UAParser.from_config(Config(path))

    assert parser.catalog.spider_detection is False
    assert parser.catalog.os_identifiers == ("Android",)
    assert parser.catalog.browser_identifiers == DEFAULT_BROWSER_IDENTIFIERS


def test_merge_config_replaces_lists_and_merges_sections() -> None:
    base = {
        "parser": {"spider_detection": True, "browser_identifiers": ["Chrome", "Safari"]},
        "report": {"format": "csv"},
    }

    merged = merge_config(base, {
        "parser": {"browser_identifiers": ["Firefox"]},
        "extra": {"nested": {"key": 1}},
    })

    assert merged is base
    assert merged["parser"] == {"spider_detection": True, "browser_identifiers": ["Firefox"]}
    assert merged["report"] == {"format": "csv"}
    assert merged["extra"] == {"nested": {"key": 1}}


def test_merge_config_section_over_scalar() -> None:
    base = {"report": "csv"}

    merge_config(base, {"report": {"format": "excel"}})

    assert base == {"report": {"format": "excel"}}


def test_config_non_mapping_yaml_uses_defaults(tmp_path, capsys) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- csv\n- excel\n", encoding="utf-8")

    cfg = Config(path)

    assert cfg.get("report.format") == "csv"
    assert "ожидался словарь" in capsys.readouterr().out


def test_config_empty_file_keeps_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert Config(path).get("parser.spider_detection") is True

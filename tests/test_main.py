"""End-to-end tests for the command-line tool."""

import pytest

import main

EDGE_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/125.0.0.0 Safari/537.36 Edg/125.0.0.0"
)


def log_line(user_agent: str) -> str:
    return (
        f'203.0.113.7 - - [19/Oct/2026:10:15:32 +0800] "GET / HTTP/1.1" 200 612 '
        f'"-" "{user_agent}" "-" 0.004'
    )


@pytest.fixture
def access_log(tmp_path):
    path = tmp_path / "access.log"
    path.write_text(
        "\n".join([log_line("curl/7.68.0"), log_line(EDGE_UA), log_line("curl/7.68.0"), "garbage"]) + "\n",
        encoding="utf-8",
    )
    return path


def test_log_command_writes_distinct_sorted_agents(tmp_path, access_log) -> None:
    ua_file = tmp_path / "ua.txt"

    main.main(["log", "-f", str(access_log), "-u", str(ua_file)])

    assert ua_file.read_text(encoding="utf-8").splitlines() == [EDGE_UA, "curl/7.68.0"]


def test_save_command_writes_csv_in_input_order(tmp_path) -> None:
    ua_file = tmp_path / "ua.txt"
    ua_file.write_text("curl/7.68.0\n" + EDGE_UA + "\n\nCustomCrawler\n", encoding="utf-8")
    save_file = tmp_path / "result.csv"

    main.main(["save", "-u", str(ua_file), "-s", str(save_file)])

    assert save_file.read_text(encoding="utf-8").splitlines() == [
        "Browser,BrowserVersion,OS,OSVersion,DeviceType",
        "curl,7.68.0,Other,,Bot",
        "Edge,125.0.0.0,Windows,10,Desktop",
        "Other,,Other,,Other",
        "CustomCrawler,,Other,,Bot",
    ]


def test_log_then_save_pipeline(tmp_path, access_log) -> None:
    ua_file = tmp_path / "ua.txt"
    save_file = tmp_path / "result.csv"

    main.main(["log", "-f", str(access_log), "-u", str(ua_file)])
    main.main(["save", "-u", str(ua_file), "-s", str(save_file), "--format", "all"])

    assert save_file.read_text(encoding="utf-8").splitlines()[1:] == [
        "Edge,125.0.0.0,Windows,10,Desktop",
        "curl,7.68.0,Other,,Bot",
    ]
    assert (tmp_path / "result.xlsx").is_file()


def test_no_spider_option(tmp_path) -> None:
    ua_file = tmp_path / "ua.txt"
    ua_file.write_text("Googlebot/2.1 (+http://www.google.com/bot.html)\n", encoding="utf-8")
    save_file = tmp_path / "result.csv"

    main.main(["--no-spider", "save", "-u", str(ua_file), "-s", str(save_file)])

    assert save_file.read_text(encoding="utf-8").splitlines()[1] == "Other,,Other,,Other"


def test_parse_command_prints_fields(capsys) -> None:
    main.main(["parse", EDGE_UA])

    out = capsys.readouterr().out
    assert "Browser:        Edge" in out
    assert "OSVersion:      10" in out
    assert "DeviceType:     Desktop" in out


def test_missing_log_file_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as exc:
        main.main(["log", "-f", str(tmp_path / "absent.log"), "-u", str(tmp_path / "ua.txt")])

    assert exc.value.code == 1


def test_missing_ua_file_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as exc:
        main.main(["save", "-u", str(tmp_path / "absent.txt"), "-s", str(tmp_path / "out.csv")])

    assert exc.value.code == 1


def test_bad_catalog_in_config_exits(tmp_path, capsys) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("parser:\n  browser_identifiers: ['Chrome.*']\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main.main(["--config", str(config_file), "parse", EDGE_UA])

    assert exc.value.code == 1
    assert "Ошибка конфигурации каталога" in capsys.readouterr().out


def test_custom_catalog_from_config(tmp_path, capsys) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("parser:\n  browser_identifiers: [Chrome]\n", encoding="utf-8")

    main.main(["--config", str(config_file), "parse", EDGE_UA])

    assert "Browser:        Chrome" in capsys.readouterr().out

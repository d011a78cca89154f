import argparse
import logging
import sys
from pathlib import Path

from config import Config
from uacascade.catalog import CatalogError
from uacascade.parser import LogParser
from uacascade.user_agent import UAParser
from report.csv_report import CsvReporter
from report.excel import ExcelReporter


def build_parser():
    parser = argparse.ArgumentParser(description='UserAgent Parser')
    parser.add_argument('--config', help='Path to config.yaml')
    parser.add_argument('--no-spider', action='store_true', help='Disable spider/bot detection')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    log_cmd = subparsers.add_parser('log', help='Parse log file')
    log_cmd.add_argument('--logfile', '-f', required=True, nargs='+', help='Log file path (.gz supported)')
    log_cmd.add_argument('--uafile', '-u', required=True, help='UserAgent file save path')

    save_cmd = subparsers.add_parser('save', help='Parse UserAgent file')
    save_cmd.add_argument('--uafile', '-u', required=True, help='UserAgent file path')
    save_cmd.add_argument('--savefile', '-s', required=True, help='Save file path')
    save_cmd.add_argument('--format', choices=['csv', 'excel', 'all'], help='Report format')

    parse_cmd = subparsers.add_parser('parse', help='Parse a single UserAgent string')
    parse_cmd.add_argument('user_agent', help='UserAgent string')

    return parser


def parse_log(logfiles, uafile):
    missing = [p for p in logfiles if not Path(p).is_file()]
    if missing:
        print(f"Ошибка: путь {', '.join(missing)} не найден")
        sys.exit(1)

    print(f"Парсинг логов: {', '.join(logfiles)}")
    user_agents = LogParser.collect_user_agents(logfiles)

    with open(uafile, 'w', encoding='utf-8', newline='') as f:
        for ua in user_agents:
            f.write(ua + '\n')

    print(f"Уникальных User-Agent: {len(user_agents)}, сохранено в {uafile}")
    return user_agents


def parse_save(ua_parser, uafile, savefile, report_format='csv'):
    path = Path(uafile)
    if not path.is_file():
        print(f"Ошибка: путь {path} не найден")
        sys.exit(1)

    lines = path.read_text(encoding='utf-8', errors='ignore').splitlines()
    results = [ua_parser.classify(line) for line in lines]

    if report_format not in ('csv', 'excel', 'all'):
        print(f"Ошибка: неизвестный формат отчета {report_format}")
        sys.exit(1)

    formats = [report_format] if report_format != 'all' else ['csv', 'excel']

    if 'csv' in formats:
        CsvReporter(savefile).generate(results)

    if 'excel' in formats:
        ExcelReporter(str(Path(savefile).with_suffix('.xlsx'))).generate(results)

    return results


def print_client_info(info):
    print(f"Browser:        {info.browser}")
    print(f"BrowserVersion: {info.browser_version}")
    print(f"OS:             {info.os}")
    print(f"OSVersion:      {info.os_version}")
    print(f"DeviceType:     {info.device_type}")


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    cfg = Config(args.config)

    # Override config with args
    if args.no_spider:
        cfg.config['parser']['spider_detection'] = False

    try:
        ua_parser = UAParser.from_config(cfg)
    except CatalogError as e:
        print(f"Ошибка конфигурации каталога: {e}")
        sys.exit(1)

    if args.command == 'log':
        parse_log(args.logfile, args.uafile)
    elif args.command == 'save':
        parse_save(ua_parser, args.uafile, args.savefile, args.format or cfg.get('report.format', 'csv'))
    elif args.command == 'parse':
        print_client_info(ua_parser.classify(args.user_agent))


if __name__ == '__main__':
    main()

import gzip
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)


class LogParser:
    """Извлечение User-Agent из access-логов (Nginx/Apache)"""

    # $remote_addr - $remote_user [$time_local] "$request" $status $body_bytes_sent
    # "$http_referer" "$http_user_agent" "$http_x_forwarded_for" [$request_time]
    NGINX_FORWARDED_PATTERN = (
        'nginx_forwarded',
        re.compile(
            r'(?P<remote_addr>\S+) - (?P<remote_user>\S+) '
            r'\[(?P<time_local>.+)\] '
            r'"(?P<request>.+)" '
            r'(?P<status>\S+) '
            r'(?P<body_bytes_sent>\S+) '
            r'"(?P<http_referer>.*)" '
            r'"(?P<http_user_agent>.*)" '
            r'"(?P<http_x_forwarded_for>.*)"'
            r'( (?P<request_time>\S+))?'
        )
    )

    # Nginx combined без X-Forwarded-For
    NGINX_PATTERN = (
        'nginx',
        re.compile(
            r'(?P<remote_addr>\S+) '
            r'(?P<ident>\S+) '
            r'(?P<remote_user>\S+) '
            r'\[(?P<time_local>[^\]]+)\] '
            r'"(?P<request>[^"]+)" '
            r'(?P<status>\d{3}) '
            r'(?P<body_bytes_sent>\S+) '
            r'"(?P<http_referer>[^"]*)" '
            r'"(?P<http_user_agent>[^"]*)"'
        )
    )

    # Apache Combined с виртуальным хостом впереди
    APACHE_PATTERN = (
        'apache',
        re.compile(
            r'(?P<hostname>\S+) '
            r'(?P<remote_addr>\S+) '
            r'(?P<remote_user>\S+) '
            r'(?P<auth_user>\S+) '
            r'\[(?P<time_local>[^\]]+)\] '
            r'"(?P<method>\S+) '
            r'(?P<url>[^"]+) '
            r'(?P<protocol>[^"]+)" '
            r'(?P<status>\d+) '
            r'(?P<size>\S+) '
            r'"(?P<http_referer>[^"]*)" '
            r'"(?P<http_user_agent>[^"]*)"'
        )
    )

    # IP - - [timestamp timezone - processing_time] status "request" size "referer" "user-agent" "-"
    EXTENDED_PATTERN = (
        'extended',
        re.compile(
            r'(?P<remote_addr>\S+) '
            r'(?P<ident>\S+) '
            r'(?P<remote_user>\S+) '
            r'\[(?P<time_local>[^\]]+)\] '
            r'(?P<status>\d{3}) '
            r'"(?P<request>[^"]+)" '
            r'(?P<size>\S+) '
            r'"(?P<http_referer>[^"]*)" '
            r'"(?P<http_user_agent>[^"]*)" '
            r'"(?P<extra>[^"]*)"'
        )
    )

    PATTERNS = [NGINX_FORWARDED_PATTERN, NGINX_PATTERN, APACHE_PATTERN, EXTENDED_PATTERN]

    @staticmethod
    def parse_line(line):
        """Парсит строку лога; возвращает (формат, именованные поля) или None"""
        for fmt, pattern in LogParser.PATTERNS:
            match = pattern.match(line)
            if match:
                return fmt, match.groupdict()
        return None

    @staticmethod
    def extract_user_agent(line):
        parsed = LogParser.parse_line(line)
        if not parsed:
            return None
        return parsed[1]['http_user_agent']

    @staticmethod
    def open_log(log_file):
        log_file = Path(log_file)
        if log_file.suffix == '.gz':
            return gzip.open(log_file, 'rt', encoding='utf-8', errors='ignore')
        return open(log_file, 'r', encoding='utf-8', errors='ignore')

    @staticmethod
    def collect_user_agents(log_files):
        """Уникальные User-Agent из одного или нескольких файлов, отсортированные"""
        if isinstance(log_files, (str, Path)):
            log_files = [log_files]

        user_agents = set()
        for log_file in log_files:
            parsed_count = 0
            skipped_count = 0
            logger.info("Reading %s", log_file)
            with LogParser.open_log(log_file) as f:
                for line_num, line in enumerate(f, 1):
                    line = line.rstrip('\r\n')
                    if not line.strip():
                        continue
                    user_agent = LogParser.extract_user_agent(line)
                    if user_agent is None:
                        skipped_count += 1
                        logger.debug("%s:%d: unrecognized log line", log_file, line_num)
                        continue
                    user_agents.add(user_agent)
                    parsed_count += 1
            logger.info("%s: parsed %d lines, skipped %d", log_file, parsed_count, skipped_count)

        return sorted(user_agents)

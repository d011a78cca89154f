import logging
import threading

from .catalog import (
    Catalog,
    SPIDER_PATTERN,
    GENERIC_BOT_PATTERN,
    BARE_NAME_PATTERN,
    MOZILLA_PREFIX,
)
from .client_info import ClientInfo, DESKTOP, MOBILE, SPIDER, BOT, OTHER
from .rules import normalize_os, normalize_browser

logger = logging.getLogger(__name__)

# Короткие строки или строки со ссылкой на описание — кандидаты в программных ботов
BOT_MAX_LENGTH = 60

MOBILE_OS = ('Android', 'iPhone OS')
DESKTOP_OS = ('Windows NT', 'Mac OS X', 'Linux')


def classify_device(os_name, user_agent):
    """Тип устройства по ещё не нормализованному названию ОС"""
    if os_name in MOBILE_OS or 'Mobile' in user_agent:
        return MOBILE
    if os_name in DESKTOP_OS:
        return DESKTOP
    return OTHER


class UAParser:
    """Анализатор User-Agent строк.

    Каскад: паук -> браузер -> программный бот -> ОС -> тип устройства ->
    нормализация. Конфигурация хранится в неизменяемом снимке Catalog;
    set_* собирают новый снимок и подменяют ссылку, так что каждый вызов
    classify видит один согласованный каталог.
    """

    def __init__(self, browser_identifiers=None, os_identifiers=None, spider_detection=True):
        kwargs = {'spider_detection': spider_detection}
        if browser_identifiers is not None:
            kwargs['browser_identifiers'] = browser_identifiers
        if os_identifiers is not None:
            kwargs['os_identifiers'] = os_identifiers
        self._catalog = Catalog(**kwargs)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config):
        return cls(
            browser_identifiers=config.get('parser.browser_identifiers'),
            os_identifiers=config.get('parser.os_identifiers'),
            spider_detection=config.get('parser.spider_detection', True),
        )

    @property
    def catalog(self):
        return self._catalog

    def set_browser_identifiers(self, identifiers):
        """Полностью заменяет каталог браузеров"""
        with self._lock:
            self._catalog = self._catalog.replace(browser_identifiers=identifiers)
        return self

    def set_os_identifiers(self, identifiers):
        """Полностью заменяет каталог ОС"""
        with self._lock:
            self._catalog = self._catalog.replace(os_identifiers=identifiers)
        return self

    def set_spider_detection(self, enabled):
        with self._lock:
            self._catalog = self._catalog.replace(spider_detection=bool(enabled))
        return self

    def classify(self, user_agent):
        """Разбирает User-Agent и возвращает ClientInfo. Никогда не бросает исключений."""
        if user_agent is None:
            user_agent = ''
        elif isinstance(user_agent, bytes):
            user_agent = user_agent.decode('utf-8', errors='replace')
        elif not isinstance(user_agent, str):
            user_agent = str(user_agent)

        if not user_agent.strip():
            return ClientInfo(user_agent=user_agent)

        catalog = self._catalog
        fields = ClientInfo(user_agent=user_agent).as_dict()

        # Пауки добавляют обычные браузерные токены, поэтому проверяются первыми
        if catalog.spider_detection:
            self._detect_spider(fields)

        if fields['browser'] == OTHER:
            match = catalog.match_browser(user_agent)
            if match:
                fields['browser'] = match.group(1)
                fields['browser_version'] = match.group(2) or ''

        if fields['browser'] == OTHER and catalog.spider_detection:
            self._detect_bot(fields)

        match = catalog.match_os(user_agent)
        if match:
            fields['os'] = match.group(1)
            fields['os_version'] = match.group(2)
        elif 'Linux' in user_agent or 'X11;' in user_agent:
            fields['os'] = 'Linux'

        # До нормализации: сравнение идёт с исходными токенами ОС
        if fields['device_type'] == OTHER:
            fields['device_type'] = classify_device(fields['os'], user_agent)

        normalize_os(fields)
        normalize_browser(fields)
        return ClientInfo(**fields)

    def _detect_spider(self, fields):
        match = SPIDER_PATTERN.search(fields['user_agent'])
        if match:
            fields['browser'] = match.group(1).strip()
            fields['browser_version'] = match.group(2) or ''
            fields['device_type'] = SPIDER

    def _detect_bot(self, fields):
        user_agent = fields['user_agent']

        if len(user_agent) <= BOT_MAX_LENGTH or 'http' in user_agent:
            # "Mozilla/" иначе принимается за имя бота
            candidate = user_agent[8:] if user_agent.startswith(MOZILLA_PREFIX) else user_agent
            match = GENERIC_BOT_PATTERN.search(candidate)
            if match:
                fields['browser'] = match.group(1)
                fields['browser_version'] = match.group(2)
                fields['device_type'] = BOT
                return

        if BARE_NAME_PATTERN.fullmatch(user_agent):
            fields['browser'] = user_agent
            fields['browser_version'] = ''
            fields['device_type'] = BOT


_default_parser = UAParser()


def parse_user_agent(ua_string):
    """Разбирает строку парсером с каталогом по умолчанию"""
    return _default_parser.classify(ua_string)

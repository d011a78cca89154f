import re
import logging

logger = logging.getLogger(__name__)

# Порядок важен: часть идентификаторов входит в другие (UOS Professional / UOS,
# фирменные браузеры добавляют токены движка Chrome/Safari)
DEFAULT_BROWSER_IDENTIFIERS = (
    # UC, Vivo, Xiaomi, Quark, Lenovo, Maxthon, 115, JiSu, Huawei, TheWorld
    "UCBrowser", "VivoBrowser", "MiuiBrowser", "QuarkPC", "SLBrowser",
    "Maxthon", "115Browser", "JiSu", "HBPC", "TheWorld",
    # 360 (корпоративный и обычный), Qianxin, UOS
    "QIHU 360ENT", "QIHU 360EE", "QIHU 360SE", "Qaxbrowser",
    "UOS Professional", "UOS",
    # WeChat, QQ, Sogou, Opera, Edge, Firefox, Chrome, Safari, IE
    "MicroMessenger", "QQBrowser", "MetaSr", "OPR", "Opera", "Edg",
    "Firefox", "Chrome", "Safari", "MSIE",
)

# Linux — отдельная категория без версии, обрабатывается в парсере
DEFAULT_OS_IDENTIFIERS = ("Windows NT", "iPhone OS", "Mac OS X", "Android")

METACHARACTERS = frozenset('.^$*+?{}[]\\|()')

# "bot" / "spider" внутри имени из букв, дефисов и пробелов + необязательная версия.
# Начало только на границе имени, иначе поиск перебирает каждую позицию внутри него
SPIDER_PATTERN = re.compile(
    r'(?<![a-z -])([a-z -]*?(?:bot|spider)[a-z0-9-]*)(?:/(\d+(?:\.\d+)*))?',
    re.IGNORECASE
)

# Имя/версия: имя обязано содержать хотя бы одну букву
GENERIC_BOT_PATTERN = re.compile(r'(?<![A-Za-z0-9-])([0-9-]*[a-zA-Z][a-zA-Z0-9-]*)[/ ]v?(\d+(?:\.\d+)*)')

# Вся строка целиком: без цифр, слешей и скобок, 2-30 символов
BARE_NAME_PATTERN = re.compile(r'[A-Za-z][A-Za-z -]{0,28}[A-Za-z]')

# Chrome, за которым сразу идёт токен совместимости Safari
CHROME_PATTERN = re.compile(r'Chrome/(\d+(?:\.\d+)*) Safari/')

MOZILLA_PREFIX = 'Mozilla'


class CatalogError(ValueError):
    """Некорректный каталог идентификаторов"""


def validate_identifiers(identifiers, kind):
    """Проверяет каталог и возвращает его как кортеж.

    Идентификаторы — литералы: метасимволы регулярных выражений запрещены,
    чтобы каталог нельзя было превратить в произвольный шаблон.
    """
    if isinstance(identifiers, (str, bytes)) or not isinstance(identifiers, (list, tuple)):
        raise CatalogError(f"{kind} catalog must be a list of strings, got {type(identifiers).__name__}")
    if not identifiers:
        raise CatalogError(f"{kind} catalog is empty")

    for identifier in identifiers:
        if not isinstance(identifier, str):
            raise CatalogError(f"{kind} identifier must be a string: {identifier!r}")
        if not identifier.strip():
            raise CatalogError(f"{kind} identifier is blank: {identifier!r}")
        bad = sorted(METACHARACTERS.intersection(identifier))
        if bad:
            raise CatalogError(
                f"{kind} identifier {identifier!r} contains regex metacharacters: {''.join(bad)}"
            )
    return tuple(identifiers)


def _compile(pattern, kind):
    try:
        return re.compile(pattern)
    except re.error as e:
        raise CatalogError(f"cannot compile {kind} catalog: {e}") from e


def build_browser_regex(identifiers):
    """Альтернация по каталогу браузеров.

    Шаблон обёрнут в lookahead, поэтому finditer отдаёт совпадение в каждой
    позиции строки; последнее из них — самое правое вхождение. В одной позиции
    побеждает идентификатор, стоящий в каталоге раньше.
    """
    alternation = '|'.join(re.escape(i) for i in identifiers)
    return _compile(rf'(?=({alternation})[/\s]?(\d+(?:\.\d+)*)?)', 'browser')


def build_os_regexes(identifiers):
    """По шаблону на идентификатор, в порядке каталога"""
    return tuple(
        _compile(rf'({re.escape(i)})[/\s]?(\d+(?:[._]\d+)*)', 'os')
        for i in identifiers
    )


class Catalog:
    """Неизменяемый снимок конфигурации парсера с уже скомпилированными шаблонами"""

    __slots__ = ('browser_identifiers', 'os_identifiers', 'spider_detection',
                 'browser_regex', 'os_regexes')

    def __init__(self, browser_identifiers=DEFAULT_BROWSER_IDENTIFIERS,
                 os_identifiers=DEFAULT_OS_IDENTIFIERS, spider_detection=True):
        browser_identifiers = validate_identifiers(browser_identifiers, 'browser')
        os_identifiers = validate_identifiers(os_identifiers, 'os')
        browser_regex = build_browser_regex(browser_identifiers)
        os_regexes = build_os_regexes(os_identifiers)

        # Атрибуты выставляются только после успешной компиляции
        object.__setattr__(self, 'browser_identifiers', browser_identifiers)
        object.__setattr__(self, 'os_identifiers', os_identifiers)
        object.__setattr__(self, 'spider_detection', bool(spider_detection))
        object.__setattr__(self, 'browser_regex', browser_regex)
        object.__setattr__(self, 'os_regexes', os_regexes)

    def __setattr__(self, name, value):
        raise AttributeError(f"Catalog is immutable, use replace() to change {name}")

    def __repr__(self):
        return (f"Catalog(browsers={len(self.browser_identifiers)}, "
                f"os={len(self.os_identifiers)}, spider_detection={self.spider_detection})")

    def replace(self, browser_identifiers=None, os_identifiers=None, spider_detection=None):
        """Новый снимок; не переданные части берутся из текущего"""
        catalog = Catalog(
            self.browser_identifiers if browser_identifiers is None else browser_identifiers,
            self.os_identifiers if os_identifiers is None else os_identifiers,
            self.spider_detection if spider_detection is None else spider_detection,
        )
        logger.debug("Catalog rebuilt: %r", catalog)
        return catalog

    def match_browser(self, user_agent):
        """Самое правое вхождение браузера из каталога или None"""
        last = None
        for last in self.browser_regex.finditer(user_agent):
            pass
        return last

    def match_os(self, user_agent):
        for regex in self.os_regexes:
            match = regex.search(user_agent)
            if match:
                return match
        return None
